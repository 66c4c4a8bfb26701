"""Scoring, hint bookkeeping and viewer state for loaded tests."""
