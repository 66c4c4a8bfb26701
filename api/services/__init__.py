"""Clients for the CMS and the model provider, and viewer sessions."""
