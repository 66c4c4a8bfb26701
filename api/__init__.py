"""HTTP service for the test viewer."""
