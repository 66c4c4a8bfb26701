"""API route modules."""
from api.routes import generation, tests, viewer

__all__ = ["generation", "tests", "viewer"]
