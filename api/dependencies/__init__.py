"""FastAPI dependencies."""
from api.dependencies.services import get_gateway, get_registry, get_test_source

__all__ = ["get_gateway", "get_registry", "get_test_source"]
