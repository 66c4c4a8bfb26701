"""Shared collaborators handed to routes via Depends()."""
from functools import lru_cache

from api.services.cms_service import CmsTestSource
from api.services.llm_service import OpenRouterGateway
from api.services.viewer_service import ViewerSessionRegistry


@lru_cache
def get_test_source() -> CmsTestSource:
    """CMS client reused across requests."""
    return CmsTestSource()


@lru_cache
def get_gateway() -> OpenRouterGateway:
    """Model provider client reused across requests."""
    return OpenRouterGateway()


@lru_cache
def get_registry() -> ViewerSessionRegistry:
    """Process-wide viewer sessions."""
    return ViewerSessionRegistry(get_test_source(), get_gateway())
