"""Test source proxy endpoint."""
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_test_source
from api.services.cms_service import CmsTestSource

router = APIRouter(prefix="/api/test", tags=["tests"])


@router.get("/{test_id}")
def get_test(
    test_id: str,
    source: Annotated[CmsTestSource, Depends(get_test_source)],
) -> dict[str, object]:
    """Return the raw CMS test document."""
    return source.fetch_test(test_id)
