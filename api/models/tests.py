"""Test-related Pydantic models."""
from pydantic import BaseModel, Field


class LoadTestRequest(BaseModel):
    """Model for loading a CMS test into a viewer session."""

    testId: str = Field(..., min_length=1)
