"""Test source backed by the content-management backend."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from api.config import CMS_API_ENDPOINT, CMS_AUTH_TOKEN, HTTP_TIMEOUT_SECONDS
from api.utils import validate_id
from core.errors import NotFound, UpstreamFailure

log = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch test from CMS"


class CmsTestSource:
    """Fetches ``/tests/{id}.json`` documents with a bearer token."""

    def __init__(
        self,
        endpoint: str = CMS_API_ENDPOINT,
        token: str = CMS_AUTH_TOKEN,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    def test_url(self, test_id: str) -> str:
        return f"{self.endpoint}/tests/{quote(test_id, safe='')}.json"

    def fetch_test(self, test_id: str) -> dict[str, Any]:
        test_id = validate_id("testId", test_id)
        url = self.test_url(test_id)
        log.info("Fetching test from CMS: %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            log.error("CMS request for %s failed: %s", test_id, exc)
            raise UpstreamFailure(FETCH_FAILED_MESSAGE) from exc

        if response.status_code == 404:
            raise NotFound("Test not found")
        if not response.ok:
            log.error("CMS returned %s for %s", response.status_code, test_id)
            raise UpstreamFailure(FETCH_FAILED_MESSAGE)

        try:
            payload = response.json()
        except ValueError as exc:
            log.error("CMS returned invalid JSON for %s: %s", test_id, exc)
            raise UpstreamFailure(FETCH_FAILED_MESSAGE) from exc
        if not isinstance(payload, dict):
            log.error("CMS returned a %s instead of a test document", type(payload).__name__)
            raise UpstreamFailure(FETCH_FAILED_MESSAGE)
        return payload
