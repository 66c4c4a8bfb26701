import pytest

from core.controller import ViewerController
from core.documents import parse_test_document
from core.errors import UpstreamFailure

from sample_data import FakeGateway, FakeTestSource, sample_payload


@pytest.fixture
def document():
    return parse_test_document(sample_payload())


@pytest.fixture
def test_source() -> FakeTestSource:
    return FakeTestSource()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def controller(test_source, gateway, document) -> ViewerController:
    viewer = ViewerController(test_source, gateway)
    viewer.open_test(document, "mock-1")
    return viewer


@pytest.fixture
def upstream_failure() -> UpstreamFailure:
    return UpstreamFailure("Failed to generate solution")
