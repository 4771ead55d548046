from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.main import app


@pytest.fixture()
def client() -> Iterator[TestClient]:
    """Provide a FastAPI test client bound to one event loop for its lifetime."""
    with TestClient(app) as test_client:
        yield test_client
