from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from promptqr.api import app
from promptqr.config import settings


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"x-api-key": settings.api_key}
