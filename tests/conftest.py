from __future__ import annotations

from typing import Any

import pytest

from confluence_search.config import AtlassianCredentials
from tests.helpers.fakes import FakeClient


@pytest.fixture
def credentials() -> AtlassianCredentials:
    return AtlassianCredentials(
        base_url="https://example.atlassian.net",
        user="bot@example.com",
        token="api-token",
    )


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def client_factory(fake_client):
    return lambda: fake_client


@pytest.fixture
def page_list_payload() -> dict[str, Any]:
    return {
        "results": [
            {"id": "10001", "title": "Roadmap", "type": "page", "status": "current"},
            {"id": "10002", "title": "Notes", "type": "page", "status": "current"},
            {"id": "10003", "title": "Retro", "type": "page", "status": "current"},
        ],
        "start": 0,
        "limit": 25,
        "size": 3,
    }


@pytest.fixture
def page_payload() -> dict[str, Any]:
    return {
        "id": "10001",
        "type": "page",
        "title": "Roadmap",
        "body": {
            "export_view": {
                "value": "<h1>Q3</h1><p>Ship <strong>search</strong>.</p>",
                "representation": "export_view",
            }
        },
    }
