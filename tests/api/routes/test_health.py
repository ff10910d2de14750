from http import HTTPStatus
from typing import TYPE_CHECKING

from arrmap.constants import API_V1_STR
from arrmap.version import __version__

if TYPE_CHECKING:
    from fastapi.testclient import TestClient
else:
    TestClient = object


def test_health(client: TestClient) -> None:
    r = client.get(f"{API_V1_STR}/health/")

    assert r.status_code == HTTPStatus.OK
    data = r.json()
    assert data["version"] == __version__
    assert data["metadata_store_available"] is True
    assert any(thread["name"] == "MainThread" for thread in data["threads"])
