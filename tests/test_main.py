from http import HTTPStatus
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from arrmap.constants import API_V1_STR
from arrmap.core.config import ArrMapConf, DatabaseConf
from arrmap.database.errors import MappingStoreInitError
from arrmap.main import create_app

if TYPE_CHECKING:
    from pathlib import Path
else:
    Path = object


def test_create_app_opens_store(test_settings: ArrMapConf) -> None:
    """Test the store is built from settings when not supplied."""
    app = create_app(settings=test_settings)

    assert test_settings.database.path.is_file()

    with TestClient(app) as client:
        r = client.post(f"{API_V1_STR}/metadata/set", json={"infohash": "abc123", "arr_name": "radarr"})
        assert r.status_code == HTTPStatus.OK

    # Same file, new app, mapping still there
    app = create_app(settings=test_settings)
    with TestClient(app) as client:
        r = client.get(f"{API_V1_STR}/metadata/abc123")
        assert r.status_code == HTTPStatus.OK
        assert r.json()["arr_name"] == "radarr"


def test_create_app_store_init_failure(tmp_path: Path) -> None:
    settings = ArrMapConf(database=DatabaseConf(path=tmp_path))

    with pytest.raises(MappingStoreInitError):
        create_app(settings=settings)


def test_create_app_cors(test_settings: ArrMapConf) -> None:
    test_settings.BACKEND_CORS_ORIGINS = ["http://localhost:5173"]
    app = create_app(settings=test_settings)

    with TestClient(app) as client:
        r = client.get(f"{API_V1_STR}/health/", headers={"Origin": "http://localhost:5173"})

    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"
