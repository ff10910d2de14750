"""The conftest.py file serves as a means of providing fixtures for an entire directory.

Fixtures defined in a conftest.py can be used by any test in that package without needing to import them.
"""

import os

os.environ["ARRMAP_TESTING"] = "true"  # Before any arrmap import, stops .env and config.json being read

from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from arrmap.core.config import ArrMapConf, DatabaseConf
from arrmap.database.handlers import TorrentArrMappingHandler
from arrmap.main import create_app

if TYPE_CHECKING:
    from pathlib import Path

    from fastapi import FastAPI
else:
    Path = object
    FastAPI = object


@pytest.fixture
def mapping_handler(tmp_path: Path) -> Iterator[TorrentArrMappingHandler]:
    """Mapping store backed by a database in tmp_path."""
    handler = TorrentArrMappingHandler(database_path=tmp_path / "test_arrmap.db")
    yield handler
    handler.close()


@pytest.fixture
def test_settings(tmp_path: Path) -> ArrMapConf:
    """Settings that only point inside tmp_path."""
    return ArrMapConf(database=DatabaseConf(path=tmp_path / "app_arrmap.db"))


@pytest.fixture
def app(test_settings: ArrMapConf, mapping_handler: TorrentArrMappingHandler) -> FastAPI:
    """App wired to the test mapping store."""
    return create_app(settings=test_settings, store=mapping_handler)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client, the context manager runs the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client
