import json
import logging
from pathlib import Path

import pytest

from arrmap.constants import DATABASE_FILE
from arrmap.core.config import ArrMapConf, DatabaseConf


def test_defaults_load_quietly(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        settings = ArrMapConf()

    assert caplog.records == []
    assert settings.database.path == DATABASE_FILE
    assert settings.ENVIRONMENT == "local"
    assert settings.all_cors_origins == []


def test_database_path_blank_is_default() -> None:
    assert DatabaseConf(path="").path == DATABASE_FILE  # type: ignore[arg-type]
    assert DatabaseConf(path="  ").path == DATABASE_FILE  # type: ignore[arg-type]
    assert DatabaseConf(path="/data/arrmap.db").path == Path("/data/arrmap.db")  # type: ignore[arg-type]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    database_path = tmp_path / "from_env.db"
    monkeypatch.setenv("ARRMAP_DATABASE__PATH", str(database_path))
    monkeypatch.setenv("ARRMAP_LOGGING__LEVEL", "debug")

    settings = ArrMapConf()

    assert settings.database.path == database_path
    assert settings.logging.level == "DEBUG"


def test_cors_origins_comma_separated() -> None:
    settings = ArrMapConf(BACKEND_CORS_ORIGINS="http://localhost:5173, http://example.com")

    assert settings.all_cors_origins == ["http://localhost:5173", "http://example.com"]


def test_write_and_load_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    settings = ArrMapConf(database=DatabaseConf(path=tmp_path / "arrmap.db"))

    settings.write_config(config_path)
    assert config_path.is_file()

    loaded = ArrMapConf.force_load_config_file(config_path)
    assert loaded.database.path == tmp_path / "arrmap.db"


def test_write_config_backs_up_changed_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    with config_path.open("w") as f:
        json.dump({"ENVIRONMENT": "production"}, f)

    ArrMapConf().write_config(config_path)

    backups = list((tmp_path / "config_backups").iterdir())
    assert len(backups) == 1


def test_load_missing_config_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        settings = ArrMapConf.force_load_config_file(tmp_path / "nope.json")

    assert "does not exist" in caplog.text
    assert settings.database.path == DATABASE_FILE


def test_force_load_defaults() -> None:
    assert ArrMapConf.force_load_defaults().ENVIRONMENT == "local"
