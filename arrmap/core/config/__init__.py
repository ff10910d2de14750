"""Config loading, setup, validating, writing."""

import json
import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Annotated, Any, Literal, Self

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from arrmap.constants import ENV_PREFIX, SETTINGS_FILE
from arrmap.utils.logger import LoggingConf, get_logger

from .database import DatabaseConf

if TYPE_CHECKING:
    from pathlib import Path
else:
    Path = object

logger = get_logger(__name__)

__all__ = [
    "ArrMapConf",
    "DatabaseConf",
]


def parse_cors(v: Any) -> list[str] | str:  # noqa: ANN401 JSON things
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class ArrMapConf(BaseSettings):
    """Settings Definition."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env" if not os.getenv("ARRMAP_TESTING") else None,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        json_file=SETTINGS_FILE,
    )

    logging: LoggingConf = LoggingConf()
    database: DatabaseConf = DatabaseConf()
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003 Don't use buy must include.
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Specify the priority of settings sources."""
        if os.getenv("ARRMAP_TESTING"):
            return (
                init_settings,
                env_settings,
            )
        return (  # pragma: no cover
            init_settings,
            dotenv_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls),
        )

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    def write_backup_config(self, config_path: Path, existing_data: Any) -> None:  # noqa: ANN401 JSON things
        time_str = datetime.now(tz=UTC).strftime("%Y-%m-%d_%H%M%S")
        config_backup_dir = config_path.parent / "config_backups"
        config_backup_dir.mkdir(parents=True, exist_ok=True)
        backup_file = config_backup_dir / f"{config_path.stem}_{time_str}{config_path.suffix}.bak"
        logger.warning("Validation has changed the config file, backing up the old one to %s", backup_file)
        with backup_file.open("w") as f:
            f.write(json.dumps(existing_data))

    def write_config(self, config_path: Path = SETTINGS_FILE) -> None:
        """Write the current settings to a JSON file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config_data = json.loads(self.model_dump_json(exclude={"all_cors_origins"}))

        if config_path.is_file():
            with config_path.open("r") as f:
                existing_data = json.load(f)
            if existing_data != config_data:
                self.write_backup_config(config_path, existing_data)
        else:
            logger.warning("Writing fresh config file at %s", config_path.absolute())

        with config_path.open("w") as f:
            f.write(json.dumps(config_data, indent=2))

        logger.info("Config written to %s", config_path)

    @classmethod
    def force_load_config_file(cls, config_path: Path) -> Self:
        """Load the configuration file. File contents takes precedence over env vars."""
        if not config_path.is_file():
            logger.warning(
                "Config file %s does not exist, loading defaults",
                config_path.absolute(),
            )
            return cls()

        logger.info("Loading config from %s", config_path.absolute())
        with config_path.open("r") as f:
            config = json.load(f)

        return cls(**config)

    @classmethod
    def force_load_defaults(cls) -> Self:
        """Load the default configuration, environment variables still apply."""
        logger.info("Loading default config")
        return cls()
