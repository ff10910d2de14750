from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from arrmap.constants import DATABASE_FILE


class DatabaseConf(BaseModel):
    """Database configuration definition."""

    model_config = ConfigDict(extra="ignore")

    path: Path = DATABASE_FILE

    @field_validator("path", mode="before")
    @classmethod
    def blank_path_is_default(cls, value: str | Path | None) -> Path:
        """A blank or missing path means the default in the instance dir."""
        if value is None:
            return DATABASE_FILE

        if isinstance(value, str):
            value = value.strip()
            if value == "":
                return DATABASE_FILE

        return Path(value)
