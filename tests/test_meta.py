"""Test versioning."""

import tomllib
from pathlib import Path

from arrmap.version import __version__, get_version_str


def test_version_pyproject() -> None:
    """Verify version in pyproject.toml matches package version."""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with pyproject_path.open("rb") as f:
        pyproject_toml = tomllib.load(f)
    assert pyproject_toml.get("project", {}).get("version") == __version__, (
        "Version in pyproject.toml does not match package version."
    )


def test_version_str() -> None:
    assert get_version_str().startswith(f"{__version__}-")
