"""Basic pytest smoke tests for TrailerBridge."""

import re
import tomllib
from pathlib import Path

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+(?:[+-][0-9A-Za-z-.]+)?$")
ROOT_DIR = Path(__file__).resolve().parent.parent


def test_project_metadata() -> None:
    """Ensure core project metadata is present and well-formed."""
    pyproject_path = ROOT_DIR / "pyproject.toml"
    assert pyproject_path.exists(), "pyproject.toml should exist at the project root"

    with pyproject_path.open("rb") as f:
        pyproject = tomllib.load(f)

    project = pyproject.get("project")
    assert isinstance(project, dict), "[project] table must exist in pyproject.toml"

    assert project.get("name") == "TrailerBridge"

    version = project.get("version")
    assert isinstance(version, str) and SEMVER_PATTERN.fullmatch(version), (
        "Version must follow semantic versioning"
    )


def test_package_version_matches_pyproject() -> None:
    """The package reports the version declared in pyproject.toml."""
    from trailerbridge import __version__

    with (ROOT_DIR / "pyproject.toml").open("rb") as f:
        assert __version__ == tomllib.load(f)["project"]["version"]
