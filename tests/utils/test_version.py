"""Tests for version utility helpers."""

import string
import tomllib

import pytest

from trailerbridge.utils import version as version_module
from trailerbridge.utils.version import get_git_hash, get_pyproject_version


def test_get_pyproject_version_matches_pyproject() -> None:
    """get_pyproject_version reads the version from pyproject.toml."""
    with (version_module.ROOT_DIR / "pyproject.toml").open("rb") as f:
        expected_version = tomllib.load(f)["project"]["version"]

    assert get_pyproject_version() == expected_version


def test_get_pyproject_version_without_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    """A missing pyproject.toml yields 'unknown'."""
    monkeypatch.setattr(version_module, "ROOT_DIR", tmp_path)

    assert get_pyproject_version() == "unknown"


def test_get_git_hash_returns_hex_or_unknown() -> None:
    """get_git_hash returns a commit hash or 'unknown'."""
    git_hash = get_git_hash()

    assert isinstance(git_hash, str)
    if git_hash != "unknown":
        assert all(char in string.hexdigits for char in git_hash)


def test_get_git_hash_follows_branch_ref(
    monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    """A symbolic HEAD is resolved through its branch ref."""
    git_dir = tmp_path / ".git"
    (git_dir / "refs" / "heads").mkdir(parents=True)
    (git_dir / "HEAD").write_text("ref: refs/heads/main\n")
    (git_dir / "refs" / "heads" / "main").write_text("a" * 40 + "\n")
    monkeypatch.setattr(version_module, "ROOT_DIR", tmp_path)

    assert get_git_hash() == "a" * 40
