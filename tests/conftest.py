"""Shared pytest configuration and fixtures for the test suite."""

import atexit
import os
import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="tb-tests-"))
os.environ["TB_DATA_PATH"] = str(_TEST_DATA_DIR)
_TEST_CONFIG_FILE = _TEST_DATA_DIR / "config.yaml"

_TEST_CONFIG_FILE.write_text(
    yaml.safe_dump(
        {
            "tmdb_api_key": "tmdb-test-key",
            "cache_ttl": 21600,
            "web": {"host": "127.0.0.1", "port": 7000},
        },
        sort_keys=False,
    ),
    encoding="utf-8",
)

from trailerbridge.config import settings as settings_module  # noqa: E402
from trailerbridge.web.state import get_app_state  # noqa: E402

settings_module.get_config.cache_clear()


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Ensure each test interacts with a fresh AppState instance."""
    get_app_state.cache_clear()
    state = get_app_state()
    yield state
    get_app_state.cache_clear()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's TMDB environment variables out of the tests."""
    for name in (
        "TMDB_API_KEY",
        "TB_TMDB_API_KEY",
        "TB_META_ERRORS",
        "TB_CACHE_TTL",
        "TB_LOG_LEVEL",
        "TB_WEB__PORT",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)


@atexit.register
def _cleanup_test_data_dir() -> None:
    """Remove the temporary test data directory after the test session."""
    shutil.rmtree(_TEST_DATA_DIR, ignore_errors=True)
