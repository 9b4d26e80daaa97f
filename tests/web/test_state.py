"""Tests for the global AppState helper."""

import asyncio

import pytest

from tests.core.fakes import FakeTMDB
from trailerbridge.config import settings as settings_module
from trailerbridge.config.settings import MetaErrorPolicy, TrailerBridgeConfig
from trailerbridge.core.resolver import TrailerResolver
from trailerbridge.core.tmdb import TMDBClient
from trailerbridge.exceptions import MissingApiKeyError
from trailerbridge.web.state import get_app_state


def _use_config(monkeypatch: pytest.MonkeyPatch, **values) -> None:
    config = TrailerBridgeConfig(**values)
    monkeypatch.setattr("trailerbridge.web.state.get_config", lambda: config)


def _use_empty_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("TB_DATA_PATH", str(tmp_path))
    config = TrailerBridgeConfig()
    monkeypatch.setattr("trailerbridge.web.state.get_config", lambda: config)


def test_ensure_resolver_builds_from_config(monkeypatch: pytest.MonkeyPatch):
    """The resolver is created once from the configuration and then reused."""
    _use_config(
        monkeypatch,
        tmdb_api_key="key",
        cache_ttl=120,
        request_timeout=3,
        meta_errors="RAISE",
    )
    state = get_app_state()

    resolver = state.ensure_resolver()

    assert state.ensure_resolver() is resolver
    assert isinstance(state.tmdb, TMDBClient)
    assert state.tmdb.api_key == "key"
    assert state.tmdb.timeout == 3
    assert resolver.cache.ttl == 120
    assert resolver.raise_errors is True


def test_ensure_resolver_requires_api_key(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Without a TMDB key no resolver can be built."""
    _use_empty_config(monkeypatch, tmp_path)

    with pytest.raises(MissingApiKeyError):
        get_app_state().ensure_resolver()


def test_set_resolver_takes_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """An injected resolver is used instead of building one from config."""
    _use_empty_config(monkeypatch, tmp_path)
    state = get_app_state()
    resolver = TrailerResolver(provider=FakeTMDB())

    state.set_resolver(resolver)

    assert state.ensure_resolver() is resolver


@pytest.mark.asyncio
async def test_shutdown_closes_client_and_runs_callbacks(
    monkeypatch: pytest.MonkeyPatch,
):
    """Shutdown runs sync and async callbacks and closes the TMDB client."""
    _use_config(monkeypatch, tmdb_api_key="key", meta_errors=MetaErrorPolicy.SWALLOW)
    state = get_app_state()
    state.ensure_resolver()
    tmdb = state.tmdb
    assert tmdb is not None

    closed: list[bool] = []

    async def fake_close() -> None:
        closed.append(True)

    monkeypatch.setattr(tmdb, "close", fake_close)

    called: list[str] = []

    async def async_cb() -> None:
        await asyncio.sleep(0)
        called.append("async")

    state.add_shutdown_callback(lambda: called.append("sync"))
    state.add_shutdown_callback(async_cb)

    await state.shutdown()

    assert called == ["sync", "async"]
    assert closed == [True]
    assert state.tmdb is None
    assert state.resolver is None


def test_get_config_is_cached():
    """The configuration singleton is built once."""
    settings_module.get_config.cache_clear()

    assert settings_module.get_config() is settings_module.get_config()
