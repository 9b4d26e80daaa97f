"""Global web application state utilities.

Holds the long-lived TMDB client and trailer resolver shared by route handlers.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

from trailerbridge import log
from trailerbridge.config.settings import MetaErrorPolicy, get_config
from trailerbridge.core.resolver import TrailerResolver
from trailerbridge.core.tmdb import TMDBClient
from trailerbridge.utils.cache import TTLStore

__all__ = ["AppState", "get_app_state"]


class AppState:
    """Container for global web application state."""

    def __init__(self) -> None:
        """Initialize empty state containers and record process start time."""
        self.resolver: TrailerResolver | None = None
        self.tmdb: TMDBClient | None = None
        self.on_shutdown_callbacks: list[Callable[[], Any]] = []
        self.started_at: datetime = datetime.now(UTC)

    def set_resolver(self, resolver: TrailerResolver) -> None:
        """Use an externally built resolver instead of one built from config.

        Args:
            resolver (TrailerResolver): The resolver instance to set.
        """
        self.resolver = resolver

    def add_shutdown_callback(self, cb: Callable[[], Any]) -> None:
        """Register a shutdown callback executed during app shutdown.

        Args:
            cb (Callable[[], Any]): The callback function to register.
        """
        self.on_shutdown_callbacks.append(cb)

    def ensure_resolver(self) -> TrailerResolver:
        """Get or create the shared trailer resolver from the configuration.

        Returns:
            TrailerResolver: Resolver backed by a TMDB client and a TTL cache.

        Raises:
            MissingApiKeyError: If no TMDB API key is configured.
        """
        if self.resolver is None:
            config = get_config()
            self.tmdb = TMDBClient(
                api_key=config.require_api_key(), timeout=config.request_timeout
            )
            self.resolver = TrailerResolver(
                provider=self.tmdb,
                cache=TTLStore(config.cache_ttl),
                raise_errors=config.meta_errors == MetaErrorPolicy.RAISE,
            )
        return self.resolver

    async def shutdown(self) -> None:
        """Run registered shutdown callbacks and release the TMDB client.

        Failing callbacks are logged and do not stop the remaining ones.
        """
        for cb in self.on_shutdown_callbacks:
            try:
                res = cb()
                if hasattr(res, "__await__"):
                    await res
            except Exception as e:
                log.warning(f"Web: Shutdown callback failed: {e}", exc_info=True)

        if self.tmdb is not None:
            try:
                await self.tmdb.close()
            except Exception as e:
                log.warning(f"Web: Failed to close TMDB client: {e}")
            self.tmdb = None
        self.resolver = None


@lru_cache(maxsize=1)
def get_app_state() -> AppState:
    """Get the singleton application state instance.

    Returns:
        AppState: The application state.
    """
    return AppState()
