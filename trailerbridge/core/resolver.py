"""Trailer resolution: ID normalization, trailer selection and cached lookups."""

import asyncio
import re
from collections.abc import Iterable
from typing import Protocol

from trailerbridge import log
from trailerbridge.exceptions import NoProviderMatchError, TrailerBridgeError
from trailerbridge.models.meta import (
    MediaKind,
    ResolveResult,
    TrailerMeta,
)
from trailerbridge.models.schemas.tmdb import FindResponse, Video, VideoList
from trailerbridge.utils.cache import TTLStore

__all__ = [
    "DEFAULT_CACHE_TTL",
    "MetadataProvider",
    "TrailerResolver",
    "cache_key",
    "normalize_id",
    "select_trailer",
    "trailer_url",
]

DEFAULT_CACHE_TTL = 6 * 60 * 60  # 6 hours

IMDB_PREFIX = "tt"
NON_DIGITS = re.compile(r"[^0-9]")
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={key}"


class MetadataProvider(Protocol):
    """The subset of the TMDB client the resolver depends on."""

    async def find_by_imdb_id(self, imdb_id: str) -> FindResponse: ...

    async def movie_videos(self, tmdb_id: int | str) -> VideoList: ...

    async def tv_videos(self, tmdb_id: int | str) -> VideoList: ...


def cache_key(kind: str, media_id: str) -> str:
    """Build the cache key of a request from its kind and ID as received."""
    return f"{kind}:{media_id}"


async def normalize_id(
    provider: MetadataProvider, kind: MediaKind, raw_id: str
) -> tuple[MediaKind, str]:
    """Turn a requested ID into a TMDB ID, correcting the media kind if needed.

    IMDb IDs (``tt...``) are cross-referenced through TMDB. Movie matches win over
    show matches, which win over episode matches; an episode resolves to its parent
    show when TMDB reports one. Any other ID has its non-digit characters stripped,
    so ``tmdb:603`` and ``movie-603`` both become ``603``. A result without digits
    is returned as an empty string and left for TMDB to reject.

    Args:
        provider (MetadataProvider): TMDB client used for the cross-reference.
        kind (MediaKind): The requested media kind.
        raw_id (str): The requested ID.

    Returns:
        tuple[MediaKind, str]: The effective media kind and the TMDB ID.

    Raises:
        NoProviderMatchError: If an IMDb ID has no TMDB match at all.
    """
    if not raw_id.startswith(IMDB_PREFIX):
        return kind, NON_DIGITS.sub("", raw_id)

    imdb_id = raw_id.strip()
    found = await provider.find_by_imdb_id(imdb_id)

    if found.movie_results:
        return MediaKind.MOVIE, str(found.movie_results[0].id)
    if found.tv_results:
        return MediaKind.SERIES, str(found.tv_results[0].id)
    if found.tv_episode_results:
        episode = found.tv_episode_results[0]
        # Falls back to the episode's own ID, which TMDB will not know as a show
        return MediaKind.SERIES, str(episode.show_id or episode.id)

    raise NoProviderMatchError(f"No TMDB match found for IMDb ID: {imdb_id}")


def select_trailer(videos: Iterable[Video]) -> Video | None:
    """Return the first YouTube trailer in provider order, if any."""
    return next(
        (v for v in videos if v.type == "Trailer" and v.site == "YouTube"), None
    )


def trailer_url(video: Video | None) -> str | None:
    """Build the YouTube watch URL of a selected trailer."""
    if video is None:
        return None
    return YOUTUBE_WATCH_URL.format(key=video.key)


class TrailerResolver:
    """Resolves addon meta requests to TMDB trailers with a TTL cache in front.

    Lookups for the same request key that miss the cache at the same time share a
    single upstream fetch. Only successful lookups are cached.
    """

    def __init__(
        self,
        provider: MetadataProvider,
        cache: TTLStore[TrailerMeta] | None = None,
        raise_errors: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            provider (MetadataProvider): TMDB client.
            cache (TTLStore[TrailerMeta] | None): Meta cache; a 6 hour cache is
                created when omitted.
            raise_errors (bool): Make ``get_meta`` raise lookup failures instead of
                returning None.
        """
        self.provider = provider
        self.cache: TTLStore[TrailerMeta] = (
            cache if cache is not None else TTLStore(DEFAULT_CACHE_TTL)
        )
        self.raise_errors = raise_errors
        self._inflight: dict[str, asyncio.Task[ResolveResult]] = {}

    async def fetch_trailer(self, kind: MediaKind, tmdb_id: str) -> str | None:
        """Fetch a title's videos and return its trailer URL.

        Args:
            kind (MediaKind): Selects the TV or the movie videos endpoint.
            tmdb_id (str): TMDB ID of the title.

        Returns:
            str | None: YouTube watch URL, or None if the title has no trailer.
        """
        if kind == MediaKind.SERIES:
            videos = await self.provider.tv_videos(tmdb_id)
        else:
            videos = await self.provider.movie_videos(tmdb_id)
        return trailer_url(select_trailer(videos.results))

    async def resolve(self, kind: MediaKind, media_id: str) -> ResolveResult:
        """Resolve the trailer meta of a title.

        Args:
            kind (MediaKind): Requested media kind.
            media_id (str): Requested ID (IMDb or TMDB based).

        Returns:
            ResolveResult: ``OK`` with the meta, ``NOT_FOUND`` when an IMDb ID has no
                TMDB match, ``UPSTREAM_ERROR`` when TMDB could not be queried.
        """
        kind = MediaKind(kind)
        key = cache_key(kind, media_id)
        cached = self.cache.get(key)
        if cached is not None:
            log.debug(f"Cache hit for $$'{key}'$$")
            return ResolveResult.success(cached)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._resolve_uncached(key, kind, media_id))
            self._inflight[key] = task
            task.add_done_callback(lambda t: self._forget(key, t))
        else:
            log.debug(f"Joining in-flight lookup for $$'{key}'$$")
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task[ResolveResult]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _resolve_uncached(
        self, key: str, kind: MediaKind, media_id: str
    ) -> ResolveResult:
        try:
            effective_kind, tmdb_id = await normalize_id(self.provider, kind, media_id)
            trailer = await self.fetch_trailer(effective_kind, tmdb_id)
        except NoProviderMatchError as e:
            log.warning(f"Lookup for $$'{key}'$$ failed: {e}")
            return ResolveResult.not_found(e)
        except TrailerBridgeError as e:
            log.error(f"Trailer lookup failed for $$'{key}'$$: {e}")
            return ResolveResult.upstream_error(e)
        except Exception as e:
            log.error(
                f"Unexpected error while resolving $$'{key}'$$: {e}", exc_info=True
            )
            return ResolveResult.upstream_error(e)

        meta = TrailerMeta(
            id=media_id, type=kind, name=f"Trailer for {media_id}", trailer=trailer
        )
        self.cache.put(key, meta)
        log.info(
            f"Trailer cached for $$'{media_id}'$$ $${{tmdb: {tmdb_id}, "
            f"kind: {effective_kind}, trailer: {trailer is not None}}}$$"
        )
        return ResolveResult.success(meta)

    async def get_meta(self, kind: MediaKind, media_id: str) -> TrailerMeta | None:
        """Meta handler: resolve a title and contain lookup failures.

        Args:
            kind (MediaKind): Requested media kind.
            media_id (str): Requested ID.

        Returns:
            TrailerMeta | None: The meta, or None if the lookup failed.

        Raises:
            Exception: The lookup failure, only when ``raise_errors`` is set.
        """
        result = await self.resolve(kind, media_id)
        if result.ok:
            return result.meta

        if self.raise_errors and result.error is not None:
            raise result.error
        log.debug(
            f"Answering null meta for $$'{cache_key(kind, media_id)}'$$ "
            f"$${{status: {result.status}}}$$"
        )
        return None

    def stats(self) -> dict[str, int]:
        """Return cache and in-flight counters."""
        return {"cached": len(self.cache), "inflight": len(self._inflight)}

