"""Test doubles for resolver and TMDB client tests."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from trailerbridge.models.schemas.tmdb import FindResponse, VideoList


def video(key: str, *, type: str = "Trailer", site: str = "YouTube") -> dict:
    """Build a raw TMDB video entry."""
    return {"key": key, "type": type, "site": site, "name": f"Video {key}"}


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeTMDB:
    """In-memory stand-in for ``TMDBClient`` that records every call.

    ``find`` maps IMDb IDs to raw ``/find`` payloads, ``movies`` and ``shows`` map
    TMDB IDs to lists of raw video entries. Unknown IDs produce empty results.
    Setting ``error`` makes every call raise it; setting ``gate`` makes calls wait
    until the event is set.
    """

    find: dict[str, dict[str, Any]] = field(default_factory=dict)
    movies: dict[str, list[dict]] = field(default_factory=dict)
    shows: dict[str, list[dict]] = field(default_factory=dict)
    error: Exception | None = None
    gate: asyncio.Event | None = None
    find_calls: list[str] = field(default_factory=list)
    movie_calls: list[str] = field(default_factory=list)
    tv_calls: list[str] = field(default_factory=list)

    @property
    def total_calls(self) -> int:
        return len(self.find_calls) + len(self.movie_calls) + len(self.tv_calls)

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error

    async def find_by_imdb_id(self, imdb_id: str) -> FindResponse:
        self.find_calls.append(imdb_id)
        await self._wait()
        return FindResponse.model_validate(self.find.get(imdb_id, {}))

    async def movie_videos(self, tmdb_id: int | str) -> VideoList:
        self.movie_calls.append(str(tmdb_id))
        await self._wait()
        return VideoList.model_validate({"results": self.movies.get(str(tmdb_id), [])})

    async def tv_videos(self, tmdb_id: int | str) -> VideoList:
        self.tv_calls.append(str(tmdb_id))
        await self._wait()
        return VideoList.model_validate({"results": self.shows.get(str(tmdb_id), [])})
