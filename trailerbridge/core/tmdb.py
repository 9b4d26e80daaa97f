"""TMDB Client."""

import asyncio
from typing import Any, TypeVar
from urllib.parse import quote

import aiohttp
from limiter import Limiter
from pydantic import BaseModel, ValidationError

from trailerbridge import __version__, log
from trailerbridge.exceptions import TMDBRequestError, TMDBResponseError
from trailerbridge.models.schemas.tmdb import FindResponse, VideoList

__all__ = ["TMDBClient"]

M = TypeVar("M", bound=BaseModel)

# TMDB allows roughly 50 requests per second per IP; stay a little below that
tmdb_limiter = Limiter(rate=40, capacity=40, jitter=False)


class TMDBClient:
    """Client for the TMDB v3 REST API.

    Only the endpoints the addon needs are wrapped: cross-referencing IMDb IDs and
    listing the videos of a movie or TV show. All requests share a single aiohttp
    session, are rate limited and are retried on rate limits, gateway errors and
    connection failures.
    """

    API_URL = "https://api.themoviedb.org/3"
    MAX_TRIES = 3

    def __init__(self, api_key: str, timeout: float | None = None) -> None:
        """Initialize the TMDB client.

        Args:
            api_key (str): TMDB v3 API key.
            timeout (float | None): Total timeout per request in seconds; None means
                no timeout.
        """
        self.api_key = api_key
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session.

        Returns:
            aiohttp.ClientSession: The active session for making HTTP requests.
        """
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "Accept": "application/json",
                    "User-Agent": f"TrailerBridge/{__version__}",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def find_by_imdb_id(self, imdb_id: str) -> FindResponse:
        """Cross-reference an IMDb ID to TMDB movies, shows and episodes.

        Args:
            imdb_id (str): IMDb identifier such as ``tt0133093``.

        Returns:
            FindResponse: The movie, TV and TV episode candidates.
        """
        data = await self._make_request(
            f"/find/{quote(imdb_id, safe='')}", {"external_source": "imdb_id"}
        )
        return self._parse(FindResponse, data)

    async def movie_videos(self, tmdb_id: int | str) -> VideoList:
        """Get the video list of a movie.

        Args:
            tmdb_id (int | str): TMDB movie ID.

        Returns:
            VideoList: The movie's videos in TMDB order.
        """
        data = await self._make_request(
            f"/movie/{quote(str(tmdb_id), safe='')}/videos"
        )
        return self._parse(VideoList, data)

    async def tv_videos(self, tmdb_id: int | str) -> VideoList:
        """Get the video list of a TV show.

        Args:
            tmdb_id (int | str): TMDB TV show ID.

        Returns:
            VideoList: The show's videos in TMDB order.
        """
        data = await self._make_request(
            f"/tv/{quote(str(tmdb_id), safe='')}/videos"
        )
        return self._parse(VideoList, data)

    @staticmethod
    def _parse(model: type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise TMDBResponseError(
                f"Unexpected TMDB payload for {model.__name__}: {e}"
            ) from e

    @tmdb_limiter()
    async def _make_request(
        self, path: str, params: dict[str, Any] | None = None, retry_count: int = 0
    ) -> dict:
        """Makes a rate-limited GET request to the TMDB API.

        Args:
            path (str): Endpoint path relative to the API root.
            params (dict[str, Any] | None): Query parameters, without the API key.
            retry_count (int): Number of retries attempted so far.

        Returns:
            dict: JSON response from the API

        Raises:
            TMDBRequestError: If TMDB answers with an error status or the request
                keeps failing after retries.
        """
        if retry_count >= self.MAX_TRIES:
            raise TMDBRequestError(
                f"TMDB request {path} failed after {self.MAX_TRIES} tries"
            )

        session = await self._get_session()
        query = {"api_key": self.api_key, **(params or {})}

        try:
            async with session.get(f"{self.API_URL}{path}", params=query) as response:
                if response.status == 429:  # Handle rate limit retries
                    retry_after = int(response.headers.get("Retry-After", 1))
                    log.warning(f"Rate limit exceeded, waiting {retry_after} seconds")
                    await asyncio.sleep(retry_after)
                    return await self._make_request(path, params, retry_count + 1)
                elif response.status in (502, 503, 504):
                    log.warning(f"Received HTTP {response.status} from TMDB, retrying")
                    await asyncio.sleep(1)
                    return await self._make_request(path, params, retry_count + 1)

                if response.status >= 400:
                    response_text = await response.text()
                    raise TMDBRequestError(
                        f"TMDB request {path} failed with HTTP {response.status}: "
                        f"{response_text[:200]}"
                    )

                return await response.json()

        except (TimeoutError, aiohttp.ClientError) as e:
            log.error(f"Connection error while requesting $$'{path}'$$ from TMDB: {e}")
            await asyncio.sleep(1)
            return await self._make_request(path, params, retry_count + 1)
