"""TMDB API response models."""

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "FindEpisodeResult",
    "FindResponse",
    "FindResult",
    "Video",
    "VideoList",
]


class TMDBBaseModel(BaseModel):
    """Base model for TMDB payloads; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class FindResult(TMDBBaseModel):
    """A movie or TV show returned by the ``/find`` endpoint."""

    id: int
    title: str | None = None
    name: str | None = None


class FindEpisodeResult(TMDBBaseModel):
    """A TV episode returned by the ``/find`` endpoint."""

    id: int
    show_id: int | None = None
    name: str | None = None
    season_number: int | None = None
    episode_number: int | None = None


class FindResponse(TMDBBaseModel):
    """Cross-reference of an external ID to TMDB entities."""

    movie_results: list[FindResult] = Field(default_factory=list)
    tv_results: list[FindResult] = Field(default_factory=list)
    tv_episode_results: list[FindEpisodeResult] = Field(default_factory=list)


class Video(TMDBBaseModel):
    """A single entry of a title's video list."""

    key: str
    site: str
    type: str
    name: str | None = None
    iso_639_1: str | None = None
    official: bool | None = None


class VideoList(TMDBBaseModel):
    """The ``/movie/{id}/videos`` and ``/tv/{id}/videos`` payload."""

    id: int | None = None
    results: list[Video] = Field(default_factory=list)
