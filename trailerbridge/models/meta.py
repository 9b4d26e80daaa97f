"""Addon-facing models: media kinds, trailer meta, manifest and resolve results."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Manifest",
    "MediaKind",
    "ResolveResult",
    "ResolveStatus",
    "TrailerMeta",
]


class MediaKind(StrEnum):
    """Media types served by the addon."""

    MOVIE = "movie"
    SERIES = "series"

    @classmethod
    def _missing_(cls, value: object) -> "MediaKind | None":
        if isinstance(value, str):
            value = value.lower()
            for member in cls:
                if member.value == value:
                    return member
        return None


class TrailerMeta(BaseModel):
    """Meta object returned for a title.

    ``trailer`` is a YouTube watch URL, or ``None`` when TMDB lists no YouTube
    trailer for the title.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: MediaKind
    name: str
    trailer: str | None = None


class Manifest(BaseModel):
    """Stremio addon manifest."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    version: str
    name: str
    description: str
    types: list[MediaKind] = Field(
        default_factory=lambda: [MediaKind.MOVIE, MediaKind.SERIES]
    )
    resources: list[str] = Field(default_factory=lambda: ["meta"])
    id_prefixes: list[str] = Field(
        default_factory=lambda: ["tt", "tmdb", "movie", "series"],
        alias="idPrefixes",
    )
    catalogs: list[dict] = Field(default_factory=list)


class ResolveStatus(StrEnum):
    """Outcome of a trailer lookup."""

    OK = "ok"
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"


@dataclass(frozen=True)
class ResolveResult:
    """Tagged result of a trailer lookup.

    ``meta`` is set only for ``OK`` results; ``error`` holds the exception for the
    failure statuses. An ``OK`` result whose meta has no trailer means the title
    legitimately has none.
    """

    status: ResolveStatus
    meta: TrailerMeta | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResolveStatus.OK

    @classmethod
    def success(cls, meta: TrailerMeta) -> "ResolveResult":
        return cls(status=ResolveStatus.OK, meta=meta)

    @classmethod
    def not_found(cls, error: Exception) -> "ResolveResult":
        return cls(status=ResolveStatus.NOT_FOUND, error=error)

    @classmethod
    def upstream_error(cls, error: Exception) -> "ResolveResult":
        return cls(status=ResolveStatus.UPSTREAM_ERROR, error=error)
