"""System related API endpoints (version and runtime info)."""

import platform
from datetime import UTC, datetime

from fastapi.routing import APIRouter
from pydantic import BaseModel

from trailerbridge import __git_hash__, __version__
from trailerbridge.web.state import get_app_state

__all__ = ["router"]


class MetaResponse(BaseModel):
    version: str
    git_hash: str


class CacheInfoModel(BaseModel):
    ttl_seconds: float | None = None
    cached: int = 0
    inflight: int = 0


class AboutResponse(BaseModel):
    version: str
    git_hash: str
    python: str
    platform: str
    utc_now: str
    started_at: str
    uptime_seconds: int
    uptime: str
    cache: CacheInfoModel


def _human_uptime(seconds: int) -> str:
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    parts: list[str] = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")
    return " ".join(parts)


router = APIRouter()


@router.get("/meta", summary="Return version info", response_model=MetaResponse)
async def api_meta() -> MetaResponse:
    """Return the running version and git hash."""
    return MetaResponse(version=__version__, git_hash=__git_hash__)


@router.get(
    "/about",
    summary="Return runtime & cache diagnostics",
    response_model=AboutResponse,
)
async def api_about() -> AboutResponse:
    """Get runtime metadata.

    The resolver is not created here; cache counters stay at zero until the first
    addon request has been served.

    Returns:
        AboutResponse: The runtime metadata.
    """
    state = get_app_state()
    now = datetime.now(UTC)
    uptime_seconds = int((now - state.started_at).total_seconds())

    cache = CacheInfoModel()
    if state.resolver is not None:
        cache = CacheInfoModel(
            ttl_seconds=state.resolver.cache.ttl, **state.resolver.stats()
        )

    return AboutResponse(
        version=__version__,
        git_hash=__git_hash__,
        python=platform.python_version(),
        platform=platform.platform(),
        utc_now=now.isoformat(),
        started_at=state.started_at.isoformat(),
        uptime_seconds=uptime_seconds,
        uptime=_human_uptime(uptime_seconds),
        cache=cache,
    )
