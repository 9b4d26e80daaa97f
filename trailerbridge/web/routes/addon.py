"""Stremio addon protocol routes (manifest and meta resource)."""

from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter

from trailerbridge import log
from trailerbridge.config.settings import get_config
from trailerbridge.core.manifest import build_manifest
from trailerbridge.exceptions import (
    TrailerBridgeError,
    UnsupportedMediaKindError,
    UnsupportedResourceError,
)
from trailerbridge.models.meta import MediaKind
from trailerbridge.web.state import get_app_state

__all__ = ["router"]

SUPPORTED_RESOURCES = ("meta",)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"err": message})


def _parse_kind(media_type: str) -> MediaKind:
    try:
        return MediaKind(media_type)
    except ValueError as e:
        raise UnsupportedMediaKindError(
            f"Unsupported media type '{media_type}'"
        ) from e


@router.get("/manifest.json", summary="Addon manifest")
async def manifest() -> JSONResponse:
    """Return the addon manifest.

    Returns:
        JSONResponse: The manifest with camelCase protocol keys.
    """
    payload = build_manifest(get_config().manifest)
    return JSONResponse(payload.model_dump(mode="json", by_alias=True))


async def serve_resource(
    resource: str, media_type: str, media_id: str
) -> JSONResponse:
    """Answer an addon resource request.

    Unknown resources and media types answer 404. Lookup failures are normally
    contained by the resolver and answered as ``{"meta": null}``; when the resolver
    is configured to raise them they answer 500 with the error message.

    Args:
        resource (str): Addon resource name, only ``meta`` is served.
        media_type (str): Requested media type.
        media_id (str): Requested ID.

    Returns:
        JSONResponse: ``{"meta": ...}`` or ``{"err": ...}``.
    """
    try:
        if resource not in SUPPORTED_RESOURCES:
            raise UnsupportedResourceError(f"Unsupported resource '{resource}'")
        kind = _parse_kind(media_type)
    except TrailerBridgeError as e:
        log.debug(f"Web: Rejecting $$'{resource}/{media_type}/{media_id}'$$: {e}")
        return _error(e.status_code, str(e))

    try:
        resolver = get_app_state().ensure_resolver()
        meta = await resolver.get_meta(kind, media_id)
    except Exception as e:
        log.error(f"Web: Meta request for $$'{kind}:{media_id}'$$ failed: {e}")
        return _error(500, str(e))

    return JSONResponse({"meta": meta.model_dump(mode="json") if meta else None})


@router.get("/meta/{media_type}/{media_id}.json", summary="Trailer meta")
async def meta(media_type: str, media_id: str) -> JSONResponse:
    """Return the trailer meta of a movie or series."""
    return await serve_resource("meta", media_type, media_id)


@router.get("/{resource}/{media_type}/{media_id}.json", summary="Addon resource")
async def resource(resource: str, media_type: str, media_id: str) -> JSONResponse:
    """Generic addon resource binding; only ``meta`` is served."""
    return await serve_resource(resource, media_type, media_id)
