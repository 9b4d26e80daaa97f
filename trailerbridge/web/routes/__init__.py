"""Route aggregators for the web application."""

from fastapi.routing import APIRouter

from trailerbridge.web.routes.addon import router as addon_router
from trailerbridge.web.routes.api import router as api_router

__all__ = ["router"]

router = APIRouter()

# The API router goes first so the addon's catch-all resource route cannot shadow it
router.include_router(api_router, prefix="/api", tags=[])
router.include_router(addon_router, tags=["addon"])
