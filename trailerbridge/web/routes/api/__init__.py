"""API routes."""

from fastapi.routing import APIRouter

from trailerbridge.web.routes.api.system import router as system_router

__all__ = ["router"]

router = APIRouter()

router.include_router(system_router, prefix="/system", tags=["system"])
