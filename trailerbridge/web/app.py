"""FastAPI application factory and setup."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import DEBUG

from fastapi.applications import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from trailerbridge import __version__, log
from trailerbridge.config.settings import get_config
from trailerbridge.core.resolver import TrailerResolver
from trailerbridge.exceptions import TrailerBridgeError
from trailerbridge.web.middlewares.request_logging import RequestLoggingMiddleware
from trailerbridge.web.routes import router
from trailerbridge.web.state import get_app_state

__all__ = ["create_app"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan context manager.

    Args:
        app (FastAPI): The FastAPI application instance.

    Returns:
        AsyncGenerator: The application lifespan context manager.
    """
    state = get_app_state()
    resolver: TrailerResolver | None = app.extra.get("resolver")
    if resolver is not None:
        state.set_resolver(resolver)
    else:
        state.ensure_resolver()
        log.info("Web: Trailer resolver initialized from configuration")
    try:
        yield
    finally:
        await state.shutdown()


def create_app(resolver: TrailerResolver | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        resolver (TrailerResolver | None): Resolver to serve requests with; one is
            built from the configuration at startup when omitted.

    Returns:
        FastAPI: The created FastAPI application.
    """
    config = get_config()
    app = FastAPI(title="TrailerBridge", lifespan=lifespan, version=__version__)

    if resolver is not None:
        app.extra["resolver"] = resolver

    # Add request logging middleware if in debug mode
    if log.level <= DEBUG:
        app.add_middleware(RequestLoggingMiddleware)
        log.debug("Web: Request logging enabled (debug mode)")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(router)

    @app.exception_handler(TrailerBridgeError)
    async def domain_exception_handler(
        request: Request, exc: TrailerBridgeError
    ) -> JSONResponse:
        """Render TrailerBridge errors as addon-style ``{"err": ...}`` responses.

        Args:
            request (Request): The incoming HTTP request.
            exc (TrailerBridgeError): The exception instance.

        Returns:
            JSONResponse: JSON response with the error message.
        """
        cls = exc.__class__
        log.error(f"Web: {cls.__name__} on $$'{request.url.path}'$$: {exc}")
        return JSONResponse(
            status_code=cls.status_code,
            content={"err": str(exc) or cls.__doc__ or cls.__name__},
        )

    return app
