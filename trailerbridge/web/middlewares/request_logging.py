"""Debug request logging middleware."""

import time
from io import BytesIO

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from trailerbridge import log

__all__ = ["RequestLoggingMiddleware"]

MAX_BODY_LOG_CHARS = 1000
TEXT_CONTENT_TYPES = ("application/json", "application/x-www-form-urlencoded")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status code and duration.

    Only installed when the log level is DEBUG. Request bodies are logged as text
    when they look textual, truncated to ``MAX_BODY_LOG_CHARS``; other payloads are
    summarized by content type and size.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        target = request.url.path
        if request.url.query:
            target += f"?{request.url.query}"
        line = f"Web: {request.method} {target}"

        body = await self._describe_body(request)
        if body is not None:
            line += f" | Body: {body}"

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = (time.perf_counter() - start) * 1000
            log.debug(f"{line} | Failed after {elapsed:.1f}ms: {e}")
            raise

        elapsed = (time.perf_counter() - start) * 1000
        log.debug(f"{line} | Response: {response.status_code} ({elapsed:.1f}ms)")
        return response

    @staticmethod
    async def _describe_body(request: Request) -> str | None:
        if request.method in ("GET", "HEAD", "OPTIONS"):
            return None

        try:
            raw = await request.body()
        except Exception as e:
            return f"<error reading body: {e}>"

        if not raw:
            return None
        request.scope["body"] = BytesIO(raw)

        content_type = request.headers.get("content-type", "").split(";")[0].strip()
        if not (content_type.startswith("text/") or content_type in TEXT_CONTENT_TYPES):
            return f"<{content_type or 'unknown'}, {len(raw)} bytes>"

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data, {len(raw)} bytes>"

        if len(text) > MAX_BODY_LOG_CHARS:
            text = text[:MAX_BODY_LOG_CHARS] + "..."
        return text
