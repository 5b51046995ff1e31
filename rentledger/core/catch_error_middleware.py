import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from .friendly_msg import get_friendly_message

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last resort for errors raised outside a route, e.g. in a dependency."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            trace_id = request.headers.get("X-Request-ID", "none")
            logger.exception(
                f"[Unhandled Error] TraceID={trace_id} | {request.method} {request.url.path}: {e}"
            )
            return JSONResponse(
                {
                    "success": False,
                    "error": "InternalServerError",
                    "detail": get_friendly_message(e),
                    "traceId": trace_id,
                },
                status_code=500,
            )
