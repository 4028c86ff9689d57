import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach the caller's id to `request.state` and log each request.

    Identity is established upstream; the authenticated user id arrives in
    the X-User-ID header. Routes that need a caller reject requests without it.
    """

    async def dispatch(self, request: Request, call_next):
        raw_user_id = request.headers.get("X-User-ID")
        request.state.user_id = raw_user_id.split(",")[0].strip() if raw_user_id else None

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "%s %s -> %s (%.1f ms) user=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.state.user_id or "-",
        )
        return response
