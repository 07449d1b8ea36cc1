"""
Request correlation middleware.

Each request gets a correlation id, taken from the ``X-Correlation-ID``
header when the client sends one. The id is bound to the log context for
the duration of the request and echoed back in the response headers.
"""
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from confidence_pool.core.logging import get_logger, log_context

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Usage:
        app.add_middleware(CorrelationIdMiddleware)

    The id is also available to handlers as ``request.state.correlation_id``.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        request.state.correlation_id = correlation_id

        with log_context(correlation_id=correlation_id):
            response = await call_next(request)
            logger.debug(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={"status": response.status_code},
            )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
