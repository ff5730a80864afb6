"""
TextShelf Backend - Request ID Middleware
===========================================

What:  Tags every request with a short correlation id and echoes it back in
       the X-Request-ID response header.
Why:   Lets one client call be traced from the access log to the error body
       it receives.
How:   Reuses a client-supplied X-Request-ID or generates one, then stores it
       in a ContextVar (read by loggers and exception handlers) and on
       request.state (read by route handlers).
When:  Runs before the access-log middleware so log lines carry the id.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """Eight hex characters, enough to correlate log lines."""
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns and propagates the request correlation id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
