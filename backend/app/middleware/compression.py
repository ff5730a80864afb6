"""
TextShelf Backend - Response Compression Middleware
=====================================================

What:  Gzip compression for responses, with a per-request opt-out.
Why:   Lists can be large; some clients (or proxies that compress
       themselves) need the uncompressed body.
How:   Wraps Starlette's GZipMiddleware. A request carrying an
       `x-no-compression` header (any value) bypasses compression entirely;
       every other request gets the standard behaviour (gzip when the client
       accepts it and the body reaches the minimum size).
"""

from starlette.datastructures import Headers
from starlette.middleware.gzip import GZipMiddleware
from starlette.types import Receive, Scope, Send

NO_COMPRESSION_HEADER = "x-no-compression"


class OptionalGZipMiddleware(GZipMiddleware):
    """GZipMiddleware that honours the x-no-compression request header."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)
            if NO_COMPRESSION_HEADER in headers:
                await self.app(scope, receive, send)
                return
        await super().__call__(scope, receive, send)
