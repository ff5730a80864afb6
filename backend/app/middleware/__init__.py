# Middleware package init
"""
TextShelf Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log method, path, status and duration with the request ID
    3. GZip: Compress large bodies unless the client sent x-no-compression

    Responses travel back through the same chain in reverse, so the logged
    status is the final one and X-Request-ID is set on every response.
"""
