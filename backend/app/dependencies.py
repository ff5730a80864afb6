"""
TextShelf Backend - Route Dependencies
========================================

What:  FastAPI dependency that hands the process-wide ResourceStore to routes.
Why:   Routes never import a global store, so tests can inject their own.
How:   The store lives on `app.state.store`; it is placed there by the
       lifespan hook (bootstrap file) or by create_app(store=...) in tests.

Usage:
    @router.get("/resources")
    async def list_resources(store: ResourceStore = Depends(get_store)):
        ...
"""

from fastapi import Request

from app.exceptions import TextShelfError
from app.services.resource_store import ResourceStore


def get_store(request: Request) -> ResourceStore:
    """Return the application's store, or fail if startup has not loaded it."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise TextShelfError(message="The resource store is not ready yet.")
    return store
