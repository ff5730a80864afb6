"""
TextShelf Backend - Resource Route Handlers
=============================================

What:  The seven /api resource endpoints.
Why:   Keeps HTTP parsing here and every resource rule in the store, so the
       rules are tested once without a client.
How:   Each handler extracts path/query/body values, calls one ResourceStore
       operation and returns its result. Failures are raised by the store and
       turned into error responses by the handlers registered in main.py.

Route Inventory:
    GET    /api/resources?limit=N          list (first N, default 10)
    GET    /api/resources/search?q=Q       case-insensitive literal search
    GET    /api/resource/random?format=    random pick, JSON or plain text
    GET    /api/resource/{id}              fetch by id
    POST   /api/resources                  create (201)
    PUT    /api/resource/{id}              replace text
    DELETE /api/resource/{id}              delete

/resource/random is declared before /resource/{resource_id}; otherwise
"random" would be captured as an id.
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from fastapi.responses import PlainTextResponse

from app.dependencies import get_store
from app.schemas.resource import (
    ErrorResponse,
    RandomFormat,
    ResourceCreate,
    ResourceResponse,
)
from app.services.resource_store import ResourceStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Resources"])


@router.get(
    "/resources",
    response_model=List[ResourceResponse],
    summary="List resources",
    description=(
        "Returns the first `limit` resources in collection order. A missing, "
        "non-numeric or non-positive limit falls back to 10."
    ),
)
async def list_resources(
    response: Response,
    limit: Optional[str] = Query(
        default=None,
        description="Maximum number of resources to return (default 10)",
    ),
    store: ResourceStore = Depends(get_store),
) -> List[ResourceResponse]:
    """
    List resources in insertion order.

    `limit` is taken as a raw string so that values like "abc" or "-1"
    fall back to the default instead of failing FastAPI's int parsing.
    X-Total-Count carries the full collection size.
    """
    result = store.list(limit)
    response.headers["X-Total-Count"] = str(store.count)
    return result


@router.get(
    "/resources/search",
    response_model=List[ResourceResponse],
    responses={
        400: {"description": "Missing query parameter 'q'", "model": ErrorResponse},
        404: {"description": "No resource matched", "model": ErrorResponse},
        500: {"description": "Search failed", "model": ErrorResponse},
    },
    summary="Search resources by text",
    description=(
        "Case-insensitive substring search over resource text. The query is "
        "matched literally; pattern characters such as '.', '*' or '[' have "
        "no special meaning."
    ),
)
async def search_resources(
    q: Optional[str] = Query(default=None, description="Text to look for"),
    store: ResourceStore = Depends(get_store),
) -> List[ResourceResponse]:
    return store.search(q)


@router.get(
    "/resource/random",
    response_model=ResourceResponse,
    responses={
        200: {
            "description": "A random resource (JSON) or its text (format=text)",
            "content": {"text/plain": {}},
        },
        404: {"description": "The store is empty", "model": ErrorResponse},
    },
    summary="Fetch a random resource",
)
async def random_resource(
    output_format: Optional[str] = Query(
        default=None,
        alias="format",
        description="'text' for the raw text as text/plain, anything else for JSON",
    ),
    store: ResourceStore = Depends(get_store),
):
    """
    Pick one resource uniformly at random.

    With ?format=text the body is the resource text alone, without a JSON
    envelope.
    """
    resource = store.random()
    if RandomFormat.from_param(output_format) is RandomFormat.TEXT:
        return PlainTextResponse(resource.text)
    return resource


@router.get(
    "/resource/{resource_id}",
    response_model=ResourceResponse,
    responses={404: {"description": "Resource not found", "model": ErrorResponse}},
    summary="Fetch a resource by ID",
)
async def get_resource(
    resource_id: str,
    store: ResourceStore = Depends(get_store),
) -> ResourceResponse:
    return store.get(resource_id)


@router.post(
    "/resources",
    status_code=201,
    response_model=ResourceResponse,
    responses={400: {"description": "Text missing or too short", "model": ErrorResponse}},
    summary="Create a resource",
    description=(
        "Creates a resource from `{creator?, text}`. Text must be at least 3 "
        "characters after trimming; creator defaults to 'Unknown'."
    ),
)
async def create_resource(
    payload: ResourceCreate,
    store: ResourceStore = Depends(get_store),
) -> ResourceResponse:
    return store.create(text=payload.text, creator=payload.creator)


@router.put(
    "/resource/{resource_id}",
    response_model=ResourceResponse,
    responses={
        400: {"description": "Text missing or too short", "model": ErrorResponse},
        404: {"description": "Resource not found", "model": ErrorResponse},
    },
    summary="Update a resource's text",
)
async def update_resource(
    resource_id: str,
    payload: Any = Body(
        default=None,
        description="JSON object with a replacement `text`, at least 3 characters after trimming",
        examples=[{"text": "Replacement body"}],
    ),
    store: ResourceStore = Depends(get_store),
) -> ResourceResponse:
    """
    Replace the text of an existing resource; id and creator never change.

    The body is read loosely so the store looks up the id before it checks
    the text. An unknown id answers 404 whatever the body holds.
    """
    text = payload.get("text") if isinstance(payload, dict) else None
    return store.update(resource_id, text=text)


@router.delete(
    "/resource/{resource_id}",
    response_model=ResourceResponse,
    responses={404: {"description": "Resource not found", "model": ErrorResponse}},
    summary="Delete a resource",
)
async def delete_resource(
    resource_id: str,
    store: ResourceStore = Depends(get_store),
) -> ResourceResponse:
    """Remove the resource and return it as it was before deletion."""
    return store.delete(resource_id)
