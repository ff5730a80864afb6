"""
TextShelf Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for resource routes.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.
Who:   Used by route handlers as body and return types, and by ResourceStore
       to hand out copies of its records.

Design Decision:
    Request bodies are deliberately loose (every field optional). The rule
    "text is required and at least 3 characters" belongs to the store, so a
    missing text reaches the store and produces the same 400 message as a
    short one. PUT /api/resource/{id} takes no model at all and reads
    `text` from the raw JSON body, so an unknown id is reported first.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ResourceResponse(BaseModel):
    """
    What:  Serializable snapshot of a stored resource.
    Who:   Returned by every resource route that answers with a JSON object.
    When:  Built by ResourceStore from its internal record on every read or
           mutation, so callers never hold a reference to store state.
    """
    id: str = Field(description="Store-assigned identifier (decimal string)")
    creator: str = Field(description="Author of the text, 'Unknown' if not given")
    text: str = Field(description="Resource body")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ResourceCreate(BaseModel):
    """
    What:  Body of POST /api/resources.
    How:   Every field is optional; ResourceStore.create() validates `text`.
    """
    creator: Optional[str] = Field(default=None, description="Author name (optional)")
    text: Optional[str] = Field(
        default=None,
        description="Resource body, at least 3 characters after trimming",
    )


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Enums
# ══════════════════════════════════════════════════════════════════════════


class RandomFormat(str, Enum):
    """
    Output mode for GET /api/resource/random.

    JSON returns the full record; TEXT returns only the raw text as
    text/plain with no JSON envelope.
    """
    JSON = "json"
    TEXT = "text"

    @classmethod
    def from_param(cls, value: Optional[str]) -> "RandomFormat":
        """Maps the ?format= query value; only an exact 'text' selects plain text."""
        if value == cls.TEXT.value:
            return cls.TEXT
        return cls.JSON


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "Could not find resource with ID '42'.",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    resources: int = Field(description="Number of resources currently held")
    uptime_seconds: float = Field(description="Seconds since service started")
