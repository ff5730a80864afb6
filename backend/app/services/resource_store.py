"""
TextShelf Backend - Resource Store (Business Logic)
=====================================================

What:  Owns the ordered, in-memory collection of text resources and implements
       list, search, get, random, create, update and delete on it.
Why:   Every resource rule lives in one class with no HTTP dependency.
How:   A single Python list holds Resource records in insertion order.
       Operations return ResourceResponse copies and report failures by
       raising the typed exceptions in app.exceptions.
Who:   Called by the resource route handlers; seeded by the bootstrap loader.
When:  Built once at startup; lives for the lifetime of the process.

Outcome Mapping (performed by the global handlers in main.py):
    ┌──────────────┬─────────────────────┬────────┐
    │ Operation    │ Failure raised      │ HTTP   │
    ├──────────────┼─────────────────────┼────────┤
    │ search       │ InvalidQueryError   │ 400    │
    │ search       │ NotFoundError       │ 404    │
    │ search       │ SearchFailedError   │ 500    │
    │ get / random │ NotFoundError       │ 404    │
    │ create       │ InvalidInputError   │ 400    │
    │ update       │ NotFound / Invalid  │ 404/400│
    │ delete       │ NotFoundError       │ 404    │
    └──────────────┴─────────────────────┴────────┘

Id Assignment:
    New ids are the decimal string of a counter that starts at the larger of
    the initial collection size and the highest numeric bootstrap id, and only
    ever grows. On an untouched store this gives "size + 1" for each create;
    after deletions it keeps counting, so an id is never handed out twice in
    one process run.

Concurrency:
    create/update/delete run under a lock so id assignment and the
    find-then-mutate steps are atomic. Reads iterate over a snapshot of
    the list and take no lock.
"""

import logging
import math
import random
import re
import threading
from typing import Any, Iterable, List, Optional

from app.config import settings
from app.exceptions import (
    InvalidInputError,
    InvalidQueryError,
    NotFoundError,
    SearchFailedError,
)
from app.models.resource import DEFAULT_CREATOR, Resource
from app.schemas.resource import ResourceResponse

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def validate_text(text: Any, min_length: Optional[int] = None) -> str:
    """
    Check a client-supplied resource body.

    Returns the text unchanged (untrimmed) when it is a string whose trimmed
    length reaches the minimum.

    Raises:
        InvalidInputError: text is missing, not a string, or too short
    """
    if min_length is None:
        min_length = settings.min_text_length
    if not isinstance(text, str) or len(text.strip()) < min_length:
        raise InvalidInputError(
            message=f"Text is required and must be at least {min_length} characters long.",
            field="text",
        )
    return text


def normalize_limit(limit: Any, default: Optional[int] = None) -> int:
    """
    Turn a raw ?limit= value into a positive count.

    Integers are used as given, strings by their leading integer
    ("5abc" → 5, "2.7" → 2). Anything missing, non-numeric or <= 0 falls
    back to the default.
    """
    if default is None:
        default = settings.default_list_limit

    value: Optional[int] = None
    if isinstance(limit, bool):
        value = None
    elif isinstance(limit, int):
        value = limit
    elif isinstance(limit, float):
        value = int(limit) if math.isfinite(limit) else None
    elif isinstance(limit, str):
        match = _LEADING_INT.match(limit)
        if match:
            value = int(match.group(1))

    if value is None or value <= 0:
        return default
    return value


def _is_numeric_id(resource_id: str) -> bool:
    return resource_id.isascii() and resource_id.isdigit()


class ResourceStore:
    """
    Authoritative in-memory collection of resources.

    Responsibilities:
        - list(): First N resources in collection order
        - search(): Case-insensitive literal substring match on text
        - get(): Exact id lookup
        - random(): Uniformly random pick
        - create() / update() / delete(): Validated mutations

    Args:
        resources: Initial records, in the order they should be listed.
                   Ids must already be unique (the bootstrap loader checks).
        rng: Random source for random(); pass a seeded random.Random in tests.
    """

    def __init__(
        self,
        resources: Optional[Iterable[Resource]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._resources: List[Resource] = list(resources or [])
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

        numeric_ids = [int(r.id) for r in self._resources if _is_numeric_id(r.id)]
        self._last_id = max([len(self._resources), *numeric_ids])

    # ── Reads ─────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._resources)

    @property
    def count(self) -> int:
        """Number of resources currently held."""
        return len(self._resources)

    def list(self, limit: Any = None) -> List[ResourceResponse]:
        """
        Return the first `limit` resources in collection order.

        Never fails: a missing, non-numeric or non-positive limit means the
        default limit (10 unless configured otherwise).
        """
        size = normalize_limit(limit)
        return [self._to_response(r) for r in self._resources[:size]]

    def search(self, query: Optional[str]) -> List[ResourceResponse]:
        """
        Find every resource whose text contains `query`, ignoring case.

        The query is escaped before it is compiled, so characters such as
        `.`, `*` or `[` only ever match themselves.

        Raises:
            InvalidQueryError: query is None or empty
            NotFoundError: nothing matched
            SearchFailedError: the pattern could not be built or evaluated
        """
        if not query:
            raise InvalidQueryError()

        try:
            pattern = re.compile(re.escape(query), re.IGNORECASE)
            matches = [r for r in list(self._resources) if pattern.search(r.text)]
        except Exception as e:
            logger.error("Search for %r failed: %s", query, str(e), exc_info=True)
            raise SearchFailedError(context={"error_type": type(e).__name__})

        if not matches:
            raise NotFoundError(
                message="Could not find that resource.",
                context={"query": query},
            )

        logger.debug("Search for %r matched %d resources", query, len(matches))
        return [self._to_response(r) for r in matches]

    def get(self, resource_id: str) -> ResourceResponse:
        """
        Return the resource whose id equals `resource_id` exactly.

        Raises:
            NotFoundError: no such id
        """
        return self._to_response(self._find(resource_id))

    def random(self) -> ResourceResponse:
        """
        Return one resource chosen uniformly at random.

        Raises:
            NotFoundError: the store is empty
        """
        snapshot = list(self._resources)
        if not snapshot:
            raise NotFoundError(message="Could not find that resource.")
        return self._to_response(self._rng.choice(snapshot))

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, text: Any, creator: Optional[str] = None) -> ResourceResponse:
        """
        Validate and append a new resource.

        An empty or missing creator is stored as "Unknown".

        Raises:
            InvalidInputError: text fails validation
        """
        text = validate_text(text)

        with self._lock:
            resource = Resource(
                id=self._next_id(),
                creator=creator or DEFAULT_CREATOR,
                text=text,
            )
            self._resources.append(resource)

        logger.info("Created resource %s (creator=%s)", resource.id, resource.creator)
        return self._to_response(resource)

    def update(self, resource_id: str, text: Any) -> ResourceResponse:
        """
        Replace the text of an existing resource in place.

        The id is checked before the text, so an unknown id with a bad body
        reports NotFoundError.

        Raises:
            NotFoundError: no such id
            InvalidInputError: text fails validation
        """
        with self._lock:
            resource = self._find(resource_id, action="update")
            resource.text = validate_text(text)

        logger.info("Updated resource %s", resource_id)
        return self._to_response(resource)

    def delete(self, resource_id: str) -> ResourceResponse:
        """
        Remove exactly one resource, keeping the order of the others.

        Raises:
            NotFoundError: no such id
        """
        with self._lock:
            for index, resource in enumerate(self._resources):
                if resource.id == resource_id:
                    del self._resources[index]
                    break
            else:
                raise NotFoundError(
                    resource_id=resource_id,
                    message=f"Could not find resource with ID '{resource_id}' to delete.",
                )

        logger.info("Deleted resource %s", resource_id)
        return self._to_response(resource)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _find(self, resource_id: str, action: Optional[str] = None) -> Resource:
        for resource in list(self._resources):
            if resource.id == resource_id:
                return resource
        message = None
        if action:
            message = f"Could not find resource with ID '{resource_id}' to {action}."
        raise NotFoundError(resource_id=resource_id, message=message)

    def _next_id(self) -> str:
        # Caller holds self._lock
        taken = {r.id for r in self._resources}
        self._last_id += 1
        while str(self._last_id) in taken:
            self._last_id += 1
        return str(self._last_id)

    @staticmethod
    def _to_response(resource: Resource) -> ResourceResponse:
        return ResourceResponse.model_validate(resource)
