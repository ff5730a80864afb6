"""
TextShelf Backend - Bootstrap Loader
======================================

What:  Reads the startup JSON file and turns it into a seeded ResourceStore.
Why:   A bad seed file should stop the server at startup rather than
       surface later as odd API responses.
How:   Async read with aiofiles, json.loads, then record-by-record checks.
Who:   Called once by the lifespan hook in main.py.
When:  At process start, before the first request is served.

Expected file format:
    [
        {"id": "1", "creator": "Ada", "text": "First resource"},
        {"id": "2", "text": "Creator defaults to Unknown"}
    ]

Failure policy:
    Any problem (missing file, malformed JSON, bad record) raises
    BootstrapError. Startup aborts because the store has no other source of
    initial data.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Set

import aiofiles

from app.config import settings
from app.exceptions import BootstrapError
from app.models.resource import DEFAULT_CREATOR, Resource
from app.services.resource_store import ResourceStore

logger = logging.getLogger(__name__)


def parse_resources(raw: Any, source: str = "<memory>") -> List[Resource]:
    """
    Validate decoded bootstrap data and build Resource records.

    Rules per entry:
        - must be a JSON object
        - id: string, or integer (converted to its decimal string); unique
        - text: string with at least MIN_TEXT_LENGTH characters after trimming
        - creator: optional string, empty or missing becomes "Unknown"

    Raises:
        BootstrapError: naming the first offending entry by index
    """
    if not isinstance(raw, list):
        raise BootstrapError(
            message=f"Bootstrap data in {source} must be a JSON array of resources",
            path=source,
        )

    resources: List[Resource] = []
    seen: Set[str] = set()
    min_length = settings.min_text_length

    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise _bad_entry(source, index, "entry is not an object")

        resource_id = entry.get("id")
        if isinstance(resource_id, bool) or not isinstance(resource_id, (str, int)):
            raise _bad_entry(source, index, "id must be a string or integer")
        resource_id = str(resource_id)
        if resource_id in seen:
            raise _bad_entry(source, index, f"duplicate id '{resource_id}'")

        text = entry.get("text")
        if not isinstance(text, str) or len(text.strip()) < min_length:
            raise _bad_entry(
                source, index, f"text must be at least {min_length} characters long"
            )

        creator = entry.get("creator")
        if creator is not None and not isinstance(creator, str):
            raise _bad_entry(source, index, "creator must be a string")

        seen.add(resource_id)
        resources.append(
            Resource(id=resource_id, creator=creator or DEFAULT_CREATOR, text=text)
        )

    return resources


async def load_resources(path: Optional[str] = None) -> List[Resource]:
    """
    Read and validate the bootstrap file.

    Args:
        path: File to read; defaults to settings.resources_file

    Raises:
        BootstrapError: unreadable file, invalid JSON, or invalid records
    """
    path = path or settings.resources_file
    file_path = Path(path)

    try:
        async with aiofiles.open(file_path, mode="r", encoding="utf-8") as f:
            content = await f.read()
    except OSError as e:
        raise BootstrapError(
            message=f"Could not read bootstrap file {file_path}: {e.strerror or e}",
            path=str(file_path),
            context={"error_type": type(e).__name__},
        )

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise BootstrapError(
            message=f"Bootstrap file {file_path} is not valid JSON: {e.msg} (line {e.lineno})",
            path=str(file_path),
        )

    resources = parse_resources(raw, source=str(file_path))
    logger.info("Loaded %d resources from %s", len(resources), file_path.resolve())
    return resources


async def build_store(path: Optional[str] = None) -> ResourceStore:
    """Load the bootstrap file and return a store seeded with its records."""
    return ResourceStore(await load_resources(path))


def _bad_entry(source: str, index: int, reason: str) -> BootstrapError:
    return BootstrapError(
        message=f"Invalid resource at index {index} in {source}: {reason}",
        path=source,
        context={"index": index},
    )
