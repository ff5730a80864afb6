"""
TextShelf Backend - Static Entry Page
=======================================

What:  Serves the static index page for any GET that no other route matched.
Why:   Browsers opening the server root get a landing page instead of a
       JSON 404.
How:   A catch-all path route; main.py includes this router last so API,
       health and docs routes always take precedence.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.config import settings
from app.exceptions import NotFoundError

router = APIRouter(tags=["Pages"])


@router.get("/{full_path:path}", include_in_schema=False)
async def index_page(full_path: str) -> FileResponse:
    page = Path(settings.index_page)
    if not page.is_file():
        raise NotFoundError(resource="page", resource_id=full_path or "/")
    return FileResponse(path=str(page), media_type="text/html")
