"""
TextShelf Backend - JSON Response Class
=========================================

What:  JSONResponse that pretty prints bodies with the configured indent.
Why:   Responses are read by people with curl as often as by programs.
How:   Set as the application's default_response_class and used by the
       exception handlers, so every JSON body shares one format.
"""

import json
from typing import Any

from fastapi.responses import JSONResponse

from app.config import settings


class PrettyJSONResponse(JSONResponse):
    """JSON body indented by settings.json_indent (compact when 0)."""

    def render(self, content: Any) -> bytes:
        indent = settings.json_indent or None
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=indent,
            separators=(",", ": ") if indent else (",", ":"),
        ).encode("utf-8")
