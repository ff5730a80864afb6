"""
TextShelf Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   One typed place for every tunable; bad values fail at import time
       instead of mid-request.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Environment variables are case-insensitive: PORT and port both work.
"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

# backend/ directory, which holds data/ and static/
BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development.
    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Bootstrap Data ────────────────────────────────────────────────────
    # What: JSON array of {id, creator, text} read once at startup
    # Defaults point into backend/, so the server starts from any directory
    resources_file: str = Field(
        default=str(BACKEND_DIR / "data" / "resources.json"),
        description="Path to the JSON file that seeds the resource store",
    )

    # ── Static Fallback Page ──────────────────────────────────────────────
    # Served for any GET that matches no API route
    index_page: str = Field(default=str(BACKEND_DIR / "static" / "index.html"))

    # ── Resource Rules ────────────────────────────────────────────────────
    default_list_limit: int = Field(default=10, ge=1, le=1000)
    min_text_length: int = Field(default=3, ge=1, le=1000)

    # ── Response Formatting ───────────────────────────────────────────────
    # Responses smaller than this many bytes are sent uncompressed
    gzip_minimum_size: int = Field(default=500, ge=0)
    # Indentation for JSON bodies; 0 disables pretty printing
    json_indent: int = Field(default=2, ge=0, le=8)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance, imported throughout the application
settings = Settings()
