"""
TextShelf Backend - Resource Record
=====================================

What:  The mutable record held inside the resource store.
Why:   The stored record can change in place; API callers only ever see
       immutable-by-convention snapshots.
How:   A plain dataclass; only ResourceStore creates, mutates or removes
       instances. Everything leaving the store is a ResourceResponse copy.
Who:   Used by ResourceStore and the bootstrap loader.

Field rules:
    - id: Decimal string assigned by the store (bootstrap ids are kept as-is)
    - creator: Free-form author name, "Unknown" when not supplied
    - text: Body text, at least MIN_TEXT_LENGTH characters after trimming
    - Only `text` changes after creation
"""

from dataclasses import dataclass

DEFAULT_CREATOR = "Unknown"


@dataclass
class Resource:
    """A single text resource owned by the store."""

    id: str
    text: str
    creator: str = DEFAULT_CREATOR

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        preview = self.text if len(self.text) <= 30 else self.text[:27] + "..."
        return f"<Resource(id='{self.id}', creator='{self.creator}', text='{preview}')>"
