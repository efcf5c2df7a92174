"""
NoteKeeper — Note Record
==========================

What:  The in-memory record for a single note.
How:   Plain dataclass owned by NoteStore; callers only ever receive copies.
Who:   Created by NoteService, held by NoteStore, converted to NoteResponse
       by the route handlers.

Field rules:
    - id:          Assigned once by the IdGenerator, never changed
    - name / text: The only fields an update may overwrite
    - created_at:  UTC, timezone-aware, set once at creation
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Note:
    """A stored note."""

    id: str
    name: str = ""
    text: str = ""
    created_at: datetime = field(default_factory=utc_now)

    def copy(self) -> "Note":
        """Detached copy; all fields are immutable values, so shallow is enough."""
        return dataclasses.replace(self)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, name='{self.name}', created_at='{self.created_at}')>"
