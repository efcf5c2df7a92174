"""
NoteKeeper — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the wire format of the /note endpoint.
How:   Handlers decode request bodies with NotePayload and encode responses
       with NoteResponse / NoteCreatedResponse. Schemas are separate from the
       stored Note record so the store never hands out its own objects.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class NotePayload(BaseModel):
    """
    What:  Body of POST and PUT requests.

    Missing fields default to the empty string. Unknown fields (a client
    echoing back id or created_at, for instance) are ignored. A non-string
    value, a non-object body or invalid JSON fails validation.
    """
    name: str = Field(default="", description="Note title")
    text: str = Field(default="", description="Note body")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by GET and PUT on /note.
    """
    id: str = Field(description="Unique note identifier")
    name: str = Field(description="Note title")
    text: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC, RFC 3339)")

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """Returned by POST /note with HTTP 201 Created."""
    id: str = Field(description="Identifier assigned to the new note")


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for monitoring and process supervisors.
    """
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    notes: int = Field(description="Number of notes currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
