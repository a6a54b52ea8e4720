"""
Notes Service: Pydantic Request/Response Schemas
=================================================

What:  The API contract. FastAPI validates request bodies against these
       models, serializes responses from them and builds the OpenAPI docs.

Schemas are kept separate from the SQLAlchemy model so the wire format can
differ from the table (the create response, for example, omits created_at).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes.

    `text` is optional at the schema level on purpose: a missing, null or
    empty value is answered with 400 "text required" by NoteService rather
    than with the framework's generic validation error.
    """
    text: Optional[str] = Field(default=None, description="Note content (max 255 characters)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """A stored note, as returned by GET /api/notes (all columns)."""
    id: int = Field(description="Auto-incremented note identifier")
    text: str = Field(description="Note content")
    created_at: Optional[datetime] = Field(
        default=None,
        description="Server-assigned creation timestamp",
    )

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """
    Returned by POST /api/notes with HTTP 201.

    Echoes the submitted text with the assigned id; created_at is not
    re-fetched.
    """
    id: int = Field(description="Auto-incremented note identifier")
    text: str = Field(description="The submitted note content")


class ErrorResponse(BaseModel):
    """
    Error body for every failure response.

    Examples:
        {"error": "text required"}
        {"error": "db_error"}
    """
    error: str = Field(description="Machine-readable error code or short message")


class HealthResponse(BaseModel):
    """Liveness: the process is up and answering requests."""
    status: str = Field(default="ok")


class ReadyResponse(BaseModel):
    """Readiness: the database answered `SELECT 1`."""
    ready: bool
