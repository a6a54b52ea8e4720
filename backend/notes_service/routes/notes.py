"""
Notes Service: Notes Route Handlers
====================================

What:  GET /api/notes (list) and POST /api/notes (create).
How:   Extract the body, delegate to NoteService, return JSON. Errors are
       raised as application exceptions and rendered by the global handlers.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notes_service.database import get_db_session
from notes_service.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteCreatedResponse,
    NoteResponse,
)
from notes_service.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        200: {"description": "Up to 100 notes, newest first"},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="List the most recent notes",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db)


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteCreatedResponse,
    responses={
        201: {"description": "Note stored", "model": NoteCreatedResponse},
        400: {"description": "text missing or empty", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteCreatedResponse:
    """
    Store a new note.

    A request without a body is treated the same as `{"text": null}`:
    400 "text required".
    """
    text = payload.text if payload is not None else None
    return await note_service.create_note(db, text)
