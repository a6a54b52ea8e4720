"""
Notes Service: Note Service (Business Logic)
=============================================

What:  Create and list operations over the notes table, plus the readiness
       probe.
Who:   Called by the route handlers; talks to the database through the
       session or Database object it is given.

Design Decision:
    NoteService is stateless. The session (or Database) arrives as an
    argument on every call, so tests can hand in a mock and no request can
    observe another request's state.

Error Handling:
    - Missing text → ValidationError before any database access
    - Any failure while talking to the database → session rolled back,
      DatabaseError raised (generic 500 for the client, details in the log)
    - No retries anywhere
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_service.database import Database
from notes_service.exceptions import DatabaseError, ValidationError
from notes_service.models.note import Note
from notes_service.schemas.note import NoteCreatedResponse, NoteResponse

logger = logging.getLogger(__name__)

# Most-recent-first listing never returns more than this many rows
LIST_LIMIT = 100


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note(): presence check, then a single INSERT
        - list_notes(): a single SELECT, newest first, bounded
        - is_ready(): SELECT 1 through the pool
    """

    async def create_note(
        self,
        db: AsyncSession,
        text: Optional[str],
    ) -> NoteCreatedResponse:
        """
        Insert a new note.

        Args:
            db:   request-scoped session
            text: submitted note text; None or "" is rejected

        Returns:
            NoteCreatedResponse echoing the submitted text with the new id.

        Raises:
            ValidationError: text missing or empty (→ 400)
            DatabaseError:   the INSERT failed (→ 500)
        """
        if not text:
            raise ValidationError(message="text required", field="text")

        try:
            note = Note(text=text)
            db.add(note)
            # Flush assigns the auto-increment id
            await db.flush()
            note_id = note.id
            await db.commit()
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            await db.rollback()
            raise DatabaseError(
                message="Could not store the note",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created (%d chars)", note_id, len(text))
        return NoteCreatedResponse(id=note_id, text=text)

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Return up to LIST_LIMIT notes ordered by id descending.

        Query plan:
            SELECT id, text, created_at FROM notes ORDER BY id DESC LIMIT 100

        Raises:
            DatabaseError: the SELECT failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Note).order_by(Note.id.desc()).limit(LIST_LIMIT)
            )
            notes = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes",
                context={"error_type": type(e).__name__},
            )

        return [NoteResponse.model_validate(note) for note in notes]

    async def is_ready(self, database: Database) -> bool:
        """
        Probe database reachability.

        Pool exhaustion, network failures and server-side errors all collapse
        into False; the cause is only logged.
        """
        try:
            await database.ping()
        except Exception as e:
            logger.warning("Readiness check failed: %s", str(e))
            return False
        return True


note_service = NoteService()
