"""
Notes Service: Note SQLAlchemy Model
=====================================

What:  ORM model for the `notes` table.
Who:   NoteService for inserts and listing; Database.init_schema for the
       idempotent CREATE TABLE.

Table Design:
    - id: auto-increment integer, so insertion order equals id order
    - text: VARCHAR(255) NOT NULL
    - created_at: filled by the database (CURRENT_TIMESTAMP), never by clients

    No update or delete path exists; a row is immutable once inserted.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import TIMESTAMP, Integer, String
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from notes_service.database import Base


class Note(Base):
    """
    A single stored note.

    Query Patterns:
        - List recent notes: SELECT ... ORDER BY id DESC LIMIT 100
          → walks the primary key index backwards
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    text: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[Optional[datetime]] = mapped_column(
        TIMESTAMP,
        nullable=True,
        server_default=sql_text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, created_at='{self.created_at}')>"
