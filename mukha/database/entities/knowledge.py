"""
KnowledgeEntry ORM Model
========================

An admin-curated fact (``title`` + ``content``) that is injected into the
assistant's system prompt on every chat turn. Maps to the ``knowledge`` table.
"""

from datetime import datetime, timezone
from uuid import UUID
import uuid

from sqlalchemy import DateTime, TEXT, VARCHAR, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mukha.database.config.connection_engine import declarativeBase


class KnowledgeEntry(declarativeBase):
    """
    ORM model for the `knowledge` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    title : str
        Short label of the fact.
    content : str
        The fact itself.
    created_at : datetime
        Creation timestamp (UTC); entries are listed newest first.
    """

    __tablename__ = "knowledge"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    title: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)

    content: Mapped[str] = mapped_column(TEXT, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(self, title: str, content: str):
        self.id = uuid.uuid4()
        self.title = title
        self.content = content
        self.created_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at.replace(tzinfo=self.created_at.tzinfo or timezone.utc).isoformat(),
        }

    def __str__(self) -> str:
        return f"Knowledge: id:{self.id}, title: {self.title}"
