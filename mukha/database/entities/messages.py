"""
UserMessage ORM Model
=====================

The ``UserMessage`` ORM model represents one turn of a user's transcript.
Each row belongs to a ``User`` and is tagged with the side of the exchange
that produced it.

Key features
~~~~~~~~~~~~
- UUID primary key (``id``)
- Foreign key reference to ``app_user.id`` (``user_id``)
- Sender role, ``user`` or ``model``
- Timezone-aware ``date_created_on`` timestamp (UTC) used for ordering

"""

from datetime import datetime, timezone
from uuid import UUID
import uuid

from sqlalchemy import ForeignKey, DateTime, TEXT, VARCHAR, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mukha.database.config.connection_engine import declarativeBase

MESSAGE_ROLES = ("user", "model")
"""Allowed values of `UserMessage.role`."""


class UserMessage(declarativeBase):
    """
    ORM model for the `message` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    user_id : UUID
        Owner of the transcript.
    role : str
        "user" or "model".
    message_text : str
        Content of the turn.
    date_created_on : datetime
        Creation timestamp (UTC).
    """

    __tablename__ = "message"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    user_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("app_user.id"), nullable=False, index=True)

    role: Mapped[str] = mapped_column(VARCHAR(16), nullable=False)

    message_text: Mapped[str] = mapped_column(TEXT, nullable=False)

    date_created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(self, user_id: UUID, role: str, message: str):
        self.id = uuid.uuid4()
        self.user_id = user_id
        self.role = role
        self.message_text = message
        self.date_created_on = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "role": self.role,
            "text": self.message_text,
            "createdAt": self.date_created_on.replace(tzinfo=self.date_created_on.tzinfo or timezone.utc).isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"Message: user:{self.user_id}, "
            f"role: {self.role}, "
            f"message: {self.message_text}, "
            f"time_created: {self.date_created_on}"
        )
