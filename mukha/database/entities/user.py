"""
User ORM Model
==============

The ``User`` ORM model represents a registered account. It maps to the
``app_user`` table and holds credentials, the optional display name and the
admin flag.

Key features
~~~~~~~~~~~~
- UUID primary key (``id``)
- Unique, lower-cased email
- bcrypt password hash
- Admin flag granted by the account policy or by operator seeding

"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID
import uuid

from sqlalchemy import VARCHAR, Boolean, TEXT, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mukha.database.config.connection_engine import declarativeBase


class User(declarativeBase):
    """
    ORM model for the `app_user` table.

    Attributes
    ----------
    id : UUID
        Primary key. Unique identifier for the user.
    email : str
        Email address of the user (unique, lower-cased).
    password : str
        Hashed password of the user.
    display_name : str | None
        Optional public name (max 12 chars, letters, digits and apostrophes).
    is_admin : bool
        Whether the user may curate the knowledge base.
    created_on : datetime
        Registration timestamp (UTC).
    """

    __tablename__ = "app_user"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    """Primary key. UUID of the user."""

    email: Mapped[str] = mapped_column(VARCHAR(255), nullable=False, unique=True, index=True)
    """Email address of the user (max length 255)."""

    password: Mapped[str] = mapped_column(TEXT, nullable=False)
    """Hashed password of the user."""

    display_name: Mapped[Optional[str]] = mapped_column(VARCHAR(12), nullable=True)
    """Optional display name."""

    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    """Admin flag."""

    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    """Registration timestamp."""

    def __init__(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        is_admin: bool = False,
    ):
        """
        Initialize a new User object.

        Parameters
        ----------
        email : str
            Normalised email address.
        password : str
            Already hashed password.
        display_name : str | None
            Validated display name.
        is_admin : bool
            Admin flag decided by the account policy.
        """
        self.id = uuid.uuid4()
        self.email = email
        self.password = password
        self.display_name = display_name
        self.is_admin = is_admin
        self.created_on = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        """Public representation; never includes the password hash."""
        return {
            "id": str(self.id),
            "email": self.email,
            "displayName": self.display_name,
            "isAdmin": self.is_admin,
        }

    def __str__(self) -> str:
        return f"User: id:{self.id}, email: {self.email}, admin: {self.is_admin}"
