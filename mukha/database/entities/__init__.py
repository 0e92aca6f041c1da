"""
Entities Package: SQLAlchemy 2.0 ORM Models (UUID + UTC)
=========================================================

The `entities` package defines the ORM models of the application, mapping
database tables to Python classes using SQLAlchemy 2.0-typed mappings.
These classes form the persistence backbone and are consumed by DAOs
(`daos` package).

Tech Stack & Conventions
------------------------
- Portable `Uuid` columns (native UUID on PostgreSQL, CHAR(32) elsewhere)
- Timezone-aware timestamps (UTC)
- SQLAlchemy 2.0 style `Mapped[...]` + `mapped_column(...)`

Contents
--------
- User
    A registered account: unique email, bcrypt hash, optional display name,
    admin flag.

- UserMessage
    One turn of a user's transcript: `user_id` (FK → app_user.id),
    `role` ("user" | "model"), `message_text`, `date_created_on`.

- KnowledgeEntry
    An admin-curated `title`/`content` fact with `created_at`.
"""

from mukha.database.entities.user import User
from mukha.database.entities.messages import UserMessage, MESSAGE_ROLES
from mukha.database.entities.knowledge import KnowledgeEntry

__all__ = ["User", "UserMessage", "KnowledgeEntry", "MESSAGE_ROLES"]
