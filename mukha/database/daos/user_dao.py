"""
User DAO

Purpose
-------
Thin data-access layer for the `User` ORM entity. Provides:
- Creation with password hashing
- Lookup by id or email, and a total count (for the first-user rule)
- Partial profile updates (email, password, display name)
- Admin promotion used by operator seeding

Design
------
- The DAO expects an active SQLAlchemy `Session` supplied by the caller
  (normally injected by `@transactional`); it never commits.
- Business rules (validation, authorization, uniqueness policy) live in
  `mukha.database.core.funcs`; the DAO focuses on persistence.
- Passwords are hashed with `EncryptionDec.hash_password(...)` before they
  reach the session.

Error Handling
--------------
- Each method logs the failure and re-raises; the transaction decorator
  rolls back.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from mukha.crypt.encrypt_decrypt import EncryptionDec
from mukha.database.entities.user import User

logger = logging.getLogger(__name__)


class UserDao:
    """
    Data Access Object (DAO) for managing User entities.
    """

    def createUser(self, session: Session, user_data: User) -> User:
        """
        Stage a new user with a hashed password.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_data : User
            User entity whose `password` still holds the plaintext.

        Returns
        -------
        User
            The staged entity (flushed, so constraint violations surface here).
        """
        try:
            enc = EncryptionDec()
            user_data.password = enc.hash_password(text=user_data.password)
            session.add(user_data)
            session.flush()
            return user_data
        except Exception as e:
            logger.error("Error in UserDao.createUser. Error Message: %s", e)
            raise

    def fetchUserById(self, session: Session, user_id: UUID) -> Optional[User]:
        """Return the user with ``user_id`` or None."""
        try:
            return session.get(User, user_id)
        except Exception as e:
            logger.error("Error in UserDao.fetchUserById. Error Message: %s", e)
            raise

    def fetchUserByEmail(self, session: Session, email: str) -> Optional[User]:
        """
        Fetch a user by (normalised) email.

        Returns
        -------
        User | None
        """
        try:
            return session.query(User).filter(User.email == email).limit(1).one_or_none()
        except Exception as e:
            logger.error("Error in UserDao.fetchUserByEmail. Error Message: %s", e)
            raise

    def countUsers(self, session: Session) -> int:
        try:
            return session.query(func.count(User.id)).scalar() or 0
        except Exception as e:
            logger.error("Error in UserDao.countUsers. Error Message: %s", e)
            raise

    def updateUser(
        self,
        session: Session,
        user: User,
        email: Optional[str] = None,
        password: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> User:
        """
        Overwrite the supplied fields of ``user``; None leaves a field untouched.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user : User
            Entity attached to ``session``.
        email, password, display_name : str | None
            New values. ``password`` is plaintext and gets hashed.
        """
        try:
            if email is not None:
                user.email = email
            if password is not None:
                user.password = EncryptionDec().hash_password(text=password)
            if display_name is not None:
                user.display_name = display_name
            session.flush()
            return user
        except Exception as e:
            logger.error("Error in UserDao.updateUser. Error Message: %s", e)
            raise

    def updateAdmin(self, session: Session, user: User, is_admin: bool = True) -> None:
        try:
            user.is_admin = is_admin
            session.flush()
        except Exception as e:
            logger.error("Error in UserDao.updateAdmin. Error Message: %s", e)
            raise
