"""
User Messages DAO

Purpose
-------
Data-access layer for the `UserMessage` ORM entity. Provides:
- Appending a turn to a user's transcript
- Retrieval of a user's transcript (chronological)
- Bulk deletion of a user's transcript

Design
------
- Requires an active SQLAlchemy `Session` provided by the caller.
- Ownership is always part of the filter, so one user's calls never see or
  touch another user's rows.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import asc
from sqlalchemy.orm import Session

from mukha.database.entities.messages import UserMessage

logger = logging.getLogger(__name__)


class UserMessagesDao:
    """
    Data Access Object (DAO) for managing User Messages.
    """

    def createMessage(self, session: Session, userMessage: UserMessage) -> UserMessage:
        """
        Stage a new message record.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        userMessage : UserMessage
            Message entity instance to be added.

        Returns
        -------
        UserMessage
            The message object that was added.
        """
        try:
            session.add(userMessage)
            return userMessage
        except Exception as e:
            logger.error("Error in UserMessagesDao.createMessage. Error Message: %s", e)
            raise

    def fetchMessagesByUserId(self, session: Session, user_id: UUID) -> List[UserMessage]:
        """
        Fetch all messages of a user, ordered by creation time (ascending).

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_id : UUID
            Owner of the transcript.

        Returns
        -------
        list[UserMessage]
        """
        try:
            return (
                session.query(UserMessage)
                .filter(UserMessage.user_id == user_id)
                .order_by(asc(UserMessage.date_created_on))
                .all()
            )
        except Exception as e:
            logger.error("Error in UserMessagesDao.fetchMessagesByUserId. Error Message: %s", e)
            raise

    def deleteMessagesByUserId(self, session: Session, user_id: UUID) -> int:
        """
        Delete every message of a user.

        Returns
        -------
        int
            Number of deleted rows.
        """
        try:
            return (
                session.query(UserMessage)
                .filter(UserMessage.user_id == user_id)
                .delete(synchronize_session=False)
            )
        except Exception as e:
            logger.error("Error in UserMessagesDao.deleteMessagesByUserId. Error Message: %s", e)
            raise
