"""
Knowledge DAO

Data-access layer for `KnowledgeEntry`: create, list newest first, fetch by
id, overwrite and delete. The caller supplies the session and owns the
transaction.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from mukha.database.entities.knowledge import KnowledgeEntry

logger = logging.getLogger(__name__)


class KnowledgeDao:
    """
    Data Access Object (DAO) for managing KnowledgeEntry entities.
    """

    def createEntry(self, session: Session, entry: KnowledgeEntry) -> KnowledgeEntry:
        try:
            session.add(entry)
            return entry
        except Exception as e:
            logger.error("Error in KnowledgeDao.createEntry. Error Message: %s", e)
            raise

    def fetchEntries(self, session: Session) -> List[KnowledgeEntry]:
        """Return every entry, newest first."""
        try:
            return session.query(KnowledgeEntry).order_by(desc(KnowledgeEntry.created_at)).all()
        except Exception as e:
            logger.error("Error in KnowledgeDao.fetchEntries. Error Message: %s", e)
            raise

    def fetchEntryById(self, session: Session, entry_id: UUID) -> Optional[KnowledgeEntry]:
        try:
            return session.get(KnowledgeEntry, entry_id)
        except Exception as e:
            logger.error("Error in KnowledgeDao.fetchEntryById. Error Message: %s", e)
            raise

    def updateEntry(self, session: Session, entry: KnowledgeEntry, title: str, content: str) -> KnowledgeEntry:
        """
        Overwrite both fields of ``entry``.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        entry : KnowledgeEntry
            Entity attached to ``session``.
        title, content : str
            New values.
        """
        try:
            entry.title = title
            entry.content = content
            session.flush()
            return entry
        except Exception as e:
            logger.error("Error in KnowledgeDao.updateEntry. Error Message: %s", e)
            raise

    def deleteEntryById(self, session: Session, entry_id: UUID) -> int:
        """Delete the entry if present; returns the number of deleted rows."""
        try:
            return (
                session.query(KnowledgeEntry)
                .filter(KnowledgeEntry.id == entry_id)
                .delete(synchronize_session=False)
            )
        except Exception as e:
            logger.error("Error in KnowledgeDao.deleteEntryById. Error Message: %s", e)
            raise
