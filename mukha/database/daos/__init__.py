"""
DAOs Package: Data Access Layer (SQLAlchemy 2.0)
=================================================

The `daos` package provides the Data Access Layer for the application.
It encapsulates all interactions with SQLAlchemy ORM entities, providing
clean CRUD APIs for the service layer while hiding direct query details.

Conventions
-----------
- Session lifecycle (open/commit/rollback) is handled by callers
- DAOs log and surface exceptions so upper layers decide error policy

Contents
--------
- UserDao
    * Creates users with password hashing
    * Fetches users by id or email, counts users
    * Applies partial profile updates and admin promotion

- UserMessagesDao
    * Appends messages to a user's transcript
    * Fetches a transcript (chronological)
    * Clears a transcript

- KnowledgeDao
    * Creates, lists (newest first), fetches, overwrites and deletes
      knowledge entries
"""
