"""
Service-layer operations for accounts, the knowledge base and transcripts.

All public functions are wrapped with the `@transactional` decorator, which
manages SQLAlchemy sessions and transactions automatically. Each function
accepts (and uses) an injected `session: Session` provided by the decorator.

This module applies the business rules (account policy, display-name rules,
uniqueness, ownership) on top of the DAOs and returns plain dicts ready to be
serialised by the API layer. Failures are raised as `mukha.api.errors`
exceptions.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mukha.api.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from mukha.crypt.encrypt_decrypt import EncryptionDec
from mukha.database.config.config import settings
from mukha.database.core.policy import (
    AccountPolicy,
    normalize_email,
    validate_display_name,
    validate_password,
)
from mukha.database.daos.knowledge_dao import KnowledgeDao
from mukha.database.daos.user_dao import UserDao
from mukha.database.daos.user_message_dao import UserMessagesDao
from mukha.database.entities.knowledge import KnowledgeEntry
from mukha.database.entities.messages import MESSAGE_ROLES, UserMessage
from mukha.database.entities.user import User
from mukha.database.helpers.transactionManagement import transactional

logger = logging.getLogger(__name__)


def parse_uuid(value: Union[str, UUID, None]) -> Optional[UUID]:
    """Return ``value`` as a UUID, or None when it is not one."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def _require(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return value


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

@transactional
def register_user(
    session: Session,
    email: Optional[str],
    password: Optional[str],
    display_name: Optional[str] = None,
    policy: Optional[AccountPolicy] = None,
) -> dict:
    """
    Validate and create a new account.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    email : str
        Email address; stored lower-cased.
    password : str
        Plaintext password, hashed at DAO level.
    display_name : str | None
        Optional display name.
    policy : AccountPolicy | None
        Registration policy; defaults to the one built from settings.

    Returns
    -------
    dict
        Public user representation.

    Raises
    ------
    ValidationError
        Missing email/password or invalid display name.
    RestrictedEmailError
        Email is on the restricted list.
    ConflictError
        Email already registered.
    """
    policy = policy or AccountPolicy.from_settings(settings)
    if not normalize_email(email) or not password:
        raise ValidationError("Email and password required")
    validate_password(password)
    email = normalize_email(email)
    display_name = validate_display_name(display_name)
    policy.check_allowed(email)

    user_dao = UserDao()
    if user_dao.fetchUserByEmail(session, email) is not None:
        raise ConflictError("User already exists")

    is_admin = policy.grants_admin(email, user_dao.countUsers(session))
    user = User(email=email, password=password, display_name=display_name, is_admin=is_admin)
    try:
        user_dao.createUser(session, user)
    except IntegrityError:
        raise ConflictError("User already exists")
    logger.info("Registered user %s (admin=%s)", user.id, is_admin)
    return user.to_dict()


@transactional
def login_user(session: Session, email: Optional[str], password: Optional[str]) -> dict:
    """
    Authenticate a user by email and password.

    Returns
    -------
    dict
        Public user representation.

    Raises
    ------
    UnauthorizedError
        Unknown email or wrong password (same message for both).
    """
    user = UserDao().fetchUserByEmail(session, normalize_email(email))
    if user is None or not password or not EncryptionDec().check_passwords(password, user.password):
        raise UnauthorizedError("Invalid credentials")
    return user.to_dict()


@transactional
def get_user_profile(session: Session, user_id: Union[str, UUID]) -> dict:
    """
    Resolve the profile of a session's bearer.

    Raises
    ------
    NotFoundError
        The user no longer exists.
    """
    user = _fetch_user(session, user_id)
    return user.to_dict()


@transactional
def update_user_profile(
    session: Session,
    user_id: Union[str, UUID],
    email: Optional[str] = None,
    password: Optional[str] = None,
    display_name: Optional[str] = None,
    policy: Optional[AccountPolicy] = None,
) -> dict:
    """
    Change the supplied profile fields of a user.

    Fields left as None are untouched. A new email is normalised, checked
    against the restricted list and for uniqueness; a new password is
    re-hashed; a display name is revalidated, and "" clears it.

    Raises
    ------
    ValidationError, RestrictedEmailError, ConflictError, NotFoundError
    """
    policy = policy or AccountPolicy.from_settings(settings)
    user_dao = UserDao()
    user = _fetch_user(session, user_id)

    if email is not None:
        email = normalize_email(_require(email, "Email cannot be empty"))
        if email == user.email:
            email = None
        else:
            policy.check_allowed(email)
            if user_dao.fetchUserByEmail(session, email) is not None:
                raise ConflictError("Email already in use")
    if password is not None:
        validate_password(_require(password, "Password cannot be empty"))
    clear_display_name = display_name == ""
    display_name = validate_display_name(display_name)
    if clear_display_name:
        user.display_name = None

    try:
        user_dao.updateUser(session, user, email=email, password=password, display_name=display_name)
    except IntegrityError:
        raise ConflictError("Email already in use")
    return user.to_dict()


@transactional
def is_admin_user(session: Session, user_id: Union[str, UUID]) -> bool:
    """True when the user exists and carries the admin flag."""
    uid = parse_uuid(user_id)
    if uid is None:
        return False
    user = UserDao().fetchUserById(session, uid)
    return bool(user and user.is_admin)


@transactional
def seed_admin(
    session: Session,
    email: str,
    password: str,
    display_name: Optional[str] = None,
) -> dict:
    """
    Create the operator account, or promote it if it already exists.

    Idempotent: running it again leaves one admin account with the given
    password (and display name, when supplied).

    Returns
    -------
    dict
        {'user': <public user>, 'created': <bool>}
    """
    email = normalize_email(_require(email, "Seed email required"))
    validate_password(_require(password, "Seed password required"))
    display_name = validate_display_name(display_name)

    user_dao = UserDao()
    user = user_dao.fetchUserByEmail(session, email)
    if user is None:
        user = User(email=email, password=password, display_name=display_name, is_admin=True)
        user_dao.createUser(session, user)
        logger.info("Seeded admin user %s", email)
        return {"user": user.to_dict(), "created": True}

    user_dao.updateUser(session, user, password=password, display_name=display_name)
    user_dao.updateAdmin(session, user, True)
    logger.info("Admin user %s already exists, admin status updated", email)
    return {"user": user.to_dict(), "created": False}


def _fetch_user(session: Session, user_id: Union[str, UUID]) -> User:
    uid = parse_uuid(user_id)
    user = UserDao().fetchUserById(session, uid) if uid is not None else None
    if user is None:
        raise NotFoundError("User not found")
    return user


# ---------------------------------------------------------------------------
# Knowledge base
# ---------------------------------------------------------------------------

@transactional
def list_knowledge(session: Session) -> list[dict]:
    """All knowledge entries, newest first."""
    return [entry.to_dict() for entry in KnowledgeDao().fetchEntries(session)]


@transactional
def create_knowledge(session: Session, title: Optional[str], content: Optional[str]) -> dict:
    """
    Persist a new knowledge entry.

    Raises
    ------
    ValidationError
        Title or content missing.
    """
    entry = KnowledgeEntry(
        title=_require(title, "Title and content required"),
        content=_require(content, "Title and content required"),
    )
    KnowledgeDao().createEntry(session, entry)
    return entry.to_dict()


@transactional
def update_knowledge(
    session: Session,
    entry_id: Union[str, UUID],
    title: Optional[str],
    content: Optional[str],
) -> dict:
    """
    Overwrite title and content of an existing entry.

    Raises
    ------
    NotFoundError
        No entry with that id (including ids that are not UUIDs).
    ValidationError
        Title or content missing.
    """
    knowledge_dao = KnowledgeDao()
    uid = parse_uuid(entry_id)
    entry = knowledge_dao.fetchEntryById(session, uid) if uid is not None else None
    if entry is None:
        raise NotFoundError("Knowledge entry not found")
    knowledge_dao.updateEntry(
        session,
        entry,
        title=_require(title, "Title and content required"),
        content=_require(content, "Title and content required"),
    )
    return entry.to_dict()


@transactional
def delete_knowledge(session: Session, entry_id: Union[str, UUID]) -> None:
    """Delete an entry; absent or malformed ids are a no-op."""
    uid = parse_uuid(entry_id)
    if uid is None:
        return
    KnowledgeDao().deleteEntryById(session, uid)


# ---------------------------------------------------------------------------
# Transcripts
# ---------------------------------------------------------------------------

@transactional
def get_user_messages(session: Session, user_id: Union[str, UUID]) -> list[dict]:
    """
    List a user's messages, oldest first.

    Returns
    -------
    list[dict]
        Each item: {'id', 'userId', 'role', 'text', 'createdAt'}; empty when
        the transcript is empty.
    """
    uid = parse_uuid(user_id)
    if uid is None:
        return []
    return [m.to_dict() for m in UserMessagesDao().fetchMessagesByUserId(session, uid)]


@transactional
def create_message(session: Session, user_id: Union[str, UUID], role: str, text: str) -> dict:
    """
    Append one turn to a user's transcript.

    Raises
    ------
    ValidationError
        Role is not "user" or "model", or the user id is malformed.
    """
    if role not in MESSAGE_ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(MESSAGE_ROLES)}")
    uid = parse_uuid(user_id)
    if uid is None:
        raise ValidationError("Invalid user id")
    message = UserMessage(user_id=uid, role=role, message=text if text is not None else "")
    UserMessagesDao().createMessage(session, message)
    return message.to_dict()


@transactional
def clear_user_messages(session: Session, user_id: Union[str, UUID]) -> int:
    """Delete the caller's whole transcript; returns the number of removed messages."""
    uid = parse_uuid(user_id)
    if uid is None:
        return 0
    return UserMessagesDao().deleteMessagesByUserId(session, uid)
