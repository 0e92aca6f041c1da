"""
FastAPI Router: Auth • Transcript • Knowledge Base • Chat
==========================================================

Purpose
-------
Defines the HTTP API under ``/api``:
- Authentication: register, login, logout, current user, profile update
- Transcript: list, append, clear the caller's messages
- Knowledge base: list (any session), create/update/delete (admin only)
- Chat: one knowledge-augmented turn against the hosted model

Key Notes
---------
- Input validation via Pydantic models in `mukha.api.models`.
- Session cookie: `token` (JWT, httpOnly). Guarded by the dependencies in
  `mukha.api.dependencies`.
- Errors are raised as `mukha.api.errors` exceptions and rendered as
  ``{"error": message}`` by the handlers installed in `mukha.main`.
- Store access is synchronous; sync handlers run in FastAPI's threadpool and
  the async chat handler offloads it explicitly, so the generation call is
  the only thing it awaits.
"""

from datetime import datetime, timezone
import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from mukha.api.dependencies import get_current_user_id, get_generator, require_admin
from mukha.api.errors import UpstreamFailure
from mukha.api.llm_pipeline import EMPTY_REPLY_TEXT, ERROR_REPLY_TEXT, ChatGenerator
from mukha.api.models import (
    ChatReply,
    ChatRequest,
    KnowledgeDetails,
    KnowledgeOut,
    MessageOut,
    NewMessage,
    ProfileUpdate,
    StatusMessage,
    UserCredentials,
    UserData,
    UserResponse,
)
from mukha.api.utils import clear_session_cookie, create_access_token, set_session_cookie
from mukha.database.config import connection_engine as engine_module
from mukha.database.core.funcs import (
    clear_user_messages,
    create_knowledge,
    create_message,
    delete_knowledge,
    get_user_messages,
    get_user_profile,
    list_knowledge,
    login_user,
    register_user,
    update_knowledge,
    update_user_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
"""Creates the FastAPI router in which we define its routes"""


# -----------------------
# Auth
# -----------------------

@router.post('/auth/register', response_model=UserResponse)
def register(data: UserData, response: Response):
    """Register a new account and open a session for it.

    Request body:
        UserData {email, password, displayName?}

    Response:
        200: {'message', 'user'} and the session cookie
        400: missing fields, invalid display name, or email already registered
        403: restricted email
    """
    user = register_user(email=data.email, password=data.password, display_name=data.displayName)
    set_session_cookie(response, create_access_token(user["id"]))
    return {"message": "Registered successfully", "user": user}


@router.post('/auth/login', response_model=UserResponse)
def login(data: UserCredentials, response: Response):
    """Authenticate a user and set a signed JWT cookie.

    Response:
        200: {'message', 'user'}
        401: unknown email or wrong password
    """
    user = login_user(email=data.email, password=data.password)
    set_session_cookie(response, create_access_token(user["id"]))
    return {"message": "Logged in successfully", "user": user}


@router.post('/auth/logout', response_model=StatusMessage)
def logout(response: Response):
    """Clear the session cookie. Always succeeds."""
    clear_session_cookie(response)
    return {"message": "Logged out successfully"}


@router.get('/auth/me', response_model=UserResponse)
def me(user_id: str = Depends(get_current_user_id)):
    """Return the profile of the session's bearer (401 without a session, 404 if the user is gone)."""
    return {"user": get_user_profile(user_id=user_id)}


@router.post('/auth/update-profile', response_model=UserResponse)
def update_profile(data: ProfileUpdate, user_id: str = Depends(get_current_user_id)):
    """Change email, password and/or display name of the caller. The session token is kept."""
    user = update_user_profile(
        user_id=user_id,
        email=data.email,
        password=data.password,
        display_name=data.displayName,
    )
    return {"message": "Profile updated", "user": user}


# -----------------------
# Transcript
# -----------------------

@router.get('/messages', response_model=List[MessageOut])
def get_messages(user_id: str = Depends(get_current_user_id)):
    """The caller's messages, oldest first."""
    return get_user_messages(user_id=user_id)


@router.post('/messages', response_model=MessageOut)
def new_message(data: NewMessage, user_id: str = Depends(get_current_user_id)):
    """Append one turn to the caller's transcript."""
    return create_message(user_id=user_id, role=data.role, text=data.text)


@router.delete('/messages', response_model=StatusMessage)
def clear_messages(user_id: str = Depends(get_current_user_id)):
    """Delete the caller's whole transcript."""
    removed = clear_user_messages(user_id=user_id)
    logger.info("Cleared %d messages of user %s", removed, user_id)
    return {"message": "History cleared"}


# -----------------------
# Knowledge base
# -----------------------

@router.get('/knowledge', response_model=List[KnowledgeOut])
def get_knowledge(user_id: str = Depends(get_current_user_id)):
    """All knowledge entries, newest first."""
    return list_knowledge()


@router.post('/knowledge', response_model=KnowledgeOut)
def new_knowledge(data: KnowledgeDetails, user_id: str = Depends(require_admin)):
    return create_knowledge(title=data.title, content=data.content)


@router.put('/knowledge/{entry_id}', response_model=KnowledgeOut)
def edit_knowledge(entry_id: str, data: KnowledgeDetails, user_id: str = Depends(require_admin)):
    return update_knowledge(entry_id=entry_id, title=data.title, content=data.content)


@router.delete('/knowledge/{entry_id}', response_model=StatusMessage)
def remove_knowledge(entry_id: str, user_id: str = Depends(require_admin)):
    delete_knowledge(entry_id=entry_id)
    return {"message": "Knowledge deleted"}


# -----------------------
# Chat
# -----------------------

@router.post('/chat', response_model=ChatReply)
async def chat_endpoint(
    data: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    generator: ChatGenerator = Depends(get_generator),
):
    """Run one chat turn.

    Steps:
        1) Persist the user's turn.
        2) Load the knowledge base for the system prompt.
        3) Ask the model, with the client's `history` or, when omitted, the
           stored transcript preceding this turn.
        4) Persist and return the reply. An empty reply is recorded as a fixed
           apology; a failed call returns a fixed error text without
           recording anything, leaving the user's turn in place.

    Response:
        ChatReply {userMessage, reply, persisted}
    """
    if data.history is None:
        history = await run_in_threadpool(get_user_messages, user_id=user_id)
    else:
        history = [turn.model_dump() for turn in data.history]

    user_message = await run_in_threadpool(create_message, user_id=user_id, role="user", text=data.message)
    knowledge = await run_in_threadpool(list_knowledge)

    try:
        reply_text = await generator.generate(message=data.message, history=history, knowledge=knowledge)
    except UpstreamFailure:
        fallback = {
            "id": None,
            "userId": user_id,
            "role": "model",
            "text": ERROR_REPLY_TEXT,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        return {"userMessage": user_message, "reply": fallback, "persisted": False}

    reply = await run_in_threadpool(
        create_message, user_id=user_id, role="model", text=reply_text or EMPTY_REPLY_TEXT
    )
    return {"userMessage": user_message, "reply": reply, "persisted": True}


@router.get('/health')
def health():
    """Liveness probe; reports whether a database is configured."""
    return {"status": "ok", "database": engine_module.connection_engine is not None}
