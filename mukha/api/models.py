"""
Pydantic models used for request/response validation and API data contracts.

Each class defines the structure of data expected in API endpoints, ensuring
validation and automatic OpenAPI schema generation. Field names follow the
camelCase JSON used by the web client.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    """
    Login credentials.
    """
    email: Optional[str] = None
    """Account email."""
    password: Optional[str] = None
    """The plaintext password provided for authentication."""


class UserData(BaseModel):
    """
    Represents data required to register a new user.
    """
    email: Optional[str] = None
    """Email address of the user."""
    password: Optional[str] = None
    """Password chosen by the user."""
    displayName: Optional[str] = None
    """Optional display name (≤12 chars, letters, digits, apostrophes)."""


class ProfileUpdate(BaseModel):
    """
    Self-service profile changes; omitted fields are left untouched.
    """
    email: Optional[str] = None
    password: Optional[str] = None
    displayName: Optional[str] = None


class UserPublic(BaseModel):
    """Public user data (never the password hash)."""
    id: str
    email: str
    displayName: Optional[str] = None
    isAdmin: bool = False


class UserResponse(BaseModel):
    message: Optional[str] = None
    user: UserPublic


class NewMessage(BaseModel):
    """
    A turn appended directly to the caller's transcript.
    """
    role: Literal["user", "model"]
    """Which side of the exchange produced the text."""
    text: str
    """The text content of the message."""


class MessageOut(BaseModel):
    id: Optional[str] = None
    userId: str
    role: str
    text: str
    createdAt: str


class KnowledgeDetails(BaseModel):
    """
    Title/content pair used to create or overwrite a knowledge entry.
    """
    title: Optional[str] = None
    content: Optional[str] = None


class KnowledgeOut(BaseModel):
    id: str
    title: str
    content: str
    createdAt: str


class HistoryTurn(BaseModel):
    """One prior turn supplied by the client with a chat request."""
    role: Literal["user", "model"]
    text: str


class ChatRequest(BaseModel):
    """
    A new chat turn.

    `history` carries the prior turns the client wants the model to see; when
    omitted the stored transcript is used.
    """
    message: str = Field(..., min_length=1)
    history: Optional[List[HistoryTurn]] = None


class ChatReply(BaseModel):
    """
    Result of a chat turn.

    `persisted` is False when the generation call failed and `reply` carries
    the fallback text that was not recorded.
    """
    userMessage: MessageOut
    reply: MessageOut
    persisted: bool


class StatusMessage(BaseModel):
    message: str
