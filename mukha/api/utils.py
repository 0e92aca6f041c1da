"""
JWT utilities for issuing and verifying session tokens, and the session
cookie policy.

Functions
---------
create_access_token(user_id) -> str
    Creates a signed JWT with `sub`, `iat` and `exp` claims.
verify_token(token) -> str | None
    Verify a JWT's signature & expiration and return the subject (`sub`) if valid.
set_session_cookie(response, token) / clear_session_cookie(response)
    Apply the httpOnly session cookie policy to a response.

Environment contract (from `settings`)
--------------------------------------
SECRET_KEY : str
    HMAC signing key for JWTs.
ALGORITHM : str
    JWT signing algorithm (e.g., "HS256").
ACCESS_TOKEN_EXPIRE_MINUTES : int
    Token lifetime window in minutes (7 days by default).
COOKIE_NAME, COOKIE_SECURE, COOKIE_SAMESITE
    Cookie name and attributes.
"""

from datetime import datetime
import logging
from typing import Optional

from fastapi import Response
from jose import jwt, JWTError

from mukha.database.config.config import settings

logger = logging.getLogger(__name__)


def create_access_token(user_id: str) -> str:
    """
    Create a signed JWT session token for ``user_id``.

    Parameters
    ----------
    user_id : str
        Identifier stored as the `sub` claim.

    Returns
    -------
    str
        Encoded JWT string.

    Notes
    ----------
    - `iat`/`exp` are NumericDates (seconds since epoch); `exp` is derived
      from ACCESS_TOKEN_EXPIRE_MINUTES.
    - Uses `settings.SECRET_KEY` and `settings.ALGORITHM` for signing.
    """
    issued_at = int(datetime.now().timestamp())
    expires = issued_at + int(settings.ACCESS_TOKEN_EXPIRE_MINUTES) * 60
    claims = {"sub": str(user_id), "iat": issued_at, "exp": expires}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: Optional[str]) -> Optional[str]:
    """
    Verify a JWT and return its subject.

    Parameters
    ----------
    token : str | None
        Encoded JWT string from the session cookie.

    Returns
    ----------
    str | None
        The `sub` claim if the token is valid, otherwise None (missing,
        malformed, bad signature or expired).
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload.get("sub")
    except JWTError as e:
        logger.debug("Rejected session token: %s", e)
        return None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=int(settings.ACCESS_TOKEN_EXPIRE_MINUTES) * 60,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
