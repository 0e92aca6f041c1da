"""Access gate: FastAPI dependencies guarding protected endpoints."""

from fastapi import Depends, Request

from mukha.api.errors import ForbiddenError, UnauthorizedError
from mukha.api.llm_pipeline import ChatGenerator
from mukha.api.utils import verify_token
from mukha.database.config.config import settings
from mukha.database.core.funcs import is_admin_user


def get_current_user_id(request: Request) -> str:
    """
    Resolve the session cookie to a user id.

    The id is also stored on ``request.state.user_id``.

    Raises
    ------
    UnauthorizedError
        No cookie, or a token that fails signature/expiry checks.
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise UnauthorizedError("Unauthorized")
    user_id = verify_token(token)
    if not user_id:
        raise UnauthorizedError("Invalid token")
    request.state.user_id = user_id
    return user_id


def require_admin(user_id: str = Depends(get_current_user_id)) -> str:
    """Like `get_current_user_id`, and additionally require the admin flag."""
    if not is_admin_user(user_id=user_id):
        raise ForbiddenError("Forbidden")
    return user_id


def get_generator(request: Request) -> ChatGenerator:
    """The process-wide `ChatGenerator` created at startup."""
    generator = getattr(request.app.state, "generator", None)
    if generator is None:
        generator = ChatGenerator()
        request.app.state.generator = generator
    return generator
