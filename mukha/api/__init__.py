"""
API Package: FastAPI Router • Models • JWT Utils • Access Gate • Chat Pipeline
===============================================================================

Contents
--------
- fast_api
    FastAPI router (prefix ``/api``) with endpoints for:
      • Auth: register, login, logout, me, update-profile
      • Messages: list, append, clear (the caller's transcript)
      • Knowledge: list for any session; create/update/delete for admins
      • Chat: one knowledge-augmented turn (``POST /api/chat``)
      • Health

- models
    Pydantic request/response contracts (camelCase JSON).

- utils
    JWT helpers and the session cookie policy:
      • create_access_token(user_id): signed JWT with iat/exp (7 days)
      • verify_token(token): returns the subject or None
      • set_session_cookie / clear_session_cookie

- dependencies
    Access gate: `get_current_user_id`, `require_admin`, `get_generator`.

- errors
    Error taxonomy and the ``{"error": message}`` exception handlers.

- llm_pipeline
    Prompt assembly (system instruction + knowledge block + history) and the
    `ChatGenerator` wrapper around LangChain's `ChatOpenAI`.
"""
