"""
Configuration: Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed application configuration using:
- Pydantic v2 `BaseSettings` for environment-driven values
- `pydantic-settings` v2 for `.env` loading and model config

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- `extra="ignore"`: unknown env vars are ignored (not an error).
- List values (`BOOTSTRAP_ADMIN_EMAILS`, `RESTRICTED_EMAILS`) are given as JSON
  arrays, e.g. `RESTRICTED_EMAILS='["admin@mukha.com"]'`.

Usage
-----
from mukha.database.config.config import settings

secret = settings.SECRET_KEY
model = settings.OPEN_AI_MODEL

Security
--------
- Never commit secrets or the `.env` file to source control.
- `SECRET_KEY` must be overridden in any real deployment.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are Mukha, a helpful and sophisticated AI assistant. "
    "Your tone is professional yet approachable. "
    "You provide concise and accurate information."
)


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Store
    DATABASE_URL: Optional[str] = Field(None, description="SQLAlchemy connection URL. Unset means no store is available.")

    # Session tokens and cookie
    SECRET_KEY: str = Field("fallback-secret", description="HMAC key used to sign session tokens.")
    ALGORITHM: str = Field("HS256", description="JWT signing algorithm.")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(7 * 24 * 60, description="Session lifetime in minutes (7 days).")
    COOKIE_NAME: str = Field("token", description="Name of the session cookie.")
    COOKIE_SECURE: bool = Field(True, description="Send the session cookie over HTTPS only.")
    COOKIE_SAMESITE: str = Field("none", description="SameSite policy of the session cookie.")

    # HTTP
    FRONTEND_URL: str = Field("http://localhost:3000", description="Allowed CORS origin of the frontend.")
    FRONTEND_DIST_DIR: str = Field("dist", description="Directory of the built frontend, served when present.")

    # Generation service
    API_KEY: Optional[str] = Field(None, description="OpenAI API key for the chat model.")
    OPEN_AI_MODEL: str = Field("gpt-4o-mini", description="Chat model name.")
    LLM_TEMPERATURE: float = Field(0.7, description="Sampling temperature of the chat model.")
    LLM_TIMEOUT_SECONDS: float = Field(60.0, description="Per-request timeout of the generation call.")
    LLM_MAX_RETRIES: int = Field(1, description="Client-side retries of the generation call.")
    SYSTEM_INSTRUCTION: str = Field(DEFAULT_SYSTEM_INSTRUCTION, description="Fixed system instruction of the assistant.")

    # Account policy
    BOOTSTRAP_ADMIN_EMAILS: List[str] = Field(default_factory=list, description="Emails that are granted admin on registration.")
    RESTRICTED_EMAILS: List[str] = Field(default_factory=list, description="Emails that may never register.")
    FIRST_USER_IS_ADMIN: bool = Field(True, description="Grant admin to the first user ever registered.")

    # Operator account seeded on startup
    SEED_ADMIN_EMAIL: Optional[str] = Field(None, description="Operator account created or promoted on boot.")
    SEED_ADMIN_PASSWORD: Optional[str] = Field(None, description="Password of the seeded operator account.")
    SEED_ADMIN_DISPLAY_NAME: Optional[str] = Field(None, description="Display name of the seeded operator account.")

    LOG_LEVEL: str = Field("INFO", description="Root logging level.")


settings = Settings()
"""Defines a Settings object that contains the contents of the environment / .env file"""
