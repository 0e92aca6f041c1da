"""
FastAPI application bootstrap with: \n
- Lifespan-managed initialization (tables, operator seeding, chat generator) \n
- CORS configured for the frontend \n
- `{"error": ...}` exception handlers \n
- Static file serving for a built frontend, when one is present \n
- Catch-all route to support client-side routing \n

Environment contract (from `settings`): \n
- DATABASE_URL: store connection; without it the API answers 503 on store access. \n
- SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD: operator account seeded on boot. \n
- FRONTEND_URL: allowed CORS origin. \n
"""

from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from mukha.api.errors import register_exception_handlers
from mukha.api.fast_api import router
from mukha.api.llm_pipeline import ChatGenerator
from mukha.database.config.config import settings
from mukha.database.config.connection_engine import create_tables
from mukha.database.core.funcs import seed_admin

logging.basicConfig(level=settings.LOG_LEVEL.upper())

logger = logging.getLogger("uvicorn")
"""Logger instance for capturing and emitting Uvicorn server logs."""


def seed_operator_account() -> None:
    """Seed the configured operator account; a failure is logged, not fatal."""
    if not (settings.SEED_ADMIN_EMAIL and settings.SEED_ADMIN_PASSWORD):
        return
    try:
        result = seed_admin(
            email=settings.SEED_ADMIN_EMAIL,
            password=settings.SEED_ADMIN_PASSWORD,
            display_name=settings.SEED_ADMIN_DISPLAY_NAME,
        )
        logger.info("Admin user seeded/updated: %s", result["user"]["email"])
    except Exception as e:
        logger.error("Error seeding admin user: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App lifespan manager.

    Notes
    ------------
    - On startup (before yielding):
        * Create missing tables and seed the operator account, when a
          database is configured; otherwise warn.
        * Attach a `ChatGenerator` to `app.state`.
    - On shutdown (after yielding):
        * Close the generator's HTTP clients.
    """
    if create_tables():
        logger.info("Connected to database")
        seed_operator_account()
    else:
        logger.warning("DATABASE_URL not found. Database features will be disabled.")

    app.state.generator = ChatGenerator()
    try:
        yield
    finally:
        await app.state.generator.shutdown()
        logger.info("App shutting down.")


app = FastAPI(title="Mukha", lifespan=lifespan)
"""Instantiates the FastAPI application object with the lifespan handler above."""

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(router)

# -----------------------
# Built frontend (optional)
# -----------------------
dist_dir = settings.FRONTEND_DIST_DIR

if os.path.isdir(os.path.join(dist_dir, "assets")):
    app.mount("/assets", StaticFiles(directory=os.path.join(dist_dir, "assets")), name="static")

if os.path.isfile(os.path.join(dist_dir, "index.html")):
    @app.get("/", include_in_schema=False)
    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_react_app(full_path: str = ""):
        """
        Serve the frontend's index.html for all non-API routes to support client-side routing.
        """
        return FileResponse(os.path.join(dist_dir, "index.html"))
