"""FastAPI application main entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from .middleware import register_error_handlers  # noqa: E402
from .routes import companies, notes, summaries, system  # noqa: E402
from ..services.auth import get_auth_service  # noqa: E402
from ..services.config import get_config  # noqa: E402
from ..services.note_store import get_note_store  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Resolve the storage backend and auth strategies once, at startup."""
    store = get_note_store()
    auth_service = get_auth_service()
    logger.info(
        "Startup complete: notes backend=%s, companies=%s, dev auth bypass=%s",
        type(store.notes).__name__,
        "enabled" if store.companies is not None else "unavailable",
        auth_service.dev_bypass_enabled,
    )
    yield


app = FastAPI(
    title="Company Notes API",
    description="Company directory with user-authored notes and AI summaries",
    version="0.1.0",
    lifespan=lifespan,
)

config = get_config()

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(system.router, tags=["system"])
app.include_router(companies.router, tags=["companies"])
app.include_router(notes.router, tags=["notes"])
app.include_router(summaries.router, tags=["summaries"])


__all__ = ["app"]
