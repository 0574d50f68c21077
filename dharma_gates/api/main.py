"""FastAPI application instance."""
from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dharma_gates.api.routers import admin, centers, feedback, geocode, health
from dharma_gates.core.config import get_settings
from dharma_gates.core.logging import configure_logging
from dharma_gates.db.session import init_db

_settings = get_settings()
configure_logging(_settings.log_level)
LOGGER = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    LOGGER.info("app.startup")
    yield
    LOGGER.info("app.shutdown")


app = FastAPI(title="dharma-gates", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(geocode.router)
app.include_router(centers.router)
app.include_router(feedback.router)
app.include_router(admin.router)
