"""
PetScan — FastAPI application entry point.
Lifespan: create DB tables → verify connectivity.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from petscan.config import settings
from petscan.database import check_db_connectivity, engine
from petscan.models import Base
from petscan.routers import health, products, profile

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Create all tables (idempotent — IF NOT EXISTS).
    2. Verify DB connectivity.
    """
    logger.info("Starting PetScan (env=%s)", settings.app_env)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created/verified.")

    if not await check_db_connectivity():
        logger.error("Database connectivity check FAILED at startup.")
    else:
        logger.info("Database connectivity verified.")

    yield

    logger.info("Shutting down PetScan.")
    await engine.dispose()


app = FastAPI(
    title="PetScan",
    description="Barcode lookup and allergen checks against a pet's allergy profile.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(profile.router)
app.include_router(products.router)


# ── Global exception handler ─────────────────────────────────────────────────

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "SERVER_ERROR"},
    )
