"""
Indiranagar Discovery API — FastAPI application entry point.
Lifespan: create DB tables → verify connectivity.

Every error response has the shape {"error": <message>}; request validation
failures are 400 with an additional "details" list.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from discovery.config import settings
from discovery.database import check_db_connectivity, create_schema, engine
from discovery.routers import (
    admin_events,
    admin_journeys,
    admin_places,
    admin_questions,
    admin_settings,
    comments,
    community_suggestions,
    cron,
    events,
    health,
    journeys,
    places,
    questions,
    ratings,
    recommendations,
    search,
    weather,
)

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
    logger.info("Starting Discovery API (env=%s)", settings.app_env)

    tables = await create_schema()
    logger.info("Database tables created/verified (%d tables).", len(tables))

    ok = await check_db_connectivity()
    if not ok:
        logger.error("Database connectivity check FAILED at startup.")
    else:
        logger.info("Database connectivity verified.")

    if not settings.admin_token:
        logger.warning("ADMIN_TOKEN is not set; admin endpoints will reject every request.")

    yield

    logger.info("Shutting down Discovery API.")
    await engine.dispose()


app = FastAPI(
    title="Indiranagar Discovery API",
    description="Places, walking journeys, weather-aware picks, events, and community input for Indiranagar.",
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
app.include_router(places.router)
app.include_router(search.router)
app.include_router(journeys.router)
app.include_router(weather.router)
app.include_router(recommendations.router)
app.include_router(events.router)
app.include_router(comments.router)
app.include_router(ratings.router)
app.include_router(community_suggestions.router)
app.include_router(questions.router)
app.include_router(cron.router)
app.include_router(admin_places.router)
app.include_router(admin_journeys.router)
app.include_router(admin_events.router)
app.include_router(admin_questions.router)
app.include_router(admin_settings.router)


# ── Exception handlers ───────────────────────────────────────────────────────

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed input is a 400 with one entry per failing field."""
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input data", "details": details},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )
