"""
OMDb Backend API - FastAPI application.

Provides endpoints for:
- A plain-text greeting
- Searching OMDb movies by title and year
- Looking up full OMDb details by IMDb id
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.deps import get_omdb_config
from api.routers import movies

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: refuse to serve traffic without an OMDb credential.
    config = get_omdb_config()
    logger.info(f"Starting up OMDb Backend API (upstream {config.base_url})...")
    yield
    # Shutdown
    logger.info("Shutting down OMDb Backend API...")


app = FastAPI(
    title="OMDb Backend API",
    description="Thin HTTP facade over the OMDb movie-metadata API",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(movies.router)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
