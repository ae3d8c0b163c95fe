"""
Leader Cruises Booking Tool - FastAPI Backend

Serves the booking form of a yacht charter agency:
- Cruise quotes and the agent/supplier settlement
- Client confirmation, supplier order and spreadsheet rows
- AI greetings for confirmed bookings
- Saved bookings, order numbers and ZIP export
"""

from dotenv import load_dotenv

# Load .env before modules read their settings at import time
load_dotenv()

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict, List
import os
import logging

from api.catalog import router as catalog_router
from api.pricing import router as pricing_router
from api.documents import router as documents_router
from api.bookings import router as bookings_router

from middleware.rate_limiter import setup_rate_limiting, limit_default, limit_health
from services.catalog import CatalogError, get_catalog

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

SERVICE_NAME = "Leader Cruises Booking API"
APP_VERSION = "1.0.0"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the yacht tables up front so config errors show in the startup log
    try:
        catalog = get_catalog()
        logger.info(f"Catalog ready: {len(catalog.yachts_db)} yachts")
    except CatalogError as e:
        logger.warning(f"Catalog not loaded at startup, endpoints will return 503: {e}")
    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Backend API for yacht charter pricing, booking documents and saved orders",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Rate limiting goes on before CORS
setup_rate_limiting(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
    # Downloads carry their filename and the next booking to show
    expose_headers=["Content-Disposition", "X-Next-Index"],
)

app.include_router(catalog_router)
app.include_router(pricing_router)
app.include_router(documents_router)
app.include_router(bookings_router)


@app.get("/", response_model=Dict[str, str])
@limit_default
async def root(request: Request) -> Dict[str, str]:
    """Service name, version and documentation links."""
    return {
        "service": SERVICE_NAME,
        "version": APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", response_model=Dict[str, str])
@limit_health
async def health_check(request: Request) -> Dict[str, str]:
    """
    Liveness probe.

    Reports "degraded" when the yacht tables cannot be loaded; the process
    itself is still serving.
    """
    try:
        get_catalog()
        catalog_status = "ok"
    except CatalogError:
        catalog_status = "unavailable"

    return {
        "status": "healthy" if catalog_status == "ok" else "degraded",
        "catalog": catalog_status,
        "version": APP_VERSION,
    }


if __name__ == "__main__":
    import uvicorn

    # Or: uvicorn main:app --reload --port 8000
    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
