"""
Shared FastAPI dependencies for the booking API.

Each dependency resolves a process-wide service and turns a failure to
load it into a 503 response.
"""

import logging
from typing import Any, Dict, NoReturn
from urllib.parse import quote

from fastapi import HTTPException, status

from db.booking_store import BookingStore, BookingStoreError, get_booking_store
from services.catalog import Catalog, CatalogError, get_catalog
from services.greeting import GreetingService

logger = logging.getLogger(__name__)

_greeting_service = None


def error_detail(error: str, message: str) -> Dict[str, Any]:
    return {
        "success": False,
        "error": error,
        "message": message,
    }


def raise_internal_error(action: str, e: Exception) -> NoReturn:
    logger.error(f"Error {action}: {e}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail("InternalError", f"Failed {action}: {e}"),
    )


def require_catalog() -> Catalog:
    """Return the yacht catalog or raise 503 when config cannot be loaded."""
    try:
        return get_catalog()
    except CatalogError as e:
        logger.error(f"Catalog unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=error_detail("CatalogNotAvailable", str(e)),
        )


def require_store() -> BookingStore:
    """Return the booking store or raise 503 when it cannot be opened."""
    try:
        return get_booking_store()
    except BookingStoreError as e:
        logger.error(f"Booking store unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=error_detail("StoreNotAvailable", str(e)),
        )


def get_greeting_service() -> GreetingService:
    global _greeting_service

    if _greeting_service is None:
        _greeting_service = GreetingService()
    return _greeting_service


def attachment_headers(filename: str) -> Dict[str, str]:
    """Content-Disposition for a download with a non-ASCII filename."""
    return {
        "Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}",
    }
