"""
Bookings API Endpoints

Saved bookings: drafts, order number assignment, paging through the saved
list, and export-then-remove as a ZIP archive.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from db.booking_store import BookingNotFound, BookingStore, OrderNumberAlreadyAssigned
from middleware.rate_limiter import limit_default, limit_export
from models.booking import (
    AssignOrderNumberResponse,
    BookingData,
    SavedBooking,
    SavedBookingListResponse,
    ToggleExtraRequest,
    ToggleExtraResponse,
)
from services.booking_form import infer_passenger_mode, prune_unavailable_extras, toggle_extra
from services.catalog import Catalog
from services.export import ExportError, export_and_remove

from api.dependencies import (
    attachment_headers,
    error_detail,
    raise_internal_error,
    require_catalog,
    require_store,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/bookings",
    tags=["bookings"],
    responses={
        404: {"description": "Saved booking not found"},
        409: {"description": "Booking already has an order number"},
        503: {"description": "Catalog or store not available"},
        500: {"description": "Internal server error"},
    },
)


# ============================================================================
# Helper Functions
# ============================================================================


def not_found(e: BookingNotFound) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_detail("NotFound", str(e)),
    )


def saved_booking(index: int, booking: BookingData, catalog: Catalog) -> SavedBooking:
    return SavedBooking(
        index=index,
        booking=booking,
        passenger_mode=infer_passenger_mode(booking, catalog.yacht_info(booking.yacht_name)),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/draft",
    response_model=BookingData,
    summary="New draft booking",
    description="A blank booking form with today's date.",
)
@limit_default
async def new_draft(request: Request) -> BookingData:
    return BookingStore.new_draft()


@router.get(
    "",
    response_model=SavedBookingListResponse,
    summary="List saved bookings",
)
@limit_default
async def list_bookings(
    request: Request,
    store: BookingStore = Depends(require_store),
    catalog: Catalog = Depends(require_catalog),
) -> SavedBookingListResponse:
    try:
        bookings = [
            saved_booking(index, booking, catalog)
            for index, booking in enumerate(store.list())
        ]
        return SavedBookingListResponse(
            bookings=bookings,
            total=len(bookings),
            next_order_number=store.order_counter,
        )

    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("listing bookings", e)


@router.post(
    "",
    response_model=AssignOrderNumberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign order number and save",
    description="Gives the booking the next order number and appends it to the saved list.",
)
@limit_default
async def assign_order_number(
    request: Request,
    booking: BookingData,
    store: BookingStore = Depends(require_store),
) -> AssignOrderNumberResponse:
    try:
        index, numbered = store.assign_order_number(booking)
        return AssignOrderNumberResponse(index=index, booking=numbered)

    except OrderNumberAlreadyAssigned as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_detail("OrderNumberAlreadyAssigned", str(e)),
        )
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("saving booking", e)


@router.post(
    "/extras/toggle",
    response_model=ToggleExtraResponse,
    summary="Toggle an extra",
    description="Applies one click on the extras selector for the given yacht.",
)
@limit_default
async def toggle_booking_extra(
    request: Request,
    body: ToggleExtraRequest,
    catalog: Catalog = Depends(require_catalog),
) -> ToggleExtraResponse:
    yacht_info = catalog.yacht_info(body.yacht_name)
    selection = prune_unavailable_extras(body.selected_extras, yacht_info)
    return ToggleExtraResponse(selected_extras=toggle_extra(selection, body.option, yacht_info))


@router.get(
    "/{index}",
    response_model=SavedBooking,
    summary="Get saved booking",
)
@limit_default
async def get_booking(
    request: Request,
    index: int,
    store: BookingStore = Depends(require_store),
    catalog: Catalog = Depends(require_catalog),
) -> SavedBooking:
    try:
        return saved_booking(index, store.get(index), catalog)

    except BookingNotFound as e:
        raise not_found(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error(f"loading booking {index}", e)


@router.put(
    "/{index}",
    response_model=SavedBooking,
    summary="Update saved booking",
)
@limit_default
async def update_booking(
    request: Request,
    index: int,
    booking: BookingData,
    store: BookingStore = Depends(require_store),
    catalog: Catalog = Depends(require_catalog),
) -> SavedBooking:
    try:
        updated = store.update(index, booking)
        return saved_booking(index, updated, catalog)

    except BookingNotFound as e:
        raise not_found(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error(f"updating booking {index}", e)


@router.post(
    "/{index}/export",
    summary="Export and remove saved booking",
    description="Downloads the four documents as a ZIP archive and removes the booking.",
    response_class=Response,
)
@limit_export
async def export_booking(
    request: Request,
    index: int,
    store: BookingStore = Depends(require_store),
    catalog: Catalog = Depends(require_catalog),
) -> Response:
    """
    The X-Next-Index header carries the booking to show next, or -1 when
    the saved list is now empty.
    """
    try:
        archive, next_index = export_and_remove(
            store, index, catalog.yachts_db, catalog.pricing_db
        )

        headers = attachment_headers(archive.filename)
        headers["X-Next-Index"] = str(next_index)
        return Response(content=archive.content, media_type="application/zip", headers=headers)

    except BookingNotFound as e:
        raise not_found(e)
    except ExportError as e:
        logger.error(f"Export failed for booking {index}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("ExportFailed", str(e)),
        )
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error(f"exporting booking {index}", e)
