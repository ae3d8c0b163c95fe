"""
Pricing API Endpoints

Quotes a booking: the table price the form pre-fills, the full client
price breakdown and the supplier settlement.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from middleware.rate_limiter import limit_default
from models.booking import BookingData, QuoteResponse
from services.catalog import Catalog
from services.pricing import auto_price, calculate_settlement, quote_price

from api.dependencies import require_catalog, raise_internal_error

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/pricing",
    tags=["pricing"],
    responses={
        503: {"description": "Catalog configuration not available"},
        500: {"description": "Internal server error"},
    },
)


@router.post(
    "/quote",
    response_model=QuoteResponse,
    summary="Quote a booking",
    description="Price breakdown and settlement for a booking form.",
)
@limit_default
async def quote_booking(
    request: Request,
    booking: BookingData,
    catalog: Catalog = Depends(require_catalog),
) -> QuoteResponse:
    try:
        quote = quote_price(booking, catalog.pricing_db)
        return QuoteResponse(
            auto_price=auto_price(booking, catalog.pricing_db),
            quote=quote,
            settlement=calculate_settlement(booking, quote),
        )

    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("quoting booking", e)
