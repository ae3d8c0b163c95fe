"""
Catalog API Endpoints

Read-only access to the yacht tables, the extras list and the payment
methods the booking form offers.
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from middleware.rate_limiter import limit_default
from models.booking import ExtraOption, YachtInfo, YachtPricing
from services.booking_form import extra_display_name, is_extra_available
from services.catalog import Catalog, EXTRAS_PRICES, PAYMENT_METHODS

from api.dependencies import require_catalog, raise_internal_error

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/catalog",
    tags=["catalog"],
    responses={
        503: {"description": "Catalog configuration not available"},
        500: {"description": "Internal server error"},
    },
)


# ============================================================================
# Response Models
# ============================================================================


class YachtCatalogResponse(BaseModel):
    """Yacht metadata and pricing tables."""
    success: bool = True
    yachts: Dict[str, YachtInfo]
    pricing: Dict[str, YachtPricing]


class ExtraItem(BaseModel):
    value: ExtraOption
    name: str
    price: int
    available: bool = True


class ExtrasResponse(BaseModel):
    """Extras with display names and prices, plus payment methods."""
    success: bool = True
    extras: List[ExtraItem]
    payment_methods: List[Dict[str, str]]


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/yachts",
    response_model=YachtCatalogResponse,
    summary="List yachts",
    description="Yacht metadata (capacity, marina) and pricing tables.",
)
@limit_default
async def list_yachts(
    request: Request,
    catalog: Catalog = Depends(require_catalog),
) -> YachtCatalogResponse:
    return YachtCatalogResponse(yachts=catalog.yachts_db, pricing=catalog.pricing_db)


@router.get(
    "/extras",
    response_model=ExtrasResponse,
    summary="List extras",
    description="Extras with prices; pass yacht_name for yacht-specific names and availability.",
)
@limit_default
async def list_extras(
    request: Request,
    yacht_name: Optional[str] = Query(None, description="Yacht the extras are offered for"),
    catalog: Catalog = Depends(require_catalog),
) -> ExtrasResponse:
    """List extras; fishing is only available on Herzliya yachts."""
    try:
        yacht_info = catalog.yacht_info(yacht_name)
        extras = []
        for option, price in EXTRAS_PRICES.items():
            extras.append(ExtraItem(
                value=option,
                name=extra_display_name(option, yacht_info),
                price=price,
                available=is_extra_available(option, yacht_info),
            ))

        return ExtrasResponse(extras=extras, payment_methods=PAYMENT_METHODS)

    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("listing extras", e)
