"""
Documents API Endpoints

Renders the booking documents, the AI greeting and the spreadsheet
workbook for the booking currently in the form.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from middleware.rate_limiter import limit_ai, limit_default, limit_export
from models.booking import BookingData, GenerateDocumentsResponse, GreetingResponse
from services.catalog import Catalog
from services.documents import DocumentGenerator, has_document_content
from services.export import ExportFormat, get_formatter
from services.export.archive import order_label
from services.greeting import GreetingService

from api.dependencies import (
    attachment_headers,
    error_detail,
    get_greeting_service,
    raise_internal_error,
    require_catalog,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/documents",
    tags=["documents"],
    responses={
        400: {"description": "Booking has nothing to render"},
        503: {"description": "Catalog configuration not available"},
        500: {"description": "Internal server error"},
    },
)


@router.post(
    "/generate",
    response_model=GenerateDocumentsResponse,
    summary="Generate booking documents",
    description="Client confirmation, supplier order and both spreadsheet rows.",
)
@limit_default
async def generate_documents(
    request: Request,
    booking: BookingData,
    catalog: Catalog = Depends(require_catalog),
) -> GenerateDocumentsResponse:
    """Refuses a booking that names no client, yacht or order number."""
    if not has_document_content(booking):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(
                "NoDocumentContent",
                "Booking has no client name, yacht or order number to render",
            ),
        )

    try:
        generator = DocumentGenerator(catalog.yachts_db, catalog.pricing_db)
        return GenerateDocumentsResponse(documents=generator.generate(booking))

    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("generating documents", e)


@router.post(
    "/greeting",
    response_model=GreetingResponse,
    summary="Generate client greeting",
    description="Hebrew WhatsApp greeting written by Claude.",
)
@limit_ai
async def generate_greeting(
    request: Request,
    booking: BookingData,
    greeting_service: GreetingService = Depends(get_greeting_service),
) -> GreetingResponse:
    return GreetingResponse(greeting=greeting_service.generate(booking))


@router.post(
    "/spreadsheet.xlsx",
    summary="Download spreadsheet rows",
    description="Detailed and summary rows of the booking as an Excel workbook.",
    response_class=Response,
)
@limit_export
async def download_spreadsheet(
    request: Request,
    booking: BookingData,
    catalog: Catalog = Depends(require_catalog),
) -> Response:
    try:
        generator = DocumentGenerator(catalog.yachts_db, catalog.pricing_db)
        formatter = get_formatter(ExportFormat.XLSX)
        content = formatter.format(generator.spreadsheet_rows(booking))
        filename = formatter.get_filename(f"הזמנה_{order_label(booking.order_number)}")

        return Response(
            content=content,
            media_type=formatter.get_content_type(),
            headers=attachment_headers(filename),
        )

    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("building spreadsheet", e)
