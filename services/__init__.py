"""
Services for yacht catalog lookup, pricing, document generation and export.
"""

from .catalog import (
    Catalog,
    CatalogError,
    get_catalog,
    EXTRAS_MAP,
    EXTRAS_PRICES,
    PAYMENT_METHODS,
)

__all__ = [
    "Catalog",
    "CatalogError",
    "get_catalog",
    "EXTRAS_MAP",
    "EXTRAS_PRICES",
    "PAYMENT_METHODS",
]
