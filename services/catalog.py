"""
Yacht catalog: extras, payment methods, and the yacht lookup tables.

The yacht metadata table and the yacht pricing table are loaded from YAML
files under config/. Both are required: without them no price can be
derived and no document can name a marina, so a missing or invalid file
raises CatalogError instead of falling back to defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from models.booking import ExtraOption, PaymentMethod, YachtInfo, YachtPricing

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent.parent / "config"
DEFAULT_YACHTS_PATH = CONFIG_DIR / "yachts.yaml"
DEFAULT_PRICING_PATH = CONFIG_DIR / "pricing.yaml"


EXTRAS_MAP: Dict[ExtraOption, str] = {
    ExtraOption.CHAMPAGNE: "בקבוק שמפניה",
    ExtraOption.FISHING: "דייג",
    ExtraOption.BREAKFAST: "ארוחת בוקר",
    ExtraOption.DINNER: "ארוחת ערב",
    ExtraOption.NONE: "ללא",
}

EXTRAS_PRICES: Dict[ExtraOption, int] = {
    ExtraOption.CHAMPAGNE: 120,
    ExtraOption.FISHING: 150,
    ExtraOption.BREAKFAST: 220,
    ExtraOption.DINNER: 280,
    ExtraOption.NONE: 0,
}

PAYMENT_METHODS: List[Dict[str, str]] = [
    {"value": PaymentMethod.CREDIT_CARD.value, "label": "כרטיס אשראי (אצל הספק)"},
    {"value": PaymentMethod.PAYBOX_TRANSFER.value, "label": "פייבוקס/העברה (אצלי)"},
]


class CatalogError(Exception):
    """Raised when the yacht or pricing tables cannot be loaded."""
    pass


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogError(f"Catalog file not found: {path}")
    except yaml.YAMLError as e:
        raise CatalogError(f"Catalog file {path} is not valid YAML: {e}")

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog file {path} must contain a mapping of yacht names")
    return data


def load_yachts_db(path: Optional[str] = None) -> Dict[str, YachtInfo]:
    """
    Load the yacht metadata table.

    Args:
        path: Optional explicit path. Defaults to YACHTS_CONFIG_PATH or
            config/yachts.yaml.

    Returns:
        Dict of yacht name -> YachtInfo

    Raises:
        CatalogError: If the file is missing or an entry is invalid
    """
    config_path = Path(path or os.getenv("YACHTS_CONFIG_PATH") or DEFAULT_YACHTS_PATH)
    raw = _read_yaml(config_path)

    yachts: Dict[str, YachtInfo] = {}
    for name, entry in raw.items():
        try:
            yachts[str(name).strip()] = YachtInfo.model_validate(entry)
        except ValidationError as e:
            raise CatalogError(f"Invalid yacht entry '{name}' in {config_path}: {e}")

    logger.info(f"Loaded {len(yachts)} yachts from {config_path}")
    return yachts


def load_pricing_db(path: Optional[str] = None) -> Dict[str, YachtPricing]:
    """
    Load the yacht pricing table.

    Entries use the flat shape {"2": 1100, "extraHour": 450, "note": "...",
    "coupleRates": {...}}.

    Args:
        path: Optional explicit path. Defaults to PRICING_CONFIG_PATH or
            config/pricing.yaml.

    Returns:
        Dict of yacht name -> YachtPricing

    Raises:
        CatalogError: If the file is missing or an entry is invalid
    """
    config_path = Path(path or os.getenv("PRICING_CONFIG_PATH") or DEFAULT_PRICING_PATH)
    raw = _read_yaml(config_path)

    pricing: Dict[str, YachtPricing] = {}
    for name, entry in raw.items():
        try:
            pricing[str(name).strip()] = YachtPricing.from_mapping(entry)
        except (ValidationError, ValueError) as e:
            raise CatalogError(f"Invalid pricing entry '{name}' in {config_path}: {e}")

    logger.info(f"Loaded pricing for {len(pricing)} yachts from {config_path}")
    return pricing


class Catalog:
    """The two yacht lookup tables, looked up by trimmed yacht name."""

    def __init__(
        self,
        yachts_db: Dict[str, YachtInfo],
        pricing_db: Dict[str, YachtPricing]
    ):
        self.yachts_db = yachts_db
        self.pricing_db = pricing_db

    @classmethod
    def load(
        cls,
        yachts_path: Optional[str] = None,
        pricing_path: Optional[str] = None
    ) -> "Catalog":
        return cls(load_yachts_db(yachts_path), load_pricing_db(pricing_path))

    def yacht_info(self, yacht_name: Optional[str]) -> Optional[YachtInfo]:
        if not yacht_name:
            return None
        return self.yachts_db.get(yacht_name.strip())


_catalog: Optional[Catalog] = None


def get_catalog() -> Catalog:
    """Return the process-wide catalog, loading it on first use."""
    global _catalog

    if _catalog is None:
        _catalog = Catalog.load()
    return _catalog


def reset_catalog() -> None:
    """Drop the cached catalog so the next get_catalog() reloads config."""
    global _catalog
    _catalog = None
