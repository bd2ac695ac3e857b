# This project was developed with assistance from AI tools.
"""ZIP-keyed knowledge lookups (county, property-tax rate, loan limits).

Reads the YAML dataset named by ``settings.KNOWLEDGE_PATH``, validates its
sections, and caches it with an mtime check so dataset edits take effect
without restarting the server. Lookups return None for unmapped ZIPs.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.config import settings
from ..schemas.knowledge import KnowledgeResponse, LoanLimits
from .errors import KnowledgeDataError

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("zip_to_county", "county_tax_rates", "conforming_loan_limits")

_cached_data: dict[str, Any] | None = None
_cached_path: Path | None = None
_cached_mtime: float = 0.0


def _validate(data: Any) -> None:
    if not isinstance(data, dict):
        raise KnowledgeDataError("knowledge dataset must be a mapping")
    missing = [s for s in REQUIRED_SECTIONS if s not in data]
    if missing:
        raise KnowledgeDataError(f"knowledge dataset is missing sections: {missing}")
    if not isinstance(data["zip_to_county"], dict):
        raise KnowledgeDataError("zip_to_county must be a mapping")
    for row in data["county_tax_rates"]:
        if "county" not in row or "rate" not in row:
            raise KnowledgeDataError(f"county_tax_rates row needs county and rate: {row}")
    for row in data["conforming_loan_limits"]:
        if "county" not in row or "one_unit" not in row:
            raise KnowledgeDataError(f"conforming_loan_limits row needs county and one_unit: {row}")


def load_knowledge(path: Path | None = None) -> dict[str, Any]:
    """Load and validate the dataset from disk."""
    data_path = Path(path or settings.KNOWLEDGE_PATH)
    if not data_path.exists():
        raise FileNotFoundError(f"Knowledge dataset not found: {data_path}")
    data = yaml.safe_load(data_path.read_text())
    _validate(data)
    # YAML may read unquoted ZIPs as ints
    data["zip_to_county"] = {str(k): v for k, v in data["zip_to_county"].items()}
    return data


def get_knowledge(path: Path | None = None) -> dict[str, Any]:
    """Return the cached dataset, reloading if the file changed."""
    global _cached_data, _cached_path, _cached_mtime  # noqa: PLW0603
    data_path = Path(path or settings.KNOWLEDGE_PATH)

    try:
        current_mtime = data_path.stat().st_mtime
    except FileNotFoundError:
        if _cached_data is not None and _cached_path == data_path:
            logger.warning("Knowledge dataset disappeared, using cached copy")
            return _cached_data
        raise

    if _cached_data is None or _cached_path != data_path or current_mtime > _cached_mtime:
        logger.info("Loading knowledge dataset from %s", data_path)
        _cached_data = load_knowledge(data_path)
        _cached_path = data_path
        _cached_mtime = current_mtime
    return _cached_data


def county_from_zip(zip_code: str | None) -> str | None:
    z = (zip_code or "").strip()[:5]
    if not z:
        return None
    return get_knowledge()["zip_to_county"].get(z)


def tax_rate_for_zip(zip_code: str | None) -> float | None:
    """Annual property-tax rate as a decimal (0.0115), or None if unmapped."""
    county = county_from_zip(zip_code)
    if county is None:
        return None
    for row in get_knowledge()["county_tax_rates"]:
        if row["county"] == county:
            return float(row["rate"])
    return None


def loan_limits_for_zip(zip_code: str | None) -> LoanLimits | None:
    county = county_from_zip(zip_code)
    if county is None:
        return None
    for row in get_knowledge()["conforming_loan_limits"]:
        if row["county"].lower() == county.lower():
            return LoanLimits(**row)
    return None


def lookup_zip(zip_code: str) -> KnowledgeResponse:
    """Everything known about a ZIP, for display."""
    return KnowledgeResponse(
        zip=zip_code,
        county=county_from_zip(zip_code),
        tax_rate=tax_rate_for_zip(zip_code),
        loan_limits=loan_limits_for_zip(zip_code),
    )
