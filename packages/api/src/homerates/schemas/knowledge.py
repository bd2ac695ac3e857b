# This project was developed with assistance from AI tools.
"""Knowledge lookup and market snapshot schemas."""

from datetime import date

from pydantic import BaseModel


class LoanLimits(BaseModel):
    """Conforming loan limits for a county, by unit count."""

    county: str
    one_unit: float
    two_unit: float | None = None
    three_unit: float | None = None
    four_unit: float | None = None
    high_cost: bool = False


class KnowledgeResponse(BaseModel):
    """ZIP lookup result."""

    zip: str
    county: str | None = None
    tax_rate: float | None = None
    loan_limits: LoanLimits | None = None


class MarketSnapshot(BaseModel):
    """Small rate snapshot: 10-year yield, 30-year average and their spread."""

    ten_year_yield: float
    mort30_avg: float
    spread: float
    as_of: date
    source: str
