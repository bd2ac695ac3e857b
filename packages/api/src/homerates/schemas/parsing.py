# This project was developed with assistance from AI tools.
"""Schemas for values extracted from free-text mortgage questions."""

from pydantic import BaseModel, ConfigDict


class LoanInputs(BaseModel):
    """Partial loan record produced by the token extractor.

    ``rate_pct`` is always a percent (6.25 means 6.25%), never a fraction.
    """

    model_config = ConfigDict(frozen=True)

    price: float | None = None
    down_percent: float | None = None
    loan_amount: float | None = None
    rate_pct: float | None = None
    term_months: int | None = None
    zip: str | None = None
    monthly_ins: float | None = None
    monthly_hoa: float | None = None


class ParsedCalc(BaseModel):
    """Fields recovered by the field-aware (regex) calc parser."""

    model_config = ConfigDict(frozen=True)

    loan_amount: float | None = None
    purchase_price: float | None = None
    annual_rate_pct: float | None = None
    term_years: float | None = None
    taxes_pct: float | None = None
    insurance_monthly: float | None = None
    hoa_monthly: float | None = None
