# This project was developed with assistance from AI tools.
"""Payment calculator schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .parsing import LoanInputs


class Sensitivity(BaseModel):
    """Monthly P&I at the base rate plus and minus 0.25%."""

    model_config = ConfigDict(frozen=True)

    up025: float
    down025: float


class AmortizationYear(BaseModel):
    """One year of an amortization schedule."""

    model_config = ConfigDict(frozen=True)

    year: int
    principal_paid: float
    interest_paid: float
    ending_balance: float


class PaymentResult(BaseModel):
    """Monthly payment breakdown for a fixed-rate loan."""

    model_config = ConfigDict(frozen=True)

    loan_amount: float
    annual_rate_pct: float
    term_years: float
    monthly_pi: float
    monthly_tax: float
    monthly_ins: float
    monthly_hoa: float
    monthly_mi: float
    monthly_total_piti: float
    sensitivity: Sensitivity
    mi_drops_month: int | None = None
    total_interest: float | None = None
    amortization: list[AmortizationYear] = Field(default_factory=list)


class TaxRateResolution(BaseModel):
    """Annual tax rate (decimal) and where it came from."""

    rate: float
    source: Literal["override", "zip_lookup", "default"]


class CalcAnswerResponse(BaseModel):
    """Answer to a free-text payment question.

    ``ok`` is False when the question did not carry enough information;
    ``missing`` then names the fields to ask for.
    """

    ok: bool
    inputs: LoanInputs
    result: PaymentResult | None = None
    tax: TaxRateResolution | None = None
    county: str | None = None
    missing: list[str] = Field(default_factory=list)
    message: str | None = None


class PitiInputsEcho(BaseModel):
    """Resolved request parameters echoed by the PITI endpoint."""

    loan: float
    rate_pct: float
    term_months: int
    zip: str | None = None
    price: float | None = None
    tax_base: Literal["loan", "price"]
    mi_pct_annual: float = 0
    ins: float = 0
    hoa: float = 0


class PitiResponse(BaseModel):
    """Response for the explicit-parameter PITI endpoint."""

    inputs: PitiInputsEcho
    tax: TaxRateResolution
    result: PaymentResult
    answer: str


class EngineAttempt(BaseModel):
    """One entry of the payment router's fallback chain."""

    engine: str
    confidence: float
    reason: str
    valid: bool
    problems: list[str] | None = None


class RoutedInputs(BaseModel):
    """Normalized fields produced by any payment-router engine."""

    loan_amount: float | None = None
    annual_rate_pct: float | None = None
    term_years: float | None = None
    purchase_price: float | None = None
    down_percent: float | None = None
    taxes_pct: float | None = None
    insurance_monthly: float | None = None
    ins_per_year: float | None = None
    hoa_per_month: float | None = None
    mi_pct: float | None = None


class RoutedPaymentResponse(BaseModel):
    """Result of routing a payment question through the parse engines."""

    engine_used: str
    query: str
    parsed: RoutedInputs
    result: PaymentResult
    fallback_chain: list[EngineAttempt]
