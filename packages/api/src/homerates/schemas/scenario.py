# This project was developed with assistance from AI tools.
"""Investor scenario (DSCR / cash flow) schemas."""

from pydantic import BaseModel, ConfigDict, Field

from . import PercentUnit


class ScenarioInputs(BaseModel):
    """Investor scenario assumptions.

    Percent fields are annual percentages of purchase price (except vacancy,
    which discounts rent). ``percent_unit`` says how to read them.
    """

    purchase_price: float | None = None
    loan_amount: float | None = None
    down_payment_amount: float | None = None
    down_payment_pct: float | None = None
    term_years: int | None = Field(default=None, gt=0, le=50)
    rent_monthly: float | None = None
    vacancy_pct: float | None = None
    tax_pct: float | None = None
    insurance_pct: float | None = None
    maintenance_pct: float | None = None
    hoa_monthly: float | None = None
    percent_unit: PercentUnit = "auto"


class CashFlowRow(BaseModel):
    """Annual net cash flow at one year marker."""

    model_config = ConfigDict(frozen=True)

    year: int
    net_cash_flow: float


class ScenarioMathResult(BaseModel):
    """Computed investor metrics."""

    model_config = ConfigDict(frozen=True)

    loan_amount: float
    rate_used_pct: float
    term_years: int
    monthly_pi: float
    monthly_tax: float
    monthly_ins: float
    monthly_hoa: float
    monthly_pitia: float
    rent_used: float
    effective_rent: float
    monthly_maint: float
    dscr_gross: float | None
    dscr_economic: float | None
    monthly_cash_flow: float
    annual_cash_flow: float
    cash_flow_table: list[CashFlowRow]


class ScenarioRequest(BaseModel):
    """Body for the scenario endpoint."""

    inputs: ScenarioInputs = Field(default_factory=ScenarioInputs)
    rate_pct: float | None = None
    escalation_pct: float | None = None


class ScenarioResponse(BaseModel):
    """Scenario endpoint response. ``result`` is None when not computable."""

    computed: bool
    result: ScenarioMathResult | None = None
    message: str | None = None
