# This project was developed with assistance from AI tools.
"""PITI composition: P&I plus tax, insurance, HOA and mortgage insurance.

Pure math apart from ``resolve_tax_rate``, which consults the ZIP lookup.
All components are summed unrounded and rounded once at the end.
"""

from collections.abc import Callable
from typing import Literal

from ..core.config import settings
from ..schemas.calculator import PaymentResult, TaxRateResolution
from ..schemas.parsing import LoanInputs
from .amortization import (
    amortization_summary,
    compute_monthly_pi,
    mi_applies,
    mi_drop_month,
    rate_sensitivity,
    round_money,
)
from .errors import InsufficientInputsError
from .knowledge import tax_rate_for_zip

TaxBase = Literal["loan", "price"]


def missing_fields(inputs: LoanInputs) -> list[str]:
    """Names of the fields still needed before a payment can be computed."""
    missing = []
    if inputs.loan_amount is None and (inputs.price is None or inputs.down_percent is None):
        missing.append("loan_amount")
    if inputs.rate_pct is None:
        missing.append("rate_pct")
    if inputs.term_months is None:
        missing.append("term_months")
    return missing


def resolve_loan_amount(inputs: LoanInputs) -> float | None:
    if inputs.loan_amount is not None:
        return inputs.loan_amount
    if inputs.price is not None and inputs.down_percent is not None:
        return inputs.price * (1 - inputs.down_percent / 100)
    return None


def estimate_monthly_tax(
    loan_amount: float,
    tax_rate: float,
    base: TaxBase = "loan",
    price: float | None = None,
) -> float:
    """Monthly property tax.

    Taxed on the loan amount by default; ``base="price"`` uses the purchase
    price when one is known.
    """
    amount = price if base == "price" and price else loan_amount
    if amount <= 0 or tax_rate <= 0:
        return 0.0
    return amount * tax_rate / 12


def resolve_tax_rate(
    zip_code: str | None = None,
    override_pct: float | None = None,
    lookup: Callable[[str], float | None] = tax_rate_for_zip,
) -> TaxRateResolution:
    """Annual tax rate (decimal): explicit override > ZIP lookup > default."""
    if override_pct is not None:
        return TaxRateResolution(rate=override_pct / 100, source="override")
    if zip_code:
        rate = lookup(zip_code)
        if rate is not None and rate > 0:
            return TaxRateResolution(rate=rate, source="zip_lookup")
    return TaxRateResolution(rate=settings.DEFAULT_TAX_RATE, source="default")


def build_payment_result(
    loan_amount: float,
    annual_rate_pct: float,
    term_months: int,
    *,
    monthly_tax: float = 0.0,
    monthly_ins: float = 0.0,
    monthly_hoa: float = 0.0,
    monthly_mi: float = 0.0,
    mi_drops_month: int | None = None,
    include_schedule: bool = False,
) -> PaymentResult:
    """Assemble a rounded ``PaymentResult`` from unrounded components."""
    pi = compute_monthly_pi(loan_amount, annual_rate_pct, term_months)
    total = pi + monthly_tax + monthly_ins + monthly_hoa + monthly_mi

    schedule = []
    total_interest = None
    if include_schedule:
        schedule, total_interest = amortization_summary(loan_amount, annual_rate_pct, term_months)

    return PaymentResult(
        loan_amount=round_money(loan_amount),
        annual_rate_pct=annual_rate_pct,
        term_years=term_months / 12,
        monthly_pi=round_money(pi),
        monthly_tax=round_money(monthly_tax),
        monthly_ins=round_money(monthly_ins),
        monthly_hoa=round_money(monthly_hoa),
        monthly_mi=round_money(monthly_mi),
        monthly_total_piti=round_money(total),
        sensitivity=rate_sensitivity(loan_amount, annual_rate_pct, term_months),
        mi_drops_month=mi_drops_month,
        total_interest=total_interest,
        amortization=schedule,
    )


def compose_piti(
    inputs: LoanInputs,
    tax_rate: float,
    mi_pct_annual: float | None = None,
    tax_base: TaxBase = "loan",
    include_schedule: bool = False,
) -> PaymentResult:
    """Full monthly payment for extracted loan inputs.

    Args:
        inputs: Extracted fields; loan (or price + down), rate and term required.
        tax_rate: Annual tax rate as a decimal (0.012).
        mi_pct_annual: Annual MI as a percent of the loan; only charged above 80% LTV.
        tax_base: "loan" (default) or "price".
        include_schedule: Attach the yearly amortization summary.

    Raises:
        InsufficientInputsError: required fields are missing.
        DomainError: a resolved value is out of range (e.g. zero term).
    """
    missing = missing_fields(inputs)
    if missing:
        raise InsufficientInputsError(missing)

    loan = resolve_loan_amount(inputs)
    rate = inputs.rate_pct
    months = inputs.term_months

    monthly_mi = 0.0
    if mi_applies(loan, inputs.price, mi_pct_annual):
        monthly_mi = loan * mi_pct_annual / 100 / 12

    return build_payment_result(
        loan,
        rate,
        months,
        monthly_tax=estimate_monthly_tax(loan, tax_rate, tax_base, inputs.price),
        monthly_ins=inputs.monthly_ins or 0.0,
        monthly_hoa=inputs.monthly_hoa or 0.0,
        monthly_mi=monthly_mi,
        mi_drops_month=mi_drop_month(loan, inputs.price, rate, months, mi_pct_annual),
        include_schedule=include_schedule,
    )
