# This project was developed with assistance from AI tools.
"""Fixed-rate amortization math.

Pure math, no I/O. Functions return unrounded floats unless their name says
otherwise; callers round once at the end with ``round_money``.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from ..schemas.calculator import AmortizationYear, Sensitivity
from .errors import DomainError

SENSITIVITY_STEP_PCT = 0.25
MI_LTV_THRESHOLD_PCT = 80.0


def round_money(value: float, places: int = 2) -> float:
    """Round half-up to ``places`` decimals (2.675 -> 2.68, unlike ``round``)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _check_domain(loan_amount: float, annual_rate_pct: float, term_months: int) -> None:
    for name, value in (
        ("loan_amount", loan_amount),
        ("annual_rate_pct", annual_rate_pct),
        ("term_months", term_months),
    ):
        if value is None or not math.isfinite(value):
            raise DomainError(f"{name} must be a finite number")
    if loan_amount <= 0:
        raise DomainError("loan_amount must be positive")
    if term_months <= 0:
        raise DomainError("term_months must be positive")
    if annual_rate_pct < 0:
        raise DomainError("annual_rate_pct cannot be negative")


def compute_monthly_pi(loan_amount: float, annual_rate_pct: float, term_months: int) -> float:
    """Monthly principal and interest for a fully amortizing fixed-rate loan.

    M = L * r / (1 - (1 + r)^-n), with r the monthly rate; L / n when r == 0.

    Raises:
        DomainError: loan or term not positive, or a negative rate.
    """
    _check_domain(loan_amount, annual_rate_pct, term_months)
    r = annual_rate_pct / 100 / 12
    if r == 0:
        return loan_amount / term_months
    return loan_amount * r / (1 - (1 + r) ** (-term_months))


def rate_sensitivity(
    loan_amount: float,
    annual_rate_pct: float,
    term_months: int,
    step_pct: float = SENSITIVITY_STEP_PCT,
) -> Sensitivity:
    """Rounded monthly P&I at the rate plus/minus ``step_pct`` (floored at 0%)."""
    up = compute_monthly_pi(loan_amount, annual_rate_pct + step_pct, term_months)
    down = compute_monthly_pi(loan_amount, max(annual_rate_pct - step_pct, 0.0), term_months)
    return Sensitivity(up025=round_money(up), down025=round_money(down))


def initial_ltv_pct(loan_amount: float, price: float | None) -> float | None:
    if not price or price <= 0:
        return None
    return loan_amount / price * 100


def mi_applies(loan_amount: float, price: float | None, mi_pct_annual: float | None) -> bool:
    """MI is charged only above 80% LTV and when an MI rate was supplied."""
    ltv = initial_ltv_pct(loan_amount, price)
    return ltv is not None and ltv > MI_LTV_THRESHOLD_PCT and bool(mi_pct_annual)


def mi_drop_month(
    loan_amount: float,
    price: float | None,
    annual_rate_pct: float,
    term_months: int,
    mi_pct_annual: float | None,
) -> int | None:
    """1-indexed month the balance first reaches 80% of the original price.

    None when MI does not apply or the threshold is never reached in the term.
    """
    if not mi_applies(loan_amount, price, mi_pct_annual):
        return None
    payment = compute_monthly_pi(loan_amount, annual_rate_pct, term_months)
    r = annual_rate_pct / 100 / 12
    target = price * MI_LTV_THRESHOLD_PCT / 100
    balance = loan_amount
    for month in range(1, term_months + 1):
        interest = balance * r
        balance -= payment - interest
        if balance <= target:
            return month
    return None


def amortization_summary(
    loan_amount: float,
    annual_rate_pct: float,
    term_months: int,
) -> tuple[list[AmortizationYear], float]:
    """Month-by-month schedule aggregated by year, plus total interest.

    Rows are rounded for display; the running balance is not.
    """
    payment = compute_monthly_pi(loan_amount, annual_rate_pct, term_months)
    r = annual_rate_pct / 100 / 12

    rows: list[AmortizationYear] = []
    balance = loan_amount
    total_interest = 0.0
    principal_ytd = 0.0
    interest_ytd = 0.0

    for month in range(1, term_months + 1):
        interest = balance * r
        principal = min(payment - interest, balance)
        balance -= principal
        total_interest += interest
        interest_ytd += interest
        principal_ytd += principal

        if month % 12 == 0 or month == term_months:
            rows.append(
                AmortizationYear(
                    year=(month - 1) // 12 + 1,
                    principal_paid=round_money(principal_ytd),
                    interest_paid=round_money(interest_ytd),
                    ending_balance=round_money(max(balance, 0.0)),
                )
            )
            principal_ytd = 0.0
            interest_ytd = 0.0

    return rows, round_money(total_interest)
