# This project was developed with assistance from AI tools.
"""Investor scenario math: PITIA, DSCR and cash flow.

Pure math, no I/O. Returns None instead of a zeroed result when the inputs
cannot support a calculation, so callers never show a confident $0 answer.
"""

import math
from typing import Any

from ..core.config import settings
from ..schemas import PercentUnit
from ..schemas.scenario import CashFlowRow, ScenarioInputs, ScenarioMathResult
from .amortization import compute_monthly_pi, round_money

CASH_FLOW_YEARS = (1, 2, 3, 4, 5, 10, 15, 20, 25, 30)
MAX_VACANCY_FRACTION = 0.9


def normalize_pct(value: float | None, unit: PercentUnit = "auto") -> float:
    """Return ``value`` as a percent (5 means 5%).

    ``auto`` reads anything strictly between 0 and 1 as a fraction, so 0.05
    and 5 both mean 5%. That guess is wrong for genuine sub-1% inputs such as
    a 0.75% insurance rate; pass ``unit="percent"`` for those.
    """
    if value is None or not math.isfinite(value):
        return 0.0
    if unit == "fraction":
        return value * 100
    if unit == "percent":
        return value
    return value * 100 if 0 < value < 1 else value


def resolve_scenario_loan(inputs: ScenarioInputs) -> float | None:
    """Explicit loan > price - down amount > price x (1 - down %)."""
    if inputs.loan_amount is not None:
        return inputs.loan_amount
    price = inputs.purchase_price
    if price is None:
        return None
    if inputs.down_payment_amount is not None:
        return price - inputs.down_payment_amount
    if inputs.down_payment_pct is not None:
        return price * (1 - normalize_pct(inputs.down_payment_pct, inputs.percent_unit) / 100)
    return None


def _positive(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def compute_scenario(
    scenario_inputs: ScenarioInputs | dict[str, Any],
    rate_used_pct: float | None,
    escalation_pct: float | None = None,
) -> ScenarioMathResult | None:
    """DSCR and cash-flow metrics for a rental purchase.

    Args:
        scenario_inputs: Price, financing, rent and expense assumptions.
        rate_used_pct: Note rate in percent.
        escalation_pct: Annual growth applied to rent and non-debt expenses in
            the cash-flow table. Defaults to ``settings.CASH_FLOW_ESCALATION_PCT``;
            at 0 every row equals the first-year figure.

    Returns:
        The computed metrics, or None when price, loan or rate is missing or
        not positive.
    """
    inputs = (
        scenario_inputs
        if isinstance(scenario_inputs, ScenarioInputs)
        else ScenarioInputs.model_validate(scenario_inputs)
    )
    price = inputs.purchase_price
    loan = resolve_scenario_loan(inputs)
    if not (_positive(price) and _positive(loan) and _positive(rate_used_pct)):
        return None

    unit = inputs.percent_unit
    term_years = inputs.term_years or settings.DEFAULT_SCENARIO_TERM_YEARS
    if escalation_pct is None:
        escalation_pct = settings.CASH_FLOW_ESCALATION_PCT

    monthly_pi = compute_monthly_pi(loan, rate_used_pct, term_years * 12)
    monthly_tax = price * normalize_pct(inputs.tax_pct, unit) / 100 / 12
    monthly_ins = price * normalize_pct(inputs.insurance_pct, unit) / 100 / 12
    monthly_maint = price * normalize_pct(inputs.maintenance_pct, unit) / 100 / 12
    monthly_hoa = inputs.hoa_monthly if _positive(inputs.hoa_monthly) else 0.0

    # PITIA excludes maintenance
    monthly_pitia = monthly_pi + monthly_tax + monthly_ins + monthly_hoa

    rent = inputs.rent_monthly if _positive(inputs.rent_monthly) else 0.0
    vacancy = min(max(normalize_pct(inputs.vacancy_pct, unit) / 100, 0.0), MAX_VACANCY_FRACTION)
    effective_rent = rent * (1 - vacancy)

    monthly_cash_flow = effective_rent - monthly_pitia - monthly_maint
    annual_cash_flow = monthly_cash_flow * 12

    growth = 1 + escalation_pct / 100
    operating = monthly_tax + monthly_ins + monthly_hoa + monthly_maint
    table = []
    for year in CASH_FLOW_YEARS:
        factor = growth ** (year - 1)
        if factor == 1:
            net = annual_cash_flow
        else:
            net = (effective_rent * factor - operating * factor - monthly_pi) * 12
        table.append(CashFlowRow(year=year, net_cash_flow=round_money(net)))

    dscr_gross = dscr_economic = None
    if monthly_pitia > 0:
        dscr_gross = round_money(rent / monthly_pitia)
        dscr_economic = round_money(effective_rent / monthly_pitia)

    return ScenarioMathResult(
        loan_amount=round_money(loan),
        rate_used_pct=rate_used_pct,
        term_years=term_years,
        monthly_pi=round_money(monthly_pi),
        monthly_tax=round_money(monthly_tax),
        monthly_ins=round_money(monthly_ins),
        monthly_hoa=round_money(monthly_hoa),
        monthly_pitia=round_money(monthly_pitia),
        rent_used=round_money(rent),
        effective_rent=round_money(effective_rent),
        monthly_maint=round_money(monthly_maint),
        dscr_gross=dscr_gross,
        dscr_economic=dscr_economic,
        monthly_cash_flow=round_money(monthly_cash_flow),
        annual_cash_flow=round_money(annual_cash_flow),
        cash_flow_table=table,
    )
