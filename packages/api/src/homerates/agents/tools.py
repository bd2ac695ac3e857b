# This project was developed with assistance from AI tools.
"""LangChain tools for the chat assistant.

These wrap the calculation core so an assistant can call them as tool
invocations during a conversation.
"""

from langchain_core.tools import tool

from ..core.config import settings
from ..services.errors import DomainError, InsufficientInputsError
from ..services.extraction import ExtractionDefaults, parse_query_to_inputs
from ..services.piti import compose_piti, resolve_tax_rate
from ..services.scenario import compute_scenario

_FIELD_LABELS = {
    "loan_amount": "a loan amount (or a price and down payment %)",
    "rate_pct": "an interest rate",
    "term_months": "a loan term",
}


@tool
def payment_calc(query: str, mi_pct_annual: float | None = None) -> str:
    """Estimate a monthly mortgage payment (PITI) from a plain-English question.

    Args:
        query: The borrower's question, e.g. "price 900k down 20% 6.25 30 years 92688".
        mi_pct_annual: Annual mortgage insurance as a percent of the loan, if known.
    """
    inputs = parse_query_to_inputs(query, ExtractionDefaults.from_settings(settings))
    tax = resolve_tax_rate(inputs.zip)
    try:
        result = compose_piti(inputs, tax.rate, mi_pct_annual=mi_pct_annual)
    except InsufficientInputsError as exc:
        needed = ", ".join(_FIELD_LABELS.get(f, f) for f in exc.missing)
        return f"I need a bit more information to calculate this: {needed}."
    except DomainError as exc:
        return (
            f"I can't calculate a payment from those numbers ({exc}). "
            "Please check the loan amount, rate and term."
        )

    parts = [
        f"Loan amount: ${result.loan_amount:,.2f}",
        f"Principal & interest: ${result.monthly_pi:,.2f}",
        f"Taxes: ${result.monthly_tax:,.2f}",
        f"Insurance: ${result.monthly_ins:,.2f}",
        f"HOA: ${result.monthly_hoa:,.2f}",
    ]
    if result.monthly_mi:
        parts.append(f"Mortgage insurance: ${result.monthly_mi:,.2f}")
    parts.append(f"Total monthly payment: ${result.monthly_total_piti:,.2f}")
    parts.append(
        f"At +/-0.25% the P&I would be ${result.sensitivity.up025:,.2f} / "
        f"${result.sensitivity.down025:,.2f}"
    )
    if result.mi_drops_month:
        parts.append(f"Mortgage insurance drops off around month {result.mi_drops_month}.")
    return "\n".join(parts)


@tool
def scenario_calc(
    purchase_price: float,
    rent_monthly: float,
    rate_pct: float,
    down_payment_pct: float = 25,
    term_years: int = 30,
    vacancy_pct: float = 5,
    tax_pct: float = 1.1,
    insurance_pct: float = 0.5,
    maintenance_pct: float = 1.0,
    hoa_monthly: float = 0,
) -> str:
    """Estimate DSCR and cash flow for a rental property purchase.

    Args:
        purchase_price: Purchase price in dollars.
        rent_monthly: Expected gross monthly rent.
        rate_pct: Note rate in percent (6.75 = 6.75%).
        down_payment_pct: Down payment as a percent of price.
        term_years: Loan term in years.
        vacancy_pct: Expected vacancy as a percent of rent.
        tax_pct: Annual property tax as a percent of price.
        insurance_pct: Annual insurance as a percent of price.
        maintenance_pct: Annual maintenance as a percent of price.
        hoa_monthly: Monthly HOA dues.
    """
    result = compute_scenario(
        {
            "purchase_price": purchase_price,
            "down_payment_pct": down_payment_pct,
            "term_years": term_years,
            "rent_monthly": rent_monthly,
            "vacancy_pct": vacancy_pct,
            "tax_pct": tax_pct,
            "insurance_pct": insurance_pct,
            "maintenance_pct": maintenance_pct,
            "hoa_monthly": hoa_monthly,
            "percent_unit": "percent",
        },
        rate_pct,
    )
    if result is None:
        return "I need a purchase price, financing, and a rate above zero to run this scenario."

    return "\n".join(
        [
            f"Loan amount: ${result.loan_amount:,.2f}",
            f"Monthly PITIA: ${result.monthly_pitia:,.2f}",
            f"Effective rent: ${result.effective_rent:,.2f}",
            f"DSCR (gross rent): {result.dscr_gross}",
            f"DSCR (after vacancy): {result.dscr_economic}",
            f"Monthly cash flow: ${result.monthly_cash_flow:,.2f}",
            f"Annual cash flow: ${result.annual_cash_flow:,.2f}",
        ]
    )
