# This project was developed with assistance from AI tools.
"""Public API routes -- no authentication required."""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request, status

from ..core.config import settings
from ..schemas.calculator import (
    CalcAnswerResponse,
    PitiInputsEcho,
    PitiResponse,
    RoutedPaymentResponse,
)
from ..schemas.knowledge import KnowledgeResponse, MarketSnapshot
from ..schemas.parsing import LoanInputs
from ..schemas.scenario import ScenarioRequest, ScenarioResponse
from ..services.errors import InsufficientInputsError
from ..services.extraction import ExtractionDefaults, parse_query_to_inputs
from ..services.knowledge import county_from_zip, lookup_zip
from ..services.market import get_market_snapshot
from ..services.payment_router import route_payment
from ..services.piti import compose_piti, missing_fields, resolve_tax_rate
from ..services.scenario import compute_scenario

logger = logging.getLogger(__name__)

router = APIRouter()

_MISSING_PROMPTS = {
    "loan_amount": "a loan amount, or a price with a down payment %",
    "rate_pct": "an interest rate",
    "term_months": "a term in years or months",
}


def _payment_sentence(total: float, has_hoa: bool) -> str:
    return (
        f"Estimated monthly payment is ${total:,.2f} including principal & interest, "
        f"taxes, insurance{', and HOA' if has_hoa else ''}."
    )


@router.get("/calc/answer", response_model=CalcAnswerResponse)
async def calc_answer(
    q: str = Query(min_length=1, description="Free-text payment question."),
    tax_pct: float | None = Query(default=None, alias="taxPct", ge=0, le=10),
    mi_pct_annual: float | None = Query(default=None, alias="miPctAnnual", ge=0, le=5),
) -> CalcAnswerResponse:
    """Answer a free-text payment question, or say what is missing."""
    inputs = parse_query_to_inputs(q, ExtractionDefaults.from_settings(settings))
    missing = missing_fields(inputs)
    if missing:
        logger.info("Payment question missing fields: %s", missing)
        needed = "; ".join(_MISSING_PROMPTS[f] for f in missing)
        return CalcAnswerResponse(
            ok=False,
            inputs=inputs,
            missing=missing,
            message=f"Please include {needed}.",
        )

    tax = resolve_tax_rate(inputs.zip, override_pct=tax_pct)
    result = compose_piti(inputs, tax.rate, mi_pct_annual=mi_pct_annual, include_schedule=True)
    return CalcAnswerResponse(
        ok=True,
        inputs=inputs,
        result=result,
        tax=tax,
        county=county_from_zip(inputs.zip),
        message=_payment_sentence(result.monthly_total_piti, bool(result.monthly_hoa)),
    )


@router.get("/calc/payment", response_model=RoutedPaymentResponse)
async def calc_payment(
    request: Request,
    q: str = Query(default="", description="Free-text payment question."),
    engine: Literal["auto", "tokens", "context", "numeric"] = "auto",
    min_confidence: float | None = Query(default=None, alias="minConfidence", ge=0, le=1),
) -> RoutedPaymentResponse:
    """Route a payment question through the parse engines.

    Numeric parameters (loanAmount, annualRatePct, termYears, purchasePrice,
    downPercent, taxesPct, insPerYear, insuranceMonthly, hoaPerMonth, miPct)
    feed the ``numeric`` engine.
    """
    return route_payment(q.strip(), dict(request.query_params), engine, min_confidence)


@router.get("/piti", response_model=PitiResponse)
async def piti(
    loan: float | None = Query(default=None, gt=0),
    rate: float | None = Query(default=None, ge=0, le=25),
    rate_pct: float | None = Query(default=None, alias="ratePct", ge=0, le=25),
    term: float | None = Query(default=None, gt=0, le=50, description="Term in years."),
    term_months: int | None = Query(default=None, alias="termMonths", gt=0, le=600),
    zip_code: str | None = Query(default=None, alias="zip", pattern=r"^\d{5}(-\d{4})?$"),
    price: float | None = Query(default=None, gt=0),
    tax_base: Literal["loan", "price"] = Query(default="loan", alias="taxBase"),
    ins: float = Query(default=0, ge=0),
    hoa: float = Query(default=0, ge=0),
    mi_pct_annual: float = Query(default=0, alias="miPctAnnual", ge=0, le=5),
) -> PitiResponse:
    """PITI breakdown from explicit parameters."""
    annual_rate = rate if rate is not None else rate_pct
    months = term_months or (round(term * 12) if term else None)

    missing = []
    if loan is None:
        missing.append("loan")
    if annual_rate is None:
        missing.append("rate")
    if months is None:
        missing.append("term or termMonths")
    if missing:
        raise InsufficientInputsError(missing)

    zip5 = zip_code[:5] if zip_code else None
    effective_base = "price" if tax_base == "price" and price else "loan"
    tax = resolve_tax_rate(zip5)
    inputs = LoanInputs(
        loan_amount=loan,
        price=price,
        rate_pct=annual_rate,
        term_months=months,
        zip=zip5,
        monthly_ins=ins,
        monthly_hoa=hoa,
    )
    result = compose_piti(
        inputs,
        tax.rate,
        mi_pct_annual=mi_pct_annual or None,
        tax_base=effective_base,
    )
    return PitiResponse(
        inputs=PitiInputsEcho(
            loan=loan,
            rate_pct=annual_rate,
            term_months=months,
            zip=zip5,
            price=price,
            tax_base=effective_base,
            mi_pct_annual=mi_pct_annual,
            ins=ins,
            hoa=hoa,
        ),
        tax=tax,
        result=result,
        answer=_payment_sentence(result.monthly_total_piti, bool(hoa)),
    )


@router.post("/scenario", response_model=ScenarioResponse)
async def scenario(req: ScenarioRequest) -> ScenarioResponse:
    """Investor DSCR / cash-flow scenario."""
    result = compute_scenario(req.inputs, req.rate_pct, req.escalation_pct)
    if result is None:
        return ScenarioResponse(
            computed=False,
            message="A purchase price, a way to size the loan, and a rate above zero are required.",
        )
    return ScenarioResponse(computed=True, result=result)


@router.get("/knowledge", response_model=KnowledgeResponse)
async def knowledge(
    zip_code: str = Query(alias="zip", pattern=r"^\d{5}(-\d{4})?$"),
) -> KnowledgeResponse:
    """County, tax rate and conforming loan limits for a ZIP."""
    return lookup_zip(zip_code[:5])


@router.get("/market", response_model=MarketSnapshot)
async def market() -> MarketSnapshot:
    """Current rate snapshot."""
    snapshot = get_market_snapshot()
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Market snapshot unavailable",
        )
    return snapshot
