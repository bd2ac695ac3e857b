# This project was developed with assistance from AI tools.
"""Payment question router.

Runs a payment question through up to three parse engines and keeps the
first result that passes validation with enough confidence:

- ``tokens``: lexer + rule-based extractor
- ``context``: field-aware regex parser
- ``numeric``: explicit request parameters (loanAmount, rate, term, ...)

Every attempt is recorded in the fallback chain so the caller can show why
a question was rejected.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..core.config import settings
from ..schemas.calculator import EngineAttempt, RoutedInputs, RoutedPaymentResponse
from .amortization import mi_drop_month
from .calc_query import parse_calc_query
from .errors import PaymentParseError
from .extraction import ExtractionDefaults, parse_query_to_inputs
from .piti import build_payment_result

ENGINE_ORDER = ("tokens", "context", "numeric")

LOAN_RANGE = (1_000.0, 50_000_000.0)
RATE_RANGE = (0.0, 25.0)
TERM_YEARS_RANGE = (5.0, 40.0)

# Acronyms and shorthand rewritten before free-text parsing.
_ACRONYMS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\bPITI\b", re.I), "principal interest taxes insurance"),
    (re.compile(r"\bPMI\b", re.I), "mortgage insurance"),
    (re.compile(r"\bMI\b", re.I), "mortgage insurance"),
    (re.compile(r"\bAPR\b", re.I), "apr rate"),
    (re.compile(r"\bprop(?:erty)?\s*tax(?:es)?\b", re.I), "property taxes"),
    (re.compile(r"\bDP\b", re.I), "down payment"),
]

_KM_RE = re.compile(r"^[$\s]*(\d+(?:\.\d+)?)\s*([km])\s*$", re.I)
_PLAIN_RE = re.compile(r"^[$\s]*(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)\s*$")


@dataclass(frozen=True)
class EngineResult:
    name: str
    parsed: RoutedInputs
    confidence: float
    reason: str


def expand_acronyms(text: str) -> str:
    for pattern, replacement in _ACRONYMS:
        text = pattern.sub(replacement, text)
    return text


def to_num(value: Any) -> float | None:
    """Tolerant number parsing: $1.2m, 620k, 1,200.55, 6.5%. None unless finite."""
    if value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        number = _parse_number_text(str(value).strip().lower())
    if number is None or not math.isfinite(number):
        return None
    return number


def _parse_number_text(s: str) -> float | None:
    if not s:
        return None
    m = _KM_RE.match(s)
    if m:
        base = float(m.group(1))
        return base * (1_000_000 if m.group(2) == "m" else 1_000)
    m = _PLAIN_RE.match(s)
    if m:
        return float(m.group(1).replace(",", ""))
    try:
        return float(re.sub(r"[\s,$%]", "", s))
    except ValueError:
        return None


def _first_num(params: Mapping[str, Any], *names: str) -> float | None:
    for name in names:
        value = to_num(params.get(name))
        if value is not None:
            return value
    return None


def _non_negative(value: float | None) -> float:
    return max(value or 0.0, 0.0)


def _in_range(value: float | None, bounds: tuple[float, float]) -> bool:
    return value is not None and bounds[0] <= value <= bounds[1]


def score_confidence(parsed: RoutedInputs, bonus: float, penalize_small_loan: bool = True) -> float:
    """0.45 loan + 0.30 rate + 0.25 term, a bonus when all look plausible."""
    conf = 0.0
    if parsed.loan_amount is not None:
        conf += 0.45
    if parsed.annual_rate_pct is not None:
        conf += 0.30
    if parsed.term_years is not None:
        conf += 0.25

    plausible_loan = parsed.loan_amount is not None and parsed.loan_amount >= 30_000
    if (
        plausible_loan
        and _in_range(parsed.annual_rate_pct, RATE_RANGE)
        and _in_range(parsed.term_years, TERM_YEARS_RANGE)
    ):
        conf += bonus

    if penalize_small_loan and parsed.loan_amount is not None and parsed.loan_amount < 5_000:
        conf -= 0.40
    return min(max(conf, 0.0), 1.0)


def validate_core(parsed: RoutedInputs) -> list[str]:
    """Problems that make the parsed fields unusable; empty when valid."""
    problems = []
    if not _in_range(parsed.loan_amount, LOAN_RANGE):
        problems.append("loan_amount missing/out-of-range")
    if not _in_range(parsed.annual_rate_pct, RATE_RANGE):
        problems.append("annual_rate_pct missing/out-of-range")
    if not _in_range(parsed.term_years, TERM_YEARS_RANGE):
        problems.append("term_years missing/out-of-range")
    return problems


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------


def engine_tokens(query: str) -> EngineResult:
    inputs = parse_query_to_inputs(
        expand_acronyms(query), ExtractionDefaults.from_settings(settings)
    )
    parsed = RoutedInputs(
        loan_amount=inputs.loan_amount,
        annual_rate_pct=inputs.rate_pct,
        term_years=inputs.term_months / 12 if inputs.term_months else None,
        purchase_price=inputs.price,
        down_percent=inputs.down_percent,
        insurance_monthly=inputs.monthly_ins,
        hoa_per_month=inputs.monthly_hoa,
    )
    return EngineResult("tokens", parsed, score_confidence(parsed, 0.10), "token rules")


def engine_context(query: str) -> EngineResult:
    calc = parse_calc_query(expand_acronyms(query))
    parsed = RoutedInputs(
        loan_amount=calc.loan_amount,
        annual_rate_pct=calc.annual_rate_pct,
        term_years=calc.term_years,
        purchase_price=calc.purchase_price,
        taxes_pct=calc.taxes_pct,
        insurance_monthly=calc.insurance_monthly,
        hoa_per_month=calc.hoa_monthly,
    )
    return EngineResult(
        "context", parsed, score_confidence(parsed, 0.05), "field-aware anchor parsing"
    )


def engine_numeric(params: Mapping[str, Any]) -> EngineResult:
    parsed = RoutedInputs(
        loan_amount=_first_num(params, "loanAmount", "amount", "price"),
        annual_rate_pct=_first_num(params, "annualRatePct", "rate"),
        term_years=_first_num(params, "termYears", "term"),
        purchase_price=_first_num(params, "purchasePrice"),
        down_percent=_first_num(params, "downPercent"),
        taxes_pct=_first_num(params, "taxesPct"),
        ins_per_year=_first_num(params, "insPerYear"),
        insurance_monthly=_first_num(params, "insuranceMonthly", "insPerMonth"),
        hoa_per_month=_first_num(params, "hoaPerMonth", "hoaMonthly"),
        mi_pct=_first_num(params, "miPct"),
    )
    if (parsed.loan_amount is None or parsed.loan_amount <= 0) and parsed.purchase_price:
        derived = parsed.purchase_price * (1 - (parsed.down_percent or 0) / 100)
        if derived > 0:
            parsed = parsed.model_copy(update={"loan_amount": derived})
    return EngineResult(
        "numeric",
        parsed,
        score_confidence(parsed, 0.15, penalize_small_loan=False),
        "strict numeric params",
    )


def _run_engine(name: str, query: str, params: Mapping[str, Any]) -> EngineResult:
    if name == "tokens":
        return engine_tokens(query)
    if name == "context":
        return engine_context(query)
    if name == "numeric":
        return engine_numeric(params)
    raise ValueError(f"Unknown engine: {name}. Valid: {', '.join(ENGINE_ORDER)}")


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------


def route_payment(
    query: str,
    params: Mapping[str, Any] | None = None,
    engine: str = "auto",
    min_confidence: float | None = None,
) -> RoutedPaymentResponse:
    """Parse a payment question and compute the payment.

    Args:
        query: Free-text question (may be empty when only params are sent).
        params: Explicit numeric parameters for the ``numeric`` engine.
        engine: "auto" or one of ``ENGINE_ORDER``.
        min_confidence: Confidence floor; defaults to ``settings.MIN_PARSE_CONFIDENCE``.

    Raises:
        PaymentParseError: no engine passed; carries the fallback chain.
        ValueError: unknown engine name.
    """
    params = params or {}
    floor = settings.MIN_PARSE_CONFIDENCE if min_confidence is None else min_confidence
    names = ENGINE_ORDER if engine == "auto" else (engine,)

    chain: list[EngineAttempt] = []
    picked: EngineResult | None = None
    for name in names:
        result = _run_engine(name, query, params)
        problems = validate_core(result.parsed)
        chain.append(
            EngineAttempt(
                engine=result.name,
                confidence=result.confidence,
                reason=result.reason,
                valid=not problems,
                problems=problems or None,
            )
        )
        if not problems and result.confidence >= floor:
            picked = result
            break

    if picked is None:
        raise PaymentParseError(chain)

    p = picked.parsed
    loan = min(max(p.loan_amount, LOAN_RANGE[0]), LOAN_RANGE[1])
    rate = min(max(p.annual_rate_pct, RATE_RANGE[0]), RATE_RANGE[1])
    term_months = round(min(max(p.term_years, TERM_YEARS_RANGE[0]), TERM_YEARS_RANGE[1]) * 12)

    monthly_tax = 0.0
    taxes_pct = _non_negative(p.taxes_pct)
    if taxes_pct:
        tax_base = p.purchase_price if p.purchase_price and p.purchase_price > 0 else loan
        monthly_tax = tax_base * taxes_pct / 100 / 12
    if p.insurance_monthly is not None:
        monthly_ins = _non_negative(p.insurance_monthly)
    elif p.ins_per_year is not None:
        monthly_ins = _non_negative(p.ins_per_year) / 12
    else:
        monthly_ins = 0.0
    mi_pct = _non_negative(p.mi_pct)
    monthly_mi = loan * mi_pct / 100 / 12 if mi_pct else 0.0

    payment = build_payment_result(
        loan,
        rate,
        term_months,
        monthly_tax=monthly_tax,
        monthly_ins=monthly_ins,
        monthly_hoa=_non_negative(p.hoa_per_month),
        monthly_mi=monthly_mi,
        mi_drops_month=mi_drop_month(loan, p.purchase_price, rate, term_months, mi_pct),
    )
    return RoutedPaymentResponse(
        engine_used=picked.name,
        query=query,
        parsed=p,
        result=payment,
        fallback_chain=chain,
    )
