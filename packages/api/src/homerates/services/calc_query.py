# This project was developed with assistance from AI tools.
"""Field-aware calc parser.

Regex alternative to the token extractor: finds each field by looking for
the first value after an anchor word, which copes better with long,
conversational questions ("what would the payment be on a house around
$850k with taxes at 1.1% ...").
"""

import re

from ..schemas.parsing import ParsedCalc

_MONEY_RE = re.compile(r"\$?\s*(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)([km](?![a-z]))?", re.I)
_PCT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*%")
_YEARS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:years?|yrs?|y)\b", re.I)
_MONTHS_RE = re.compile(r"(\d+)\s*(?:months?|mos?)\b", re.I)

_LOAN_ANCHOR = re.compile(r"\b(?:loan|amount|purchase|price|home|house)\b", re.I)
_PRICE_ANCHOR = re.compile(r"\b(?:price|purchase|home|house|value)\b", re.I)
_RATE_ANCHOR = re.compile(r"\brate\b", re.I)
_INS_ANCHOR = re.compile(r"\binsurance\b", re.I)
_HOA_ANCHOR = re.compile(r"\bhoa\b", re.I)

MIN_PLAUSIBLE_LOAN = 1_000


def _money_value(match: re.Match) -> float:
    value = float(match.group(1).replace(",", ""))
    suffix = (match.group(2) or "").lower()
    if suffix == "k":
        value *= 1_000
    elif suffix == "m":
        value *= 1_000_000
    return value


def _number_after(text: str, anchor: re.Pattern) -> float | None:
    """First money-shaped number after the first match of ``anchor``."""
    m = anchor.search(text)
    if not m:
        return None
    v = _MONEY_RE.search(text, m.end())
    return _money_value(v) if v else None


def _is_tax_pct(text: str, m: re.Match) -> bool:
    return "tax" in text[max(0, m.start() - 20) : m.start() + 10].lower()


def _rate(text: str) -> float | None:
    for m in _PCT_RE.finditer(text):
        if _is_tax_pct(text, m):
            continue
        value = float(m.group(1))
        if 0.5 <= value <= 25:
            return value
    near = _number_after(text, _RATE_ANCHOR)
    if near is not None and 0 < near < 25:
        return near
    return None


def _term_years(text: str) -> float | None:
    m = _YEARS_RE.search(text)
    if m:
        return float(m.group(1))
    m = _MONTHS_RE.search(text)
    if m:
        return int(m.group(1)) / 12
    return None


def _taxes_pct(text: str) -> float | None:
    for m in _PCT_RE.finditer(text):
        if _is_tax_pct(text, m):
            return float(m.group(1))
    return None


def parse_calc_query(text: str) -> ParsedCalc:
    """Pull loan, price, rate, term, tax %, insurance and HOA out of a question."""
    loan = _number_after(text, _LOAN_ANCHOR)
    if loan is None or loan < MIN_PLAUSIBLE_LOAN:
        plausible = [
            v for v in (_money_value(m) for m in _MONEY_RE.finditer(text)) if v >= MIN_PLAUSIBLE_LOAN
        ]
        loan = max(plausible) if plausible else None

    price = _number_after(text, _PRICE_ANCHOR)
    if price is not None and price < MIN_PLAUSIBLE_LOAN:
        price = None

    return ParsedCalc(
        loan_amount=loan,
        purchase_price=price,
        annual_rate_pct=_rate(text),
        term_years=_term_years(text),
        taxes_pct=_taxes_pct(text),
        insurance_monthly=_number_after(text, _INS_ANCHOR),
        hoa_monthly=_number_after(text, _HOA_ANCHOR),
    )
