# This project was developed with assistance from AI tools.
"""Loan field extraction from lexer tokens.

Pure functions, no I/O. Extraction is an ordered list of rules; each rule
scans the whole token list and returns an updated copy of the partial
``LoanInputs``. Earlier rules win: a rule never overwrites a field an earlier
rule already resolved, except where noted (last keyword/ZIP mention wins).

Extraction never fails. Fields it cannot resolve stay None and the caller
decides whether the result is usable (see ``services.piti.missing_fields``).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from ..schemas.parsing import LoanInputs
from .lexer import Token, TokenKind, tokenize

_SKIPPABLE = {TokenKind.PUNCT, TokenKind.TEXT}
_TERM_UNITS = {TokenKind.YRS, TokenKind.MOS}
_ANCHOR_FIELDS = {
    TokenKind.KW_PRICE: "price",
    TokenKind.KW_LOAN: "loan_amount",
    TokenKind.KW_INS: "monthly_ins",
    TokenKind.KW_HOA: "monthly_hoa",
}

RATE_MIN = 0.1
RATE_MAX = 25.0


@dataclass(frozen=True)
class ExtractionDefaults:
    """Values filled in when a query leaves them out.

    These are display conveniences for the chat UI, not inputs the payment
    math depends on.
    """

    monthly_ins: float = 100.0
    monthly_hoa: float = 0.0

    @classmethod
    def from_settings(cls, settings) -> "ExtractionDefaults":
        return cls(
            monthly_ins=settings.DEFAULT_MONTHLY_INS,
            monthly_hoa=settings.DEFAULT_MONTHLY_HOA,
        )


# ---------------------------------------------------------------------------
# Token scanning helpers
# ---------------------------------------------------------------------------


def _kind_at(tokens: Sequence[Token], idx: int) -> TokenKind | None:
    if 0 <= idx < len(tokens):
        return tokens[idx].kind
    return None


def _numeric_value(token: Token) -> float:
    if token.kind is TokenKind.ZIP:
        return float(token.text[:5])
    return token.value


def _next_num_index(tokens: Sequence[Token], idx: int, accept_zip: bool = False) -> int | None:
    """Index of the next NUM after ``idx``, skipping punctuation and loose text."""
    for j in range(idx + 1, len(tokens)):
        kind = tokens[j].kind
        if kind is TokenKind.NUM or (accept_zip and kind is TokenKind.ZIP):
            return j
        if kind not in _SKIPPABLE:
            return None
    return None


def _unit_after(tokens: Sequence[Token], idx: int) -> TokenKind | None:
    """Time unit directly after ``idx``; a single hyphen ("30-year") is allowed."""
    kind = _kind_at(tokens, idx + 1)
    if kind in _TERM_UNITS:
        return kind
    if kind is TokenKind.PUNCT and tokens[idx + 1].text == "-":
        kind = _kind_at(tokens, idx + 2)
        if kind in _TERM_UNITS:
            return kind
    return None


def _anchored_indices(tokens: Sequence[Token]) -> dict[int, TokenKind]:
    """Map value-token index -> the keyword that claims it."""
    anchored: dict[int, TokenKind] = {}
    for i, token in enumerate(tokens):
        if token.kind not in _ANCHOR_FIELDS:
            continue
        j = _next_num_index(tokens, i, accept_zip=True)
        if j is not None and _kind_at(tokens, j + 1) is TokenKind.PERCENT:
            # "loan 6.5%" names a rate, not an amount
            j = None
        if j is None and token.kind in (TokenKind.KW_PRICE, TokenKind.KW_LOAN):
            # "$500k loan at 6.5%": a dollar amount written just before the keyword
            prev = i - 1
            if _kind_at(tokens, prev) is TokenKind.NUM and tokens[prev].is_money:
                j = prev
        if j is not None:
            anchored.setdefault(j, token.kind)
    return anchored


def _down_percent_indices(tokens: Sequence[Token]) -> list[int]:
    """NUM indices used as a down-payment percent, in order of appearance."""
    found: list[int] = []
    for i, token in enumerate(tokens):
        if token.kind is TokenKind.KW_DOWN:
            if (
                _kind_at(tokens, i - 1) is TokenKind.PERCENT
                and _kind_at(tokens, i - 2) is TokenKind.NUM
            ):
                # "10% down" already names the percent
                continue
            j = _next_num_index(tokens, i)
            if j is not None and _kind_at(tokens, j + 1) is TokenKind.PERCENT:
                found.append(j)
        elif (
            token.kind is TokenKind.NUM
            and _kind_at(tokens, i + 1) is TokenKind.PERCENT
            and _kind_at(tokens, i + 2) is TokenKind.KW_DOWN
        ):
            found.append(i)
    return sorted(set(found))


def _term_indices(tokens: Sequence[Token]) -> list[int]:
    """Indices of NUMs directly followed by a year/month marker."""
    return [
        i
        for i, token in enumerate(tokens)
        if token.kind is TokenKind.NUM and _unit_after(tokens, i) is not None
    ]


def _claimed_indices(tokens: Sequence[Token]) -> set[int]:
    """NUM indices already explained by some pattern other than a bare rate."""
    claimed = set(_anchored_indices(tokens))
    claimed.update(_down_percent_indices(tokens))
    claimed.update(_term_indices(tokens))
    for i, token in enumerate(tokens):
        if token.kind is not TokenKind.NUM:
            continue
        if _kind_at(tokens, i + 1) in (TokenKind.PERCENT, TokenKind.AT):
            claimed.add(i)
        if _kind_at(tokens, i - 1) in (TokenKind.KW_RATE, TokenKind.AT):
            claimed.add(i)
    return claimed


def _as_percent(value: float) -> float:
    """Read 625 as 6.25 (a dropped decimal point)."""
    return value / 100 if value > 100 else value


def _as_rate(value: float, explicit_percent: bool) -> float:
    value = _as_percent(value)
    if not explicit_percent and 0 < value < 1:
        return value * 100
    return value


def _is_bare_rate_candidate(token: Token) -> bool:
    return (
        token.kind is TokenKind.NUM
        and not token.is_money
        and RATE_MIN <= token.value <= RATE_MAX
    )


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class ExtractionRule(Protocol):
    name: str

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs: ...


class KeywordAnchorRule:
    """price/loan/ins/hoa followed by a number. Last mention wins."""

    name = "keyword_anchor"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        updates: dict[str, float] = {}
        for idx, kind in sorted(_anchored_indices(tokens).items()):
            value = _numeric_value(tokens[idx])
            field = _ANCHOR_FIELDS[kind]
            if field in ("monthly_ins", "monthly_hoa"):
                value = float(max(0, round(value)))
            updates[field] = value
        return partial.model_copy(update=updates) if updates else partial


class ZipRule:
    """Any ZIP token not consumed as an amount. Last one wins."""

    name = "zip"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        anchored = _anchored_indices(tokens)
        zips = [
            t.text[:5]
            for i, t in enumerate(tokens)
            if t.kind is TokenKind.ZIP and i not in anchored
        ]
        if not zips:
            return partial
        return partial.model_copy(update={"zip": zips[-1]})


class DownPaymentRule:
    """"down 20%" / "20 percent down"."""

    name = "down_percent"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        indices = _down_percent_indices(tokens)
        if not indices:
            return partial
        value = _as_percent(tokens[indices[-1]].value)
        return partial.model_copy(update={"down_percent": value})


class TermRule:
    """"30 years" / "360 months". First mention wins."""

    name = "term"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if partial.term_months is not None:
            return partial
        for idx in _term_indices(tokens):
            count = tokens[idx].value
            if count <= 0:
                continue
            if _unit_after(tokens, idx) is TokenKind.YRS:
                months = round(count * 12)
            else:
                months = round(count)
            return partial.model_copy(update={"term_months": months})
        return partial


class PercentRateRule:
    """"<num>%" not used as the down payment."""

    name = "rate_percent"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if partial.rate_pct is not None:
            return partial
        excluded = set(_down_percent_indices(tokens))
        for i, token in enumerate(tokens):
            if (
                token.kind is TokenKind.NUM
                and _kind_at(tokens, i + 1) is TokenKind.PERCENT
                and i not in excluded
            ):
                return partial.model_copy(update={"rate_pct": _as_rate(token.value, True)})
        return partial


class RateKeywordRule:
    """"rate 6.5"."""

    name = "rate_keyword"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if partial.rate_pct is not None:
            return partial
        for i, token in enumerate(tokens):
            if token.kind is not TokenKind.KW_RATE:
                continue
            j = _next_num_index(tokens, i)
            if j is not None and not tokens[j].is_money:
                explicit = _kind_at(tokens, j + 1) is TokenKind.PERCENT
                return partial.model_copy(
                    update={"rate_pct": _as_rate(tokens[j].value, explicit)}
                )
        return partial


class AtRateRule:
    """"at 6.5" / "@ 6.5", unless the number is a term ("at 30 years")."""

    name = "rate_at"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if partial.rate_pct is not None:
            return partial
        for i, token in enumerate(tokens):
            if token.kind is not TokenKind.AT:
                continue
            j = i + 1
            if _kind_at(tokens, j) is not TokenKind.NUM or tokens[j].is_money:
                continue
            if _unit_after(tokens, j) is not None:
                continue
            explicit = _kind_at(tokens, j + 1) is TokenKind.PERCENT
            return partial.model_copy(update={"rate_pct": _as_rate(tokens[j].value, explicit)})
        return partial


class DeriveLoanFromPriceRule:
    """loan = price x (1 - down/100)."""

    name = "derive_loan_from_price"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if (
            partial.loan_amount is None
            and partial.price is not None
            and partial.down_percent is not None
        ):
            loan = partial.price * (1 - partial.down_percent / 100)
            return partial.model_copy(update={"loan_amount": loan})
        return partial


class BareLoanRule:
    """"400000 at 6.5" with no price/loan keyword: the first number is the loan."""

    name = "bare_loan"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if partial.loan_amount is not None or partial.price is not None:
            return partial
        for i in range(len(tokens) - 2):
            if (
                tokens[i].kind is TokenKind.NUM
                and tokens[i + 1].kind is TokenKind.AT
                and tokens[i + 2].kind is TokenKind.NUM
            ):
                return partial.model_copy(update={"loan_amount": tokens[i].value})
        return partial


class RateBeforeTermRule:
    """Nearest unclaimed number left of the term, e.g. "6.25 30 years"."""

    name = "rate_before_term"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if partial.rate_pct is not None or partial.term_months is None:
            return partial
        terms = _term_indices(tokens)
        if not terms:
            return partial
        claimed = _claimed_indices(tokens)
        for i in range(terms[0] - 1, -1, -1):
            token = tokens[i]
            if i in claimed or not _is_bare_rate_candidate(token):
                continue
            return partial.model_copy(update={"rate_pct": token.value})
        return partial


class LoneRateCandidateRule:
    """Last resort: exactly one unclaimed number in rate range anywhere.

    Zero or several candidates leave the rate unresolved rather than guessing.
    """

    name = "lone_rate_candidate"

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        if partial.rate_pct is not None:
            return partial
        if partial.price is None or partial.down_percent is None or partial.term_months is None:
            return partial
        claimed = _claimed_indices(tokens)
        candidates = [
            t
            for i, t in enumerate(tokens)
            if i not in claimed and _is_bare_rate_candidate(t)
        ]
        if len(candidates) != 1:
            return partial
        return partial.model_copy(update={"rate_pct": candidates[0].value})


class DefaultsRule:
    name = "defaults"

    def __init__(self, defaults: ExtractionDefaults):
        self.defaults = defaults

    def try_extract(self, tokens: Sequence[Token], partial: LoanInputs) -> LoanInputs:
        updates = {}
        if partial.monthly_ins is None:
            updates["monthly_ins"] = self.defaults.monthly_ins
        if partial.monthly_hoa is None:
            updates["monthly_hoa"] = self.defaults.monthly_hoa
        return partial.model_copy(update=updates) if updates else partial


def build_rules(defaults: ExtractionDefaults | None = None) -> list[ExtractionRule]:
    """Rules in priority order."""
    return [
        KeywordAnchorRule(),
        ZipRule(),
        DownPaymentRule(),
        TermRule(),
        PercentRateRule(),
        RateKeywordRule(),
        AtRateRule(),
        DeriveLoanFromPriceRule(),
        BareLoanRule(),
        RateBeforeTermRule(),
        LoneRateCandidateRule(),
        DefaultsRule(defaults or ExtractionDefaults()),
    ]


def extract(
    tokens: Sequence[Token],
    defaults: ExtractionDefaults | None = None,
    rules: Sequence[ExtractionRule] | None = None,
) -> LoanInputs:
    """Run the extraction rules over ``tokens`` and return the partial record."""
    partial = LoanInputs()
    for rule in rules if rules is not None else build_rules(defaults):
        partial = rule.try_extract(tokens, partial)
    return partial


def parse_query_to_inputs(query: str, defaults: ExtractionDefaults | None = None) -> LoanInputs:
    """Tokenize and extract in one step."""
    return extract(tokenize(query), defaults)
