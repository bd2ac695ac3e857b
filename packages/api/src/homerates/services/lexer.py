# This project was developed with assistance from AI tools.
"""Tokenizer for free-text mortgage questions.

Pure function, no I/O. Turns "price 900k down 20% 6.25 30 yrs 92688" into a
flat list of typed tokens that the extractor walks. Input is lower-cased here;
callers pass the raw string. The lexer never raises: anything it does not
recognise becomes a one-character TEXT token.
"""

import enum
import re
from dataclasses import dataclass


class TokenKind(enum.StrEnum):
    NUM = "num"
    PERCENT = "percent"
    YRS = "yrs"
    MOS = "mos"
    ZIP = "zip"
    KW_PRICE = "kw_price"
    KW_LOAN = "kw_loan"
    KW_DOWN = "kw_down"
    KW_RATE = "kw_rate"
    KW_INS = "kw_ins"
    KW_HOA = "kw_hoa"
    AT = "at"
    PUNCT = "punct"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    """One lexical unit.

    ``value`` is set for NUM tokens only, with any k/m suffix already applied.
    ``is_money`` marks NUMs written with ``$`` or a k/m suffix.
    """

    kind: TokenKind
    text: str
    start: int
    value: float | None = None
    is_money: bool = False


# Word-ish patterns must not start or end inside a longer word.
_W = r"(?<![a-z])"
_E = r"(?![a-z])"

_ZIP_RE = re.compile(r"(?<![\d.,$])\d{5}(?:-\d{4})?(?![,.]?\d)(?![km]" + _E + r")(?!\s*(?:%|percent|pct))")

# Priority order matters: first match at a position wins.
_KEYWORDS: list[tuple[TokenKind, re.Pattern]] = [
    (TokenKind.KW_PRICE, re.compile(_W + r"price" + _E)),
    (TokenKind.KW_LOAN, re.compile(_W + r"loan" + _E)),
    (TokenKind.KW_DOWN, re.compile(_W + r"down" + _E)),
    (TokenKind.KW_RATE, re.compile(_W + r"rate" + _E)),
    (TokenKind.KW_INS, re.compile(_W + r"ins(?:urance)?" + _E)),
    (TokenKind.KW_HOA, re.compile(_W + r"hoa" + _E)),
    (TokenKind.AT, re.compile(r"@|" + _W + r"at" + _E)),
    (TokenKind.YRS, re.compile(_W + r"(?:years|year|yrs|yr|y)" + _E)),
    (TokenKind.MOS, re.compile(_W + r"(?:months|month|mos|mo)" + _E)),
    (TokenKind.PERCENT, re.compile(_W + r"(?:percent|pct)" + _E)),
]

_PERCENT_RE = re.compile(r"%")
_NUM_RE = re.compile(
    r"(?P<dollar>\$\s*)?(?P<num>\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?|\.\d+)"
    r"(?:(?P<suffix>[km])" + _E + r")?"
)
_PUNCT_RE = re.compile(r"[,:;\-()/.?!]")
_SPACE_RE = re.compile(r"\s+")

_SUFFIX_MULTIPLIER = {"k": 1_000, "m": 1_000_000}


def expand_money(raw: str, suffix: str | None = None) -> float:
    """Parse a numeric literal, dropping separators and applying a k/m suffix."""
    value = float(raw.replace(",", "").replace("$", "").strip())
    if suffix:
        value *= _SUFFIX_MULTIPLIER[suffix.lower()]
    return value


def _scan_at(text: str, pos: int) -> Token:
    m = _ZIP_RE.match(text, pos)
    if m:
        return Token(TokenKind.ZIP, m.group(0), pos)

    for kind, pattern in _KEYWORDS:
        m = pattern.match(text, pos)
        if m:
            return Token(kind, m.group(0), pos)

    m = _PERCENT_RE.match(text, pos)
    if m:
        return Token(TokenKind.PERCENT, m.group(0), pos)

    m = _NUM_RE.match(text, pos)
    if m:
        suffix = m.group("suffix")
        return Token(
            TokenKind.NUM,
            m.group(0),
            pos,
            value=expand_money(m.group("num"), suffix),
            is_money=bool(m.group("dollar") or suffix),
        )

    m = _PUNCT_RE.match(text, pos)
    if m:
        return Token(TokenKind.PUNCT, m.group(0), pos)

    return Token(TokenKind.TEXT, text[pos], pos)


def tokenize(query: str) -> list[Token]:
    """Split a query into tokens, left to right."""
    text = query.lower()
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        space = _SPACE_RE.match(text, pos)
        if space:
            pos = space.end()
            continue
        token = _scan_at(text, pos)
        tokens.append(token)
        pos += len(token.text)
    return tokens
