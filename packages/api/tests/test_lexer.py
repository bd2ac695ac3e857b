# This project was developed with assistance from AI tools.
"""Tests for the query tokenizer."""

from homerates.services.lexer import TokenKind, expand_money, tokenize


def _kinds(query):
    return [t.kind for t in tokenize(query)]


class TestNumbers:
    def test_k_suffix_is_money(self):
        (tok,) = tokenize("900k")
        assert tok.kind is TokenKind.NUM
        assert tok.value == 900_000
        assert tok.is_money

    def test_m_suffix(self):
        (tok,) = tokenize("1.2M")
        assert tok.value == 1_200_000

    def test_dollar_with_separators(self):
        (tok,) = tokenize("$1,200.50")
        assert tok.value == 1200.5
        assert tok.is_money

    def test_plain_decimal_is_not_money(self):
        (tok,) = tokenize("6.25")
        assert tok.value == 6.25
        assert not tok.is_money

    def test_leading_dot(self):
        (tok,) = tokenize(".5")
        assert tok.value == 0.5

    def test_suffix_must_be_attached(self):
        assert _kinds("900 k") == [TokenKind.NUM, TokenKind.TEXT]

    def test_expand_money(self):
        assert expand_money("1,500", "k") == 1_500_000
        assert expand_money("$250") == 250


class TestZip:
    def test_five_digits_is_zip(self):
        assert _kinds("92688") == [TokenKind.ZIP]

    def test_zip_plus_four(self):
        (tok,) = tokenize("92688-1234")
        assert tok.kind is TokenKind.ZIP
        assert tok.text == "92688-1234"

    def test_six_digits_is_number(self):
        (tok,) = tokenize("400000")
        assert tok.kind is TokenKind.NUM
        assert tok.value == 400_000

    def test_five_digits_with_suffix_is_number(self):
        (tok,) = tokenize("12345k")
        assert tok.kind is TokenKind.NUM

    def test_five_digits_before_percent_is_number(self):
        assert _kinds("12345%") == [TokenKind.NUM, TokenKind.PERCENT]

    def test_separated_thousands_is_number(self):
        (tok,) = tokenize("$12,345")
        assert tok.kind is TokenKind.NUM


class TestKeywords:
    def test_full_query(self):
        assert _kinds("price 900k down 20% 6.25 30 years 92688") == [
            TokenKind.KW_PRICE,
            TokenKind.NUM,
            TokenKind.KW_DOWN,
            TokenKind.NUM,
            TokenKind.PERCENT,
            TokenKind.NUM,
            TokenKind.NUM,
            TokenKind.YRS,
            TokenKind.ZIP,
        ]

    def test_case_insensitive(self):
        assert _kinds("LOAN Rate HOA Insurance") == [
            TokenKind.KW_LOAN,
            TokenKind.KW_RATE,
            TokenKind.KW_HOA,
            TokenKind.KW_INS,
        ]

    def test_percent_words(self):
        assert _kinds("5 percent 6 pct") == [
            TokenKind.NUM,
            TokenKind.PERCENT,
            TokenKind.NUM,
            TokenKind.PERCENT,
        ]

    def test_term_units(self):
        assert _kinds("30 yrs 360 mos 15y") == [
            TokenKind.NUM,
            TokenKind.YRS,
            TokenKind.NUM,
            TokenKind.MOS,
            TokenKind.NUM,
            TokenKind.YRS,
        ]

    def test_hyphenated_term(self):
        assert _kinds("30-year") == [TokenKind.NUM, TokenKind.PUNCT, TokenKind.YRS]

    def test_at_forms(self):
        assert _kinds("at @") == [TokenKind.AT, TokenKind.AT]

    def test_keyword_inside_word_is_text(self):
        kinds = _kinds("separate")
        assert TokenKind.KW_RATE not in kinds
        assert set(kinds) == {TokenKind.TEXT}


class TestTotality:
    def test_empty(self):
        assert tokenize("") == []

    def test_unknown_characters_become_text(self):
        tokens = tokenize("#&*")
        assert [t.kind for t in tokens] == [TokenKind.TEXT] * 3

    def test_offsets_point_into_lowercased_input(self):
        query = "Loan $400K"
        for tok in tokenize(query):
            assert query.lower()[tok.start : tok.start + len(tok.text)] == tok.text
