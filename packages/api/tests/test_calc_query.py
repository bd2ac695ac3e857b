# This project was developed with assistance from AI tools.
"""Tests for the field-aware calc parser."""

from homerates.services.calc_query import parse_calc_query


def test_conversational_question():
    parsed = parse_calc_query(
        "What's the payment on a $850k house at 6.5% for 30 years with taxes at 1.1%, "
        "insurance 150 and HOA 200?"
    )
    assert parsed.loan_amount == 850_000
    assert parsed.annual_rate_pct == 6.5
    assert parsed.term_years == 30
    assert parsed.taxes_pct == 1.1
    assert parsed.insurance_monthly == 150
    assert parsed.hoa_monthly == 200


def test_loan_anchor():
    parsed = parse_calc_query("loan amount 425,000 rate 6.125 15 yrs")
    assert parsed.loan_amount == 425_000
    assert parsed.annual_rate_pct == 6.125
    assert parsed.term_years == 15


def test_tax_percent_is_not_the_rate():
    parsed = parse_calc_query("taxes 1.2% on a 500k loan at 7% for 30 years")
    assert parsed.taxes_pct == 1.2
    assert parsed.annual_rate_pct == 7


def test_months_term():
    parsed = parse_calc_query("300k at 6% for 180 months")
    assert parsed.term_years == 15


def test_million_suffix():
    parsed = parse_calc_query("1.2m at 6.75% 30 years")
    assert parsed.loan_amount == 1_200_000


def test_nothing_found():
    parsed = parse_calc_query("how are rates today?")
    assert parsed.loan_amount is None
    assert parsed.annual_rate_pct is None
    assert parsed.term_years is None


def test_purchase_price_anchor():
    parsed = parse_calc_query("home price $500,000 rate 6.5% 30 years")
    assert parsed.purchase_price == 500_000


def test_no_price_without_anchor():
    assert parse_calc_query("400k at 6% 30 years").purchase_price is None
