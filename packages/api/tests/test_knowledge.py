# This project was developed with assistance from AI tools.
"""Tests for the ZIP knowledge dataset."""

import os

import pytest

from homerates.services.errors import KnowledgeDataError
from homerates.services.knowledge import (
    county_from_zip,
    get_knowledge,
    load_knowledge,
    loan_limits_for_zip,
    lookup_zip,
    tax_rate_for_zip,
)

_VALID = """\
zip_to_county:
  12345: Test County
county_tax_rates:
  - county: Test County
    rate: 0.01
conforming_loan_limits:
  - county: Test County
    one_unit: 766550
"""


class TestPackagedDataset:
    def test_county(self):
        assert county_from_zip("92688") == "Orange"

    def test_zip_plus_four(self):
        assert county_from_zip("92688-1234") == "Orange"

    def test_tax_rate(self):
        assert tax_rate_for_zip("92688") == 0.0115

    def test_unmapped(self):
        assert county_from_zip("00000") is None
        assert tax_rate_for_zip("00000") is None
        assert loan_limits_for_zip("00000") is None

    def test_empty(self):
        assert county_from_zip(None) is None
        assert county_from_zip("  ") is None

    def test_loan_limits(self):
        limits = loan_limits_for_zip("94102")
        assert limits.county == "San Francisco"
        assert limits.one_unit == 1_209_750
        assert limits.high_cost is True

    def test_lookup_zip(self):
        info = lookup_zip("90210")
        assert info.county == "Los Angeles"
        assert info.tax_rate == 0.0125
        assert info.loan_limits.one_unit == 1_150_000


class TestLoading:
    def test_unquoted_zip_keys_become_strings(self, tmp_path):
        path = tmp_path / "knowledge.yaml"
        path.write_text(_VALID)
        data = load_knowledge(path)
        assert data["zip_to_county"] == {"12345": "Test County"}

    def test_missing_section(self, tmp_path):
        path = tmp_path / "knowledge.yaml"
        path.write_text("zip_to_county: {}\ncounty_tax_rates: []\n")
        with pytest.raises(KnowledgeDataError, match="conforming_loan_limits"):
            load_knowledge(path)

    def test_bad_tax_row(self, tmp_path):
        path = tmp_path / "knowledge.yaml"
        path.write_text(
            "zip_to_county: {}\ncounty_tax_rates:\n  - county: X\nconforming_loan_limits: []\n"
        )
        with pytest.raises(KnowledgeDataError):
            load_knowledge(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "knowledge.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(KnowledgeDataError):
            load_knowledge(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_knowledge(tmp_path / "nope.yaml")

    def test_reload_on_change(self, tmp_path):
        path = tmp_path / "knowledge.yaml"
        path.write_text(_VALID)
        assert get_knowledge(path)["county_tax_rates"][0]["rate"] == 0.01

        path.write_text(_VALID.replace("0.01", "0.02"))
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + 10))
        assert get_knowledge(path)["county_tax_rates"][0]["rate"] == 0.02

    def test_cached_copy_survives_deletion(self, tmp_path):
        path = tmp_path / "knowledge.yaml"
        path.write_text(_VALID)
        first = get_knowledge(path)
        path.unlink()
        assert get_knowledge(path) is first
