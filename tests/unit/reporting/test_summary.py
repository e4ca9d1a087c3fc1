"""Tests for the post-upload parse summary."""

from __future__ import annotations

from decimal import Decimal

from dsnreport.ingest.file_parser import parse_dsn
from dsnreport.reporting.summary import SAMPLE_SIZE, summarize
from tests.fakes import MINIMAL_DSN, NO_DATES_DSN


class TestSummarize:
    def test_company_and_counts(self, sample_parsed):
        summary = summarize(sample_parsed)
        assert summary.company_name == "ACME INDUSTRIES"
        assert summary.siret == "12345678900012"
        assert summary.total_employees == 2
        assert summary.total_establishments == 1
        assert summary.parsing_method == "S21.G00.30_delimiter"

    def test_samples(self, sample_parsed):
        samples = summarize(sample_parsed).sample_employees
        assert [s.family_name for s in samples] == ["DUPONT", "MARTIN"]
        assert samples[0].has_identity_block is True
        assert samples[1].has_identity_block is False
        assert samples[1].birth_date == "N/A"

    def test_sample_size_is_capped(self):
        content = "S20.G00.05,''\n" + "S21.G00.30,''\nS21.G00.30.001,'1'\n" * (SAMPLE_SIZE + 3)
        summary = summarize(parse_dsn(content, "many.txt"))
        assert len(summary.sample_employees) == SAMPLE_SIZE
        assert summary.total_employees == SAMPLE_SIZE + 3

    def test_distribution(self, sample_parsed):
        dist = summarize(sample_parsed).employee_distribution
        assert dist.with_identity_block == 1
        assert dist.with_address_block == 1
        assert dist.total == 2

    def test_gender_and_contracts(self, sample_parsed):
        summary = summarize(sample_parsed)
        assert summary.gender_breakdown.male == 1
        assert summary.gender_breakdown.female == 1
        assert summary.contract_types == {"01": 1, "02": 1}

    def test_remuneration(self, sample_parsed):
        summary = summarize(sample_parsed)
        assert summary.has_remuneration_data is True
        assert summary.total_remuneration == Decimal("5700.50")
        assert summary.average_remuneration == Decimal("2850.25")

    def test_no_remuneration(self):
        summary = summarize(parse_dsn(NO_DATES_DSN, "nodate.txt"))
        assert summary.has_remuneration_data is False
        assert summary.average_remuneration == Decimal("0")

    def test_invalid_amount_is_skipped(self):
        content = MINIMAL_DSN + "S21.G00.50,''\nS21.G00.50.002,'abc'\n"
        assert summarize(parse_dsn(content, "bad.txt")).has_remuneration_data is False

    def test_unknown_company_defaults(self):
        summary = summarize(parse_dsn(MINIMAL_DSN, "min.txt"))
        assert summary.company_name == "Unknown"
        assert summary.siret == "Unknown"
