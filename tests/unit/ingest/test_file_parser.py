"""Tests for DsnParserService: the tokenize/build/backfill pipeline."""

from __future__ import annotations

import logging

import pytest

from dsnreport.core.exceptions import DsnParseError
from dsnreport.ingest.file_parser import (
    DsnParserService,
    decode_dsn_bytes,
    parse_dsn,
    parse_dsn_bytes,
)
from dsnreport.models.dsn_record import PARSING_METHOD
from tests.fakes import MINIMAL_DSN, SAMPLE_DSN


class TestParse:
    def test_metadata(self, sample_parsed):
        meta = sample_parsed.metadata
        assert meta.filename == "sample.txt"
        assert meta.total_employees == 2
        assert meta.total_establishments == 1
        assert meta.parsing_method == PARSING_METHOD
        assert meta.parsed_at.tzinfo is not None

    def test_total_employees_matches_tree(self, sample_parsed):
        tree_count = sum(len(est.employees) for est in sample_parsed.company.establishments)
        assert sample_parsed.metadata.total_employees == tree_count

    def test_primary_record_is_backfilled(self, sample_parsed):
        primary = sample_parsed.company.primary_record
        assert primary.identity.nir == "123456789"
        assert primary.address.address == "1 RUE DE LA PAIX"

    def test_parse_is_deterministic(self):
        first = parse_dsn(SAMPLE_DSN, "a.txt")
        second = parse_dsn(SAMPLE_DSN, "a.txt")
        assert first.company == second.company
        assert first.metadata.model_dump(exclude={"parsed_at"}) == second.metadata.model_dump(exclude={"parsed_at"})

    def test_empty_content_yields_empty_tree(self):
        parsed = parse_dsn("", "empty.txt")
        assert parsed.company.establishments == []
        assert parsed.metadata.total_employees == 0

    def test_garbage_lines_are_skipped(self):
        parsed = parse_dsn("not a dsn line\n" + MINIMAL_DSN + "###\n", "x.txt")
        assert parsed.metadata.total_employees == 2

    def test_bad_line_inside_employee_keeps_block_context(self, caplog):
        content = (
            "S20.G00.05,''\n"
            "S21.G00.30,''\n"
            "S21.G00.30.001,'111'\n"
            "S21.G00.30.00X,broken\n"
            "S21.G00.30.002,'DUPONT'\n"
            "S21.G00.30,''\n"
            "S21.G00.30.001,'222'\n"
        )
        with caplog.at_level(logging.WARNING, logger="dsnreport"):
            parsed = parse_dsn(content, "interleaved.txt")

        first, second = parsed.employees
        assert first.personal.nir == "111"
        assert first.personal.family_name == "DUPONT"
        assert second.personal.nir == "222"
        assert parsed.metadata.total_employees == 2
        assert "Could not parse DSN line 4" in caplog.text

    def test_non_text_input_raises(self):
        with pytest.raises(DsnParseError) as exc_info:
            DsnParserService().parse(b"S21.G00.30,''", "bytes.txt")  # type: ignore[arg-type]
        assert exc_info.value.filename == "bytes.txt"

    def test_pipeline_failure_is_wrapped(self, monkeypatch):
        def explode(content):
            raise RuntimeError("tokenizer down")

        monkeypatch.setattr("dsnreport.ingest.file_parser.tokenize", explode)
        with pytest.raises(DsnParseError, match="tokenizer down"):
            parse_dsn(SAMPLE_DSN, "a.txt")


class TestParseBytes:
    def test_utf8_bytes(self):
        parsed = parse_dsn_bytes(SAMPLE_DSN.encode("utf-8"), "a.txt")
        assert parsed.company.info.company_name == "ACME INDUSTRIES"

    def test_bom_is_stripped(self):
        parsed = parse_dsn_bytes(b"\xef\xbb\xbf" + SAMPLE_DSN.encode("utf-8"), "a.txt")
        assert parsed.company.info.software_name == "SILAE"

    def test_invalid_utf8_raises_parse_error(self):
        with pytest.raises(DsnParseError) as exc_info:
            decode_dsn_bytes(b"S10.G00.01.003,'\xff\xfe'", "bad.txt")
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)
