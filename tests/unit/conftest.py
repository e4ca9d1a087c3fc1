"""Unit test fixtures: sample declarations and a pinned reference date."""

from __future__ import annotations

from datetime import date

import pytest

from dsnreport.ingest.file_parser import parse_dsn
from dsnreport.models.dsn_record import ParsedDsnData
from tests.fakes import SAMPLE_DSN

TODAY = date(2026, 10, 18)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_parsed() -> ParsedDsnData:
    return parse_dsn(SAMPLE_DSN, "sample.txt")
