"""DsnParserService: parses raw DSN text into a ParsedDsnData tree."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from dsnreport.core.exceptions import DsnParseError
from dsnreport.ingest.entity_builder import backfill_leading_blocks, build_entity_tree
from dsnreport.ingest.tokenizer import tokenize
from dsnreport.models.dsn_record import PARSING_METHOD, DsnCompany, DsnMetadata, ParsedDsnData

logger = logging.getLogger(__name__)


def decode_dsn_bytes(data: bytes, filename: str) -> str:
    """Decode an uploaded buffer as UTF-8 (a leading BOM is tolerated)."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DsnParseError(filename, exc) from exc


def count_employees(company: DsnCompany) -> int:
    return sum(len(est.employees) for est in company.establishments)


class DsnParserService:
    """Tokenize -> build entity tree -> backfill leading identity/address blocks.

    Bad lines are logged and skipped; only whole-input failures raise
    ``DsnParseError``.
    """

    def parse(self, content: str, filename: str) -> ParsedDsnData:
        if not isinstance(content, str):
            raise DsnParseError(filename, f"expected decoded text, got {type(content).__name__}")

        logger.info("Starting DSN parsing for file: %s", filename)
        try:
            tokens = tokenize(content)
            company = build_entity_tree(tokens)
            company = backfill_leading_blocks(tokens, company)
        except Exception as exc:
            raise DsnParseError(filename, exc) from exc

        metadata = DsnMetadata(
            total_employees=count_employees(company),
            total_establishments=len(company.establishments),
            parsed_at=datetime.now(timezone.utc),
            filename=filename,
            parsing_method=PARSING_METHOD,
        )
        logger.info(
            "DSN parsing completed: %d establishment(s), %d employee(s), method=%s",
            metadata.total_establishments, metadata.total_employees, metadata.parsing_method,
        )
        return ParsedDsnData(company=company, metadata=metadata)

    def parse_bytes(self, data: bytes, filename: str) -> ParsedDsnData:
        return self.parse(decode_dsn_bytes(data, filename), filename)


def parse_dsn(content: str, filename: str) -> ParsedDsnData:
    """Module-level shortcut for ``DsnParserService().parse``."""
    return DsnParserService().parse(content, filename)


def parse_dsn_bytes(data: bytes, filename: str) -> ParsedDsnData:
    return DsnParserService().parse_bytes(data, filename)
