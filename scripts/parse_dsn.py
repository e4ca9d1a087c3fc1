"""Parse a DSN file and print the computed S1-6 answers as JSON.

Usage:
    python scripts/parse_dsn.py path/to/declaration.txt --summary
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

from dsnreport.core.exceptions import DsnParseError
from dsnreport.core.logging import configure_logging
from dsnreport.ingest.file_parser import parse_dsn_bytes
from dsnreport.reporting.question_mapper import map_to_answers
from dsnreport.reporting.summary import summarize


def build_report(path: Path, include_summary: bool = False,
                 today: Optional[date] = None) -> dict[str, Any]:
    """Parse ``path`` and return a JSON-ready report."""
    parsed = parse_dsn_bytes(path.read_bytes(), path.name)
    report: dict[str, Any] = {
        "metadata": parsed.metadata.model_dump(mode="json"),
        "answers": map_to_answers(parsed, today=today),
    }
    if include_summary:
        report["summary"] = summarize(parsed).model_dump(mode="json")
    return report


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute CSRD S1-6 answers from a DSN file")
    parser.add_argument("path", type=Path, help="DSN text file")
    parser.add_argument("--summary", action="store_true", help="Include the parse summary")
    parser.add_argument("--today", type=date.fromisoformat, default=None,
                        help="Reference date for the reporting window (YYYY-MM-DD)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    try:
        report = build_report(args.path, include_summary=args.summary, today=args.today)
    except DsnParseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(report, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
