"""DSN line tokenizer.

Each DSN line looks like ``S21.G00.30.001,'123456789'``. A line whose payload
is the empty-quote pair (``S21.G00.30,''``) is a header: it opens a block
rather than carrying data.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DSN_LINE_REGEX = re.compile(r"^([A-Z]\d+\.G\d+\.\d+(?:\.\d+)?),('.*'|'')$")
HEADER_PAYLOAD = "''"


@dataclass(frozen=True)
class DsnToken:
    code: str
    value: str
    block: str  # top-level segment: S10, S20, S21...
    is_header: bool
    line_number: int = 0
    raw: str = ""

    @property
    def group(self) -> str:
        """First three code segments, e.g. ``S21.G00.30``."""
        return ".".join(self.code.split(".")[:3])


def tokenize_line(line: str, line_number: int = 0) -> DsnToken | None:
    """Parse one raw line. Returns None for blank or malformed lines."""
    stripped = line.strip()
    if not stripped:
        return None

    match = DSN_LINE_REGEX.match(stripped)
    if match is None:
        logger.warning("Could not parse DSN line %d: %r", line_number, stripped)
        return None

    code, payload = match.groups()
    is_header = payload == HEADER_PAYLOAD
    return DsnToken(
        code=code,
        value="" if is_header else payload[1:-1],
        block=code.split(".", 1)[0],
        is_header=is_header,
        line_number=line_number,
        raw=stripped,
    )


def tokenize(content: str) -> list[DsnToken]:
    """Tokenize a whole file, skipping blank and malformed lines."""
    tokens: list[DsnToken] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        token = tokenize_line(line, line_number)
        if token is not None:
            tokens.append(token)
    logger.debug("Tokenized %d DSN lines", len(tokens))
    return tokens
