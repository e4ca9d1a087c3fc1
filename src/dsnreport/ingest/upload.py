"""Upload validation applied before a DSN buffer reaches the parser."""

from __future__ import annotations

import os
import re

from dsnreport.core.config import UploadConfig
from dsnreport.core.exceptions import UploadValidationError
from dsnreport.ingest.file_parser import decode_dsn_bytes

# A base name made of characters that are legal on every common filesystem.
FILENAME_REGEX = re.compile(r'^[^<>:"/\\|?*]+$')


def _format_error(config: UploadConfig) -> str:
    allowed = ", ".join(ext.lstrip(".") for ext in config.allowed_extensions)
    return f"Unsupported file format ({allowed} only)"


def validate_upload(filename: str, data: bytes, config: UploadConfig | None = None) -> str:
    """Check name, size and emptiness, then return the decoded text."""
    if config is None:
        config = UploadConfig()

    stem, ext = os.path.splitext(filename)
    allowed = {e.lower() for e in config.allowed_extensions}
    if not stem or ext.lower() not in allowed or not FILENAME_REGEX.match(filename):
        raise UploadValidationError(filename, _format_error(config))

    size = len(data)
    if size == 0:
        raise UploadValidationError(filename, "Empty file not allowed")
    if size > config.max_size_bytes:
        limit_mb = config.max_size_bytes // (1024 * 1024)
        raise UploadValidationError(filename, f"File too large (max {limit_mb}MB)")

    return decode_dsn_bytes(data, filename)
