"""DSN report exception hierarchy."""

from __future__ import annotations


class DsnReportError(Exception):
    """Base exception for all DSN report errors."""


class DsnParseError(DsnReportError):
    """The whole input could not be parsed. No partial result is returned."""

    def __init__(self, filename: str, cause: BaseException | str) -> None:
        self.filename = filename
        self.cause = cause
        super().__init__(f"Failed to parse DSN file {filename!r}: {cause}")


class UploadValidationError(DsnReportError):
    """Uploaded file rejected before parsing (extension, size, empty)."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Invalid upload {filename!r}: {reason}")


class UnknownQuestionError(DsnReportError):
    """Question identifier is not part of the supported catalogue."""

    def __init__(self, question_id: str) -> None:
        self.question_id = question_id
        super().__init__(f"Unknown question id: {question_id!r}")


class SessionNotFoundError(DsnReportError):
    """No parsed DSN is cached under the given session id."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"DSN session not found: {session_id!r}")


class CacheError(DsnReportError):
    """Cache backend operation failed."""
