"""DsnSessionService: parse, map and cache one uploaded DSN per session.

Cache layout: ``session:{session_id}:dsn`` -> DsnSession JSON, TTL from
``CacheConfig.session_ttl_seconds`` (refreshed on every write).
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from dsnreport.core.exceptions import SessionNotFoundError
from dsnreport.core.protocols import ICacheBackend
from dsnreport.core.types import MappedAnswers, QuestionAnswer
from dsnreport.ingest.file_parser import DsnParserService
from dsnreport.models.session import DsnSession
from dsnreport.reporting.question_mapper import map_to_answers
from dsnreport.reporting.questions import get_question, resolve_answers
from dsnreport.reporting.summary import summarize

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = 4 * 60 * 60


def session_key(session_id: str) -> str:
    return f"session:{session_id}:dsn"


class DsnSessionService:
    def __init__(self, cache: ICacheBackend, ttl_seconds: int = DEFAULT_SESSION_TTL,
                 parser: Optional[DsnParserService] = None) -> None:
        self._cache = cache
        self._ttl = ttl_seconds
        self._parser = parser or DsnParserService()

    def create(self, content: str, filename: str, today: Optional[date] = None) -> DsnSession:
        """Parse ``content``, compute answers and cache the result under a new id."""
        parsed = self._parser.parse(content, filename)
        session = DsnSession(
            session_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            parsed=parsed,
            summary=summarize(parsed),
            answers=map_to_answers(parsed, today=today),
        )
        self._save(session)
        logger.info("Created DSN session %s for %s", session.session_id, filename)
        return session

    def get(self, session_id: str) -> DsnSession:
        raw = self._cache.get(session_key(session_id))
        if raw is None:
            raise SessionNotFoundError(session_id)
        return DsnSession.model_validate_json(raw)

    def resolved_answers(self, session_id: str) -> MappedAnswers:
        session = self.get(session_id)
        return resolve_answers(session.answers, session.overrides)

    def set_override(self, session_id: str, question_id: str, value: QuestionAnswer) -> DsnSession:
        get_question(question_id)
        session = self.get(session_id)
        session.overrides[question_id] = value
        self._save(session)
        return session

    def clear_override(self, session_id: str, question_id: str) -> DsnSession:
        get_question(question_id)
        session = self.get(session_id)
        session.overrides.pop(question_id, None)
        self._save(session)
        return session

    def delete(self, session_id: str) -> None:
        self._cache.delete(session_key(session_id))

    def _save(self, session: DsnSession) -> None:
        self._cache.setex(session_key(session.session_id), self._ttl, session.model_dump_json())
