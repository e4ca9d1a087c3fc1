"""Upload session model cached between the parse call and the form/export calls."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from dsnreport.models.answers import DsnSummary
from dsnreport.models.dsn_record import ParsedDsnData


class DsnSession(BaseModel):
    session_id: str
    created_at: datetime
    parsed: ParsedDsnData
    summary: DsnSummary
    answers: dict[str, Any] = Field(default_factory=dict)
    overrides: dict[str, Any] = Field(default_factory=dict)
