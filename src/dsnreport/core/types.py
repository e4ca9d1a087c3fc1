"""Type aliases used across the DSN report package."""

from __future__ import annotations

from typing import Union

QuestionId = str
QuestionAnswer = Union[str, int, float, bool, dict[str, int]]
MappedAnswers = dict[QuestionId, QuestionAnswer]
