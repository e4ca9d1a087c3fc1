"""Question catalogue and override resolution.

The catalogue is closed: ``map_to_answers`` produces exactly these ids, and the
form/export layers only accept overrides for them.
"""

from __future__ import annotations

from typing import Mapping

from dsnreport.core.exceptions import UnknownQuestionError
from dsnreport.core.types import MappedAnswers, QuestionAnswer
from dsnreport.models.answers import QuestionDefinition

QUESTIONS: tuple[QuestionDefinition, ...] = (
    QuestionDefinition(id="S1-6_02", label="Number of employees (end of period)", content="number", unit="head-count"),
    QuestionDefinition(id="S1-6_03", label="Number of employees (average during period)", content="number", unit="head-count"),
    QuestionDefinition(id="S1-6_05", label="Employees by country (end of period)", content="breakdown", unit="head-count"),
    QuestionDefinition(id="S1-6_06", label="Employees by country (average during period)", content="breakdown", unit="head-count"),
    QuestionDefinition(id="K_718", label="Employees by contract type and gender (end of period)", content="breakdown", unit="head-count"),
    QuestionDefinition(id="K_719", label="Employees by contract type and gender (average during period)", content="breakdown", unit="head-count"),
    QuestionDefinition(id="S1-6_09", label="Employees by region (end of period)", content="breakdown", unit="head-count"),
    QuestionDefinition(id="S1-6_10", label="Employees by region (average during period)", content="breakdown", unit="head-count"),
    QuestionDefinition(id="S1-6_11", label="Number of employees who have left the company", content="number", unit="head-count"),
    QuestionDefinition(id="S1-6_12", label="Percentage of employee turnover", content="percentage", unit="%"),
    QuestionDefinition(id="S1-6_14", label="Employee numbers reported in head-count or full-time equivalent", content="enum"),
    QuestionDefinition(id="S1-6_15", label="Employee numbers reported at end of period or average", content="enum"),
    QuestionDefinition(id="S1-6_16", label="Contextual information necessary to understand the data", content="text"),
    QuestionDefinition(id="S1-6_17", label="Relationship with numbers reported in the financial statements", content="text"),
    QuestionDefinition(id="S1-6_19", label="Employees by category (end of period)", content="breakdown", unit="head-count", parent_id="S1-6_02"),
    QuestionDefinition(id="S1-6_20", label="Employees by category (average during period)", content="breakdown", unit="head-count", parent_id="S1-6_03"),
)

QUESTIONS_BY_ID: dict[str, QuestionDefinition] = {q.id: q for q in QUESTIONS}


def get_question(question_id: str) -> QuestionDefinition:
    try:
        return QUESTIONS_BY_ID[question_id]
    except KeyError:
        raise UnknownQuestionError(question_id) from None


def resolve_answers(
    computed: Mapping[str, QuestionAnswer], overrides: Mapping[str, QuestionAnswer],
) -> MappedAnswers:
    """Overlay user overrides on computed answers. An override always wins."""
    resolved: MappedAnswers = dict(computed)
    resolved.update(overrides)
    return resolved
