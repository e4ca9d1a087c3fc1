"""Tests for the question catalogue and override resolution."""

from __future__ import annotations

import pytest

from dsnreport.core.exceptions import UnknownQuestionError
from dsnreport.reporting.questions import QUESTIONS, QUESTIONS_BY_ID, get_question, resolve_answers


class TestCatalogue:
    def test_sixteen_unique_ids(self):
        assert len(QUESTIONS) == 16
        assert len(QUESTIONS_BY_ID) == 16

    def test_category_breakdowns_hang_off_headcounts(self):
        assert get_question("S1-6_19").parent_id == "S1-6_02"
        assert get_question("S1-6_20").parent_id == "S1-6_03"

    def test_parents_exist(self):
        for question in QUESTIONS:
            if question.parent_id is not None:
                assert question.parent_id in QUESTIONS_BY_ID

    def test_unknown_id_raises(self):
        with pytest.raises(UnknownQuestionError) as exc_info:
            get_question("S1-6_99")
        assert exc_info.value.question_id == "S1-6_99"


class TestResolveAnswers:
    def test_override_wins(self):
        resolved = resolve_answers({"S1-6_02": 10, "S1-6_03": 8}, {"S1-6_02": 12})
        assert resolved == {"S1-6_02": 12, "S1-6_03": 8}

    def test_inputs_are_not_mutated(self):
        computed = {"S1-6_02": 10}
        resolve_answers(computed, {"S1-6_02": 0})
        assert computed == {"S1-6_02": 10}

    def test_falsy_override_still_wins(self):
        assert resolve_answers({"S1-6_14": "Head-count"}, {"S1-6_14": ""}) == {"S1-6_14": ""}
