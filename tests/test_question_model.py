"""
Tests for question bank models and loading.
"""

import json

import pytest

from antigaspi_quiz.models.errors import InvalidConfigurationError, OutOfRangeError
from antigaspi_quiz.models.question_model import (
    QuestionKind,
    load_question_bank,
    parse_question_bank,
)

from conftest import MC_QUESTION, NUMERIC_QUESTION


def _bank(*questions, **extra):
    return {"questions": list(questions), **extra}


class TestQuestionParsing:
    """Tests for Question / ScoringRange parsing."""

    def test_aliases(self, numeric_question):
        """JSON keys map onto python field names."""
        assert numeric_question.text.startswith("Combien")
        assert numeric_question.kind == QuestionKind.NUMERIC
        assert numeric_question.scoring_ranges[0].upper == 100
        assert numeric_question.default_range.default_score == 3

    def test_dump_by_alias(self, mc_question):
        data = mc_question.model_dump(by_alias=True)
        assert data["question"] == MC_QUESTION["question"]
        assert data["type"] == QuestionKind.MULTIPLE_CHOICE

    def test_find_option(self, mc_question):
        assert mc_question.find_option("Jamais").score == 4
        assert mc_question.find_option("jamais") is None


class TestBankValidation:
    """Malformed banks fail fast with InvalidConfigurationError."""

    def test_valid_bank(self, small_bank):
        assert small_bank.question_count() == 2
        assert small_bank.question_at(1).id == 2
        assert small_bank.index_of(2) == 1
        assert small_bank.index_of(99) is None

    def test_empty_bank(self):
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank())

    def test_mc_without_options(self):
        q = {**MC_QUESTION, "options": []}
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(q))

    def test_numeric_without_ranges(self):
        q = {**NUMERIC_QUESTION, "scoringRanges": []}
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(q))

    def test_duplicate_option_text(self):
        q = {**MC_QUESTION, "options": [{"text": "A", "score": 0}, {"text": "A", "score": 1}]}
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(q))

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_option_score(self, bad):
        q = {**MC_QUESTION, "options": [{"text": "A", "score": bad}]}
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(q))

    def test_non_finite_default_score(self):
        q = {**NUMERIC_QUESTION, "scoringRanges": [{"max": 1, "score": 0}, {"defaultScore": float("inf")}]}
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(q))

    def test_range_without_any_score(self):
        q = {**NUMERIC_QUESTION, "scoringRanges": [{"max": 1}]}
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(q))

    def test_inverted_range(self):
        q = {**NUMERIC_QUESTION, "scoringRanges": [{"min": 10, "max": 1, "score": 0}]}
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(q))

    def test_duplicate_ids(self):
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(MC_QUESTION, {**NUMERIC_QUESTION, "id": 1}))

    def test_hook_must_reference_numeric_question(self):
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(MC_QUESTION, NUMERIC_QUESTION, budgetAnswerId=1))

    def test_hook_must_exist(self):
        with pytest.raises(InvalidConfigurationError):
            parse_question_bank(_bank(MC_QUESTION, NUMERIC_QUESTION, wasteAnswerId=42))


class TestQuestionAt:
    """Index access on the bank."""

    @pytest.mark.parametrize("index", [-1, 2, 100])
    def test_out_of_range(self, small_bank, index):
        with pytest.raises(OutOfRangeError):
            small_bank.question_at(index)

    def test_out_of_range_is_index_error(self, small_bank):
        with pytest.raises(IndexError):
            small_bank.question_at(5)


class TestLoadQuestionBank:
    """Loading the bank from disk."""

    def test_load_shipped_bank(self, real_bank):
        assert real_bank.question_count() == 22
        assert real_bank.budget_answer_id == 21
        assert real_bank.waste_answer_id == 22

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidConfigurationError):
            load_question_bank(str(tmp_path / "absent.json"))

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "quiz.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidConfigurationError):
            load_question_bank(str(path))

    def test_invalid_schema(self, tmp_path):
        path = tmp_path / "quiz.json"
        path.write_text(json.dumps(_bank({**MC_QUESTION, "options": []})), encoding="utf-8")
        with pytest.raises(InvalidConfigurationError):
            load_question_bank(str(path))
