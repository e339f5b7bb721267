"""
Shared fixtures for quiz engine tests.
"""

import pytest

import config
from antigaspi_quiz.models.question_model import (
    Question,
    QuestionBank,
    load_question_bank,
    parse_question_bank,
)
from antigaspi_quiz.services.quiz_service import restart


MC_QUESTION = {
    "id": 1,
    "question": "Faites-vous une liste de courses ?",
    "type": "multiple_choice",
    "options": [
        {"text": "Toujours", "score": 1},
        {"text": "Jamais", "score": 4},
    ],
}

NUMERIC_QUESTION = {
    "id": 2,
    "question": "Combien de grammes de pain jetez-vous par semaine ?",
    "type": "numeric",
    "unit": "g",
    "scoringRanges": [
        {"max": 100, "score": 2},
        {"min": 101, "score": 3},
        {"value": "Je ne sais pas", "score": 3},
        {"defaultScore": 3},
    ],
}

# defaultScore 없음: 마지막 구간 점수로 대체
NO_DEFAULT_QUESTION = {
    "id": 3,
    "question": "Combien de repas jetez-vous par mois ?",
    "type": "numeric",
    "scoringRanges": [
        {"max": 5, "score": 0},
        {"min": 6, "max": 9, "score": 3},
        {"min": 10, "score": 1},
    ],
}

BUDGET_QUESTION = {
    "id": 21,
    "question": "Budget alimentaire mensuel ?",
    "type": "numeric",
    "unit": "€",
    "scoringRanges": [{"min": 0, "score": 0}, {"defaultScore": 0}],
}

WASTE_QUESTION = {
    "id": 22,
    "question": "Part des courses jetée ?",
    "type": "numeric",
    "unit": "%",
    "scoringRanges": [
        {"max": 5, "score": 0},
        {"min": 5, "score": 2},
        {"defaultScore": 2},
    ],
}


@pytest.fixture
def mc_question() -> Question:
    return Question.model_validate(MC_QUESTION)


@pytest.fixture
def numeric_question() -> Question:
    return Question.model_validate(NUMERIC_QUESTION)


@pytest.fixture
def no_default_question() -> Question:
    return Question.model_validate(NO_DEFAULT_QUESTION)


@pytest.fixture
def small_bank() -> QuestionBank:
    """MC (scores {1, 4}) then numeric (scores {2, 3}, default 3)."""
    return parse_question_bank({"questions": [MC_QUESTION, NUMERIC_QUESTION]})


@pytest.fixture
def numeric_first_bank() -> QuestionBank:
    return parse_question_bank({"questions": [NUMERIC_QUESTION, MC_QUESTION, NO_DEFAULT_QUESTION]})


@pytest.fixture
def hook_bank() -> QuestionBank:
    return parse_question_bank(
        {
            "budgetAnswerId": 21,
            "wasteAnswerId": 22,
            "questions": [MC_QUESTION, BUDGET_QUESTION, WASTE_QUESTION],
        }
    )


@pytest.fixture
def real_bank() -> QuestionBank:
    return load_question_bank(config.QUESTION_BANK_FILE)


@pytest.fixture
def session():
    return restart()
