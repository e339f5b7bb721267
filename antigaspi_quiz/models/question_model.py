"""
models/question_model.py

문제 은행(Question Bank) 모델.
JSON 문서(data/quiz.json)의 키 이름(question, type, scoringRanges, defaultScore)을
alias로 그대로 받는다. Pydantic v2 적용.
"""

import json
import logging
import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from antigaspi_quiz.models.errors import InvalidConfigurationError, OutOfRangeError

logger = logging.getLogger(__name__)


def _ensure_finite(v: Optional[float]) -> Optional[float]:
    if v is not None and not math.isfinite(v):
        raise ValueError(f"점수는 유한한 실수여야 합니다: {v}")
    return v


class QuestionKind(str, Enum):
    """문제 유형."""
    MULTIPLE_CHOICE = "multiple_choice"
    NUMERIC = "numeric"


class ChoiceOption(BaseModel):
    """객관식 보기 하나. text는 문제 안에서 유일해야 한다."""
    text: str = Field(..., min_length=1, description="보기 문구")
    score: float = Field(..., description="선택 시 점수 (높을수록 낭비 성향)")

    @field_validator("score")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        return _ensure_finite(v)


class ScoringRange(BaseModel):
    """
    숫자 문제의 채점 구간 규칙.

    - lower/upper (JSON: min/max): 양 끝 포함 구간. 한쪽만 있으면 반개구간.
    - value: 숫자가 아닌 특정 입력 (예: "Je ne sais pas")에 대한 규칙.
    - default_score (JSON: defaultScore): 어떤 규칙에도 맞지 않을 때의 점수.
    """
    model_config = {"populate_by_name": True}

    lower: Optional[float] = Field(None, alias="min", description="구간 하한 (포함)")
    upper: Optional[float] = Field(None, alias="max", description="구간 상한 (포함)")
    value: Optional[str] = Field(None, description="숫자가 아닌 특정 입력값")
    score: Optional[float] = Field(None, description="규칙이 맞을 때의 점수")
    default_score: Optional[float] = Field(
        None, alias="defaultScore", description="기본 점수 (문제당 첫 항목만 사용)"
    )

    @field_validator("score", "default_score")
    @classmethod
    def validate_finite(cls, v: Optional[float]) -> Optional[float]:
        return _ensure_finite(v)

    @model_validator(mode="after")
    def validate_rule(self) -> "ScoringRange":
        """score가 없는 항목은 defaultScore 전용 항목이어야 한다."""
        if self.score is None and self.default_score is None:
            raise ValueError("채점 구간에는 score 또는 defaultScore가 필요합니다.")
        if self.lower is not None and self.upper is not None and self.lower > self.upper:
            raise ValueError(f"구간 하한({self.lower})이 상한({self.upper})보다 큽니다.")
        return self

    def matches(self, number: float) -> bool:
        """숫자가 이 구간에 속하는지 판정. 구간이 없는 규칙은 항상 False."""
        if self.score is None:
            return False
        if self.lower is not None and self.upper is not None:
            return self.lower <= number <= self.upper
        if self.upper is not None:
            return number <= self.upper
        if self.lower is not None:
            return number >= self.lower
        return False


class Question(BaseModel):
    """퀴즈 문제 하나 (객관식 또는 숫자 입력)."""
    model_config = {"populate_by_name": True}

    id: int = Field(..., description="문제 번호 (고유 식별자)")
    text: str = Field(..., alias="question", min_length=1, description="발문")
    kind: QuestionKind = Field(..., alias="type", description="문제 유형")
    unit: Optional[str] = Field(None, description="표시 단위 (숫자 문제 전용, 채점 무관)")
    options: List[ChoiceOption] = Field(default_factory=list, description="객관식 보기")
    scoring_ranges: List[ScoringRange] = Field(
        default_factory=list, alias="scoringRanges", description="숫자 문제 채점 규칙"
    )

    @model_validator(mode="after")
    def validate_scoring_rules(self) -> "Question":
        """
        검증 로직: 객관식은 보기가, 숫자 문제는 채점 구간이 반드시 있어야 한다.
        보기 문구는 문제 안에서 중복될 수 없다.
        """
        if self.kind == QuestionKind.MULTIPLE_CHOICE:
            if not self.options:
                raise ValueError(f"객관식 문제 {self.id}에 보기(options)가 없습니다.")
            texts = [o.text for o in self.options]
            if len(set(texts)) != len(texts):
                raise ValueError(f"문제 {self.id}의 보기 문구가 중복됩니다: {texts}")
        elif not self.scoring_ranges:
            raise ValueError(f"숫자 문제 {self.id}에 채점 구간(scoringRanges)이 없습니다.")
        return self

    @property
    def is_numeric(self) -> bool:
        return self.kind == QuestionKind.NUMERIC

    @property
    def default_range(self) -> Optional[ScoringRange]:
        """defaultScore를 가진 첫 번째 구간."""
        return next((r for r in self.scoring_ranges if r.default_score is not None), None)

    def find_option(self, text: str) -> Optional[ChoiceOption]:
        return next((o for o in self.options if o.text == text), None)


class QuestionBank(BaseModel):
    """
    정적 문제 은행. 로드 후 읽기 전용.

    budget_answer_id / waste_answer_id: 연간 낭비 비용 계산에 쓰는
    숫자 문제 id (선택). 일반 채점 경로 밖에서 읽힌다.
    """
    model_config = {"populate_by_name": True, "frozen": True}

    questions: List[Question] = Field(..., min_length=1, description="순서 있는 문제 목록")
    budget_answer_id: Optional[int] = Field(
        None, alias="budgetAnswerId", description="월 식비 예산 문제 id"
    )
    waste_answer_id: Optional[int] = Field(
        None, alias="wasteAnswerId", description="버리는 식품 비율(%) 문제 id"
    )

    @model_validator(mode="after")
    def validate_ids(self) -> "QuestionBank":
        ids = [q.id for q in self.questions]
        if len(set(ids)) != len(ids):
            raise ValueError("문제 id가 중복됩니다.")
        for hook in (self.budget_answer_id, self.waste_answer_id):
            if hook is None:
                continue
            question = next((q for q in self.questions if q.id == hook), None)
            if question is None or not question.is_numeric:
                raise ValueError(f"보조 지표 문제 id {hook}는 숫자 문제를 가리켜야 합니다.")
        return self

    def question_count(self) -> int:
        return len(self.questions)

    def question_at(self, index: int) -> Question:
        if not 0 <= index < len(self.questions):
            raise OutOfRangeError(
                f"문제 인덱스 {index}가 범위를 벗어났습니다 (0 ~ {len(self.questions) - 1})."
            )
        return self.questions[index]

    def index_of(self, question_id: int) -> Optional[int]:
        """문제 id → 인덱스. 없으면 None."""
        for idx, q in enumerate(self.questions):
            if q.id == question_id:
                return idx
        return None


def parse_question_bank(data: dict) -> QuestionBank:
    """dict → QuestionBank. 검증 실패 시 InvalidConfigurationError."""
    try:
        return QuestionBank.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigurationError(f"문제 은행 검증 실패:\n{e}") from e


def load_question_bank(path: str) -> QuestionBank:
    """
    JSON 파일에서 문제 은행을 읽는다.

    파일을 읽을 수 없거나 JSON이 깨졌거나 스키마가 맞지 않으면
    InvalidConfigurationError를 던진다. 세션을 시작하면 안 되는 상태.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidConfigurationError(f"문제 은행 파일을 읽을 수 없습니다 ({path}): {e}") from e

    bank = parse_question_bank(data)
    logger.info(f"문제 은행 로드 완료: {bank.question_count()}문제 ({path})")
    return bank
