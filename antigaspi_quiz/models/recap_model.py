"""
models/recap_model.py

화면(Streamlit / API)이 읽기 전용으로 소비하는 스냅샷 모델.
  - ProgressSnapshot : 진행 중 화면
  - Recap            : 완료 후 결과 화면
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from antigaspi_quiz.models.question_model import Question
from antigaspi_quiz.models.session_state import AnswerRecord, SessionPhase


class ScoreBounds(BaseModel):
    """문제 은행 전체에서 가능한 총점의 이론적 최소/최대."""
    model_config = {"frozen": True}

    min: float = 0.0
    max: float = 0.0

    @property
    def span(self) -> float:
        return self.max - self.min


class FeedbackTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScoreSplit(BaseModel):
    """도넛 차트용 좋은 부분 / 낭비 부분."""
    good: float
    bad: float


class DerivedMetrics(BaseModel):
    waste_estimate: int = Field(..., description="연간 음식물 낭비 추정치 (기준 단위, 예: kg)")
    potential_savings: int = Field(..., description="평균 대비 절약 가능량")
    unit: str = Field("kg", description="표시 단위")
    annual_waste_cost: Optional[float] = Field(
        None, description="월 예산 × 12 × 낭비 비율. 보조 문제 미응답 시 None"
    )


class BreakdownItem(BaseModel):
    """문제별 응답 내역. 계산 없는 단순 투영."""
    question_number: int
    question_text: str
    answer_text: str
    score: Optional[float] = None


class Recap(BaseModel):
    total_score: float
    bounds: ScoreBounds
    percentage: float = Field(..., ge=0, le=100)
    rounded_percentage: int = Field(..., ge=0, le=100)
    feedback_tier: FeedbackTier
    narrative: str
    tip: str
    derived_metrics: DerivedMetrics
    score_split: ScoreSplit
    breakdown: List[BreakdownItem]


class ProgressSnapshot(BaseModel):
    phase: SessionPhase
    total: int
    question_number: int = Field(0, description="1-based 표시용 번호")
    current_question: Optional[Question] = None
    progress_fraction: float = 0.0
    is_last_question: bool = False
    can_go_back: bool = False
    input_buffer: str = ""
    current_answer: Optional[AnswerRecord] = None
    answers: Dict[int, AnswerRecord] = Field(default_factory=dict)
