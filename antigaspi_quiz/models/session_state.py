"""
models/session_state.py

퀴즈 진행 상태 모델.
Pydantic BaseModel 기반. 변경은 services/quiz_service.py의 조작 함수로만 한다.
UI 코드 없음.
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field


class SessionPhase(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class AnswerRecord(BaseModel):
    """문제 하나에 대한 기록된 응답. 문제 인덱스당 최대 하나."""
    question_index: int = Field(..., ge=0, description="문제 인덱스 (0-based)")
    raw_input: str = Field("", description="선택한 보기 문구 또는 입력한 문자열 (빈 문자열 = 미응답)")
    score: float = Field(..., description="채점 결과")


class QuizSession(BaseModel):
    """
    사용자의 퀴즈 세션 전체 상태.

    Attributes:
        current_index: 현재 문제 인덱스 (0-based). 진행 중에는 0 ~ N-1.
        answers:       {문제 인덱스: AnswerRecord}
        completed:     True이면 Recap 상태. 더 이상 조작 불가.
        input_buffer:  숫자 문제 입력창에 입력 중인 문자열 (아직 채점 전).
    """

    current_index: int = Field(
        default=0,
        ge=0,
        description="현재 문제 인덱스 (0-based)"
    )
    answers: Dict[int, AnswerRecord] = Field(
        default_factory=dict,
        description="응답 기록. key: 문제 인덱스"
    )
    completed: bool = Field(
        default=False,
        description="퀴즈 완료 여부"
    )
    input_buffer: str = Field(
        default="",
        description="숫자 문제 입력 버퍼"
    )

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase.COMPLETED if self.completed else SessionPhase.IN_PROGRESS
