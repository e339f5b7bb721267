"""
services/recap_service.py

완료된 퀴즈의 결과(Recap) 계산 로직.
순수 Python 함수로 구성. UI 코드, 전역 상태 변경 없음.

점수는 낮을수록 좋은 습관이므로 퍼센트는 반전된다:
    percentage = (max - total) / (max - min) * 100
"""

import logging
import math
from typing import Dict, List, Optional

from config import HIGH_TIER_THRESHOLD, MEDIUM_TIER_THRESHOLD
from antigaspi_quiz.models.errors import ConfigurationError
from antigaspi_quiz.models.question_model import QuestionBank
from antigaspi_quiz.models.recap_model import (
    BreakdownItem,
    DerivedMetrics,
    FeedbackTier,
    Recap,
    ScoreBounds,
    ScoreSplit,
)
from antigaspi_quiz.models.session_state import AnswerRecord, QuizSession
from antigaspi_quiz.models.theme_model import Theme
from antigaspi_quiz.services.scoring_service import parse_numeric, total_bounds

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """화면 표시용 반올림 (0.5는 올림)."""
    return int(math.floor(value + 0.5))


def calculate_total_score(bank: QuestionBank, answers: Dict[int, AnswerRecord]) -> float:
    """
    기록된 점수의 합.

    응답 기록이 없는 문제는 0점으로 계산한다.
    """
    return sum(
        answers[idx].score for idx in range(bank.question_count()) if idx in answers
    )


def calculate_percentage(total_score: float, bounds: ScoreBounds) -> float:
    """
    총점 → 0 ~ 100 퍼센트 (반전, 범위 밖은 잘라냄).

    범위가 0이면 총점이 min과 같을 때만 100. 다르면 ConfigurationError.
    """
    span = bounds.max - bounds.min
    if span > 0:
        percentage = (bounds.max - total_score) / span * 100
        return max(0.0, min(100.0, percentage))
    if total_score == bounds.min:
        return 100.0
    logger.error(
        f"퍼센트 계산 오류: min={bounds.min}, max={bounds.max}, total={total_score}"
    )
    raise ConfigurationError(
        f"점수 범위가 퇴화했는데(min=max={bounds.min}) 총점이 {total_score}입니다. "
        "문제 은행 설정을 확인하세요."
    )


def feedback_tier(percentage: float) -> FeedbackTier:
    """표시 퍼센트(반올림) 기준 등급."""
    shown = round_half_up(percentage)
    if shown >= HIGH_TIER_THRESHOLD:
        return FeedbackTier.HIGH
    if shown >= MEDIUM_TIER_THRESHOLD:
        return FeedbackTier.MEDIUM
    return FeedbackTier.LOW


def calculate_score_split(total_score: float, bounds: ScoreBounds) -> ScoreSplit:
    """도넛 차트 값. 범위가 0이면 전부 좋은 부분."""
    if bounds.span > 0:
        return ScoreSplit(
            good=max(0.0, bounds.max - total_score),
            bad=max(0.0, total_score - bounds.min),
        )
    return ScoreSplit(good=100.0, bad=0.0)


def _hook_value(bank: QuestionBank, answers: Dict[int, AnswerRecord], question_id: int) -> Optional[float]:
    idx = bank.index_of(question_id)
    record = answers.get(idx) if idx is not None else None
    if record is None or not record.raw_input.strip():
        return None
    return parse_numeric(record.raw_input)


def calculate_annual_waste_cost(
    bank: QuestionBank, answers: Dict[int, AnswerRecord]
) -> Optional[float]:
    """
    월 식비 예산 × 12 × 버리는 비율(%) / 100.

    보조 문제 id가 설정되지 않았거나 응답이 비었거나 숫자가 아니면 None.
    """
    if bank.budget_answer_id is None or bank.waste_answer_id is None:
        return None

    budget = _hook_value(bank, answers, bank.budget_answer_id)
    waste_percent = _hook_value(bank, answers, bank.waste_answer_id)
    if budget is None or waste_percent is None or budget < 0:
        return None

    waste_percent = max(0.0, min(100.0, waste_percent))
    return round(budget * 12 * waste_percent / 100, 2)


def calculate_derived_metrics(
    rounded_percentage: int,
    theme: Theme,
    annual_waste_cost: Optional[float] = None,
) -> DerivedMetrics:
    """연간 낭비 추정치 / 절약 가능량 (기준값 K = theme.waste_reference)."""
    reference = theme.waste_reference
    waste_estimate = round_half_up((100 - rounded_percentage) * reference / 100)
    potential_savings = max(0, round_half_up(reference - waste_estimate))
    return DerivedMetrics(
        waste_estimate=waste_estimate,
        potential_savings=potential_savings,
        unit=theme.waste_unit,
        annual_waste_cost=annual_waste_cost if theme.show_waste_cost else None,
    )


def build_breakdown(
    bank: QuestionBank, answers: Dict[int, AnswerRecord], unanswered_label: str
) -> List[BreakdownItem]:
    """문제 순서대로 (문제, 응답, 점수). 응답 없으면 unanswered_label / None."""
    items: List[BreakdownItem] = []
    for idx, q in enumerate(bank.questions):
        record = answers.get(idx)
        items.append(
            BreakdownItem(
                question_number=idx + 1,
                question_text=q.text,
                answer_text=(record.raw_input if record and record.raw_input else unanswered_label),
                score=record.score if record else None,
            )
        )
    return items


def build_recap(
    session: QuizSession,
    bank: QuestionBank,
    theme: Theme,
    bounds: Optional[ScoreBounds] = None,
) -> Recap:
    """
    완료된 세션 → Recap.

    Args:
        session: 완료(completed=True)된 세션.
        bank:    문제 은행.
        theme:   등급별 문구와 보조 지표 설정.
        bounds:  미리 계산한 점수 범위 (없으면 total_bounds(bank)).

    Raises:
        ValueError:         세션이 아직 완료되지 않음.
        ConfigurationError: 점수 범위가 퇴화했고 총점이 맞지 않음.
    """
    if not session.completed:
        raise ValueError("퀴즈가 아직 완료되지 않았습니다.")

    if bounds is None:
        bounds = total_bounds(bank)
    total = calculate_total_score(bank, session.answers)
    percentage = calculate_percentage(total, bounds)
    rounded = round_half_up(percentage)
    tier = feedback_tier(percentage)
    copy = theme.tiers[tier]

    recap = Recap(
        total_score=total,
        bounds=bounds,
        percentage=percentage,
        rounded_percentage=rounded,
        feedback_tier=tier,
        narrative=copy.narrative,
        tip=copy.tip,
        derived_metrics=calculate_derived_metrics(
            rounded, theme, calculate_annual_waste_cost(bank, session.answers)
        ),
        score_split=calculate_score_split(total, bounds),
        breakdown=build_breakdown(bank, session.answers, theme.unanswered_label),
    )
    logger.info(f"결과 계산 완료: 총점 {total} ({rounded}%, {tier.value})")
    return recap
