"""
services/scoring_service.py

응답 채점 및 점수 범위 계산 로직.
순수 Python 함수로 구성. UI 코드, 상태 변경 없음.

점수는 "낭비 성향의 양"이다. 높을수록 나쁜 습관.
"""

import logging
import math
import re
from typing import Iterable, List, Optional

from config import UNANSWERED_FALLBACK_SCORE
from antigaspi_quiz.models.errors import UnknownOptionError
from antigaspi_quiz.models.question_model import Question, QuestionBank, ScoringRange
from antigaspi_quiz.models.recap_model import ScoreBounds

logger = logging.getLogger(__name__)

# 선행 숫자 접두사 ("12 kg" → 12, "2.5e1" → 25)
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_numeric(raw_input: str) -> Optional[float]:
    """
    사용자 입력 → 숫자. 숫자가 아니면 None.

    소수점은 ',' 와 '.' 모두 허용 (첫 번째 ','만 '.'으로 치환).
    입력 앞부분의 숫자만 읽고 뒤따르는 단위 등은 무시한다.
    """
    normalized = raw_input.replace(",", ".", 1)
    match = _NUMBER_PREFIX.match(normalized)
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def score_multiple_choice(question: Question, option_text: str) -> float:
    """보기 문구(정확히 일치) → 점수. 없으면 UnknownOptionError."""
    option = question.find_option(option_text)
    if option is None:
        raise UnknownOptionError(
            f"문제 {question.id}에 '{option_text}' 보기가 없습니다."
        )
    return option.score


def _fallback_score(ranges: List[ScoringRange]) -> float:
    """
    기본 구간 점수, 없으면 마지막 구간 점수.

    마지막 구간으로 떨어지는 정책은 문제 은행 작성 의도와 다를 수 있다.
    검토 대상으로 로그를 남긴다.
    """
    default = next((r for r in ranges if r.default_score is not None), None)
    if default is not None:
        return default.default_score
    logger.warning("기본 점수(defaultScore)가 없어 마지막 구간 점수로 채점합니다.")
    return ranges[-1].score


def score_numeric(question: Question, raw_input: str) -> float:
    """
    숫자 문제 채점.

    1. 숫자로 읽히지 않으면: value가 대소문자 무시하고 일치하는 구간 → 기본 구간 → 마지막 구간.
    2. 숫자면: 선언 순서대로 첫 번째로 맞는 구간 (양 끝 포함) → 기본 구간 → 마지막 구간.

    빈 입력은 호출자(quiz_service.submit_numeric)가 처리한다.
    """
    ranges = question.scoring_ranges
    number = parse_numeric(raw_input)

    if number is None:
        token = raw_input.casefold()
        for r in ranges:
            if r.value is not None and r.score is not None and r.value.casefold() == token:
                return r.score
        return _fallback_score(ranges)

    for r in ranges:
        if r.matches(number):
            return r.score
    return _fallback_score(ranges)


def unanswered_score(question: Question) -> float:
    """
    빈 숫자 응답의 점수.

    defaultScore → 구간 점수 중 최댓값 → UNANSWERED_FALLBACK_SCORE.
    응답이 없으면 좋지 않은 습관으로 간주한다.
    """
    default = question.default_range
    if default is not None:
        return default.default_score
    scores = _finite([r.score for r in question.scoring_ranges])
    if scores:
        return max(scores)
    return UNANSWERED_FALLBACK_SCORE


def _finite(values: Iterable[Optional[float]]) -> List[float]:
    return [v for v in values if v is not None and math.isfinite(v)]


def score_range_bounds(question: Question) -> ScoreBounds:
    """
    문제 하나의 최소/최대 점수.

    객관식: 보기 점수의 min/max.
    숫자: 구간 점수 + 기본 점수의 min/max.
    유한한 점수가 하나도 없으면 (0, 0).
    """
    if question.is_numeric:
        scores = _finite([r.score for r in question.scoring_ranges])
        default = question.default_range
        if default is not None:
            scores.extend(_finite([default.default_score]))
    else:
        scores = _finite([o.score for o in question.options])

    if not scores:
        return ScoreBounds(min=0.0, max=0.0)
    return ScoreBounds(min=min(scores), max=max(scores))


def total_bounds(bank: QuestionBank) -> ScoreBounds:
    """문제 은행 전체의 총점 범위 (문제별 범위의 합)."""
    low = 0.0
    high = 0.0
    for q in bank.questions:
        b = score_range_bounds(q)
        low += b.min
        high += b.max
    return ScoreBounds(min=low, max=high)
