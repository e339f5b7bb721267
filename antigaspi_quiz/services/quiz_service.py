"""
services/quiz_service.py

퀴즈 상태 머신.
QuizSession은 아래 조작 함수로만 변경한다:
  - select_option(session, bank, option_text)  : 객관식 보기 선택 (이동 없음)
  - set_input(session, text)                     : 숫자 입력 버퍼 갱신
  - submit_numeric(session, bank, raw_input)     : 숫자 응답 기록
  - advance(session, bank)                       : 다음 문제 / 완료
  - retreat(session, bank)                       : 이전 문제
  - restart()                                    : 새 세션

상태: InProgress(current_index, answers) → Completed(answers). Completed는 종료 상태.
"""

import logging

from antigaspi_quiz.models.errors import (
    AtFirstQuestionError,
    NoAnswerSelectedError,
    QuestionKindMismatchError,
    SessionCompletedError,
)
from antigaspi_quiz.models.question_model import Question, QuestionBank
from antigaspi_quiz.models.recap_model import ProgressSnapshot
from antigaspi_quiz.models.session_state import AnswerRecord, QuizSession
from antigaspi_quiz.services.scoring_service import (
    score_multiple_choice,
    score_numeric,
    unanswered_score,
)

logger = logging.getLogger(__name__)


def _ensure_in_progress(session: QuizSession) -> None:
    if session.completed:
        raise SessionCompletedError("이미 완료된 퀴즈입니다. 다시 시작하세요.")


def _current_question(session: QuizSession, bank: QuestionBank) -> Question:
    _ensure_in_progress(session)
    return bank.question_at(session.current_index)


def restart() -> QuizSession:
    """이전 세션을 버리고 InProgress(0, {}) 세션을 만든다."""
    return QuizSession()


def select_option(session: QuizSession, bank: QuestionBank, option_text: str) -> AnswerRecord:
    """
    현재 객관식 문제의 응답을 기록(덮어쓰기)한다. 문제는 넘기지 않는다.

    보기 문구가 문제의 보기가 아니면 UnknownOptionError.
    """
    question = _current_question(session, bank)
    if question.is_numeric:
        raise QuestionKindMismatchError(f"문제 {question.id}는 숫자 입력 문제입니다.")

    score = score_multiple_choice(question, option_text)
    record = AnswerRecord(
        question_index=session.current_index, raw_input=option_text, score=score
    )
    session.answers[session.current_index] = record
    return record


def set_input(session: QuizSession, text: str) -> None:
    """숫자 입력창의 현재 문자열을 저장. 채점은 advance 시점에 한다."""
    _ensure_in_progress(session)
    session.input_buffer = text


def submit_numeric(session: QuizSession, bank: QuestionBank, raw_input: str) -> AnswerRecord:
    """
    현재 숫자 문제의 응답을 채점하여 기록한다.

    빈 입력(공백만 포함)은 미응답으로 보고 unanswered_score()를 부여한다.
    """
    question = _current_question(session, bank)
    if not question.is_numeric:
        raise QuestionKindMismatchError(f"문제 {question.id}는 객관식 문제입니다.")

    if raw_input.strip():
        record = AnswerRecord(
            question_index=session.current_index,
            raw_input=raw_input,
            score=score_numeric(question, raw_input),
        )
    else:
        record = AnswerRecord(
            question_index=session.current_index,
            raw_input="",
            score=unanswered_score(question),
        )
    session.answers[session.current_index] = record
    return record


def advance(session: QuizSession, bank: QuestionBank) -> None:
    """
    다음 문제로 이동하거나, 마지막 문제면 완료 상태로 전환한다.

    객관식: 응답 기록이 없으면 NoAnswerSelectedError (세션 변경 없음).
    숫자: 입력 버퍼(빈 문자열 포함)를 submit_numeric으로 기록한 뒤 이동.
    성공 시 입력 버퍼는 비운다.
    """
    question = _current_question(session, bank)

    if question.is_numeric:
        submit_numeric(session, bank, session.input_buffer)
    elif session.current_index not in session.answers:
        raise NoAnswerSelectedError(f"문제 {question.id}에 응답이 없습니다.")

    session.input_buffer = ""
    if session.current_index == bank.question_count() - 1:
        session.completed = True
        logger.info(f"퀴즈 완료: {len(session.answers)}/{bank.question_count()}문제 응답")
    else:
        session.current_index += 1


def retreat(session: QuizSession, bank: QuestionBank) -> None:
    """
    이전 문제로 이동한다.

    이전 문제가 숫자 문제이고 기록된 응답이 있으면 입력 버퍼를 그 값으로 복원,
    아니면 버퍼를 비운다. 첫 문제에서는 AtFirstQuestionError.
    """
    _ensure_in_progress(session)
    if session.current_index == 0:
        raise AtFirstQuestionError("첫 번째 문제입니다.")

    session.current_index -= 1
    question = bank.question_at(session.current_index)
    previous = session.answers.get(session.current_index)
    if question.is_numeric and previous is not None:
        session.input_buffer = previous.raw_input
    else:
        session.input_buffer = ""


def progress_snapshot(session: QuizSession, bank: QuestionBank) -> ProgressSnapshot:
    """진행 화면용 읽기 전용 스냅샷. 완료 세션은 current_question 없이 반환."""
    total = bank.question_count()
    answers = {k: v.model_copy() for k, v in session.answers.items()}

    if session.completed:
        return ProgressSnapshot(
            phase=session.phase,
            total=total,
            progress_fraction=1.0,
            answers=answers,
        )

    idx = session.current_index
    return ProgressSnapshot(
        phase=session.phase,
        total=total,
        question_number=idx + 1,
        current_question=bank.question_at(idx),
        progress_fraction=(idx + 1) / total,
        is_last_question=idx == total - 1,
        can_go_back=idx > 0,
        input_buffer=session.input_buffer,
        current_answer=answers.get(idx),
        answers=answers,
    )
