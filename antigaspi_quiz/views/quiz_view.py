"""
views/quiz_view.py — 퀴즈 풀기 화면

레이아웃:
  - 진행 막대 + 문제 번호
  - 현재 문제 카드 (객관식 라디오 / 숫자 입력)
  - 이전 / 다음(또는 결과 보기) 버튼

상태 관리:
  - st.session_state.quiz_session  (QuizSession)
  - st.session_state.nav_count     (문제 이동 횟수. 위젯 키 접미사로 사용)
  - 위젯 값 → quiz_service 조작 함수로만 세션에 반영
"""

from __future__ import annotations

import streamlit as st

from antigaspi_quiz.models.errors import AtFirstQuestionError, NoAnswerSelectedError
from antigaspi_quiz.models.question_model import QuestionBank
from antigaspi_quiz.models.session_state import QuizSession
from antigaspi_quiz.models.theme_model import Theme
from antigaspi_quiz.services.quiz_service import (
    advance,
    progress_snapshot,
    retreat,
    select_option,
    set_input,
)
from antigaspi_quiz.views.components import progress as prog
from antigaspi_quiz.views.components import question_card as qcard


def _moved() -> None:
    st.session_state.nav_count = st.session_state.get("nav_count", 0) + 1


def render(bank: QuestionBank, theme: Theme) -> None:
    """퀴즈 화면 렌더링."""

    # ── 세션 가드 ──────────────────────────────────────────────────────────
    quiz_session: QuizSession | None = st.session_state.get("quiz_session")
    if quiz_session is None:
        st.session_state.page = "home"
        st.rerun()
        return
    if quiz_session.completed:
        st.session_state.page = "recap"
        st.rerun()
        return

    snapshot = progress_snapshot(quiz_session, bank)
    question = snapshot.current_question

    prog.render(snapshot, theme)

    # ── 문제 카드 ─────────────────────────────────────────────────────────
    value = qcard.render(
        question=question,
        widget_suffix=str(st.session_state.get("nav_count", 0)),
        theme=theme,
        saved_answer=snapshot.current_answer.raw_input if snapshot.current_answer else None,
        input_buffer=snapshot.input_buffer,
    )

    # 입력값을 즉시 세션에 반영 (숫자는 버퍼만, 채점은 advance 시점)
    if question.is_numeric:
        set_input(quiz_session, value or "")
    elif value is not None:
        current = snapshot.current_answer
        if current is None or current.raw_input != value:
            select_option(quiz_session, bank, value)

    # ── 이전 / 다음 네비게이션 ────────────────────────────────────────────
    st.markdown("<br>", unsafe_allow_html=True)
    nav_left, _, nav_right = st.columns([1, 2, 1])

    with nav_left:
        if snapshot.can_go_back:
            if st.button(theme.previous_label, key="prev_btn", use_container_width=True):
                try:
                    retreat(quiz_session, bank)
                except AtFirstQuestionError:
                    pass
                _moved()
                st.rerun()

    with nav_right:
        label = theme.results_label if snapshot.is_last_question else theme.next_label
        if st.button(label, key="next_btn", type="primary", use_container_width=True):
            try:
                advance(quiz_session, bank)
            except NoAnswerSelectedError:
                st.warning(theme.no_answer_prompt)
                return
            _moved()
            if quiz_session.completed:
                st.session_state.page = "recap"
            st.rerun()
