"""
views/home_view.py — 홈 / 시작 화면

기능:
  - 테마(화면 변형) 선택
  - 문제 수 안내
  - "퀴즈 시작" 버튼
"""

from __future__ import annotations

import streamlit as st

from antigaspi_quiz.models.question_model import QuestionBank
from antigaspi_quiz.models.theme_model import THEMES, Theme
from antigaspi_quiz.services.quiz_service import restart


def _start_quiz() -> None:
    """새 세션을 만들고 quiz 페이지로 이동."""
    st.session_state.quiz_session = restart()
    st.session_state.nav_count = st.session_state.get("nav_count", 0) + 1
    st.session_state.page = "quiz"


def _choose_theme() -> None:
    # 위젯 키는 페이지 이동 시 사라지므로 별도 키에 복사
    st.session_state.theme = st.session_state.theme_choice


def render(bank: QuestionBank, theme: Theme) -> None:
    """홈 화면 렌더링."""
    _, col, _ = st.columns([0.8, 2.5, 0.8])

    with col:
        st.markdown(
            f"<h1 style='text-align:center; color:{theme.primary_color};'>{theme.title}</h1>",
            unsafe_allow_html=True,
        )
        st.markdown(
            f"<p style='text-align:center; color:#6b7280;'>"
            f"{bank.question_count()} questions pour évaluer vos habitudes alimentaires.</p>",
            unsafe_allow_html=True,
        )

        names = list(THEMES)
        st.selectbox(
            "Thème",
            options=names,
            index=names.index(theme.name),
            format_func=lambda n: THEMES[n].recap_title,
            key="theme_choice",
            on_change=_choose_theme,
        )

        st.button(
            theme.start_label,
            key="start_btn",
            type="primary",
            use_container_width=True,
            on_click=_start_quiz,
        )
