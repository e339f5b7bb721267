"""
views/components/question_card.py

현재 문제를 카드 형태로 렌더링하고 사용자의 입력을 반환하는 컴포넌트.
  - 객관식: 라디오 → 선택한 보기 문구
  - 숫자:   텍스트 입력 → 입력 중인 문자열
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from antigaspi_quiz.models.question_model import Question
from antigaspi_quiz.models.theme_model import Theme


def render(
    question: Question,
    widget_suffix: str,
    theme: Theme,
    saved_answer: Optional[str] = None,
    input_buffer: str = "",
) -> Optional[str]:
    """
    문제 카드를 렌더링한다.

    Args:
        question:      렌더링할 Question 객체
        widget_suffix: 위젯 키 접미사. 문제 이동 시마다 바뀌어야 저장값으로 초기화된다.
        theme:         문구/색상 테마
        saved_answer:  객관식: 이미 선택한 보기 (없으면 None)
        input_buffer:  숫자: 복원할 입력 문자열

    Returns:
        객관식은 선택된 보기 문구(없으면 None), 숫자 문제는 입력 문자열
    """

    # ── 문제 본문 ──────────────────────────────────────────────────────────
    st.markdown(
        f"""
        <div class="question-card">
            <p style="font-size:1.2rem; font-weight:600; color:{theme.primary_color};
                      line-height:1.7; margin:0 0 16px 0;">
                {question.text}
            </p>
        </div>
        """,
        unsafe_allow_html=True,
    )

    # ── 숫자 입력 ─────────────────────────────────────────────────────────
    if question.is_numeric:
        return st.text_input(
            "Votre réponse",
            value=input_buffer,
            key=f"input_{question.id}_{widget_suffix}",
            placeholder=theme.placeholder_for(question.unit),
            label_visibility="collapsed",
        )

    # ── 보기 선택 (Radio) ─────────────────────────────────────────────────
    texts = [o.text for o in question.options]
    default_index = texts.index(saved_answer) if saved_answer in texts else None

    return st.radio(
        "Choisissez une réponse",
        options=texts,
        index=default_index,  # None → 아무것도 선택 안 됨
        key=f"radio_{question.id}_{widget_suffix}",
        label_visibility="collapsed",
    )
