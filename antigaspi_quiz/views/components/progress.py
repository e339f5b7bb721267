"""
views/components/progress.py

문제 번호 헤더와 진행 막대 컴포넌트.
"""

from __future__ import annotations

import streamlit as st

from antigaspi_quiz.models.recap_model import ProgressSnapshot
from antigaspi_quiz.models.theme_model import Theme


def render(snapshot: ProgressSnapshot, theme: Theme) -> None:
    """'Question n/N' 헤더, 퍼센트 배지, 진행 막대, 응답 수를 렌더링한다."""
    percent = round(snapshot.progress_fraction * 100)

    st.progress(snapshot.progress_fraction)
    st.markdown(
        f"""
        <div style="display:flex; justify-content:space-between; align-items:center;
                    margin:12px 0 20px 0;">
            <h2 style="font-size:1.5rem; font-weight:700; color:{theme.primary_color}; margin:0;">
                Question {snapshot.question_number}/{snapshot.total}
            </h2>
            <span style="font-size:0.85rem; color:{theme.primary_color};
                         padding:2px 12px; border-radius:12px; background:#fffbeb;">
                {percent}%
            </span>
        </div>
        """,
        unsafe_allow_html=True,
    )

    answered = len(snapshot.answers)
    if answered:
        st.caption(f"{answered} / {snapshot.total} réponses enregistrées")
