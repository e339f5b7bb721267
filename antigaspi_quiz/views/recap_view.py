"""
views/recap_view.py — 퀴즈 결과 화면

표시 내용:
  - 반전 퍼센트 점수 (대형 숫자) + 좋은 부분 / 낭비 부분 막대
  - 총점 (min / max)
  - 등급별 피드백 문구 + 보조 지표 카드 + 팁
  - 응답 내역 (접기)
  - 다시 시작 버튼
"""

from __future__ import annotations

import streamlit as st

from antigaspi_quiz.models.errors import ConfigurationError
from antigaspi_quiz.models.question_model import QuestionBank
from antigaspi_quiz.models.recap_model import BreakdownItem, Recap, ScoreBounds
from antigaspi_quiz.models.session_state import QuizSession
from antigaspi_quiz.models.theme_model import Theme
from antigaspi_quiz.services.quiz_service import restart
from antigaspi_quiz.services.recap_service import build_breakdown, build_recap


def _restart_quiz() -> None:
    """새 세션으로 퀴즈를 다시 시작."""
    st.session_state.quiz_session = restart()
    st.session_state.nav_count = st.session_state.get("nav_count", 0) + 1
    st.session_state.page = "quiz"


def render(bank: QuestionBank, theme: Theme, bounds: ScoreBounds) -> None:
    """결과 화면 렌더링."""

    # ── 세션 가드 ──────────────────────────────────────────────────────────
    quiz_session: QuizSession | None = st.session_state.get("quiz_session")
    if quiz_session is None or not quiz_session.completed:
        st.warning("Aucun résultat disponible.")
        if st.button(theme.start_label, type="primary"):
            _restart_quiz()
            st.rerun()
        return

    _, col, _ = st.columns([0.5, 3, 0.5])

    with col:
        try:
            recap = build_recap(quiz_session, bank, theme, bounds)
        except ConfigurationError as e:
            # 문제 은행 작성 오류: 경고만 표시하고 응답 내역은 보여준다
            st.warning(f"Erreur de calcul du score : {e}")
            _render_breakdown(build_breakdown(bank, quiz_session.answers, theme.unanswered_label), theme)
            st.button(theme.restart_label, key="restart_btn", on_click=_restart_quiz)
            return

        _render_score(recap, theme)
        _render_feedback(recap, theme)
        _render_breakdown(recap.breakdown, theme)

        st.button(
            theme.restart_label,
            key="restart_btn",
            type="primary",
            use_container_width=True,
            on_click=_restart_quiz,
        )


def _render_score(recap: Recap, theme: Theme) -> None:
    copy = theme.tiers[recap.feedback_tier]
    st.markdown(
        f"<h2 style='text-align:center; color:{theme.primary_color};'>"
        f"{copy.icon} {theme.recap_title} {copy.icon}</h2>",
        unsafe_allow_html=True,
    )

    split_total = recap.score_split.good + recap.score_split.bad
    good_width = recap.score_split.good / split_total * 100 if split_total else 100

    st.markdown(
        f"""
        <div style="text-align:center; margin:16px 0;">
            <p style="font-size:3.5rem; font-weight:800; color:{copy.color}; margin:0;">
                {recap.rounded_percentage}%
            </p>
            <p style="font-size:0.9rem; color:#6b7280; margin:0 0 12px 0;">{theme.score_label}</p>
            <div style="display:flex; height:14px; border-radius:7px; overflow:hidden;">
                <div style="background:{theme.good_color}; width:{good_width}%;"></div>
                <div style="background:{theme.bad_color}; flex:1;"></div>
            </div>
            <div style="display:flex; justify-content:space-between;
                        font-size:0.78rem; color:#6b7280; margin-top:4px;">
                <span>{theme.chart_labels[0]}</span><span>{theme.chart_labels[1]}</span>
            </div>
            <p style="font-size:1rem; color:#374151; margin-top:12px;">
                Score Total : <b>{recap.total_score:g}</b>
                <span style="font-size:0.75rem; color:#9ca3af;">
                    (Min: {recap.bounds.min:g} / Max: {recap.bounds.max:g})
                </span>
            </p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _render_feedback(recap: Recap, theme: Theme) -> None:
    st.markdown(
        f"<p style='font-size:1.1rem; font-style:italic; color:{theme.primary_color}; "
        f"text-align:center;'>{recap.narrative}</p>",
        unsafe_allow_html=True,
    )

    metrics = recap.derived_metrics
    cards = [
        (theme.waste_label, f"{metrics.waste_estimate} {metrics.unit}", theme.waste_caption, theme.bad_color),
        (theme.savings_label, f"{metrics.potential_savings} {metrics.unit}", theme.savings_caption, "#16a34a"),
    ]
    if metrics.annual_waste_cost is not None:
        cards.append(
            (theme.waste_cost_label, f"{metrics.annual_waste_cost:.0f} {theme.currency}", "", theme.bad_color)
        )

    for c, (label, value, caption, color) in zip(st.columns(len(cards)), cards):
        _stat_card(c, label, value, caption, color)

    st.info(f"**{theme.tip_label}** : {recap.tip}")


def _render_breakdown(items: list[BreakdownItem], theme: Theme) -> None:
    with st.expander(theme.breakdown_label, expanded=False):
        for item in items:
            score = f"{item.score:g}" if item.score is not None else "-"
            st.markdown(
                f"**{item.question_number}. {item.question_text}** "
                f"<span style='font-size:0.75rem; color:#9ca3af;'>(Score: {score})</span><br>"
                f"→ {item.answer_text}",
                unsafe_allow_html=True,
            )


def _stat_card(col, label: str, value: str, caption: str, color: str) -> None:
    """지표를 카드 형태로 렌더링하는 헬퍼."""
    with col:
        st.markdown(
            f"""
            <div style="text-align:center; background:#f7fafd; border-radius:12px;
                        padding:16px 8px; border-top:3px solid {color};">
                <p style="font-size:0.85rem; color:#374151; margin:0 0 4px 0;">{label}</p>
                <p style="font-size:1.6rem; font-weight:800; color:{color};
                           margin:0 0 4px 0;">{value}</p>
                <p style="font-size:0.72rem; color:#9ca3af; margin:0;">{caption}</p>
            </div>
            """,
            unsafe_allow_html=True,
        )
