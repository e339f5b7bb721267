"""
streamlit_app.py — Streamlit 화면 진입점

실행: streamlit run antigaspi_quiz/streamlit_app.py  (또는 python main.py)

페이지 라우팅: st.session_state.page ∈ {"home", "quiz", "recap"}
"""

import logging
import os
import sys

# ── 패키지 경로 설정 (반드시 최상단) ──────────────────────────────────────────
_BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

import streamlit as st

from config import DEFAULT_THEME, QUESTION_BANK_FILE
from antigaspi_quiz.models.errors import InvalidConfigurationError
from antigaspi_quiz.models.question_model import QuestionBank, load_question_bank
from antigaspi_quiz.models.recap_model import ScoreBounds
from antigaspi_quiz.models.theme_model import THEMES, get_theme
from antigaspi_quiz.services.scoring_service import total_bounds
from antigaspi_quiz.views import home_view, quiz_view, recap_view

logger = logging.getLogger(__name__)


@st.cache_resource
def _load_bank() -> QuestionBank:
    return load_question_bank(QUESTION_BANK_FILE)


@st.cache_resource
def _load_bounds() -> ScoreBounds:
    return total_bounds(_load_bank())


def main() -> None:
    st.set_page_config(page_title="Quiz Anti-Gaspi", page_icon="🥕", layout="centered")

    # ── 세션 기본값 ───────────────────────────────────────────────────────
    st.session_state.setdefault("page", "home")
    st.session_state.setdefault("nav_count", 0)
    if st.session_state.get("theme") not in THEMES:
        st.session_state.theme = DEFAULT_THEME

    try:
        bank = _load_bank()
    except InvalidConfigurationError as e:
        logger.error(f"문제 은행 로드 실패: {e}")
        st.error("Le questionnaire est mal configuré. Impossible de démarrer le quiz.")
        st.code(str(e))
        st.stop()

    theme = get_theme(st.session_state.theme)
    page = st.session_state.page

    if page == "quiz":
        quiz_view.render(bank, theme)
    elif page == "recap":
        recap_view.render(bank, theme, _load_bounds())
    else:
        home_view.render(bank, theme)


main()
