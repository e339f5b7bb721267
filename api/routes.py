"""
api/routes.py — FastAPI 엔드포인트

화면 레이어는 조작 엔드포인트를 호출한 뒤 /api/snapshot 또는 /api/recap을 다시 읽는다.
채점 로직은 전부 antigaspi_quiz.services 쪽에 있다.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

import config
import api.session as session
from antigaspi_quiz.models.errors import (
    AtFirstQuestionError,
    ConfigurationError,
    NoAnswerSelectedError,
    QuestionKindMismatchError,
    SessionCompletedError,
    UnknownOptionError,
)
from antigaspi_quiz.models.question_model import QuestionBank, load_question_bank
from antigaspi_quiz.models.recap_model import ScoreBounds
from antigaspi_quiz.models.session_state import QuizSession
from antigaspi_quiz.models.theme_model import THEMES, Theme, get_theme
from antigaspi_quiz.services.quiz_service import (
    advance,
    progress_snapshot,
    retreat,
    select_option,
    set_input,
)
from antigaspi_quiz.services.recap_service import build_recap
from antigaspi_quiz.services.scoring_service import total_bounds

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Pydantic request bodies ──────────────────────────────────────────────────

class SelectOptionBody(BaseModel):
    option: str

class InputBody(BaseModel):
    text: str = ""

class AdvanceBody(BaseModel):
    input: Optional[str] = None

class RestartBody(BaseModel):
    theme: Optional[str] = None


# ── 문제 은행 (프로세스당 1회 로드) ──────────────────────────────────────────

@lru_cache(maxsize=1)
def get_bank() -> QuestionBank:
    return load_question_bank(config.QUESTION_BANK_FILE)


@lru_cache(maxsize=1)
def get_bounds() -> ScoreBounds:
    return total_bounds(get_bank())


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def _sid(request: Request) -> str:
    return request.state.session_id


def _quiz_session(request: Request) -> QuizSession:
    quiz_session = session.get(_sid(request), "quiz_session")
    if quiz_session is None:
        raise HTTPException(status_code=404, detail="퀴즈 세션이 없습니다.")
    return quiz_session


def _theme(request: Request) -> Theme:
    return get_theme(session.get(_sid(request), "theme", config.DEFAULT_THEME))


def _snapshot_dict(quiz_session: QuizSession) -> dict:
    snapshot = progress_snapshot(quiz_session, get_bank())
    return snapshot.model_dump(mode="json", by_alias=True)


# ── 엔드포인트 ───────────────────────────────────────────────────────────────

@router.get("/api/themes")
async def list_themes():
    return [{"name": t.name, "title": t.title} for t in THEMES.values()]


@router.get("/api/quiz")
async def get_quiz(request: Request):
    bank = get_bank()
    theme = _theme(request)
    return {
        "theme": theme.model_dump(mode="json"),
        "total": bank.question_count(),
        "bounds": get_bounds().model_dump(),
        "questions": [q.model_dump(mode="json", by_alias=True) for q in bank.questions],
    }


@router.get("/api/snapshot")
async def get_snapshot(request: Request):
    return _snapshot_dict(_quiz_session(request))


@router.post("/api/select-option")
async def api_select_option(request: Request, body: SelectOptionBody):
    quiz_session = _quiz_session(request)
    try:
        select_option(quiz_session, get_bank(), body.option)
    except SessionCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (UnknownOptionError, QuestionKindMismatchError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "snapshot": _snapshot_dict(quiz_session)}


@router.post("/api/input")
async def api_set_input(request: Request, body: InputBody):
    quiz_session = _quiz_session(request)
    try:
        set_input(quiz_session, body.text)
    except SessionCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"ok": True}


@router.post("/api/advance")
async def api_advance(request: Request, body: AdvanceBody | None = None):
    quiz_session = _quiz_session(request)
    try:
        if body is not None and body.input is not None:
            set_input(quiz_session, body.input)
        advance(quiz_session, get_bank())
    except SessionCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NoAnswerSelectedError:
        raise HTTPException(status_code=400, detail=_theme(request).no_answer_prompt)
    return {"ok": True, "completed": quiz_session.completed, "snapshot": _snapshot_dict(quiz_session)}


@router.post("/api/retreat")
async def api_retreat(request: Request):
    quiz_session = _quiz_session(request)
    try:
        retreat(quiz_session, get_bank())
    except SessionCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AtFirstQuestionError:
        # 첫 문제에서는 아무 일도 일어나지 않음
        return {"ok": False, "snapshot": _snapshot_dict(quiz_session)}
    return {"ok": True, "snapshot": _snapshot_dict(quiz_session)}


@router.post("/api/restart")
async def api_restart(request: Request, body: RestartBody | None = None):
    theme = body.theme if body else None
    if theme is not None and theme not in THEMES:
        raise HTTPException(status_code=404, detail=f"알 수 없는 테마입니다: {theme}")
    session.reset(_sid(request), theme)
    return {"ok": True, "snapshot": _snapshot_dict(_quiz_session(request))}


@router.get("/api/recap")
async def get_recap(request: Request):
    quiz_session = _quiz_session(request)
    if not quiz_session.completed:
        raise HTTPException(status_code=400, detail="퀴즈가 아직 완료되지 않았습니다.")
    try:
        recap = build_recap(quiz_session, get_bank(), _theme(request), get_bounds())
    except ConfigurationError as e:
        logger.warning(f"결과 계산 경고: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return recap.model_dump(mode="json")
