"""
Tests for the FastAPI layer (session cookie + quiz endpoints).
"""

import pytest
from fastapi.testclient import TestClient

import api.routes as routes
import api.session as session
from api.app import create_app
from api.routes import get_bank
from antigaspi_quiz.models.recap_model import ScoreBounds


@pytest.fixture
def client():
    with TestClient(create_app(start_cleanup=False)) as c:
        yield c


def _answer_all(client, budget="400", waste="3"):
    """Answer every question with its best option / a zero value."""
    bank = get_bank()
    for q in bank.questions:
        if q.is_numeric:
            value = {bank.budget_answer_id: budget, bank.waste_answer_id: waste}.get(q.id, "0")
            resp = client.post("/api/advance", json={"input": value})
        else:
            client.post("/api/select-option", json={"option": q.options[0].text})
            resp = client.post("/api/advance")
        assert resp.status_code == 200
    return resp.json()


class TestSnapshot:
    def test_initial_snapshot(self, client):
        data = client.get("/api/snapshot").json()
        assert data["phase"] == "in_progress"
        assert data["question_number"] == 1
        assert data["total"] == 22
        assert data["can_go_back"] is False
        assert data["current_question"]["type"] == "multiple_choice"

    def test_session_cookie_keeps_state(self, client):
        first = get_bank().question_at(0).options[1].text
        client.post("/api/select-option", json={"option": first})
        data = client.get("/api/snapshot").json()
        assert data["current_answer"]["raw_input"] == first

    def test_quiz_and_themes(self, client):
        quiz = client.get("/api/quiz").json()
        assert quiz["total"] == 22
        assert quiz["bounds"] == {"min": 0.0, "max": 61.0}
        assert quiz["questions"][2]["scoringRanges"]
        themes = client.get("/api/themes").json()
        assert {t["name"] for t in themes} == {"anti_gaspi", "eco"}

    def test_no_root_page(self, client):
        assert client.get("/").status_code == 404
        assert client.get("/docs").status_code == 200


class TestMutations:
    def test_advance_without_selection(self, client):
        resp = client.post("/api/advance")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Veuillez sélectionner une réponse."
        assert client.get("/api/snapshot").json()["question_number"] == 1

    def test_unknown_option(self, client):
        resp = client.post("/api/select-option", json={"option": "n'existe pas"})
        assert resp.status_code == 400

    def test_retreat_at_first_question_is_noop(self, client):
        resp = client.post("/api/retreat")
        assert resp.status_code == 200
        assert resp.json()["ok"] is False

    def test_numeric_round_trip(self, client):
        bank = get_bank()
        # 3번 문제(숫자 입력)까지 이동
        for idx in range(2):
            client.post("/api/select-option", json={"option": bank.question_at(idx).options[0].text})
            client.post("/api/advance")
        client.post("/api/input", json={"text": "2,5"})
        client.post("/api/advance")
        resp = client.post("/api/retreat")
        snap = resp.json()["snapshot"]
        assert snap["question_number"] == 3
        assert snap["input_buffer"] == "2,5"

    def test_recap_before_completion(self, client):
        assert client.get("/api/recap").status_code == 400


class TestFullRun:
    def test_best_answers(self, client):
        last = _answer_all(client)
        assert last["completed"] is True
        assert last["snapshot"]["phase"] == "completed"

        recap = client.get("/api/recap").json()
        assert recap["total_score"] == 0
        assert recap["rounded_percentage"] == 100
        assert recap["feedback_tier"] == "high"
        assert recap["derived_metrics"]["annual_waste_cost"] is None
        assert len(recap["breakdown"]) == 22

    def test_completed_session_rejects_mutations(self, client):
        _answer_all(client)
        resp = client.post("/api/select-option", json={"option": "Toujours"})
        assert resp.status_code == 409
        assert client.post("/api/retreat").status_code == 409

    def test_restart_with_eco_theme(self, client):
        _answer_all(client)
        resp = client.post("/api/restart", json={"theme": "eco"})
        assert resp.status_code == 200
        assert resp.json()["snapshot"]["question_number"] == 1
        assert resp.json()["snapshot"]["answers"] == {}

        _answer_all(client, budget="400", waste="3")
        recap = client.get("/api/recap").json()
        assert recap["derived_metrics"]["annual_waste_cost"] == 144.0

    def test_restart_unknown_theme(self, client):
        assert client.post("/api/restart", json={"theme": "inconnu"}).status_code == 404

    def test_degenerate_bounds_give_422(self, client, monkeypatch):
        # 모든 최선 응답의 총점은 0, 범위는 min=max=5 → 계산 불가
        monkeypatch.setattr(routes, "get_bounds", lambda: ScoreBounds(min=5, max=5))
        _answer_all(client)
        resp = client.get("/api/recap")
        assert resp.status_code == 422
        assert "min=max=5" in resp.json()["detail"]


class TestSessionStore:
    """Tests for the in-memory session TTL."""

    def test_expired_session_is_dropped(self, monkeypatch):
        sid = session.create_session()
        assert session.get_session(sid) is not None

        monkeypatch.setattr(session, "SESSION_TTL", -1)
        assert session.get_session(sid) is None
        assert session.get(sid, "theme", "absent") == "absent"

    def test_cleanup_expired(self, monkeypatch):
        sid = session.create_session()
        assert session.get_session(sid) is not None

        monkeypatch.setattr(session, "SESSION_TTL", -1)
        assert session.cleanup_expired() >= 1
        monkeypatch.undo()
        assert session.get_session(sid) is None

    def test_expired_cookie_gets_new_session(self, client, monkeypatch):
        first = get_bank().question_at(0).options[1].text
        client.post("/api/select-option", json={"option": first})
        old_sid = client.cookies.get("quiz_session")

        monkeypatch.setattr(session, "SESSION_TTL", -1)
        session.cleanup_expired()
        monkeypatch.undo()

        data = client.get("/api/snapshot").json()
        assert data["current_answer"] is None
        assert client.cookies.get("quiz_session") != old_sid
