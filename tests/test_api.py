import pytest
from fastapi.testclient import TestClient

from services.prompts import FALLBACK_REPLY, GREETING, MISSING_FIELDS_ERROR
from services.session_store import SessionStore


@pytest.fixture
def api(tmp_path, monkeypatch, generation):
    monkeypatch.setenv("DATABASE_DIR", str(tmp_path))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    from main import create_app

    app = create_app()
    with TestClient(app) as client:
        store = app.state.session_store
        app.state.session_store = SessionStore(generation, store.persistence_client)
        yield client


def test_health(api):
    body = api.get("/health").json()
    assert body == {"ok": True, "db_initialized": True, "openai_available": True}


def test_categories(api):
    body = api.get("/products/categories").json()
    assert body["categories"][0] == "Jewelry"
    assert len(body["categories"]) == 10


def test_chat_round_trip(api, generation):
    generation.replies = ["Yes, we offer custom engraving."]

    session = api.post("/chat/sessions").json()
    assert [m["message"] for m in session["messages"]] == [GREETING]

    resp = api.post(f"/chat/sessions/{session['session_id']}/turns", json={"text": "Can you engrave?"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["accepted"] is True
    assert [m["message"] for m in body["messages"][1:]] == ["Can you engrave?", "Yes, we offer custom engraving."]

    again = api.get(f"/chat/sessions/{session['session_id']}").json()
    assert len(again["messages"]) == 3


def test_chat_blank_message_not_accepted(api):
    session_id = api.post("/chat/sessions").json()["session_id"]

    body = api.post(f"/chat/sessions/{session_id}/turns", json={"text": "   "}).json()

    assert body["accepted"] is False
    assert len(body["messages"]) == 1


def test_chat_failure_returns_fallback(api, generation):
    generation.fail = True
    session_id = api.post("/chat/sessions").json()["session_id"]

    body = api.post(f"/chat/sessions/{session_id}/turns", json={"text": "Hello"}).json()

    assert body["messages"][-1]["message"] == FALLBACK_REPLY


def test_unknown_session_is_404(api):
    assert api.get("/chat/sessions/missing").status_code == 404
    assert api.post("/chat/sessions/missing/turns", json={"text": "hi"}).status_code == 404
    assert api.get("/products/workflows/missing").status_code == 404


def test_product_generation_and_copy(api, generation):
    generation.replies = ["Handwoven elegance."]
    workflow_id = api.post("/products/workflows").json()["workflow_id"]

    body = api.post(
        f"/products/workflows/{workflow_id}/generate",
        json={"name": "Silk Scarf", "category": "Textiles", "materials": "silk", "price": 85},
    ).json()

    assert body["generated"] is True
    assert body["generated_description"] == "Handwoven elegance."
    assert body["draft"]["price"] == "85"
    assert isinstance(body["record_id"], int)
    assert body["error"] == ""

    copied = api.post(f"/products/workflows/{workflow_id}/copy").json()
    assert copied == {"copied": True, "clipboard": "Handwoven elegance."}


def test_product_validation_error_is_inline(api, generation):
    workflow_id = api.post("/products/workflows").json()["workflow_id"]

    resp = api.post(f"/products/workflows/{workflow_id}/generate", json={"name": "", "category": "Pottery"})

    assert resp.status_code == 200
    assert resp.json()["error"] == MISSING_FIELDS_ERROR
    assert resp.json()["generated"] is False
    assert generation.calls == []


def test_draft_updates(api):
    workflow_id = api.post("/products/workflows").json()["workflow_id"]

    ok = api.patch(f"/products/workflows/{workflow_id}/draft", json={"field": "name", "value": "Clay Mug"})
    assert ok.json()["draft"]["name"] == "Clay Mug"

    bad = api.patch(f"/products/workflows/{workflow_id}/draft", json={"field": "colour", "value": "red"})
    assert bad.status_code == 400


def test_no_frontend_routes_are_mounted(api):
    paths = {getattr(route, "path", None) for route in api.app.routes}
    assert "/" not in paths
    assert "/public" not in paths
    assert api.get("/").status_code == 404
