from fastapi.testclient import TestClient

from backend.main import app
from chatbot import gemini_api

client = TestClient(app)


def test_healthz():
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_genai_status_never_reveals_key(monkeypatch):
    monkeypatch.setattr(gemini_api, "API_KEY", "super-secret")
    r = client.get("/admin/genai-status")
    assert r.status_code == 200
    body = r.json()
    assert body["api_key_present"] is True
    assert "super-secret" not in r.text


def test_chat_returns_generated_text():
    r = client.post("/api/chat", json={"message": "hello"})
    assert r.status_code == 200, r.text
    assert r.json() == {"response": "Test fake reply"}


def test_chat_forwards_message_verbatim(monkeypatch):
    seen = []

    async def fake_generate(message, **_k):
        seen.append(message)
        return f"ECHO: {message}"

    monkeypatch.setattr(gemini_api, "generate_content", fake_generate)
    r = client.post("/api/chat", json={"message": "  Hej  "})
    assert r.status_code == 200
    assert r.json()["response"] == "ECHO:   Hej  "
    assert seen == ["  Hej  "]


def test_chat_forwards_empty_message(monkeypatch):
    seen = []

    async def fake_generate(message, **_k):
        seen.append(message)
        return ""

    monkeypatch.setattr(gemini_api, "generate_content", fake_generate)
    r = client.post("/api/chat", json={"message": ""})
    assert r.status_code == 200
    assert r.json() == {"response": ""}
    assert seen == [""]


def test_chat_upstream_failure_is_generic_500(monkeypatch):
    async def failing(message, **_k):
        raise gemini_api.UpstreamError("API request failed with status 403", 403)

    monkeypatch.setattr(gemini_api, "generate_content", failing)
    r = client.post("/api/chat", json={"message": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process your request"}


def test_chat_unexpected_error_is_generic_500(monkeypatch):
    async def broken(message, **_k):
        raise KeyError("candidates")

    monkeypatch.setattr(gemini_api, "generate_content", broken)
    r = client.post("/api/chat", json={"message": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process your request"}


def test_chat_malformed_body_is_generic_500():
    r = client.post(
        "/api/chat", content=b"not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process your request"}

    r = client.post("/api/chat", json={"text": "wrong field"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process your request"}
