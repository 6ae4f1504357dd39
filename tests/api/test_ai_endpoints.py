# This file tests the AI proxy endpoints with a fake upstream client.
# It exists so key storage, input validation, and upstream error mapping stay stable.
# No test here talks to the real AI service.

from __future__ import annotations

from tests.api.support import FakeClaudeClient, api_test_client, build_test_config


def test_api_key_can_be_stored_and_checked() -> None:
    with api_test_client() as client:
        before = client.get("/api/v1/ai/api-key").json()["data"]
        invalid = client.post("/api/v1/ai/api-key", json={"apiKey": "nope"})
        stored = client.post("/api/v1/ai/api-key", json={"apiKey": "sk-ant-123"})
        after = client.get("/api/v1/ai/api-key").json()["data"]

    assert before == {"hasKey": False}
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid API key format"
    assert stored.json()["data"] == {"success": True}
    assert after == {"hasKey": True}


def test_lookup_returns_parsed_result() -> None:
    fake = FakeClaudeClient(result={"isReligiousOrg": True, "confidence": "high"})
    config = build_test_config(ai_api_key="sk-env")
    with api_test_client(config=config, claude_client=fake) as client:
        response = client.post("/api/v1/ai/lookup", json={"domain": "stmary.org"})

    assert response.status_code == 200
    assert response.json()["data"] == {"success": True, "result": {"isReligiousOrg": True, "confidence": "high"}}
    assert fake.calls[0]["api_key"] == "sk-env"


def test_helpers_without_key_are_rejected() -> None:
    with api_test_client() as client:
        response = client.post("/api/v1/ai/parse-signups", json={"imageData": "abc"})

    assert response.status_code == 400
    assert response.json()["message"] == "No Claude API key configured. Add one in Settings."


def test_upstream_failure_maps_to_502() -> None:
    fake = FakeClaudeClient(error="Claude API returned 529")
    config = build_test_config(ai_api_key="sk-env")
    with api_test_client(config=config, claude_client=fake) as client:
        response = client.post("/api/v1/ai/analyze", json={"sampleData": "a,b", "prompt": "Map it"})

    assert response.status_code == 502
    assert response.json()["error_code"] == "AI_UPSTREAM_ERROR"
    assert response.json()["message"] == "Claude API returned 529"


def test_enrich_passes_text_results_through() -> None:
    fake = FakeClaudeClient(result="not json")
    config = build_test_config(ai_api_key="sk-env")
    with api_test_client(config=config, claude_client=fake) as client:
        response = client.post(
            "/api/v1/ai/enrich",
            json={
                "sourceType": "spreadsheet",
                "sampleData": "Name\nChoir",
                "existingMinistries": [{"name": "Choir"}],
            },
        )

    assert response.status_code == 200
    assert response.json()["data"]["result"] == "not json"
