"""
Tests for description enhancement: the endpoint and the LLM client behind it.
"""
import asyncio
import json

import httpx
import pytest

from app.core.llm_client import LLMClient


# ============================================================================
# ENDPOINT
# ============================================================================


def test_enhance_description_returns_trimmed_text(client, fake_llm):
    response = client.post(
        "/api/ai/enhanceDescription",
        json={"name": "Tomato Soup", "oldDescription": "soup with tomato", "brandVoice": "rustic"},
    )

    assert response.status_code == 200
    assert response.json() == {"newDescription": "Silky tomato soup with basil oil."}
    assert fake_llm.calls == [
        {"name": "Tomato Soup", "old_description": "soup with tomato", "brand_voice": "rustic"}
    ]


def test_enhance_description_without_brand_voice(client, fake_llm):
    response = client.post(
        "/api/ai/enhanceDescription",
        json={"name": "Tomato Soup", "oldDescription": "soup"},
    )

    assert response.status_code == 200
    assert fake_llm.calls[0]["brand_voice"] is None


def test_provider_failure_returns_500_with_message(client, fake_llm):
    fake_llm.error = RuntimeError("Incorrect API key provided")

    response = client.post(
        "/api/ai/enhanceDescription",
        json={"name": "Tomato Soup", "oldDescription": "soup"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Incorrect API key provided"}


# ============================================================================
# LLM CLIENT
# ============================================================================


def _client_with(handler) -> LLMClient:
    return LLMClient(transport=httpx.MockTransport(handler))


def test_openai_provider_sends_chat_completion(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"choices": [{"message": {"content": "\n A bright, tangy soup. \n"}}]}
        )

    llm = _client_with(handler)
    monkeypatch.setattr(llm.settings, "llm_provider", "openai")
    monkeypatch.setattr(llm.settings, "llm_base_url", "https://api.openai.com/v1")
    monkeypatch.setattr(llm.settings, "openai_api_key", "sk-test")

    result = asyncio.run(llm.enhance_description("Tomato Soup", "soup"))

    assert result == "A bright, tangy soup."
    assert seen["url"] == "https://api.openai.com/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    messages = seen["body"]["messages"]
    assert messages[0] == {"role": "system", "content": "You improve menu item descriptions."}
    assert "Tomato Soup" in messages[1]["content"]
    assert '"generic"' in messages[1]["content"]


def test_ollama_provider_uses_generate(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "Velvety soup."})

    llm = _client_with(handler)
    monkeypatch.setattr(llm.settings, "llm_provider", "ollama")
    monkeypatch.setattr(llm.settings, "llm_base_url", "http://localhost:11434")

    result = asyncio.run(llm.enhance_description("Tomato Soup", "soup", "playful"))

    assert result == "Velvety soup."
    assert seen["url"] == "http://localhost:11434/api/generate"
    assert seen["body"]["stream"] is False
    assert '"playful"' in seen["body"]["prompt"]


def test_provider_error_status_raises(monkeypatch):
    llm = _client_with(lambda request: httpx.Response(401, json={"error": "bad key"}))
    monkeypatch.setattr(llm.settings, "llm_provider", "openai")

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(llm.enhance_description("Soup", "soup"))


def test_unknown_provider_raises(monkeypatch):
    llm = _client_with(lambda request: httpx.Response(200, json={}))
    monkeypatch.setattr(llm.settings, "llm_provider", "carrier-pigeon")

    with pytest.raises(ValueError, match="carrier-pigeon"):
        asyncio.run(llm.complete("hello"))
