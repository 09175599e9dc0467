"""Tests for the Gemini REST client."""
from __future__ import annotations

import json

import httpx
import pytest

from quiz_api.gemini_client import GeminiClient, OracleError


def reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def keyed(settings):
    return settings.model_copy(update={"gemini_api_key": "secret"})


class TestGeminiClient:
    def test_requires_key(self, settings):
        with pytest.raises(ValueError):
            GeminiClient(settings)

    def test_vertex_endpoint(self, keyed):
        client = GeminiClient(keyed.model_copy(update={"gemini_provider": "vertex", "vertex_project": "proj"}))
        assert client.base_url.startswith("https://us-central1-aiplatform.googleapis.com/v1/projects/proj/")

    @pytest.mark.asyncio
    async def test_generate(self, keyed):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.url.params.get("key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=reply('{"items": []}'))

        client = GeminiClient(keyed, transport=httpx.MockTransport(handler))
        text = await client.generate("make questions")
        await client.aclose()
        assert text == '{"items": []}'
        assert seen["key"] == "secret"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "make questions"

    @pytest.mark.asyncio
    async def test_http_error(self, keyed):
        client = GeminiClient(keyed, transport=httpx.MockTransport(lambda request: httpx.Response(503)))
        with pytest.raises(OracleError, match="503"):
            await client.generate("make questions")
        await client.aclose()

    @pytest.mark.asyncio
    async def test_unexpected_payload(self, keyed):
        client = GeminiClient(keyed, transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []})))
        with pytest.raises(OracleError, match="Unexpected Gemini response"):
            await client.generate("make questions")
        await client.aclose()
