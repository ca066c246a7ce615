"""Tests for the Google Translate client and the /api/translate endpoint."""

import json

import httpx
import pytest
from httpx import AsyncClient

from catalog_cms.main import app
from catalog_cms.routers.translate import get_translation_client
from catalog_cms.services.translation import (
    TranslationClient,
    TranslationError,
    TranslationNotConfiguredError,
)

API_URL = "https://translation.example/v2"


def _google(requests: list):
    """MockTransport handler echoing '<target>:<text>' like the v2 API."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        requests.append((request.url.params["key"], body))
        return httpx.Response(200, json={
            "data": {"translations": [{"translatedText": f"{body['target']}:{body['q']}"}]},
        })

    return handler


def _client(handler, api_key: str = "k-123") -> TranslationClient:
    return TranslationClient(api_key=api_key, api_url=API_URL, transport=httpx.MockTransport(handler))


@pytest.mark.unit
@pytest.mark.asyncio
class TestTranslationClient:
    async def test_translates_each_target(self):
        requests = []
        result = await _client(_google(requests)).translate("Hola", ["en", "fr"])

        assert result == {"en": "en:Hola", "fr": "fr:Hola"}
        assert {(key, body["source"], body["format"]) for key, body in requests} == {("k-123", "es", "text")}

    async def test_source_language_and_duplicates_need_no_request(self):
        requests = []
        result = await _client(_google(requests)).translate("Hola", ["es", "en", "en"])

        assert result == {"es": "Hola", "en": "en:Hola"}
        assert len(requests) == 1

    async def test_blank_text(self):
        requests = []
        result = await _client(_google(requests)).translate("   ", ["en"])

        assert result == {"en": ""}
        assert requests == []

    async def test_google_language_code_mapping(self):
        requests = []
        result = await _client(_google(requests)).translate("Hola", ["zh"])

        assert result == {"zh": "zh-CN:Hola"}

    async def test_missing_api_key(self):
        with pytest.raises(TranslationNotConfiguredError):
            await _client(_google([]), api_key="").translate("Hola", ["en"])

    async def test_api_error(self):
        def handler(request):
            return httpx.Response(403, json={"error": {"message": "API key not valid"}})

        with pytest.raises(TranslationError) as exc_info:
            await _client(handler).translate("Hola", ["en"])

        assert "API key not valid" in exc_info.value.message
        assert exc_info.value.status_code == 502

    async def test_malformed_response(self):
        def handler(request):
            return httpx.Response(200, json={"data": {}})

        with pytest.raises(TranslationError):
            await _client(handler).translate("Hola", ["en"])


@pytest.mark.api
@pytest.mark.asyncio
class TestTranslateEndpoint:
    async def test_translate(self, client: AsyncClient):
        app.dependency_overrides[get_translation_client] = lambda: _client(_google([]))

        response = await client.post("/api/translate", json={
            "text": "Hola", "target_languages": ["en", "pt"],
        })

        assert response.status_code == 200
        assert response.json() == {"translations": {"en": "en:Hola", "pt": "pt:Hola"}}

    async def test_blank_text_rejected(self, client: AsyncClient):
        response = await client.post("/api/translate", json={"text": " ", "target_languages": ["en"]})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_not_configured(self, client: AsyncClient):
        app.dependency_overrides[get_translation_client] = lambda: _client(_google([]), api_key="")

        response = await client.post("/api/translate", json={"text": "Hola", "target_languages": ["en"]})

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "TRANSLATION_NOT_CONFIGURED"
