"""Google Cloud Translation (v2 REST) client.

Used by the admin UI to pre-fill the other-language columns of a record
from its Spanish text.  One request per target language, issued
concurrently.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
from fastapi import status

from catalog_cms.config import settings
from catalog_cms.middleware.exceptions import CatalogCMSException

logger = logging.getLogger(__name__)

# Our language codes → Google's where they differ
GOOGLE_LANGUAGE_CODES = {
    "zh": "zh-CN",
}


class TranslationNotConfiguredError(CatalogCMSException):
    def __init__(self):
        super().__init__(
            message="Google Translate API key is not configured",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="TRANSLATION_NOT_CONFIGURED",
        )


class TranslationError(CatalogCMSException):
    def __init__(self, language: str, message: str):
        super().__init__(
            message=f"Translation to {language} failed: {message}",
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code="TRANSLATION_FAILED",
            details={"language": language},
        )


class TranslationClient:
    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.google_translate_api_key if api_key is None else api_key
        self.api_url = api_url or settings.google_translate_api_url
        self.timeout = timeout or settings.translate_timeout_seconds
        self._transport = transport

    async def translate(
        self,
        text: str,
        target_languages: list[str],
        source_language: str = "es",
    ) -> dict[str, str]:
        """Return {language: translated text} for every target language.

        Blank text translates to blank and the source language maps to the
        text itself; neither needs an API call.
        """
        if not self.api_key:
            raise TranslationNotConfiguredError()

        targets = list(dict.fromkeys(target_languages))
        translations: dict[str, str] = {}
        pending: list[str] = []
        for lang in targets:
            if not text.strip():
                translations[lang] = ""
            elif lang == source_language:
                translations[lang] = text
            else:
                pending.append(lang)

        if pending:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                results = await asyncio.gather(*(
                    self._translate_one(client, text, lang, source_language) for lang in pending
                ))
            translations.update(zip(pending, results))

        return {lang: translations[lang] for lang in targets}

    async def _translate_one(
        self,
        client: httpx.AsyncClient,
        text: str,
        target: str,
        source: str,
    ) -> str:
        params = {"key": self.api_key}
        body = {
            "q": text,
            "source": GOOGLE_LANGUAGE_CODES.get(source, source),
            "target": GOOGLE_LANGUAGE_CODES.get(target, target),
            "format": "text",
        }
        try:
            response = await client.post(self.api_url, params=params, json=body)
        except httpx.HTTPError as exc:
            logger.warning("Translation request to %s failed: %s", target, exc)
            raise TranslationError(target, str(exc)) from exc

        if response.status_code != 200:
            try:
                detail = response.json().get("error", {}).get("message", "")
            except ValueError:
                detail = ""
            logger.warning("Translation to %s returned %d: %s", target, response.status_code, detail)
            raise TranslationError(target, detail or f"HTTP {response.status_code}")

        try:
            return response.json()["data"]["translations"][0]["translatedText"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise TranslationError(target, "invalid response") from exc
