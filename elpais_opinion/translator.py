"""
elpais_opinion/translator.py
----------------------------
ArticleTranslator — translates article titles via the DeepL REST API.

The source language is left to DeepL's auto-detection. Falls back to the
original text if translation fails for any reason.
"""
import asyncio

import requests

from elpais_opinion import config
from elpais_opinion.errors import TranslationWarning, report


DEEPL_FREE_URL = "https://api-free.deepl.com/v2/translate"
DEEPL_PRO_URL  = "https://api.deepl.com/v2/translate"


class ArticleTranslator:
    """Translates single strings; stateless apart from its key."""

    def __init__(self, auth_key: str, api_url: str | None = None):
        self.auth_key = auth_key
        # DeepL free-tier keys end in ":fx" and live on a separate host
        self.api_url = api_url or (
            DEEPL_FREE_URL if auth_key.endswith(":fx") else DEEPL_PRO_URL
        )

    async def translate(
        self, text: str, target_language: str = config.TRANSLATION_TARGET, label: str = "translator"
    ) -> str:
        """Translate *text*. Returns *text* unchanged on any failure."""
        if not text:
            return text
        try:
            return await asyncio.to_thread(self._request, text, target_language)
        except Exception as exc:
            report(label, TranslationWarning, f"{exc} (keeping original text)")
            return text

    def _request(self, text: str, target_language: str) -> str:
        if not self.auth_key:
            raise ValueError("DEEPL_AUTH_KEY is not set")
        resp = requests.post(
            self.api_url,
            headers={"Authorization": f"DeepL-Auth-Key {self.auth_key}"},
            data={"text": text, "target_lang": target_language.upper()},
            timeout=config.TRANSLATION_TIMEOUT,
        )
        resp.raise_for_status()
        return resp.json()["translations"][0]["text"]
