import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import deepl

logger = logging.getLogger(__name__)

DEFAULT_TARGET_LANG = "EN-US"


@dataclass(frozen=True)
class TranslationResult:
    text: str
    ok: bool
    detected_source_lang: Optional[str] = None


class Translator:
    """
    Best-effort DeepL translation to English.

    Line breaks are preserved (`split_sentences="nonewlines"`). Failures of any kind are
    logged and reported as `ok=False` with the original text; they are never raised.
    The DeepL client is built once at startup and shared read-only by every message task.
    """

    def __init__(self, client: "deepl.Translator", target_lang: str = DEFAULT_TARGET_LANG):
        self.client = client
        self.target_lang = target_lang

    @classmethod
    def from_auth_key(cls, auth_key: str, target_lang: str = DEFAULT_TARGET_LANG) -> "Translator":
        return cls(deepl.Translator(auth_key), target_lang=target_lang)

    def translate_sync(self, text: str, source_language_hint: Optional[str] = None) -> TranslationResult:
        # DeepL auto-detects the source; upstream codes ("und", "zh-Hant", ...) are not
        # always valid DeepL source languages, so the hint is only logged.
        logger.debug("Translating text (upstream language=%s)", source_language_hint)
        try:
            result = self.client.translate_text(
                text,
                source_lang=None,
                target_lang=self.target_lang,
                split_sentences="nonewlines",
            )
        except Exception as e:
            logger.warning("Error translating text (%s): %s", type(e).__name__, e, exc_info=True)
            return TranslationResult(text=text, ok=False)

        translated = getattr(result, "text", None)
        if not isinstance(translated, str):
            logger.warning("DeepL returned no text; keeping the original.")
            return TranslationResult(text=text, ok=False)

        detected = getattr(result, "detected_source_lang", None)
        logger.info("Translated post text (detected source=%s).", detected)
        return TranslationResult(text=translated, ok=True, detected_source_lang=detected)

    async def translate(self, text: str, source_language_hint: Optional[str] = None) -> TranslationResult:
        return await asyncio.to_thread(self.translate_sync, text, source_language_hint)
