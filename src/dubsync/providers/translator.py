"""LLM-based transcript translation."""

from __future__ import annotations

from dubsync.core.config import LLMConfig
from dubsync.core.errors import NetworkError, TranslationError, is_network_failure
from dubsync.core.languages import language_name
from dubsync.providers.llm import complete
from dubsync.providers.prompts import (
    TRANSLATION_SYSTEM,
    TRANSLATION_USER,
    strip_wrapping_quotes,
)
from dubsync.utils.console import console


class LLMTranslator:
    """Translator that sends the whole transcript to a chat model in one request."""

    def __init__(self, config: LLMConfig | None = None, source_language: str = "hi") -> None:
        self.config = config or LLMConfig()
        self.source_language = source_language

    async def translate(self, text: str) -> str:
        """Translate text from the source language to the configured target.

        Raises:
            TranslationError: The model call failed or returned no text.
        """
        source = language_name(self.source_language)
        target = language_name(self.config.target_language)
        messages = [
            {
                "role": "system",
                "content": TRANSLATION_SYSTEM.format(source_lang=source, target_lang=target),
            },
            {
                "role": "user",
                "content": TRANSLATION_USER.format(
                    source_lang=source, target_lang=target, text=text
                ),
            },
        ]

        console.print(f"[bold]Translating {source} → {target}:[/bold] {self.config.model}")
        try:
            response = await complete(messages, self.config)
        except Exception as e:
            if is_network_failure(e):
                raise NetworkError() from e
            raise TranslationError(f"Failed to translate text: {e}") from e

        translated = strip_wrapping_quotes(response)
        if not translated:
            raise TranslationError("The translation model returned no text.")
        return translated
