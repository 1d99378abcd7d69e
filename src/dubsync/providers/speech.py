"""Text-to-speech synthesis via LiteLLM's speech endpoint."""

from __future__ import annotations

from dubsync.core.config import SpeechConfig
from dubsync.core.errors import NetworkError, SynthesisError, is_network_failure
from dubsync.utils.console import console


class LLMSpeechSynthesizer:
    """SpeechSynthesizer backed by a hosted TTS model (Gemini TTS by default)."""

    def __init__(self, config: SpeechConfig | None = None) -> None:
        self.config = config or SpeechConfig()

    async def synthesize(self, text: str) -> bytes:
        """Render text to an encoded audio payload.

        Raises:
            SynthesisError: The call failed or no audio data came back.
        """
        from litellm import aspeech

        console.print(
            f"[bold]Synthesizing speech:[/bold] {self.config.model} (voice {self.config.voice})"
        )
        try:
            response = await aspeech(
                model=self.config.model,
                voice=self.config.voice,
                input=text,
                response_format=self.config.audio_format,
            )
        except Exception as e:
            if is_network_failure(e):
                raise NetworkError() from e
            raise SynthesisError(f"Failed to generate speech: {e}") from e

        audio = getattr(response, "content", None)
        if not audio:
            raise SynthesisError("No audio data received from the API.")
        console.print(f"[green]Speech ready:[/green] {len(audio) / 1024:.0f} KB")
        return audio
