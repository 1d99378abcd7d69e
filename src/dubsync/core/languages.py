"""Language definitions for transcript lookup, translation, and speech.

Codes are the ISO 639-1 codes YouTube uses for caption tracks. The speech
set lists the languages the default Gemini TTS voices render natively;
other targets still translate but may be voiced with a foreign accent.
"""

from __future__ import annotations

# fmt: off
LANGUAGES: dict[str, str] = {
    "ar": "arabic",      "bn": "bengali",        "de": "german",
    "en": "english",     "es": "spanish",        "fr": "french",
    "gu": "gujarati",    "hi": "hindi",          "id": "indonesian",
    "it": "italian",     "ja": "japanese",       "kn": "kannada",
    "ko": "korean",      "ml": "malayalam",      "mr": "marathi",
    "ne": "nepali",      "nl": "dutch",          "or": "odia",
    "pa": "punjabi",     "pl": "polish",         "pt": "portuguese",
    "ro": "romanian",    "ru": "russian",        "si": "sinhala",
    "ta": "tamil",       "te": "telugu",         "th": "thai",
    "tr": "turkish",     "uk": "ukrainian",      "ur": "urdu",
    "vi": "vietnamese",  "zh": "chinese",
}
# fmt: on

SPEECH_LANGUAGES: set[str] = {
    "ar", "bn", "de", "en", "es", "fr", "hi", "id", "it", "ja", "ko",
    "mr", "nl", "pl", "pt", "ro", "ru", "ta", "te", "th", "tr", "uk", "vi",
}  # fmt: skip


def is_valid_language(code: str) -> bool:
    """Check if a language code is supported."""
    return code in LANGUAGES


def language_name(code: str) -> str:
    """Get the display name for a code, or the code itself if unknown."""
    name = LANGUAGES.get(code)
    return name.title() if name else code


def validate_language(code: str) -> str:
    """Validate a language code and return it, raising ValueError if invalid."""
    if code not in LANGUAGES:
        raise ValueError(
            f"Unsupported language: '{code}'. "
            f"Run 'dubsync languages' to see all {len(LANGUAGES)} supported languages."
        )
    return code
