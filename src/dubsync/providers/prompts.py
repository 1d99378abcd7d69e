"""Prompt templates for transcript translation."""

TRANSLATION_SYSTEM = """\
You are a professional translator preparing a script for a voice-over dub. \
Translate the transcript accurately while keeping it natural to speak aloud.

Rules:
- Translate from {source_lang} to {target_lang}
- Preserve the tone and register of the original
- Handle idioms and colloquialisms naturally in the target language
- Do NOT summarize, shorten, or add information
- Provide only the raw translated text, without any additional explanations, \
formatting, or labels
"""

TRANSLATION_USER = """\
Translate the following {source_lang} text to {target_lang}.

{source_lang} Text: "{text}"
"""


def strip_wrapping_quotes(text: str) -> str:
    """Remove one pair of quotes the model may echo back around its answer."""
    text = text.strip()
    for open_q, close_q in (('"', '"'), ("“", "”"), ("'", "'")):
        if len(text) >= 2 and text.startswith(open_q) and text.endswith(close_q):
            return text[1:-1].strip()
    return text
