"""Unified async LLM access via LiteLLM."""

from __future__ import annotations

from dubsync.core.config import LLMConfig


async def complete(
    messages: list[dict[str, str]],
    config: LLMConfig,
    **kwargs: object,
) -> str:
    """Send a chat completion request via LiteLLM.

    Args:
        messages: Chat messages in OpenAI format.
        config: LLM configuration.
        **kwargs: Additional kwargs passed to litellm.acompletion.

    Returns:
        The assistant's response text (empty string if none).
    """
    from litellm import acompletion

    call_kwargs: dict = {
        "model": config.model,
        "messages": messages,
        "temperature": config.temperature,
    }
    if config.api_base:
        call_kwargs["api_base"] = config.api_base
    call_kwargs.update(kwargs)

    response = await acompletion(**call_kwargs)
    return response.choices[0].message.content or ""
