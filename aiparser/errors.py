"""Exception types raised by aiparser."""

from __future__ import annotations

_LABELS: dict[str, str] = {
    "CHATGPT": "ChatGPT",
    "GEMINI": "Gemini",
    "PERPLEXITY": "Perplexity",
    "COPILOT": "Copilot",
    "AIOVERVIEW": "AI Overview",
    "AIMODE": "AI Mode",
    "GROK": "Grok",
}


def provider_label(provider: object) -> str:
    """Human-readable name for a provider identity (falls back to the raw value)."""
    key = str(provider)
    return _LABELS.get(key, key)


class AIParserError(Exception):
    """Base class for all aiparser errors."""


class NoContentFoundError(AIParserError):
    """Raised by a provider when neither HTML nor text could be located.

    Attributes:
        provider -- identity of the provider that gave up
    """

    def __init__(self, provider: object) -> None:
        super().__init__(f"No content found in {provider_label(provider)} response")
        self.provider = str(provider)


class UnknownProviderError(AIParserError, KeyError):
    """Raised when a caller names a provider that is not registered."""

    def __init__(self, provider: object) -> None:
        super().__init__(f"Unknown provider: {provider}")
        self.provider = str(provider)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])
