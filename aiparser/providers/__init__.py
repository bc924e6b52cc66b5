"""Built-in providers, one per :class:`~aiparser.items.ProviderIdentity`."""

from __future__ import annotations

from aiparser.items import ProviderIdentity

from .ai_mode import AIModeProvider
from .ai_overview import AIOverviewProvider
from .base import BaseProvider
from .chatgpt import ChatGPTProvider
from .copilot import CopilotProvider
from .gemini import GeminiProvider
from .grok import GrokProvider
from .perplexity import PerplexityProvider

BUILTIN_PROVIDERS: dict[ProviderIdentity, type[BaseProvider]] = {
    ProviderIdentity.CHATGPT: ChatGPTProvider,
    ProviderIdentity.GEMINI: GeminiProvider,
    ProviderIdentity.PERPLEXITY: PerplexityProvider,
    ProviderIdentity.COPILOT: CopilotProvider,
    ProviderIdentity.AIOVERVIEW: AIOverviewProvider,
    ProviderIdentity.AIMODE: AIModeProvider,
    ProviderIdentity.GROK: GrokProvider,
}


def builtin_providers() -> dict[str, BaseProvider]:
    """Fresh instances of every built-in provider, keyed by identity string."""
    return {str(identity): cls() for identity, cls in BUILTIN_PROVIDERS.items()}


__all__ = [
    "BUILTIN_PROVIDERS",
    "AIModeProvider",
    "AIOverviewProvider",
    "BaseProvider",
    "ChatGPTProvider",
    "CopilotProvider",
    "GeminiProvider",
    "GrokProvider",
    "PerplexityProvider",
    "builtin_providers",
]
