"""aiparser.parser: High-level ResponseParser class.

Bundles provider detection, the provider registry and the generic fallback
into a single reusable object.  Construct one at application start and pass
it around; there is no implicit module-level instance.

Usage::

    from aiparser import ResponseParser

    parser = ResponseParser()

    # Auto-detect the provider
    parsed = parser.parse({"result": {"html": captured_page}})
    if parsed is not None:
        print(parsed.provider, parsed.metadata)

    # Force a provider and ask for a clean view
    parsed = parser.parse_with_provider(
        captured_page, "GEMINI", {"removeHeader": True, "invertColors": True},
    )

    # Plug in custom or updated provider logic at runtime
    parser.register_provider("CHATGPT", MyChatGPTProvider())
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from aiparser.detection import ProviderDetector
from aiparser.errors import NoContentFoundError, UnknownProviderError
from aiparser.items import DetectionResult, ParsedResponse, ParseOptions, ProviderIdentity
from aiparser.locator import locate_content
from aiparser.markup import is_full_document, sanitize_html
from aiparser.plugins import ResponseProviderPlugin
from aiparser.providers import builtin_providers

logger = logging.getLogger(__name__)

# Label attached to results of the generic fallback path
GENERIC_PROVIDER = str(ProviderIdentity.CHATGPT)


class ResponseParser:
    """Detect, dispatch and normalize captured AI-chat responses.

    The provider registry is the only mutable state.  It is filled at
    construction and changed only by :meth:`register_provider`; callers
    sharing one parser across threads must synchronize registration
    themselves.

    Args:
        providers: Initial registry (identity → provider).  Defaults to one
                   instance of every built-in provider.
        detector:  Classifier used by :meth:`parse`.  Defaults to a
                   :class:`~aiparser.detection.ProviderDetector` over the
                   built-in pattern library.
    """

    def __init__(
        self,
        providers: Mapping[ProviderIdentity | str, ResponseProviderPlugin] | None = None,
        detector: ProviderDetector | None = None,
    ) -> None:
        self._detector = detector or ProviderDetector()
        self._providers: dict[str, ResponseProviderPlugin] = {}
        initial = builtin_providers() if providers is None else providers
        for identity, instance in initial.items():
            self.register_provider(identity, instance)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(
        self,
        response: Any,
        options: ParseOptions | Mapping[str, Any] | None = None,
    ) -> ParsedResponse | None:
        """Parse *response* with whichever provider it looks like.

        Returns ``None`` when nothing could be rendered: no provider matched
        and the generic path found no content, the detected provider is not
        registered, or the provider failed.  Provider failures are logged.
        """
        detection = self._detector.detect(response)
        if detection is None:
            return self._parse_generic(response)

        key = str(detection.provider)
        provider = self._providers.get(key)
        if provider is None:
            logger.info("Detected provider %s is not registered", key)
            return None

        parsed = self._run(provider, key, response, options)
        if parsed is None:
            return None

        return parsed.model_copy(
            update={"metadata": {**parsed.metadata, "detectionConfidence": detection.confidence}},
        )

    def parse_with_provider(
        self,
        response: Any,
        provider: ProviderIdentity | str,
        options: ParseOptions | Mapping[str, Any] | None = None,
    ) -> ParsedResponse | None:
        """Parse *response* with an explicitly named provider.

        Raises:
            UnknownProviderError: if *provider* is not registered.
        """
        key = str(provider)
        instance = self._providers.get(key)
        if instance is None:
            raise UnknownProviderError(key)
        return self._run(instance, key, response, options)

    def _run(
        self,
        provider: ResponseProviderPlugin,
        key: str,
        response: Any,
        options: ParseOptions | Mapping[str, Any] | None,
    ) -> ParsedResponse | None:
        try:
            return provider.parse(response, ParseOptions.coerce(options))
        except NoContentFoundError as exc:
            logger.info("%s", exc)
        except Exception:
            logger.warning("Failed to parse response with %s", key, exc_info=True)
        return None

    def _parse_generic(self, response: Any) -> ParsedResponse | None:
        """Fallback when no provider matched: locate, sanitize, tag as generic."""
        content = locate_content(response)
        if content.is_empty:
            logger.debug("No provider detected and no content located")
            return None

        html = sanitize_html(content.html) if content.html else ""
        return ParsedResponse(
            provider=GENERIC_PROVIDER,
            html=html,
            text=content.text,
            metadata={"isFullDocument": is_full_document(html), "isGeneric": True},
        )

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def detect_provider(self, response: Any) -> str | None:
        """Identity of the detected provider, or ``None``."""
        detection = self._detector.detect(response)
        return str(detection.provider) if detection else None

    def detect_all_providers(self, response: Any) -> list[DetectionResult]:
        """Every matching provider, ranked by pattern hit ratio."""
        return self._detector.get_all_providers(response)

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register_provider(
        self,
        identity: ProviderIdentity | str,
        instance: ResponseProviderPlugin,
    ) -> None:
        """Add or replace the provider registered under *identity*.

        Raises:
            TypeError: if *instance* does not implement the provider protocol.
        """
        if not isinstance(instance, ResponseProviderPlugin):
            msg = f"{instance!r} does not implement extract_content()/parse()"
            raise TypeError(msg)
        self._providers[str(identity)] = instance

    def get_supported_providers(self) -> list[str]:
        """Identities currently in the registry, in registration order."""
        return list(self._providers)
