"""aiparser.detection: Provider classifier.

Pure-function, no I/O.  Scores a raw response against a fixed library of
boolean predicates per provider identity by fast substring matching.

Usage::

    from aiparser.detection import detect_provider

    result = detect_provider({"html": "<html>...chatgpt.com...</html>"})
    if result is not None:
        print(result.provider, result.confidence)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from aiparser.items import DetectionResult, ProviderIdentity
from aiparser.locator import looks_like_html

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _raw_html(response: Any) -> str:
    """HTML the predicates look at: ``result.html``, then ``html``, then a markup string.

    A plain-text string has no markup to match against.
    """
    if isinstance(response, str):
        return response if looks_like_html(response) else ""
    if not isinstance(response, Mapping):
        return ""
    result = response.get("result")
    if isinstance(result, Mapping) and result.get("html"):
        return result["html"]
    return response.get("html") or ""


def _contains(*needles: str) -> Predicate:
    """Predicate that is true when the raw HTML contains any of *needles*."""

    def predicate(response: Any) -> bool:
        html = _raw_html(response)
        return any(needle in html for needle in needles)

    predicate.__name__ = f"contains({', '.join(needles)})"
    return predicate


def _overview_text(data: Any) -> bool:
    overview = data.get("aioverview") if isinstance(data, Mapping) else None
    return isinstance(overview, Mapping) and bool(overview.get("text"))


def _has_overview_text(response: Mapping[str, Any]) -> bool:
    return _overview_text(response.get("result")) or _overview_text(response)


def _overview_markers(response: Any) -> bool:
    if isinstance(response, Mapping) and _has_overview_text(response):
        return True
    return _contains("WIZ_global_data", "DnVkpd")(response)


# ---------------------------------------------------------------------------
# Pattern library (evaluated in declaration order)
# ---------------------------------------------------------------------------

PROVIDER_PATTERNS: dict[ProviderIdentity, tuple[Predicate, ...]] = {
    ProviderIdentity.CHATGPT: (
        # token-based CSS utility classes
        _contains("bg-token-bg-primary", "text-token-text-secondary"),
        _contains("chatgpt.com", "openai.com"),
    ),
    ProviderIdentity.GEMINI: (
        # Material side navigation
        _contains("bard-sidenav", "mat-sidenav"),
        _contains("gemini.google.com", "gem-sys-color"),
    ),
    ProviderIdentity.PERPLEXITY: (
        _contains("perplexity.ai", "prose"),
    ),
    ProviderIdentity.COPILOT: (
        _contains("copilot.microsoft.com", 'data-testid="sidebar-container"'),
    ),
    ProviderIdentity.AIOVERVIEW: (
        _overview_markers,
    ),
    ProviderIdentity.AIMODE: (
        _contains("DZ13He", "wYq63b", "AI Mode"),
    ),
    ProviderIdentity.GROK: (
        _contains("grok.com", "x.ai/"),
        _contains("query-bar"),
    ),
}


# ---------------------------------------------------------------------------
# Detector
# ---------------------------------------------------------------------------

class ProviderDetector:
    """Stateless classifier over a fixed, ordered pattern library.

    Args:
        patterns: Mapping of provider identity to its predicates.  Iteration
                  order is the tie-break order.  Defaults to
                  :data:`PROVIDER_PATTERNS`.
    """

    def __init__(
        self,
        patterns: Mapping[ProviderIdentity | str, Sequence[Predicate]] | None = None,
    ) -> None:
        source = PROVIDER_PATTERNS if patterns is None else patterns
        self._patterns: dict[ProviderIdentity | str, tuple[Predicate, ...]] = {
            provider: tuple(preds) for provider, preds in source.items()
        }

    @property
    def providers(self) -> list[ProviderIdentity | str]:
        return list(self._patterns)

    def _hits(self, response: Any) -> dict[ProviderIdentity | str, int]:
        hits: dict[ProviderIdentity | str, int] = {}
        for provider, predicates in self._patterns.items():
            count = 0
            for predicate in predicates:
                try:
                    if predicate(response):
                        count += 1
                except Exception as exc:
                    logger.debug(
                        "Pattern %s for %s raised %s; treating as no match",
                        getattr(predicate, "__name__", predicate), provider, exc,
                    )
            hits[provider] = count
        return hits

    def detect(self, response: Any) -> DetectionResult | None:
        """Return the best-matching provider, or ``None`` if nothing matched.

        The provider with the strictly highest hit count wins; ties go to
        whichever provider comes first in the pattern library.  Confidence is
        ``winning count / highest count`` which is 1.0 for any winner; the
        ``> 0.5`` check in :meth:`validate` relies on that.
        """
        hits = self._hits(response)

        best_score = 0
        best: ProviderIdentity | str | None = None
        for provider, score in hits.items():
            if score > best_score:
                best_score = score
                best = provider

        if best is None:
            return None

        return DetectionResult(
            provider=best,
            confidence=best_score / max(max(hits.values()), 1),
        )

    def get_all_providers(self, response: Any) -> list[DetectionResult]:
        """Every provider with at least one hit, ranked by ``hits / patterns``."""
        hits = self._hits(response)
        results = [
            DetectionResult(provider=provider, confidence=count / len(self._patterns[provider]))
            for provider, count in hits.items()
            if count > 0
        ]
        # sorted() is stable: equal ratios keep library order
        return sorted(results, key=lambda r: r.confidence, reverse=True)

    def validate(self, response: Any, provider: ProviderIdentity | str) -> bool:
        """Return True when *provider* is the detected provider with confidence > 0.5."""
        detected = self.detect(response)
        return (
            detected is not None
            and str(detected.provider) == str(provider)
            and detected.confidence > 0.5
        )


# ---------------------------------------------------------------------------
# Public API (module-level default detector)
# ---------------------------------------------------------------------------

_default_detector = ProviderDetector()


def detect_provider(response: Any) -> DetectionResult | None:
    """Detect which AI front end produced *response*."""
    return _default_detector.detect(response)


def get_all_providers(response: Any) -> list[DetectionResult]:
    """Rank every provider whose patterns match *response*."""
    return _default_detector.get_all_providers(response)


def validate_provider(response: Any, provider: ProviderIdentity | str) -> bool:
    """Return True if *response* is confidently attributed to *provider*."""
    return _default_detector.validate(response, provider)
