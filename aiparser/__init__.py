"""aiparser - normalize captured AI-chat responses into one structured document.

Quick usage::

    from aiparser import ResponseParser

    parser = ResponseParser()
    parsed = parser.parse({"result": {"html": captured_chatgpt_page}},
                          {"removeSidebar": True, "removeLinks": True})
    print(parsed.provider, parsed.metadata["detectionConfidence"])
    print(parsed.to_markdown())

One-off helpers (share a lazily-created default parser)::

    from aiparser import detect_provider, parse_response

    detect_provider(payload)      # "GEMINI"
    parse_response(payload)       # ParsedResponse | None

Embedding a bare fragment safely::

    from aiparser import wrap_fragment

    doc = parsed.html if parsed.metadata["isFullDocument"] else wrap_fragment(parsed.html)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aiparser.detection import ProviderDetector
from aiparser.errors import AIParserError, NoContentFoundError, UnknownProviderError
from aiparser.items import (
    ContentExtraction,
    DetectionResult,
    ParsedResponse,
    ParseOptions,
    ProviderIdentity,
)
from aiparser.locator import locate_content
from aiparser.markup import inject_styles, is_full_document, remove_links, sanitize_html, wrap_fragment
from aiparser.parser import GENERIC_PROVIDER, ResponseParser
from aiparser.plugins import ResponseProviderPlugin
from aiparser.profiles import load_profile

__version__ = "0.1.0"

_default_parser: ResponseParser | None = None


def get_default_parser() -> ResponseParser:
    """Return the shared parser used by the helpers below, creating it on first use."""
    global _default_parser
    if _default_parser is None:
        _default_parser = ResponseParser()
    return _default_parser


def parse_response(
    response: Any,
    options: ParseOptions | Mapping[str, Any] | None = None,
) -> ParsedResponse | None:
    """Parse *response* with the default parser."""
    return get_default_parser().parse(response, options)


def detect_provider(response: Any) -> str | None:
    """Detect the provider of *response* with the default parser."""
    return get_default_parser().detect_provider(response)


__all__ = [
    "GENERIC_PROVIDER",
    "AIParserError",
    "ContentExtraction",
    "DetectionResult",
    "NoContentFoundError",
    "ParseOptions",
    "ParsedResponse",
    "ProviderDetector",
    "ProviderIdentity",
    "ResponseParser",
    "ResponseProviderPlugin",
    "UnknownProviderError",
    "detect_provider",
    "get_default_parser",
    "inject_styles",
    "is_full_document",
    "load_profile",
    "locate_content",
    "parse_response",
    "remove_links",
    "sanitize_html",
    "wrap_fragment",
]
