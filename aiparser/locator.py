"""Content locator: the single extraction primitive shared by every provider.

Pure functions, never raise.  A raw response is unwrapped at most one level
(``{"result": ...}``) and then classified:

* a string is HTML when it starts with ``<`` and contains ``>``, else text;
* a mapping is checked field by field: ``html`` → ``content`` → ``text``.
  The first field present wins and later fields are not consulted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from aiparser.items import ContentExtraction

logger = logging.getLogger(__name__)


def unwrap(response: Any) -> Any:
    """Return ``response["result"]`` when present and truthy, else *response*."""
    if isinstance(response, Mapping) and response.get("result"):
        return response["result"]
    return response


def looks_like_html(value: str) -> bool:
    stripped = value.strip()
    return stripped.startswith("<") and ">" in stripped


def locate_content(response: Any) -> ContentExtraction:
    """Locate ``html`` / ``text`` in an arbitrary raw response."""
    data = unwrap(response)

    if isinstance(data, str):
        if looks_like_html(data):
            return ContentExtraction(html=data)
        return ContentExtraction(text=data)

    if not isinstance(data, Mapping):
        return ContentExtraction()

    html = data.get("html")
    if html and isinstance(html, str):
        return ContentExtraction(html=html)

    content = data.get("content")
    if content and isinstance(content, str):
        if content.strip().startswith("<"):
            return ContentExtraction(html=content)
        return ContentExtraction(text=content)

    text = data.get("text")
    if text and isinstance(text, str):
        return ContentExtraction(text=text)

    logger.debug("No html/content/text field in response keys %s", sorted(map(str, data)))
    return ContentExtraction()


def locate_sources(response: Any) -> list[Any]:
    """Return the citation list of a response (``aioverview.sources`` or ``sources``)."""
    data = unwrap(response)
    if not isinstance(data, Mapping):
        return []

    overview = data.get("aioverview")
    if isinstance(overview, Mapping) and isinstance(overview.get("sources"), list):
        return list(overview["sources"])

    sources = data.get("sources")
    if isinstance(sources, list):
        return list(sources)
    return []
