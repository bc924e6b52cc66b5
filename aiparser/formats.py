"""Render parsed HTML as Markdown or plain text."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_TRAILING_WHITESPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)
_INLINE_WHITESPACE_RE = re.compile(r"[ \t\r\f\v]+")

# Never part of the readable answer
_NON_CONTENT_TAGS: tuple[str, ...] = ("head", "style", "script", "noscript", "template", "svg")


def html_to_text(html: str) -> str:
    """Extract readable text from *html*, one block per line."""
    if not html or not html.strip():
        return ""

    soup = BeautifulSoup(html, "lxml")
    for tag in soup(list(_NON_CONTENT_TAGS)):
        tag.decompose()

    text = soup.get_text(separator="\n")
    lines = (_INLINE_WHITESPACE_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def html_to_markdown(html: str) -> str:
    """Convert *html* to clean Markdown.

    Uses markdownify with ATX heading style.  Post-processes to:
    - Remove excessive blank lines (>2 consecutive)
    - Strip trailing whitespace from lines
    """
    if not html or not html.strip():
        return ""

    try:
        from markdownify import markdownify  # type: ignore[import-untyped]

        soup = BeautifulSoup(html, "lxml")
        for tag in soup(list(_NON_CONTENT_TAGS)):
            tag.decompose()
        md = markdownify(
            str(soup.body or soup),
            heading_style="ATX",
            bullets="-",
            code_language_callback=_detect_lang,
        )
    except Exception:
        logger.debug("markdownify failed; falling back to plain text", exc_info=True)
        md = html_to_text(html)

    md = _TRAILING_WHITESPACE_RE.sub("", md)
    md = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", md)
    return md.strip()


def _detect_lang(el: object) -> str:
    """Language hint for markdownify, read from ``<pre>`` or its inner ``<code>``.

    Chat front ends put ``language-xxx`` on the ``<code>`` element.
    """
    try:
        finder = getattr(el, "find", None)
        candidates = [el, finder("code") if finder else None]
        for node in candidates:
            getter = getattr(node, "get", None)
            classes = (getter("class") if getter else None) or []
            for cls in classes:
                if isinstance(cls, str) and cls.startswith("language-"):
                    return cls[len("language-"):]
    except Exception as exc:
        logger.debug("Language detection failed for element: %s", exc)
    return ""
