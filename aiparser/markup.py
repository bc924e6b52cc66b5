"""aiparser.markup: String-level HTML surgery shared by every provider.

Sanitizing, injection and link rewriting are regex based and work on the
original markup text.  Chrome removal parses the page with BeautifulSoup and
only reserializes it when an element was actually removed.

* :func:`sanitize_html`: strip ``<script>`` / ``<noscript>`` blocks
* :func:`inject_styles`: add ``<base>`` and ``<style>`` to the document head
* :func:`is_full_document`: ``<html`` / doctype sniffing
* :func:`remove_links`: ``<a>`` → ``<span>``, keeping non-link attributes
* :func:`collapse_links`: ``<a>`` → its inner content
* :func:`wrap_fragment`: locked-down document around a bare fragment
* :func:`anchor`: CSS selector for a chrome element
* :func:`remove_elements`: delete every element matching a selector, subtree included
"""

from __future__ import annotations

import html as html_lib
import logging
import re

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Compiled patterns (evaluated once at import time)
# ---------------------------------------------------------------------------

# Attribute text inside a tag; quoted values may contain '>'
_ATTRS = r"""(?:"[^"]*"|'[^']*'|[^'">])*"""

_SCRIPT_BLOCK_RE = re.compile(r"<script(?=[\s/>])[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_NOSCRIPT_BLOCK_RE = re.compile(r"<noscript(?=[\s/>])[^>]*>.*?</noscript\s*>", re.IGNORECASE | re.DOTALL)
# An opener that never closes swallows the rest of the document
_UNCLOSED_SCRIPT_RE = re.compile(r"<(?:no)?script(?=[\s/>]|\Z).*\Z", re.IGNORECASE | re.DOTALL)
_STRAY_SCRIPT_CLOSE_RE = re.compile(r"</(?:no)?script\s*>", re.IGNORECASE)

_HEAD_OPEN_RE = re.compile(rf"<head(?=[\s/>]){_ATTRS}>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(rf"<html(?=[\s/>]){_ATTRS}>", re.IGNORECASE)
_BASE_TAG_RE = re.compile(r"<base(?=[\s/>])", re.IGNORECASE)
_FULL_DOCUMENT_RE = re.compile(r"^\s*(?:<html|<!doctype)", re.IGNORECASE)

_ANCHOR_OPEN_RE = re.compile(rf"<a(?=[\s>])({_ATTRS})>", re.IGNORECASE)
_ANCHOR_CLOSE_RE = re.compile(r"</a\s*>", re.IGNORECASE)
_ANCHOR_BLOCK_RE = re.compile(rf"<a(?=[\s>]){_ATTRS}>(.*?)</a\s*>", re.IGNORECASE | re.DOTALL)
# Navigation-only attributes dropped when an anchor becomes a span
_LINK_ATTR_RE = re.compile(
    r"""\s+(?:href|alt|rel|target)\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+)""",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Sanitizer
# ---------------------------------------------------------------------------

def sanitize_html(html: str) -> str:
    """Remove every ``<script>`` and ``<noscript>`` block from *html*."""
    if not html:
        return html

    cleaned = html
    # Repeat until stable: removing one block can splice another together
    while True:
        stripped = _SCRIPT_BLOCK_RE.sub("", cleaned)
        stripped = _NOSCRIPT_BLOCK_RE.sub("", stripped)
        if stripped == cleaned:
            break
        cleaned = stripped

    cleaned = _UNCLOSED_SCRIPT_RE.sub("", cleaned)
    return _STRAY_SCRIPT_CLOSE_RE.sub("", cleaned)


# ---------------------------------------------------------------------------
# Style / base injection
# ---------------------------------------------------------------------------

def _insert_into_head(html: str, snippet: str) -> str:
    """Prepend *snippet* to the head, creating one after ``<html>`` if needed."""
    head = _HEAD_OPEN_RE.search(html)
    if head:
        return html[:head.end()] + snippet + html[head.end():]

    root = _HTML_OPEN_RE.search(html)
    if root:
        return html[:root.end()] + f"<head>{snippet}</head>" + html[root.end():]

    # Bare fragment: nothing to attach to
    return html


def inject_styles(html: str, *, base_url: str | None = None, custom_css: str = "") -> str:
    """Add a ``<base href>`` and a ``<style>`` block to *html*.

    The base tag is only added when the document has none yet, so applying
    this twice with the same *base_url* yields exactly one ``<base>``.
    """
    styled = html

    if custom_css:
        styled = _insert_into_head(styled, f"<style>{custom_css}</style>")

    # Inserted last so it lands first in the head, ahead of any url() in the styles
    if base_url and not _BASE_TAG_RE.search(styled):
        href = html_lib.escape(base_url, quote=True)
        styled = _insert_into_head(styled, f'<base href="{href}">')

    return styled


def is_full_document(html: str) -> bool:
    """Return True if *html* starts with ``<html`` or a doctype (leading whitespace allowed)."""
    return bool(_FULL_DOCUMENT_RE.match(html or ""))


# ---------------------------------------------------------------------------
# Link handling
# ---------------------------------------------------------------------------

def _anchor_to_span(match: re.Match[str]) -> str:
    attrs = _LINK_ATTR_RE.sub("", match.group(1)).strip()
    return f"<span {attrs}>" if attrs else "<span>"


def remove_links(html: str) -> str:
    """Rewrite anchors as ``<span>`` elements.

    ``href``, ``alt``, ``rel`` and ``target`` are dropped; everything else
    (``class``, ``style``, ``data-*``) is kept so badge/pill styling survives.
    """
    spans = _ANCHOR_OPEN_RE.sub(_anchor_to_span, html)
    return _ANCHOR_CLOSE_RE.sub("</span>", spans)


def collapse_links(html: str) -> str:
    """Replace each ``<a ...>inner</a>`` with ``inner``, discarding the anchor's attributes."""
    return _ANCHOR_BLOCK_RE.sub(r"\1", html)


# ---------------------------------------------------------------------------
# Fragment wrapping
# ---------------------------------------------------------------------------

_FRAGMENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta http-equiv="Content-Security-Policy" content="default-src 'none'; script-src 'none'; style-src 'unsafe-inline';">
  <style>
    body {{
      margin: 0;
      padding: 16px;
      font-family: system-ui, -apple-system, sans-serif;
      white-space: pre-wrap;
      word-wrap: break-word;
      pointer-events: none;
      user-select: none;
    }}
    img {{ max-width: 100%; height: auto; }}
  </style>
</head>
<body>
  {body}
</body>
</html>"""


def wrap_fragment(html: str) -> str:
    """Wrap a bare fragment in a script-free, non-interactive document."""
    return _FRAGMENT_TEMPLATE.format(body=html)


# ---------------------------------------------------------------------------
# Structural removal
# ---------------------------------------------------------------------------

def _css_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def anchor(
    tag: str = "div",
    *,
    class_contains: str | None = None,
    **attrs: str,
) -> str:
    """Build the CSS selector for a chrome element.

    Args:
        tag:            Element name.
        class_contains: Substring that must occur inside the ``class`` value.
        **attrs:        Exact attribute values; underscores in the keyword
                        become hyphens (``data_testid`` → ``data-testid``).
    """
    parts = [tag]
    if class_contains is not None:
        parts.append(f'[class*="{_css_string(class_contains)}"]')
    for name, value in attrs.items():
        parts.append(f'[{name.replace("_", "-")}="{_css_string(value)}"]')
    return "".join(parts)


def remove_elements(
    html: str,
    selector: str,
    *,
    containing: str | None = None,
) -> tuple[str, int]:
    """Delete every element matching *selector*, subtree included.

    Args:
        html:       Markup to clean.
        selector:   CSS selector for the element (see :func:`anchor`).
        containing: If given, only elements with a descendant matching this
                    selector are removed.

    Returns:
        ``(cleaned_html, removed_count)``.  When nothing matches, *html* is
        returned as is.
    """
    if not html:
        return html, 0

    # html.parser leaves fragments unwrapped (no added <html>/<body>)
    soup = BeautifulSoup(html, "html.parser")
    removed = 0
    for el in soup.select(selector):
        if not isinstance(el, Tag) or el.decomposed:
            continue
        if containing is not None and el.select_one(containing) is None:
            continue
        el.decompose()
        removed += 1

    if not removed:
        return html, 0
    logger.debug("Removed %d element(s) matching %s", removed, selector)
    return str(soup), removed
