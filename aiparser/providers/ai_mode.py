"""Google Search "AI Mode" captures.

AI Mode pages sometimes arrive as an empty shell whose answer only exists in
a serialized data blob (``"aimfl": "<escaped string>"``).  When the located
HTML has no visible text, the blob is JSON-unescaped and its private-use
delimiter glyphs are turned into markup:

* ``U+E000``            → section divider ``<hr>``
* ``U+E001`` + image URL → ``<img src=...>``
* ``U+E001`` otherwise  → ``<br>``
* newline               → ``<br>``
"""

from __future__ import annotations

import html as html_lib
import json
import logging
import re
from typing import Any, ClassVar

from aiparser.formats import html_to_text
from aiparser.items import ContentExtraction, ParseOptions, ProviderIdentity
from aiparser.locator import locate_content
from aiparser.markup import anchor, sanitize_html
from aiparser.providers.ai_overview import SEARCH_FOOTER_CSS, SEARCH_HEADER_CSS, SEARCH_SIDEBAR_CSS
from aiparser.providers.base import Anchor, BaseProvider

logger = logging.getLogger(__name__)

DATA_BLOB_KEY = "aimfl"
SECTION_GLYPH = "\ue000"
BREAK_GLYPH = "\ue001"
DECODED_CLASS = "aimode-decoded"

_DATA_BLOB_RE = re.compile(rf'"{DATA_BLOB_KEY}"\s*:\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)
_GLYPH_IMAGE_RE = re.compile(rf"{BREAK_GLYPH}(https?://[^\s{SECTION_GLYPH}{BREAK_GLYPH}]+)")
_BODY_OPEN_RE = re.compile(r"""<body(?=[\s>])(?:"[^"]*"|'[^']*'|[^'">])*>""", re.IGNORECASE)

COOKIE_CONSENT_CSS = """
      .KxvlWc, #CXQnmb {
        display: none !important;
      }
    """

DARK_THEME_CSS = """
      html {
        color-scheme: dark !important;
      }
      html, body, main, #main, #rcnt {
        background-color: #1F1F1F !important;
      }
      html, body, div, span, p, h1, h2, h3, h4, h5, h6, li, strong, label, textarea {
        color: #E3E3E3 !important;
      }
      a {
        color: #8AB4F8 !important;
      }
      textarea, input, [contenteditable="true"] {
        background-color: #303134 !important;
        color: #E3E3E3 !important;
      }
      pre, code, table, td, th {
        background-color: #303134 !important;
        border-color: #5F6368 !important;
        color: #E3E3E3 !important;
      }
      [class*="border"], hr {
        border-color: #5F6368 !important;
      }
    """


def glyphs_to_html(text: str) -> str:
    """Translate the blob's delimiter glyphs (and newlines) into markup."""
    escaped = html_lib.escape(text, quote=False)
    # URLs are captured from escaped text; unescape once so "&" is not doubled
    marked = _GLYPH_IMAGE_RE.sub(
        lambda m: f'<img src="{html_lib.escape(html_lib.unescape(m.group(1)), quote=True)}" alt="">',
        escaped,
    )
    marked = marked.replace(SECTION_GLYPH, "<hr>")
    marked = marked.replace(BREAK_GLYPH, "<br>")
    return marked.replace("\n", "<br>")


def decode_data_blob(html: str) -> str | None:
    """Return markup decoded from the embedded blob, or None if absent or undecodable."""
    match = _DATA_BLOB_RE.search(html)
    if match is None:
        return None
    try:
        decoded = json.loads(f'"{match.group(1)}"')
    except ValueError as exc:
        logger.debug("AI Mode data blob could not be unescaped: %s", exc)
        return None
    if not decoded.strip():
        return None
    return f'<div class="{DECODED_CLASS}">{glyphs_to_html(decoded)}</div>'


class AIModeProvider(BaseProvider):
    identity = ProviderIdentity.AIMODE
    origin_base_url = "https://www.google.com"
    default_theme = "light"
    default_remove_header = True
    default_remove_footer = True

    inversion_strategy = "theme"
    inversion_css = DARK_THEME_CSS

    always_css = COOKIE_CONSENT_CSS
    header_css = SEARCH_HEADER_CSS
    sidebar_css = SEARCH_SIDEBAR_CSS
    footer_css = SEARCH_FOOTER_CSS

    header_anchors: ClassVar[tuple[Anchor, ...]] = (
        # Filters / Topics bar (AI Mode, All, Images, Videos, News, More)
        Anchor(anchor("div", class_contains="DZ13He", jsname="oEQ3x")),
    )
    footer_anchors: ClassVar[tuple[Anchor, ...]] = (
        # follow-up input plate, then the wrappers around it, innermost first
        Anchor(anchor("div", data_xid="aim-mars-input-plate")),
        Anchor(anchor("div", jscontroller="P5gZDb")),
        Anchor(anchor("div", class_contains="t0ITR hh3ttd")),
        Anchor(anchor("div", class_contains="y4VEUd vve6Ce")),
    )
    sidebar_anchors: ClassVar[tuple[Anchor, ...]] = (
        # history slide-over
        Anchor(anchor("div", class_contains="ho072b", aria_label="AI Mode history")),
        # floating "new search" / "history" buttons
        Anchor(anchor("div", class_contains="qEn1od", jsname="NlVIob")),
        Anchor(anchor("div", class_contains="OEwhSe")),
        Anchor(anchor("button", aria_label="Start new search")),
        Anchor(anchor("button", aria_label="AI Mode history")),
    )

    def extract_content(self, response: Any) -> ContentExtraction:
        """Shared locator; falls back to the embedded data blob when the page shows nothing."""
        content = locate_content(response)
        if not content.html or html_to_text(sanitize_html(content.html)):
            return content

        decoded = decode_data_blob(content.html)
        if decoded is None:
            return content

        body = _BODY_OPEN_RE.search(content.html)
        if body:
            content.html = content.html[:body.end()] + decoded + content.html[body.end():]
        else:
            content.html = decoded
        return content

    def pre_cleanup(self, html: str, options: ParseOptions, metadata: dict[str, Any]) -> str:
        metadata["dataBlobDecoded"] = f'class="{DECODED_CLASS}"' in html
        return html
