"""Gemini (gemini.google.com) conversation pages.

Gemini renders dark by default, so inverting colours injects a light theme
keyed to Gemini's own class vocabulary.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from aiparser.items import ContentExtraction, ProviderIdentity
from aiparser.locator import locate_content, unwrap
from aiparser.markup import anchor
from aiparser.providers.base import Anchor, BaseProvider

LIGHT_THEME_CSS = """
      html {
        color-scheme: light !important;
      }
      html, body, main {
        background-color: #ffffff !important;
      }
      html, body, main, article, div, span, p, h1, h2, h3, h4, h5, h6, li, a, button, strong, label, textarea {
        color: #1A1A1A !important;
      }
      /* user query bubbles */
      .user-query-bubble-with-background,
      .user-query-container,
      .query-text,
      .query-text-line {
        background-color: #F4F4F4 !important;
        color: #1A1A1A !important;
      }
      /* model responses */
      .model-response-text,
      .response-container,
      .response-container-content,
      .response-content {
        background-color: #ffffff !important;
        color: #1A1A1A !important;
      }
      input-area-v2,
      .input-area,
      .input-area-container,
      .text-input-field,
      .text-input-field_textarea-wrapper,
      .text-input-field-main-area,
      .text-input-field_textarea-inner,
      .text-input-field_textarea,
      .ql-editor,
      .textarea,
      .input-buttons-wrapper-bottom {
        background-color: #ffffff !important;
        color: #1A1A1A !important;
        border-color: #E5E5E5 !important;
      }
      input-container,
      .input-gradient {
        background: transparent !important;
      }
      input-container::before,
      .input-gradient::before {
        content: none !important;
      }
      .ql-editor::before,
      .textarea::placeholder {
        color: #666666 !important;
      }
      button, [role="button"] {
        background-color: #F4F4F4 !important;
        color: #1A1A1A !important;
        border-color: #E5E5E5 !important;
      }
      a {
        color: #1a73e8 !important;
      }
      pre, code, [class*="code"] {
        background-color: #f5f5f5 !important;
        color: #1A1A1A !important;
        border-color: #E5E5E5 !important;
      }
      table, td, th {
        background-color: #ffffff !important;
        border-color: #E5E5E5 !important;
        color: #1A1A1A !important;
      }
      [class*="border"], hr {
        border-color: #E5E5E5 !important;
      }
      [class*="card"], [class*="container"] {
        background-color: #ffffff !important;
        border-color: #E5E5E5 !important;
      }
    """


class GeminiProvider(BaseProvider):
    identity = ProviderIdentity.GEMINI
    origin_base_url = "https://gemini.google.com"
    default_theme = "dark"

    inversion_strategy = "theme"
    inversion_css = LIGHT_THEME_CSS

    header_anchors: ClassVar[tuple[Anchor, ...]] = (
        # OneGoogle bar (account / apps)
        Anchor(anchor("div", class_contains="boqOnegoogleliteOgbOneGoogleBar")),
        # hamburger menu
        Anchor(anchor("div", class_contains="side-nav-menu-button")),
        Anchor(anchor("top-bar-actions")),
        Anchor(anchor("div", class_contains="desktop-ogb-buffer")),
    )
    footer_anchors: ClassVar[tuple[Anchor, ...]] = (
        Anchor(anchor("input-container")),
    )
    sidebar_anchors: ClassVar[tuple[Anchor, ...]] = (
        Anchor(anchor("bard-sidenav")),
    )

    def extract_content(self, response: Any) -> ContentExtraction:
        """Shared locator, plus the overview text/sources Gemini exports nest under ``aioverview``."""
        content = locate_content(response)
        content.sources = []

        data = unwrap(response)
        overview = data.get("aioverview") if isinstance(data, Mapping) else None
        if isinstance(overview, Mapping):
            if overview.get("text"):
                content.text = overview["text"]
            if isinstance(overview.get("sources"), list):
                content.sources = list(overview["sources"])
        return content
