"""Perplexity (perplexity.ai) answer pages."""

from __future__ import annotations

from typing import ClassVar

from aiparser.items import ProviderIdentity
from aiparser.markup import anchor
from aiparser.providers.base import Anchor, BaseProvider

# Perplexity ships a light page by default; inversion goes dark
DARK_THEME_CSS = """
      html {
        color-scheme: dark !important;
      }
      html, body, main {
        background-color: #191A1A !important;
      }
      html, body, main, article, div, span, p, h1, h2, h3, h4, h5, h6, li, button, strong, label, textarea {
        color: #E8E8E6 !important;
      }
      .prose, .prose * {
        color: #E8E8E6 !important;
      }
      [class*="bg-base"], [class*="bg-offset"], [class*="bg-subtler"] {
        background-color: #202222 !important;
      }
      textarea, [contenteditable="true"] {
        background-color: #202222 !important;
        color: #E8E8E6 !important;
      }
      a {
        color: #20B8CD !important;
      }
      pre, code, [class*="code"] {
        background-color: #202222 !important;
        color: #E8E8E6 !important;
        border-color: #3A3B3B !important;
      }
      table, td, th {
        background-color: #191A1A !important;
        border-color: #3A3B3B !important;
        color: #E8E8E6 !important;
      }
      [class*="border"], hr {
        border-color: #3A3B3B !important;
      }
    """


class PerplexityProvider(BaseProvider):
    identity = ProviderIdentity.PERPLEXITY
    origin_base_url = "https://www.perplexity.ai"
    default_theme = "light"
    removals = frozenset({"header", "footer"})

    inversion_strategy = "theme"
    inversion_css = DARK_THEME_CSS

    header_anchors: ClassVar[tuple[Anchor, ...]] = (
        # navbar, marked by its container-query name
        Anchor(anchor("div", class_contains="@container/header")),
    )
    footer_anchors: ClassVar[tuple[Anchor, ...]] = (
        # follow-up composer pinned to the bottom of the thread
        Anchor(anchor(
            "div",
            class_contains="erp-sidecar:fixed erp-sidecar:w-full bottom-safeAreaInsetBottom",
        )),
    )
