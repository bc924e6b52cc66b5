"""Grok (grok.com) conversation pages.

Grok's header and composer are hidden with attribute-selector CSS; the
markup itself is left intact.
"""

from __future__ import annotations

from aiparser.items import ProviderIdentity
from aiparser.providers.base import BaseProvider

HEADER_HIDE_CSS = """
        div[class*="h-16"][class*="top-0"][class*="z-10"],
        div[class*="absolute"][class*="inset-x-0"][class*="top-0"] {
          display: none !important;
        }
      """

FOOTER_HIDE_CSS = """
        div[class*="absolute"][class*="inset-x-0"][class*="bottom-0"][class*="max-w-breakout"],
        div[class*="absolute"][class*="bottom-0"][class*="w-full"] {
          display: none !important;
        }
      """

LIGHT_THEME_CSS = """
      html {
        color-scheme: light !important;
      }
      html, body, main {
        background-color: #ffffff !important;
      }
      html, body, main, article, div, span, p, h1, h2, h3, h4, h5, h6, li, button, strong, label, textarea {
        color: #1A1A1A !important;
      }
      .message-bubble, [class*="bg-surface"], [class*="bg-background"] {
        background-color: #F4F4F4 !important;
      }
      a {
        color: #1a73e8 !important;
      }
      pre, code, [class*="code"] {
        background-color: #f5f5f5 !important;
        color: #1A1A1A !important;
        border-color: #E5E5E5 !important;
      }
      [class*="border"], hr {
        border-color: #E5E5E5 !important;
      }
    """


class GrokProvider(BaseProvider):
    identity = ProviderIdentity.GROK
    origin_base_url = "https://grok.com"
    default_theme = "dark"
    removals = frozenset({"header", "footer"})

    inversion_strategy = "theme"
    inversion_css = LIGHT_THEME_CSS

    header_css = HEADER_HIDE_CSS
    footer_css = FOOTER_HIDE_CSS
