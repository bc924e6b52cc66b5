"""Google Search AI Overview captures.

Sources are first-class here: they come from ``aioverview.sources`` (or a
top-level ``sources`` list).  Overview ``text`` is reported as text but is
never turned into HTML.  Search chrome is hidden with CSS rather than cut
out, and links are collapsed to plain text.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aiparser.items import ContentExtraction, ProviderIdentity
from aiparser.locator import locate_content, locate_sources, unwrap
from aiparser.providers.base import BaseProvider

SEARCH_HEADER_CSS = """
        header, #header, #searchform, .sfbg, #appbar,
        div[role="navigation"], #leftnav, #sidetogether,
        [role="banner"], .Fgvgjc, #hdtb, .hdtb-msb,
        .DZ13He, .wYq63b, .eT9Cje, .bNg8Rb, .S6VXfe, .Lu57id {
          display: none !important;
        }
      """

SEARCH_SIDEBAR_CSS = """
        #leftnav, #sidetogether {
          display: none !important;
        }
      """

SEARCH_FOOTER_CSS = """
        footer, #footer, .fbar,
        .pdp-nav, [aria-label="Main menu"], .gb_Td, .gb_L {
          display: none !important;
        }
      """


class AIOverviewProvider(BaseProvider):
    identity = ProviderIdentity.AIOVERVIEW
    origin_base_url = "https://www.google.com"
    default_theme = "light"
    # clean view by default
    default_remove_header = True
    default_remove_footer = True

    link_strategy = "collapse"

    header_css = SEARCH_HEADER_CSS
    sidebar_css = SEARCH_SIDEBAR_CSS
    footer_css = SEARCH_FOOTER_CSS

    def extract_content(self, response: Any) -> ContentExtraction:
        """HTML from ``html``/``content`` only; text and sources from the overview object."""
        located = locate_content(response)
        content = ContentExtraction(
            html=located.html,
            text=located.text,
            sources=locate_sources(response),
        )

        data = unwrap(response)
        overview = data.get("aioverview") if isinstance(data, Mapping) else None
        if isinstance(overview, Mapping) and isinstance(overview.get("text"), str):
            content.text = content.text or overview["text"]
        return content
