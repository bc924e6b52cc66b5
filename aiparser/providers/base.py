"""Shared parse pipeline for the built-in providers.

A concrete provider is mostly declarative: identity, origin, theme, which
chrome it can strip, and the structural anchors / CSS that do the
stripping.  :meth:`BaseProvider.parse` runs the common pipeline::

    extract → sanitize → provider pre-cleanup → header/footer/sidebar removal
            → link removal → theme CSS → <base>/<style> injection
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any, ClassVar, Literal, NamedTuple

from aiparser.errors import NoContentFoundError
from aiparser.items import ContentExtraction, ParsedResponse, ParseOptions, ProviderIdentity
from aiparser.locator import locate_content
from aiparser.markup import (
    collapse_links,
    inject_styles,
    is_full_document,
    remove_elements,
    remove_links,
    sanitize_html,
)

logger = logging.getLogger(__name__)


class Anchor(NamedTuple):
    """A chrome element to delete: CSS selector plus an optional descendant guard."""

    selector: str
    containing: str | None = None


# Literal colour inversion; media is flipped back so photos keep their colours
INVERT_FILTER_CSS = """
      html {
        filter: invert(1) hue-rotate(180deg) !important;
        background-color: #ffffff !important;
      }
      img, video, picture, canvas, iframe, [style*="background-image"] {
        filter: invert(1) hue-rotate(180deg) !important;
      }
    """


class BaseProvider(ABC):
    """Common behaviour of every built-in provider."""

    identity: ClassVar[ProviderIdentity]
    origin_base_url: ClassVar[str]

    default_theme: ClassVar[Literal["light", "dark"]] = "dark"
    default_remove_header: ClassVar[bool] = False
    default_remove_footer: ClassVar[bool] = False
    # Which of "header" / "footer" / "sidebar" this provider knows how to strip
    removals: ClassVar[frozenset[str]] = frozenset({"header", "footer", "sidebar"})

    # "span" keeps attributes on a non-interactive element, "collapse" keeps only the text
    link_strategy: ClassVar[Literal["span", "collapse"]] = "span"

    # "theme" = opposite-theme stylesheet, "filter" = literal CSS filter, None = unsupported
    inversion_strategy: ClassVar[Literal["theme", "filter"] | None] = None
    inversion_css: ClassVar[str] = ""

    header_anchors: ClassVar[tuple[Anchor, ...]] = ()
    footer_anchors: ClassVar[tuple[Anchor, ...]] = ()
    sidebar_anchors: ClassVar[tuple[Anchor, ...]] = ()

    # CSS-based hiding, injected when the matching removal runs
    always_css: ClassVar[str] = ""
    header_css: ClassVar[str] = ""
    footer_css: ClassVar[str] = ""
    sidebar_css: ClassVar[str] = ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.identity}>"

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract_content(self, response: Any) -> ContentExtraction:
        """Locate content with the shared locator."""
        return locate_content(response)

    # ------------------------------------------------------------------
    # Structural cleanup
    # ------------------------------------------------------------------

    def _strip(self, html: str, anchors: tuple[Anchor, ...], region: str) -> str:
        total = 0
        for item in anchors:
            html, count = remove_elements(html, item.selector, containing=item.containing)
            total += count
        logger.debug("%s: removed %d %s element(s)", self.identity, total, region)
        return html

    def remove_header(self, html: str) -> str:
        return self._strip(html, self.header_anchors, "header")

    def remove_footer(self, html: str) -> str:
        return self._strip(html, self.footer_anchors, "footer")

    def remove_sidebar(self, html: str) -> str:
        return self._strip(html, self.sidebar_anchors, "sidebar")

    def remove_links(self, html: str) -> str:
        if self.link_strategy == "collapse":
            return collapse_links(html)
        return remove_links(html)

    def pre_cleanup(self, html: str, options: ParseOptions, metadata: dict[str, Any]) -> str:
        """Hook for steps that always run right after sanitizing."""
        return html

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------

    def wants_inversion(self, options: ParseOptions) -> bool:
        """True when the caller asked for the opposite of this provider's default theme."""
        if self.inversion_strategy is None:
            return False
        if options.invert_colors is not None:
            return options.invert_colors
        return options.theme is not None and options.theme != self.default_theme

    def build_css(
        self,
        *,
        header: bool,
        footer: bool,
        sidebar: bool,
        invert: bool,
    ) -> str:
        parts = [self.always_css]
        if header:
            parts.append(self.header_css)
        if sidebar:
            parts.append(self.sidebar_css)
        if footer:
            parts.append(self.footer_css)
        if invert:
            parts.append(self.inversion_css)
        return "".join(part for part in parts if part)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _enabled(self, region: str, requested: bool | None, default: bool = False) -> bool:
        if region not in self.removals:
            return False
        return default if requested is None else requested

    def transform(self, html: str, options: ParseOptions, metadata: dict[str, Any]) -> str:
        """Run every HTML transformation and record which ones ran in *metadata*."""
        if not options.sanitize:
            logger.debug("%s: sanitize=False ignored; scripts are always stripped", self.identity)
        html = sanitize_html(html)
        html = self.pre_cleanup(html, options, metadata)

        header = self._enabled("header", options.remove_header, self.default_remove_header)
        footer = self._enabled("footer", options.remove_footer, self.default_remove_footer)
        sidebar = self._enabled("sidebar", options.remove_sidebar)
        links = bool(options.remove_links)

        if header:
            html = self.remove_header(html)
        if footer:
            html = self.remove_footer(html)
        if sidebar:
            html = self.remove_sidebar(html)
        if links:
            html = self.remove_links(html)

        invert = self.wants_inversion(options)
        css = self.build_css(header=header, footer=footer, sidebar=sidebar, invert=invert)
        html = inject_styles(
            html,
            base_url=options.base_url or self.origin_base_url,
            custom_css=css,
        )

        self._record(metadata, header=header, footer=footer, sidebar=sidebar, links=links)
        if self.inversion_strategy is not None:
            metadata["colorsInverted"] = invert
        return html

    def _record(self, metadata: dict[str, Any], **flags: bool) -> None:
        for region in ("header", "footer", "sidebar"):
            if region in self.removals:
                metadata[f"{region}Removed"] = flags.get(region, False)
        metadata["linksRemoved"] = flags.get("links", False)

    def build_response(
        self,
        content: ContentExtraction,
        html: str,
        metadata: dict[str, Any],
    ) -> ParsedResponse:
        return ParsedResponse(
            provider=str(self.identity),
            html=html,
            text=content.text or None,
            sources=content.sources,
            metadata={"isFullDocument": is_full_document(html), **metadata},
        )

    def parse(
        self,
        response: Any,
        options: ParseOptions | dict[str, Any] | None = None,
    ) -> ParsedResponse:
        """Normalize *response* into a :class:`ParsedResponse`.

        Raises:
            NoContentFoundError: if neither HTML nor text could be located.
        """
        opts = ParseOptions.coerce(options)
        content = self.extract_content(response)
        if content.is_empty:
            raise NoContentFoundError(self.identity)

        metadata: dict[str, Any] = {}
        if content.html:
            html = self.transform(content.html, opts, metadata)
        else:
            # Text-only: nothing to clean, nothing was removed
            html = ""
            self._record(metadata)
            if self.inversion_strategy is not None:
                metadata["colorsInverted"] = False

        return self.build_response(content, html, metadata)
