"""Microsoft Copilot (copilot.microsoft.com) conversation pages.

The cookie banner is always removed; everything else is opt-in.  Copilot
renders dark by default, so inversion injects a light theme written against
its Tailwind class names.
"""

from __future__ import annotations

from typing import Any, ClassVar

from aiparser.items import ParseOptions, ProviderIdentity
from aiparser.markup import anchor
from aiparser.providers.base import Anchor, BaseProvider

LIGHT_THEME_CSS = r"""
      html {
        color-scheme: light !important;
      }
      html, body, main {
        background-color: #ffffff !important;
      }
      html, body, main, article, div, span, p, h1, h2, h3, h4, h5, h6, li, a, button, strong, label, textarea {
        color: #1A1A1A !important;
      }
      /* user message bubbles */
      .bg-accent-250\/60,
      [class*="bg-accent-250"],
      .dark\:bg-accent-200,
      [class*="dark:bg-accent"] {
        background-color: #F4F4F4 !important;
        color: #1A1A1A !important;
      }
      [class*="ai-message"] {
        background-color: #ffffff !important;
        color: #1A1A1A !important;
      }
      .bg-sidebar-dark, [class*="bg-sidebar-dark"] {
        background-color: #ffffff !important;
      }
      [class*="composer"], [class*="bottom-0"] {
        background-color: #ffffff !important;
        border-color: #E5E5E5 !important;
      }
      textarea {
        background-color: #F4F4F4 !important;
        color: #1A1A1A !important;
      }
      textarea::placeholder {
        color: #666666 !important;
      }
      [class*="dark:bg-background"],
      [class*="dark:bg-black"],
      [class*="dark:bg-muted"] {
        background-color: #F4F4F4 !important;
      }
      .bg-transparent {
        background-color: transparent !important;
      }
      .dark\:border-black\/8,
      [class*="dark:border-black"],
      [class*="dark:border-stroke"] {
        border-color: #E5E5E5 !important;
      }
      [class*="border-transparent"] {
        border-color: transparent !important;
      }
      .dark\:fill-white,
      [class*="dark:fill"] {
        fill: #1A1A1A !important;
      }
      a,
      [class*="dark:text-accent"] {
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
      .text-foreground-800,
      [class*="text-foreground"],
      [class*="dark:text-foreground"] {
        color: #1A1A1A !important;
      }
      [class*="bg-background-1"],
      [class*="bg-background-2"],
      [class*="bg-white\/"] {
        background-color: #ffffff !important;
      }
      .bg-background-350,
      .bg-background-800,
      .bg-background-850,
      [class*="bg-accent-1"],
      [class*="bg-accent-2"],
      [class*="dark:bg-white/5"] {
        background-color: #F4F4F4 !important;
      }
      /* gradient fades above the composer */
      [class*="before:from-sidebar-dark"],
      [class*="before:to-sidebar-dark"],
      [class*="before:bg-gradient"] {
        background: linear-gradient(transparent, #ffffff) !important;
      }
      ::before,
      ::after {
        background-color: transparent !important;
        border-color: #E5E5E5 !important;
      }
      [data-testid="scroll-to-bottom-button"] {
        background-color: transparent !important;
      }
    """


class CopilotProvider(BaseProvider):
    identity = ProviderIdentity.COPILOT
    origin_base_url = "https://copilot.microsoft.com"
    default_theme = "dark"

    inversion_strategy = "theme"
    inversion_css = LIGHT_THEME_CSS

    cookie_banner_anchors: ClassVar[tuple[Anchor, ...]] = (
        Anchor(anchor("div", id="cookie-banner")),
        Anchor(anchor("div", class_contains="max-w-cookie-banner")),
    )
    header_anchors: ClassVar[tuple[Anchor, ...]] = (
        Anchor(anchor("div", class_contains="relative shrink-0 min-h-14", data_testid="backstage-chats")),
        # "Today" divider
        Anchor(
            anchor("div", class_contains="flex items-center px-6 mx-auto w-full max-w-chat"),
            containing='[data-testid="date-divider"]',
        ),
        # share / settings buttons, top-right
        Anchor(anchor(
            "div",
            class_contains="absolute flex end-6 origin-top-right flex-col items-end",
            data_testid="settings-wrapper",
        )),
    )
    footer_anchors: ClassVar[tuple[Anchor, ...]] = (
        # composer: file input, textarea, mode / attach / call buttons
        Anchor(anchor("div", class_contains="absolute bottom-0 w-full")),
        # spacer reserving the composer's height
        Anchor(anchor("div", class_contains="mt-[var(--composer-container-height)]")),
        Anchor(
            anchor("div", class_contains="pointer-events-none absolute flex justify-center z-20 inset-x-0"),
            containing='[data-testid="scroll-to-bottom-button"]',
        ),
    )
    sidebar_anchors: ClassVar[tuple[Anchor, ...]] = (
        Anchor(anchor("div", class_contains="absolute h-full w-0 will-change-auto max-md:bg-sidebar-light")),
    )

    def remove_cookie_banner(self, html: str) -> str:
        return self._strip(html, self.cookie_banner_anchors, "cookie banner")

    def pre_cleanup(self, html: str, options: ParseOptions, metadata: dict[str, Any]) -> str:
        metadata["cookieBannerRemoved"] = True
        return self.remove_cookie_banner(html)
