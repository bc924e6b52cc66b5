"""ChatGPT (chatgpt.com) conversation pages."""

from __future__ import annotations

from typing import ClassVar

from aiparser.items import ProviderIdentity
from aiparser.markup import anchor
from aiparser.providers.base import INVERT_FILTER_CSS, Anchor, BaseProvider


class ChatGPTProvider(BaseProvider):
    identity = ProviderIdentity.CHATGPT
    origin_base_url = "https://chatgpt.com"
    default_theme = "dark"

    link_strategy = "span"  # citation badges keep their pill styling
    inversion_strategy = "filter"
    inversion_css = INVERT_FILTER_CSS

    header_anchors: ClassVar[tuple[Anchor, ...]] = (
        Anchor(anchor("header", id="page-header")),
    )
    sidebar_anchors: ClassVar[tuple[Anchor, ...]] = (
        Anchor(anchor("nav")),
        Anchor(anchor("div", class_contains="sidebar")),
    )
    footer_anchors: ClassVar[tuple[Anchor, ...]] = (
        # scroll-to-bottom button container
        Anchor(anchor("div", id="thread-bottom-container")),
        # composer and its inputs
        Anchor(anchor("div", id="thread-bottom")),
        Anchor(anchor("div", class_contains="[grid-area:leading]")),
        Anchor(anchor("div", class_contains="[grid-area:footer]")),
        Anchor(anchor("div", class_contains="[grid-area:trailing]")),
        # "ChatGPT can make mistakes" disclaimer, located by its view-transition name
        Anchor(anchor("div", class_contains="[view-transition-name:var(--vt-disclaimer)]")),
    )
