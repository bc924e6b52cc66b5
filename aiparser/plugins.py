"""aiparser.plugins: Capability contract for response providers.

Any object satisfying :class:`ResponseProviderPlugin` can be registered with
:meth:`aiparser.parser.ResponseParser.register_provider`, built-in or not::

    from aiparser import ResponseParser, ParsedResponse
    from aiparser.locator import locate_content

    class EchoProvider:
        identity = "ECHO"
        origin_base_url = "https://echo.example"

        def extract_content(self, response):
            return locate_content(response)

        def parse(self, response, options=None):
            return ParsedResponse(provider="ECHO", html=str(response),
                                  metadata={"isFullDocument": False})

    parser = ResponseParser()
    parser.register_provider("ECHO", EchoProvider())

The protocol is ``runtime_checkable`` so registration can verify the shape
with ``isinstance()`` without forcing inheritance from
:class:`~aiparser.providers.base.BaseProvider`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from aiparser.items import ContentExtraction, ParsedResponse, ParseOptions


@runtime_checkable
class ResponseProviderPlugin(Protocol):
    """One AI front end: locate its content and turn it into a ParsedResponse."""

    identity: Any
    origin_base_url: str

    def extract_content(self, response: Any) -> ContentExtraction:
        """Locate html/text/sources in *response*.  Must not raise."""
        ...

    def parse(self, response: Any, options: ParseOptions | None = None) -> ParsedResponse:
        """Produce the normalized document, raising if no content exists."""
        ...
