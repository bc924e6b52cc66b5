"""Tests for aiparser.items and aiparser.errors."""

from __future__ import annotations

import pydantic
import pytest

from aiparser.errors import AIParserError, NoContentFoundError, UnknownProviderError, provider_label
from aiparser.items import ContentExtraction, ParsedResponse, ParseOptions, ProviderIdentity

# ---------------------------------------------------------------------------
# ParseOptions
# ---------------------------------------------------------------------------

class TestParseOptions:
    def test_defaults(self):
        opts = ParseOptions()
        assert opts.remove_header is None
        assert opts.theme is None
        assert opts.sanitize is True

    def test_camel_and_snake_keys(self):
        assert ParseOptions.coerce({"removeHeader": True}).remove_header is True
        assert ParseOptions.coerce({"remove_header": True}).remove_header is True
        assert ParseOptions.coerce({"baseUrl": "https://b.example"}).base_url == "https://b.example"

    def test_unknown_keys_ignored(self):
        assert ParseOptions.coerce({"colour": "teal"}) == ParseOptions()

    def test_unusable_values_fall_back_to_default(self):
        opts = ParseOptions.coerce({"theme": "system", "removeLinks": "maybe", "sanitize": [1], "invertColors": True})
        assert opts.theme is None
        assert opts.remove_links is None
        assert opts.sanitize is True
        assert opts.invert_colors is True

    def test_coerce_passthrough(self):
        opts = ParseOptions(remove_links=True)
        assert ParseOptions.coerce(opts) is opts
        assert ParseOptions.coerce(None) == ParseOptions()

    def test_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            ParseOptions().remove_links = True

    def test_merged_only_applies_set_fields(self):
        base = ParseOptions(remove_links=True, theme="dark")
        merged = base.merged({"theme": "light"})
        assert merged.remove_links is True
        assert merged.theme == "light"

    def test_merged_none(self):
        base = ParseOptions(remove_links=True)
        assert base.merged(None) is base


# ---------------------------------------------------------------------------
# ParsedResponse
# ---------------------------------------------------------------------------

class TestParsedResponse:
    def test_to_dict_drops_none(self):
        parsed = ParsedResponse(provider="GROK", html="<p>x</p>", metadata={"isFullDocument": False})
        assert parsed.to_dict() == {"provider": "GROK", "html": "<p>x</p>", "metadata": {"isFullDocument": False}}

    def test_text_rendering_falls_back_to_text(self):
        parsed = ParsedResponse(provider="CHATGPT", text="only text")
        assert parsed.to_text() == "only text"
        assert parsed.to_markdown() == "only text"

    def test_text_rendering_of_html(self):
        parsed = ParsedResponse(provider="CHATGPT", html="<html><head><title>t</title></head><body><p>Hi</p></body></html>")
        assert parsed.to_text() == "Hi"


# ---------------------------------------------------------------------------
# Small types
# ---------------------------------------------------------------------------

def test_identity_str_is_value():
    assert str(ProviderIdentity.AIOVERVIEW) == "AIOVERVIEW"
    assert ProviderIdentity("GROK") is ProviderIdentity.GROK


def test_identity_declaration_order():
    assert [p.value for p in ProviderIdentity] == [
        "CHATGPT", "GEMINI", "PERPLEXITY", "COPILOT", "AIOVERVIEW", "AIMODE", "GROK",
    ]


def test_content_extraction_is_empty():
    assert ContentExtraction().is_empty
    assert not ContentExtraction(text="t").is_empty
    assert ContentExtraction(sources=["s"]).is_empty


class TestErrors:
    def test_labels(self):
        assert provider_label(ProviderIdentity.AIOVERVIEW) == "AI Overview"
        assert provider_label("CUSTOM") == "CUSTOM"

    def test_no_content_message(self):
        exc = NoContentFoundError(ProviderIdentity.COPILOT)
        assert str(exc) == "No content found in Copilot response"
        assert exc.provider == "COPILOT"
        assert isinstance(exc, AIParserError)

    def test_unknown_provider_str(self):
        exc = UnknownProviderError("BING")
        assert str(exc) == "Unknown provider: BING"
        assert isinstance(exc, KeyError)
