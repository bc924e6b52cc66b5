"""Data model shared by the locator, detector, providers and dispatcher.

``ParseOptions`` and ``ParsedResponse`` are Pydantic models (validation +
serialization); the short-lived intermediate values are plain dataclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Provider identity
# ---------------------------------------------------------------------------

class ProviderIdentity(str, Enum):
    """Closed set of supported AI-chat front ends.

    Declaration order is the registration order used to break detection ties.
    """

    CHATGPT = "CHATGPT"
    GEMINI = "GEMINI"
    PERPLEXITY = "PERPLEXITY"
    COPILOT = "COPILOT"
    AIOVERVIEW = "AIOVERVIEW"
    AIMODE = "AIMODE"
    GROK = "GROK"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Intermediate values
# ---------------------------------------------------------------------------

@dataclass
class ContentExtraction:
    """Whatever content could be located in a raw response."""

    html: str = ""
    text: str = ""
    sources: list[Any] | None = None

    @property
    def is_empty(self) -> bool:
        return not self.html and not self.text


@dataclass
class DetectionResult:
    """Result of a provider-detection check."""

    provider: ProviderIdentity | str
    confidence: float  # (0.0, 1.0]


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class ParseOptions(BaseModel):
    """Per-call configuration bag.

    ``None`` on a removal flag means "use the provider's default".  Keys a
    provider does not understand are ignored, as are keys nobody knows
    about.  Both ``remove_header`` and ``removeHeader`` spellings are
    accepted.  A value a field cannot hold (``theme="system"``) falls back to
    the field default instead of failing the parse.
    """

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    remove_links: bool | None = None
    remove_header: bool | None = None
    remove_footer: bool | None = None
    remove_sidebar: bool | None = None
    invert_colors: bool | None = None
    theme: Literal["light", "dark"] | None = None
    base_url: str | None = None
    sanitize: bool = True

    @field_validator("*", mode="wrap")
    @classmethod
    def _drop_unusable(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.debug("Ignoring unusable option %s=%r", info.field_name, value)
            return cls.model_fields[info.field_name].default

    @classmethod
    def coerce(cls, value: ParseOptions | Mapping[str, Any] | None) -> ParseOptions:
        """Return *value* as a :class:`ParseOptions` instance."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))

    def merged(self, overrides: ParseOptions | Mapping[str, Any] | None) -> ParseOptions:
        """Return a copy with every explicitly-set field of *overrides* applied."""
        if overrides is None:
            return self
        other = self.coerce(overrides)
        data = self.model_dump(exclude_unset=True)
        data.update(other.model_dump(exclude_unset=True))
        return type(self).model_validate(data)


class ParsedResponse(BaseModel):
    """Canonical output of a parse: sanitized HTML plus what was done to it."""

    provider: str
    html: str = ""
    text: str | None = None
    sources: list[Any] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    # ------------------------------------------------------------------
    # Alternate renderings (delegate to aiparser.formats)
    # ------------------------------------------------------------------

    def to_text(self) -> str:
        """Plain-text rendering of :attr:`html`, or :attr:`text` when there is no HTML."""
        from aiparser.formats import html_to_text

        if self.html:
            return html_to_text(self.html)
        return self.text or ""

    def to_markdown(self) -> str:
        """Markdown rendering of :attr:`html`, or :attr:`text` when there is no HTML."""
        from aiparser.formats import html_to_markdown

        if self.html:
            return html_to_markdown(self.html)
        return self.text or ""
