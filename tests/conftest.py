"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from aiparser.parser import ResponseParser

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def chatgpt_html() -> str:
    return _read_fixture("chatgpt.html")


@pytest.fixture
def gemini_html() -> str:
    return _read_fixture("gemini.html")


@pytest.fixture
def perplexity_html() -> str:
    return _read_fixture("perplexity.html")


@pytest.fixture
def copilot_html() -> str:
    return _read_fixture("copilot.html")


@pytest.fixture
def ai_mode_html() -> str:
    return _read_fixture("ai_mode.html")


@pytest.fixture
def parser() -> ResponseParser:
    return ResponseParser()
