"""Pytest configuration and fixtures for curl-to-csharp tests.

This file provides:
- make_options: CurlOptions factory with sensible defaults
- Statement helpers shared by converter and renderer tests
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from curl_to_csharp.models import CurlOptions
from curl_to_csharp.syntax import Assignment, ExpressionCall, ScopedBlock, Statement, walk


DEFAULT_URL = "https://example.com/"


def make_curl_options(url: str = DEFAULT_URL, **overrides: Any) -> CurlOptions:
    """Create CurlOptions for testing.

    Prefer this over constructing CurlOptions directly - only the fields a
    test varies need to be spelled out.
    """
    return CurlOptions(url=url, **overrides)


@pytest.fixture
def make_options() -> Callable[..., CurlOptions]:
    return make_curl_options


@pytest.fixture
def write_request_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write request file text to tmp_path and return its path."""

    def _write(content: str, name: str = "request.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


def header_names(statements: tuple[Statement, ...]) -> list[str]:
    """Header names passed to TryAddWithoutValidation, in order."""
    return [
        s.args[0].value
        for s in walk(statements)
        if isinstance(s, ExpressionCall) and s.member_path == ("Headers", "TryAddWithoutValidation")
    ]


def content_assignments(statements: tuple[Statement, ...]) -> list[Assignment]:
    return [s for s in walk(statements) if isinstance(s, Assignment) and s.member == "Content"]


def request_url(scope: ScopedBlock) -> str:
    """URL literal passed to the HttpRequestMessage constructor."""
    return scope.constructor_args[1].value
