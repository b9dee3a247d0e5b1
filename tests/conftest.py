"""
Pytest configuration and shared fixtures for httpc tests.

This conftest.py:
1. Isolates every test from HTTPC_* variables, .env files and forced colors
2. Provides a Rich console that writes plain text into a buffer
3. Provides a recording httpx.MockTransport so no test touches the network
"""

from __future__ import annotations

import io
import os
from typing import Callable

import httpx
import pytest
from rich.console import Console


# =============================================================================
# Environment isolation
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test without user config or color forcing."""
    for name in list(os.environ):
        if name.upper().startswith("HTTPC_"):
            monkeypatch.delenv(name, raising=False)
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Console capture
# =============================================================================

@pytest.fixture
def console_buffer():
    """Provide (console, buffer) with styling disabled."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        color_system=None,
        force_terminal=False,
        highlight=False,
        soft_wrap=True,
        width=100,
    )
    return console, buffer


# =============================================================================
# Mock transport
# =============================================================================

class RecordingTransport:
    """Wraps a handler in httpx.MockTransport and keeps every request seen."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


def text_response(
    body: str = "ok",
    *,
    status_code: int = 200,
    content_type: str | None = "text/plain",
    extra_headers: list[tuple[str, str]] | None = None,
) -> httpx.Response:
    """Build a response whose headers are exactly the ones given (plus length)."""
    headers: list[tuple[str, str]] = []
    if content_type is not None:
        headers.append(("content-type", content_type))
    headers.extend(extra_headers or [])
    return httpx.Response(status_code, headers=headers, content=body.encode("utf-8"))


@pytest.fixture
def make_transport():
    """Factory fixture: make_transport(handler) -> RecordingTransport."""
    return RecordingTransport


@pytest.fixture
def make_response():
    """Factory fixture: make_response(body, content_type=..., ...) -> httpx.Response."""
    return text_response
