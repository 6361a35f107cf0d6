"""Outbound HTTP client factory."""
from __future__ import annotations

from typing import Callable

import httpx

HttpClientFactory = Callable[[float], httpx.AsyncClient]


def _default_factory(timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout)


_factory: HttpClientFactory = _default_factory


def configure_http_client_factory(factory: HttpClientFactory | None) -> None:
    """Install the factory used for outbound calls (``None`` restores the default)."""

    global _factory
    _factory = factory or _default_factory


def get_http_client(timeout: float) -> httpx.AsyncClient:
    """Return a new client; callers own it and must close it."""

    return _factory(timeout)
