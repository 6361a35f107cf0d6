"""Capture internal report pages as PDF documents with a headless browser."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from playwright.async_api import Error as PlaywrightError

from inspection_portal.core.config import Settings
from inspection_portal.domain import (
    ForwardedCredentials,
    NavigationFailure,
    RenderErrorKind,
    RenderFailure,
)

logger = logging.getLogger(__name__)

DETACHED_MARKER = "detached"


def classify_browser_error(exc: Exception, *, attempt: int, url: str) -> RenderFailure:
    """Translate a browser library error into a structured :class:`RenderFailure`."""

    message = str(exc) or exc.__class__.__name__
    if DETACHED_MARKER in message.lower():
        return NavigationFailure(
            f"frame detached (attempt={attempt}) url={url}: {message}",
            kind=RenderErrorKind.FRAME_DETACHED,
        )
    return RenderFailure(message, kind=RenderErrorKind.RENDER_FAILED)


class HeadlessRenderClient:
    """Render one report URL into A4 PDF bytes inside a fresh browser context."""

    def __init__(
        self,
        *,
        viewport_width: int = 1080,
        viewport_height: int = 8000,
        timeout_ms: int = 60000,
        settle_delay_ms: int = 600,
    ) -> None:
        self._viewport = {"width": viewport_width, "height": viewport_height}
        self._timeout_ms = timeout_ms
        self._settle_delay = settle_delay_ms / 1000.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "HeadlessRenderClient":
        return cls(
            viewport_width=settings.viewport_width,
            viewport_height=settings.viewport_height,
            timeout_ms=settings.render_timeout_ms,
            settle_delay_ms=settings.settle_delay_ms,
        )

    async def render(
        self,
        browser: Any,
        url: str,
        credentials: ForwardedCredentials,
        *,
        attempt: int = 1,
    ) -> bytes:
        context = None
        try:
            context = await browser.new_context(
                viewport=self._viewport,
                extra_http_headers=credentials.as_headers(),
            )
            context.set_default_navigation_timeout(self._timeout_ms)
            context.set_default_timeout(self._timeout_ms)
            page = await context.new_page()

            response = await page.goto(url, wait_until="domcontentloaded")
            if response is None:
                raise NavigationFailure(
                    f"page.goto returned no response (attempt={attempt}) url={url}",
                    kind=RenderErrorKind.NAVIGATION_REJECTED,
                )
            # a redirect to the login page still answers 200, so keep both URLs in the message
            if not response.ok:
                raise NavigationFailure(
                    f"page.goto failed (attempt={attempt}): status={response.status} "
                    f"finalUrl={page.url} targetUrl={url}",
                    kind=RenderErrorKind.NAVIGATION_REJECTED,
                )

            await asyncio.sleep(self._settle_delay)

            content = await page.pdf(format="A4", print_background=True)
            if not content:
                raise RenderFailure(
                    f"empty PDF captured (attempt={attempt}) url={url}",
                    kind=RenderErrorKind.RENDER_FAILED,
                )
            return content
        except PlaywrightError as exc:
            raise classify_browser_error(exc, attempt=attempt, url=url) from exc
        finally:
            if context is not None:
                await _close_context(context)


async def _close_context(context: Any) -> None:
    try:
        await context.close()
    except PlaywrightError as exc:
        logger.debug("browser context close failed: %s", exc)


__all__ = ["DETACHED_MARKER", "HeadlessRenderClient", "classify_browser_error"]
