"""Headless browser provisioning.

A :class:`BrowserProvider` is chosen once at start-up and hands out one
:class:`BrowserSession` per PDF request.  The session owns the browser process
(or CDP connection) and the Playwright driver; closing it releases both.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from inspection_portal.core.config import Settings, get_settings
from inspection_portal.domain import LaunchFailed

logger = logging.getLogger(__name__)

LOCAL_CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]

MANAGED_CHROMIUM_ARGS = [
    *LOCAL_CHROMIUM_ARGS,
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--font-render-hinting=none",
]


class BrowserSession:
    """A launched (or connected) browser scoped to a single request."""

    def __init__(self, browser: Any, driver: Any | None = None) -> None:
        self.browser = browser
        self._driver = driver
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self.browser.close()
        except PlaywrightError as exc:
            logger.warning("browser close failed: %s", exc)
        finally:
            if self._driver is not None:
                await self._driver.stop()


class BrowserProvider(Protocol):
    """Contract for browser acquisition strategies."""

    name: str

    async def launch(self) -> BrowserSession:
        """Start or connect to a browser; raise :class:`LaunchFailed` on error."""


class _PlaywrightProvider:
    name = "playwright"

    async def _open(self, driver: Any) -> Any:  # pragma: no cover - overridden
        raise NotImplementedError

    async def launch(self) -> BrowserSession:
        driver = await async_playwright().start()
        try:
            browser = await self._open(driver)
        except PlaywrightError as exc:
            await driver.stop()
            raise LaunchFailed(f"{self.name} browser launch failed: {exc}") from exc
        except BaseException:
            await driver.stop()
            raise
        logger.debug("%s browser ready", self.name)
        return BrowserSession(browser, driver)


class LocalChromiumProvider(_PlaywrightProvider):
    """Launch the locally installed Chromium without the setuid sandbox."""

    name = "local"

    async def _open(self, driver: Any) -> Any:
        return await driver.chromium.launch(
            headless=True,
            args=LOCAL_CHROMIUM_ARGS,
            chromium_sandbox=False,
        )


class ManagedChromiumProvider(_PlaywrightProvider):
    """Launch the platform packaged Chromium binary on serverless hosts."""

    name = "managed"

    def __init__(self, executable_path: str | None) -> None:
        self.executable_path = executable_path

    async def launch(self) -> BrowserSession:
        if not self.executable_path:
            raise LaunchFailed("CHROMIUM_EXECUTABLE_PATH is required for the managed browser provider")
        return await super().launch()

    async def _open(self, driver: Any) -> Any:
        return await driver.chromium.launch(
            executable_path=self.executable_path,
            headless=True,
            args=MANAGED_CHROMIUM_ARGS,
            chromium_sandbox=False,
        )


class RemoteChromiumProvider(_PlaywrightProvider):
    """Connect to an already running Chromium over the DevTools protocol."""

    name = "remote"

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint

    async def _open(self, driver: Any) -> Any:
        return await driver.chromium.connect_over_cdp(self.endpoint)


def is_managed_platform(settings: Settings, environ: Mapping[str, str]) -> bool:
    return any(environ.get(signal) for signal in settings.managed_platform_signals)


def select_browser_provider(
    settings: Settings,
    environ: Mapping[str, str] | None = None,
) -> BrowserProvider:
    """Pick the provider named by ``BROWSER_PROVIDER`` (``auto`` inspects the host)."""

    env = os.environ if environ is None else environ
    mode = settings.browser_provider
    if mode == "auto":
        if settings.browser_ws_endpoint:
            mode = "remote"
        elif is_managed_platform(settings, env):
            mode = "managed"
        else:
            mode = "local"

    if mode == "local":
        return LocalChromiumProvider()
    if mode == "managed":
        return ManagedChromiumProvider(settings.chromium_executable_path)
    if mode == "remote":
        if not settings.browser_ws_endpoint:
            raise ValueError("BROWSER_WS_ENDPOINT is required for the remote browser provider")
        return RemoteChromiumProvider(settings.browser_ws_endpoint)
    raise ValueError(f"unknown browser provider: {settings.browser_provider!r}")


_provider: BrowserProvider | None = None


def configure_browser_provider(provider: BrowserProvider | None) -> None:
    """Install the provider used by the PDF endpoint (``None`` re-selects lazily)."""

    global _provider
    _provider = provider


def get_browser_provider() -> BrowserProvider:
    """Return the configured provider, selecting one from settings on first use."""

    global _provider
    if _provider is None:
        _provider = select_browser_provider(get_settings())
        logger.info("using %s browser provider", _provider.name)
    return _provider


__all__ = [
    "BrowserProvider",
    "BrowserSession",
    "LocalChromiumProvider",
    "ManagedChromiumProvider",
    "RemoteChromiumProvider",
    "configure_browser_provider",
    "get_browser_provider",
    "is_managed_platform",
    "select_browser_provider",
]
