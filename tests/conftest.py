import sys
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from inspection_portal.core.config import reset_settings
from inspection_portal.infrastructure import (
    BrowserSession,
    configure_browser_provider,
    configure_http_client_factory,
)

PDF_BYTES = b"%PDF-1.4\n% fake report\n%%EOF\n"


class FakeResponse:
    def __init__(self, status: int) -> None:
        self.status = status

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class FakePage:
    """Page whose ``goto`` follows one scripted outcome.

    Outcomes: ``"ok"``, an HTTP status ``int``, ``(status, final_url)``,
    ``None`` (no response) or an exception instance to raise.
    """

    def __init__(self, outcome, pdf_bytes: bytes) -> None:
        self._outcome = outcome
        self._pdf_bytes = pdf_bytes
        self.url = "about:blank"
        self.goto_calls: list[tuple[str, str | None]] = []
        self.pdf_calls: list[dict] = []

    async def goto(self, url: str, wait_until: str | None = None):
        self.goto_calls.append((url, wait_until))
        self.url = url
        outcome = self._outcome
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            return None
        if outcome == "ok":
            return FakeResponse(200)
        if isinstance(outcome, tuple):
            status, final_url = outcome
            self.url = final_url
            return FakeResponse(status)
        return FakeResponse(int(outcome))

    async def pdf(self, **kwargs) -> bytes:
        self.pdf_calls.append(kwargs)
        return self._pdf_bytes


class FakeContext:
    def __init__(self, page: FakePage, options: dict) -> None:
        self.page = page
        self.options = options
        self.navigation_timeout: int | None = None
        self.default_timeout: int | None = None
        self.closed = False

    def set_default_navigation_timeout(self, timeout: int) -> None:
        self.navigation_timeout = timeout

    def set_default_timeout(self, timeout: int) -> None:
        self.default_timeout = timeout

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, outcomes: list, pdf_bytes: bytes = PDF_BYTES, context_error=None) -> None:
        self._outcomes = list(outcomes)
        self._pdf_bytes = pdf_bytes
        self._context_error = context_error
        self.contexts: list[FakeContext] = []
        self.close_count = 0

    async def new_context(self, **options) -> FakeContext:
        if self._context_error is not None:
            raise self._context_error
        outcome = self._outcomes.pop(0) if self._outcomes else "ok"
        context = FakeContext(FakePage(outcome, self._pdf_bytes), options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.close_count += 1


class FakeBrowserProvider:
    name = "fake"

    def __init__(self, outcomes=None, *, launch_error=None, pdf_bytes: bytes = PDF_BYTES, context_error=None) -> None:
        self._outcomes = list(outcomes or ["ok"])
        self._launch_error = launch_error
        self._pdf_bytes = pdf_bytes
        self._context_error = context_error
        self.browsers: list[FakeBrowser] = []

    async def launch(self) -> BrowserSession:
        if self._launch_error is not None:
            raise self._launch_error
        browser = FakeBrowser(self._outcomes, self._pdf_bytes, self._context_error)
        self.browsers.append(browser)
        return BrowserSession(browser)

    @property
    def browser(self) -> FakeBrowser:
        assert len(self.browsers) == 1
        return self.browsers[0]


@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    monkeypatch.setenv("PDF_SETTLE_DELAY_MS", "0")
    monkeypatch.setenv("API_BASE_URL", "https://backend.example.com/api")
    monkeypatch.setenv("QUICKBOOKS_REALM_ID", "REALM-1")
    monkeypatch.delenv("REPORT_BASE_URL", raising=False)
    monkeypatch.delenv("RESEND_API_KEY", raising=False)
    monkeypatch.delenv("BROWSER_PROVIDER", raising=False)
    reset_settings()
    configure_browser_provider(None)
    configure_http_client_factory(None)
    yield
    reset_settings()
    configure_browser_provider(None)
    configure_http_client_factory(None)


@pytest.fixture()
def install_provider():
    def install(outcomes=None, **kwargs) -> FakeBrowserProvider:
        provider = FakeBrowserProvider(outcomes, **kwargs)
        configure_browser_provider(provider)
        return provider

    return install


@pytest.fixture()
def mock_http():
    """Route outbound httpx calls to ``handler`` and record every request."""

    recorded: list[httpx.Request] = []

    def install(handler) -> list[httpx.Request]:
        def record(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return handler(request)

        configure_http_client_factory(
            lambda timeout: httpx.AsyncClient(transport=httpx.MockTransport(record), timeout=timeout)
        )
        return recorded

    return install


@pytest.fixture()
def client():
    from inspection_portal.app import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
