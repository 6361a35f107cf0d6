"""Document rendering use case: resolve a report, render it with retries."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Awaitable, Callable, TypeVar

from inspection_portal.core.config import Settings, get_settings
from inspection_portal.core.report_kinds import ReportCatalogue, get_report_catalogue
from inspection_portal.domain import (
    AttemptOutcome,
    ForwardedCredentials,
    RenderAttempt,
    RenderedDocument,
    RenderExhausted,
    RenderFailure,
    ReportRequest,
)
from inspection_portal.infrastructure import (
    BrowserProvider,
    BrowserSession,
    HeadlessRenderClient,
    get_browser_provider,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RenderRetryController:
    """Retry a render only while it fails with a frame-detached error.

    One controller drives a single render request; ``attempts`` keeps the
    history of that request.
    """

    def __init__(self, max_attempts: int = 3) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.state = RetryState.IDLE
        self.attempts: list[RenderAttempt] = []

    async def run(self, attempt_fn: Callable[[int], Awaitable[T]]) -> T:
        if self.state is not RetryState.IDLE:
            raise RuntimeError("RenderRetryController instances are single-use")

        last_error: RenderFailure | None = None
        for number in range(1, self.max_attempts + 1):
            self.state = RetryState.ATTEMPTING
            try:
                result = await attempt_fn(number)
            except RenderFailure as exc:
                last_error = exc
                if exc.retryable:
                    self.attempts.append(
                        RenderAttempt(number, AttemptOutcome.RETRYABLE_FAILURE, exc.message)
                    )
                    logger.warning(
                        "render attempt %d/%d failed, retrying: %s",
                        number,
                        self.max_attempts,
                        exc.message,
                    )
                    continue
                self.attempts.append(RenderAttempt(number, AttemptOutcome.FATAL_FAILURE, exc.message))
                self.state = RetryState.FAILED
                raise
            self.attempts.append(RenderAttempt(number, AttemptOutcome.SUCCESS))
            self.state = RetryState.SUCCEEDED
            return result

        self.state = RetryState.FAILED
        if last_error is None:
            raise RuntimeError("render retry loop ended without an attempt")
        raise RenderExhausted(last_error, attempts=len(self.attempts))


class DocumentDeliveryService:
    """Turn ``(id, type)`` into a rendered PDF using one browser per call."""

    def __init__(
        self,
        provider: BrowserProvider,
        render_client: HeadlessRenderClient,
        catalogue: ReportCatalogue,
        *,
        locale: str = "es",
        max_attempts: int = 3,
        report_base_url: str | None = None,
    ) -> None:
        self._provider = provider
        self._render_client = render_client
        self._catalogue = catalogue
        self._locale = locale
        self._max_attempts = max_attempts
        self._report_base_url = report_base_url

    def build_request(
        self,
        entity_id: str,
        report_type: str | None,
        *,
        origin: str,
        credentials: ForwardedCredentials,
    ) -> ReportRequest:
        return ReportRequest(
            entity_id=entity_id,
            kind=self._catalogue.resolve(report_type),
            origin_url=self._report_base_url or origin,
            locale=self._locale,
            credentials=credentials,
        )

    async def render(self, request: ReportRequest) -> RenderedDocument:
        logger.info(
            "rendering %s %s from %s (%s)",
            request.kind.name,
            request.entity_id,
            request.report_url,
            request.credentials.describe(),
        )
        session: BrowserSession | None = None
        try:
            session = await self._provider.launch()
            browser = session.browser
            controller = RenderRetryController(self._max_attempts)
            content = await controller.run(
                lambda attempt: self._render_client.render(
                    browser,
                    request.report_url,
                    request.credentials,
                    attempt=attempt,
                )
            )
        finally:
            if session is not None:
                await session.close()

        logger.info(
            "rendered %s (%d bytes, %d attempt(s))",
            request.suggested_file_name,
            len(content),
            len(controller.attempts),
        )
        return RenderedDocument(content=content, file_name=request.suggested_file_name)


def build_document_service(
    settings: Settings | None = None,
    provider: BrowserProvider | None = None,
) -> DocumentDeliveryService:
    settings = settings or get_settings()
    return DocumentDeliveryService(
        provider or get_browser_provider(),
        HeadlessRenderClient.from_settings(settings),
        get_report_catalogue(),
        locale=settings.report_locale,
        max_attempts=settings.render_attempts,
        report_base_url=settings.report_base_url,
    )


def get_document_service() -> DocumentDeliveryService:
    """Return a service bound to the current settings and browser provider."""

    return build_document_service()


__all__ = [
    "DocumentDeliveryService",
    "RenderRetryController",
    "RetryState",
    "build_document_service",
    "get_document_service",
]
