"""Error taxonomy shared by the document and attachment pipelines."""
from __future__ import annotations

from enum import Enum


class RenderErrorKind(str, Enum):
    """Structured reason a render attempt failed."""

    FRAME_DETACHED = "frame_detached"
    NAVIGATION_REJECTED = "navigation_rejected"
    RENDER_FAILED = "render_failed"


class PortalError(Exception):
    """Base class for errors surfaced to HTTP callers."""

    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailure(PortalError):
    """Required input is missing or malformed."""

    http_status = 400


class RenderFailure(PortalError):
    """A render attempt did not produce a document."""

    def __init__(self, message: str, *, kind: RenderErrorKind) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind is RenderErrorKind.FRAME_DETACHED


class NavigationFailure(RenderFailure):
    """The report page could not be reached or answered with a non-success status."""


class RenderExhausted(RenderFailure):
    """Every allowed attempt failed with a retryable error."""

    def __init__(self, last_error: RenderFailure, *, attempts: int) -> None:
        super().__init__(last_error.message, kind=last_error.kind)
        self.last_error = last_error
        self.attempts = attempts


class UpstreamFailure(PortalError):
    """A dependent HTTP call failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FatalFailure(PortalError):
    """Unexpected failure outside the retry loop."""


class LaunchFailed(FatalFailure):
    """The headless browser could not be started or reached."""


__all__ = [
    "FatalFailure",
    "LaunchFailed",
    "NavigationFailure",
    "PortalError",
    "RenderErrorKind",
    "RenderExhausted",
    "RenderFailure",
    "UpstreamFailure",
    "ValidationFailure",
]
