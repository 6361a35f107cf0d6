"""Domain layer definitions."""

from .errors import (
    FatalFailure,
    LaunchFailed,
    NavigationFailure,
    PortalError,
    RenderErrorKind,
    RenderExhausted,
    RenderFailure,
    UpstreamFailure,
    ValidationFailure,
)
from .reports import (
    PDF_MIME_TYPE,
    AttachmentRequest,
    AttemptOutcome,
    ForwardedCredentials,
    RenderAttempt,
    RenderedDocument,
    ReportKind,
    ReportRequest,
)

__all__ = [
    "PDF_MIME_TYPE",
    "AttachmentRequest",
    "AttemptOutcome",
    "FatalFailure",
    "ForwardedCredentials",
    "LaunchFailed",
    "NavigationFailure",
    "PortalError",
    "RenderAttempt",
    "RenderErrorKind",
    "RenderExhausted",
    "RenderFailure",
    "RenderedDocument",
    "ReportKind",
    "ReportRequest",
    "UpstreamFailure",
    "ValidationFailure",
]
