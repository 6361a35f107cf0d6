"""Application services."""

from .attachments import AttachmentRelayService, RelayResult, get_attachment_service, parse_attachment_request
from .notifications import (
    EmailNotConfigured,
    InspectionEmailService,
    get_email_service,
    render_inspection_email,
)
from .rendering import (
    DocumentDeliveryService,
    RenderRetryController,
    RetryState,
    build_document_service,
    get_document_service,
)

__all__ = [
    "AttachmentRelayService",
    "DocumentDeliveryService",
    "EmailNotConfigured",
    "InspectionEmailService",
    "RelayResult",
    "RenderRetryController",
    "RetryState",
    "build_document_service",
    "get_attachment_service",
    "get_document_service",
    "get_email_service",
    "parse_attachment_request",
    "render_inspection_email",
]
