"""Infrastructure layer exports."""

from .browser import (
    BrowserProvider,
    BrowserSession,
    configure_browser_provider,
    get_browser_provider,
    select_browser_provider,
)
from .documents import DocumentDeliveryClient
from .outbound import configure_http_client_factory, get_http_client
from .mailer import EmailDeliveryError, ResendEmailClient
from .quickbooks import QuickBooksAttachmentClient
from .renderer import HeadlessRenderClient

__all__ = [
    "BrowserProvider",
    "BrowserSession",
    "DocumentDeliveryClient",
    "EmailDeliveryError",
    "HeadlessRenderClient",
    "QuickBooksAttachmentClient",
    "ResendEmailClient",
    "configure_browser_provider",
    "configure_http_client_factory",
    "get_browser_provider",
    "get_http_client",
    "select_browser_provider",
]
