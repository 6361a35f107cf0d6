"""Inspection confirmation e-mails."""
from __future__ import annotations

import html
import logging
from typing import Any

from inspection_portal.core.config import Settings, get_settings
from inspection_portal.infrastructure import ResendEmailClient

logger = logging.getLogger(__name__)

INSPECTION_EMAIL_SUBJECT = "Confirmación de Inspección"
DEFAULT_RECIPIENT_NAME = "Usuario"


def render_inspection_email(recipient_name: str) -> str:
    name = html.escape(recipient_name or DEFAULT_RECIPIENT_NAME)
    return (
        "<div style=\"font-family: Arial, sans-serif; color: #1f2937;\">"
        f"<h1>Hola, {name}!</h1>"
        "<p>Tu inspección fue registrada correctamente.</p>"
        "<p>Recibirás el reporte en cuanto esté disponible.</p>"
        "</div>"
    )


class EmailNotConfigured(RuntimeError):
    """Raised when no e-mail provider key is configured."""


class InspectionEmailService:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def send_confirmation(self, email: str, name: str | None = None) -> dict[str, Any]:
        api_key = self._settings.resend_api_key
        if not api_key:
            logger.error("RESEND_API_KEY is not configured")
            raise EmailNotConfigured("Email service not configured")

        mailer = ResendEmailClient(api_key, api_url=self._settings.resend_api_url)
        data = await mailer.send(
            sender=self._settings.email_sender,
            to=[email],
            subject=INSPECTION_EMAIL_SUBJECT,
            html=render_inspection_email(name or DEFAULT_RECIPIENT_NAME),
        )
        logger.info("inspection confirmation sent (id=%s)", data.get("id"))
        return data


def get_email_service() -> InspectionEmailService:
    return InspectionEmailService(get_settings())
