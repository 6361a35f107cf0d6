"""Transactional e-mail through the Resend SDK."""
from __future__ import annotations

import asyncio
from typing import Any

import resend
from resend.exceptions import ResendError


class EmailDeliveryError(RuntimeError):
    """Raised when the e-mail provider rejects a message."""

    def __init__(self, message: str, *, status_code: int | str, payload: Any) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ResendEmailClient:
    def __init__(self, api_key: str, *, api_url: str | None = None) -> None:
        self._api_key = api_key
        self._api_url = api_url

    async def send(self, *, sender: str, to: list[str], subject: str, html: str) -> dict[str, Any]:
        resend.api_key = self._api_key
        if self._api_url:
            resend.api_url = self._api_url
        params = {"from": sender, "to": to, "subject": subject, "html": html}
        try:
            # the SDK is blocking
            result = await asyncio.to_thread(resend.Emails.send, params)
        except ResendError as exc:
            raise EmailDeliveryError(
                exc.message,
                status_code=exc.code,
                payload={"statusCode": exc.code, "name": exc.error_type, "message": exc.message},
            ) from exc
        return dict(result)


__all__ = ["EmailDeliveryError", "ResendEmailClient"]
