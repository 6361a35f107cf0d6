"""Client for the same-origin PDF endpoint."""
from __future__ import annotations

import logging
import re
from urllib.parse import quote, unquote

import httpx

from inspection_portal.domain import (
    PDF_MIME_TYPE,
    ForwardedCredentials,
    RenderedDocument,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)

_FILENAME_PATTERN = re.compile(r'filename="?([^";]+)"?', re.IGNORECASE)
_EXTENDED_FILENAME_PATTERN = re.compile(r"filename\*=UTF-8'[^']*'([^;\s]+)", re.IGNORECASE)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def filename_from_disposition(value: str | None) -> str | None:
    if not value:
        return None
    extended = _EXTENDED_FILENAME_PATTERN.search(value)
    if extended:
        return unquote(extended.group(1))
    match = _FILENAME_PATTERN.search(value)
    return match.group(1).strip() if match else None


class DocumentDeliveryClient:
    """Fetch rendered PDFs from ``{origin}/api/pdf/{id}?type=<kind>``."""

    def __init__(self, http_client: httpx.AsyncClient, origin: str) -> None:
        self._client = http_client
        self._origin = origin.rstrip("/")

    def document_url(self, entity_id: str) -> str:
        return f"{self._origin}/api/pdf/{quote(entity_id, safe='')}"

    async def fetch(
        self,
        entity_id: str,
        report_kind: str,
        credentials: ForwardedCredentials,
        *,
        fallback_file_name: str,
    ) -> RenderedDocument:
        headers = {**NO_CACHE_HEADERS, **credentials.as_headers()}
        url = self.document_url(entity_id)
        logger.info("fetching PDF %s type=%s (%s)", url, report_kind, credentials.describe())
        response = await self._client.get(url, params={"type": report_kind}, headers=headers)

        if not response.is_success:
            raise UpstreamFailure(
                f"No se pudo generar PDF. {response.text}",
                status_code=response.status_code,
            )

        content = response.content
        if not content:
            raise UpstreamFailure("PDF vacío", status_code=response.status_code)

        file_name = (
            filename_from_disposition(response.headers.get("content-disposition"))
            or fallback_file_name
        )
        return RenderedDocument(content=content, file_name=file_name, mime_type=PDF_MIME_TYPE)


__all__ = ["DocumentDeliveryClient", "filename_from_disposition"]
