"""Estimate attachment operation of the accounting backend."""
from __future__ import annotations

import logging

import httpx

from inspection_portal.domain import RenderedDocument

logger = logging.getLogger(__name__)

ATTACHMENT_PATH = "/QuickBooks/estimates/attachmentPDF"


class QuickBooksAttachmentClient:
    """Upload PDFs as estimate attachments through the REST backend."""

    def __init__(self, http_client: httpx.AsyncClient, api_base_url: str) -> None:
        self._client = http_client
        self._url = f"{api_base_url.rstrip('/')}{ATTACHMENT_PATH}"

    @staticmethod
    def build_form(estimate_id: str, realm_id: str) -> dict[str, str]:
        # the backend binds either spelling of the estimate id
        return {
            "QuickBookEstimateId": estimate_id,
            "QuickBookEstimatedId": estimate_id,
            "RealmId": realm_id,
        }

    async def attach_estimate_pdf(
        self,
        *,
        estimate_id: str,
        realm_id: str,
        document: RenderedDocument,
        authorization: str | None,
    ) -> httpx.Response:
        # Content-Type is left to httpx so the multipart boundary matches the body
        headers = {"Cache-Control": "no-cache"}
        if authorization:
            headers["Authorization"] = authorization

        logger.info(
            "attaching %s (%d bytes) to estimate %s realm=%s",
            document.file_name,
            len(document.content),
            estimate_id,
            realm_id,
        )
        response = await self._client.post(
            self._url,
            params={"RealmId": realm_id},
            data=self.build_form(estimate_id, realm_id),
            files={"FilePdf": (document.file_name, document.content, document.mime_type)},
            headers=headers,
        )
        if not response.is_success:
            logger.warning(
                "estimate attachment rejected: status=%s body=%s",
                response.status_code,
                response.text[:500],
            )
        return response


__all__ = ["ATTACHMENT_PATH", "QuickBooksAttachmentClient"]
