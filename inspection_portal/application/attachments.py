"""Relay a rendered report PDF to an accounting estimate as an attachment."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from inspection_portal.core.config import Settings, get_settings
from inspection_portal.core.report_kinds import ReportCatalogue, get_report_catalogue
from inspection_portal.core.schema import AttachEstimatePayload
from inspection_portal.domain import AttachmentRequest, ForwardedCredentials, ValidationFailure
from inspection_portal.infrastructure import (
    DocumentDeliveryClient,
    QuickBooksAttachmentClient,
    get_http_client,
)

logger = logging.getLogger(__name__)

DEFAULT_REPORT_TYPE = "workorder"


@dataclass(slots=True)
class RelayResult:
    """Upstream answer returned to the caller unchanged."""

    status_code: int
    content: bytes
    content_type: str | None = None


def parse_attachment_request(payload: Any, default_realm_id: str | None) -> AttachmentRequest:
    """Validate the relay body; raise :class:`ValidationFailure` when unusable."""

    if not isinstance(payload, dict):
        raise ValidationFailure("El cuerpo debe ser un objeto JSON")
    try:
        body = AttachEstimatePayload.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(str(error["loc"][-1]) for error in exc.errors())
        raise ValidationFailure(f"Parámetros inválidos: {fields}") from exc

    entity_id = body.work_order_id or body.entity_id
    if not body.quick_book_estimate_id or not entity_id:
        raise ValidationFailure("Faltan parámetros: quickBookEstimateId o workOrderId")

    realm_id = body.realm_id or default_realm_id
    if not realm_id:
        raise ValidationFailure("Falta realmId y QUICKBOOKS_REALM_ID no está configurado")

    return AttachmentRequest(
        quickbook_estimate_id=body.quick_book_estimate_id,
        entity_id=entity_id,
        report_kind=body.type or DEFAULT_REPORT_TYPE,
        realm_id=realm_id,
    )


class AttachmentRelayService:
    """Fetch the PDF from the document endpoint, then upload it to the estimate."""

    def __init__(self, settings: Settings, catalogue: ReportCatalogue) -> None:
        self._settings = settings
        self._catalogue = catalogue

    def parse(self, payload: Any) -> AttachmentRequest:
        return parse_attachment_request(payload, self._settings.quickbooks_realm_id)

    async def relay(
        self,
        request: AttachmentRequest,
        *,
        origin: str,
        credentials: ForwardedCredentials,
    ) -> RelayResult:
        fallback_name = self._catalogue.resolve(request.report_kind).file_name(request.entity_id)

        async with get_http_client(float(self._settings.upstream_timeout_seconds)) as client:
            document = await DocumentDeliveryClient(client, origin).fetch(
                request.entity_id,
                request.report_kind,
                credentials,
                fallback_file_name=fallback_name,
            )
            response = await QuickBooksAttachmentClient(
                client, self._settings.api_base_url
            ).attach_estimate_pdf(
                estimate_id=request.quickbook_estimate_id,
                realm_id=request.realm_id,
                document=document,
                authorization=credentials.authorization,
            )

        return RelayResult(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("content-type"),
        )


def get_attachment_service() -> AttachmentRelayService:
    return AttachmentRelayService(get_settings(), get_report_catalogue())


__all__ = [
    "AttachmentRelayService",
    "RelayResult",
    "get_attachment_service",
    "parse_attachment_request",
]
