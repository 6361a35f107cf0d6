from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

from inspection_portal.application import get_attachment_service
from inspection_portal.domain import ForwardedCredentials, PortalError, ValidationFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quickbooks", tags=["quickbooks"])


@router.post("/attach-estimate-pdf")
async def attach_estimate_pdf(request: Request) -> Response:
    """Render the report PDF and attach it to an accounting estimate.

    The accounting backend's status and body are returned unchanged so callers
    see the real upstream error.
    """
    try:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise ValidationFailure("Cuerpo JSON inválido") from exc

        service = get_attachment_service()
        attachment = service.parse(payload)
        result = await service.relay(
            attachment,
            origin=str(request.base_url),
            credentials=ForwardedCredentials.from_headers(request.headers),
        )
    except PortalError as exc:
        logger.warning("attach-estimate-pdf rejected: %s", exc.message)
        return PlainTextResponse(exc.message, status_code=exc.http_status)
    except Exception as exc:
        logger.exception("attach-estimate-pdf route error")
        return PlainTextResponse(str(exc) or "Error inesperado", status_code=500)

    return Response(
        content=result.content or b"OK",
        status_code=result.status_code,
        media_type=result.content_type or "text/plain",
    )
