from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse, Response

from inspection_portal.application import get_document_service
from inspection_portal.domain import ForwardedCredentials, RenderFailure

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


@router.get("/pdf/{entity_id}")
async def download_report_pdf(
    entity_id: str,
    request: Request,
    report_type: str | None = Query(default=None, alias="type"),
) -> Response:
    """Render the internal report page of an entity and return it as a PDF download."""
    try:
        service = get_document_service()
        report_request = service.build_request(
            entity_id,
            report_type,
            origin=str(request.base_url),
            credentials=ForwardedCredentials.from_headers(request.headers),
        )
        document = await service.render(report_request)
        return Response(
            content=document.content,
            media_type=document.mime_type,
            headers={"Content-Disposition": document.content_disposition},
        )
    except RenderFailure as exc:
        logger.warning("pdf render failed for %s: %s", entity_id, exc.message)
        return PlainTextResponse(f"PDF_ERROR: {exc.message}", status_code=500)
    except Exception as exc:
        logger.exception("pdf route fatal error")
        return PlainTextResponse(f"PDF_FATAL: {exc}", status_code=500)
