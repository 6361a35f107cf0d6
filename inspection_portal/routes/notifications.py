from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from inspection_portal.application import EmailNotConfigured, get_email_service
from inspection_portal.core.schema import InspectionEmailPayload
from inspection_portal.infrastructure import EmailDeliveryError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])


@router.post("/send-inspection-email")
async def send_inspection_email(request: Request) -> JSONResponse:
    try:
        payload = InspectionEmailPayload.model_validate(await request.json())
    except (ValueError, ValidationError):
        return JSONResponse({"error": "invalid request body"}, status_code=400)
    if not payload.email:
        return JSONResponse({"error": "email is required"}, status_code=400)

    try:
        data = await get_email_service().send_confirmation(payload.email, payload.name)
    except EmailNotConfigured as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)
    except EmailDeliveryError as exc:
        logger.error("email provider error: %s", exc)
        return JSONResponse({"error": exc.payload}, status_code=500)
    except Exception as exc:
        logger.exception("send-inspection-email failed")
        return JSONResponse({"error": str(exc) or "unexpected error"}, status_code=500)

    return JSONResponse({"success": True, "data": data})
