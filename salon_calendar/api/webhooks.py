from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Request, Response
from pydantic import ValidationError

from salon_calendar.application.dto.push_event import PushEnvelopeDTO
from salon_calendar.infrastructure.realtime.push_signature import SIGNATURE_HEADER, PushSignature
from salon_calendar.wiring.dependencies import get_realtime_bridge


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/webhooks/realtime")
async def realtime_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
) -> Response:
    body = await request.body()
    if not PushSignature.from_settings().verify(body, request.headers.get(SIGNATURE_HEADER)):
        return Response(status_code=403)

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
    except ValueError:
        logger.exception("Failed to parse push body")
        return Response(status_code=400)

    try:
        envelope = PushEnvelopeDTO.model_validate(payload)
    except ValidationError as e:
        logger.warning("Invalid push envelope", extra={"error": str(e)})
        return Response(status_code=400)

    try:
        bridge = get_realtime_bridge()
    except Exception as e:
        logger.exception("Failed to initialize realtime bridge", extra={"error": str(e)})
        return Response(status_code=500)

    logger.info("Push received", extra={"event": envelope.event})
    background_tasks.add_task(bridge.handle_raw, envelope.event, envelope.payload)
    return Response(status_code=200)
