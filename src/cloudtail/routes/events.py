"""Inbound CloudTrail event submission."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from cloudtail.dispatch.controller import Controller
from cloudtail.errors import DecodeError
from cloudtail.events.models import decode_event
from cloudtail.logging import bind_context, clear_context
from cloudtail.routes.dependencies import get_controller

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.post("/test")
async def submit_event(
    request: Request,
    controller: Controller = Depends(get_controller),  # noqa: B008
) -> JSONResponse:
    """Decode one event and dispatch it to every registered notifier.

    Delivery outcomes are logged and counted; the submitter only learns
    whether the event was accepted.
    """
    body = await request.body()
    try:
        event = decode_event(body)
    except DecodeError as exc:
        logger.info("fn=submit_event event=decodeEvent err=%r", str(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )

    bind_context(event_id=event.event_id)
    try:
        await asyncio.to_thread(controller.process, event)
    finally:
        clear_context()
    return JSONResponse(status_code=status.HTTP_200_OK, content={"accepted": True})
