"""Stash registration and listing routes."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from cloudtail.dispatch.controller import Controller
from cloudtail.errors import DecodeError
from cloudtail.routes.dependencies import get_controller
from cloudtail.stashes.models import decode_stash

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stashes"])


@router.post("/stash")
async def add_stash(
    request: Request,
    controller: Controller = Depends(get_controller),  # noqa: B008
) -> JSONResponse:
    body = await request.body()
    try:
        stash = decode_stash(body)
    except DecodeError as exc:
        logger.info("fn=add_stash event=decodeStash err=%r", str(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )

    # the write lock waits for in-flight dispatches, so keep it off the loop
    stash_id = await asyncio.to_thread(controller.add_stash, stash)
    logger.info("fn=add_stash event=addStash id=%d", stash_id)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"id": stash_id, "message": f"stash {stash_id} added"},
    )


@router.get("/stashes")
def list_stashes(
    controller: Controller = Depends(get_controller),  # noqa: B008
) -> dict[str, object]:
    stashes = controller.list_stashes()
    return {"stashes": {str(stash_id): stash.to_wire() for stash_id, stash in stashes.items()}}
