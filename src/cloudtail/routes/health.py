"""Health and metrics routes."""

from fastapi import APIRouter, Depends

from cloudtail.dispatch.controller import Controller
from cloudtail.routes.dependencies import get_controller

router = APIRouter(tags=["health"])


@router.get("/metrics")
def metrics(controller: Controller = Depends(get_controller)) -> dict[str, int]:  # noqa: B008
    """Dispatch counters in JSON format."""
    return controller.stats()


@router.get("/healthz")
async def healthz() -> dict[str, bool]:
    return {"ok": True}
