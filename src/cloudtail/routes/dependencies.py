"""FastAPI dependencies shared by route modules."""

from fastapi import Request

from cloudtail.dispatch.controller import Controller


def get_controller(request: Request) -> Controller:
    return request.app.state.controller
