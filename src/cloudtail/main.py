"""FastAPI entrypoint."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cloudtail.config import (
    build_controller,
    get_settings,
    load_file_config,
    validate_settings_for_env,
)
from cloudtail.dispatch.controller import Controller
from cloudtail.logging import configure_logging
from cloudtail.routes.events import router as events_router
from cloudtail.routes.health import router as health_router
from cloudtail.routes.stashes import router as stashes_router

logger = logging.getLogger(__name__)


def create_app(controller: Controller | None = None) -> FastAPI:
    """Build the HTTP app around ``controller``.

    Without a controller, the lifespan loads one from CLOUDTAIL_CONFIG (or
    starts empty); a ConfigurationError there aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "controller", None) is None:
            settings = get_settings()
            validate_settings_for_env(settings)
            configure_logging(settings.log_level, settings.log_json)
            if settings.config_path:
                file_config = load_file_config(settings.config_path)
                if file_config.debug:
                    configure_logging("DEBUG", settings.log_json)
                app.state.controller = build_controller(file_config)
            else:
                app.state.controller = Controller()
        logger.info(
            "cloudtail ready (notifiers=%s)",
            ",".join(app.state.controller.notifier_names()) or "-",
        )
        yield

    app = FastAPI(title="cloudtail", version="0.1.0", lifespan=lifespan)
    app.state.controller = controller
    app.include_router(health_router)
    app.include_router(events_router)
    app.include_router(stashes_router)
    return app


app = create_app()
