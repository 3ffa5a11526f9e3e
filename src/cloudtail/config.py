"""Application configuration contract."""

from __future__ import annotations

import logging
import warnings
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudtail.dispatch.controller import Controller
from cloudtail.errors import ConfigurationError
from cloudtail.notifiers.factory import build_notifier
from cloudtail.stashes.models import Stash
from cloudtail.wire import describe_validation_error, fold_object

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")
    log_json: bool | None = Field(alias="LOG_JSON", default=None)
    config_path: str = Field(alias="CLOUDTAIL_CONFIG", default="")

    # Security: bind host defaults to loopback
    bind_host: str = Field(alias="BIND_HOST", default="127.0.0.1")
    bind_port: int = Field(alias="BIND_PORT", default=8888)


class FileConfig(BaseModel):
    """Shape of the JSON config file passed with ``-f``."""

    model_config = ConfigDict(extra="ignore")

    listen: str = ""
    debug: bool = False
    notifiers: dict[str, dict[str, str]] = Field(default_factory=dict)
    stashes: list[Stash] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        return fold_object(data, cls.model_fields)

    @field_validator("notifiers", mode="before")
    @classmethod
    def _null_notifier_settings(cls, value: Any) -> Any:
        # "stdout": null and "token": null read as empty, not as errors
        if not isinstance(value, dict):
            return value
        normalized: dict[object, object] = {}
        for name, settings in value.items():
            if settings is None:
                settings = {}
            elif isinstance(settings, dict):
                settings = {key: "" if item is None else item for key, item in settings.items()}
            normalized[name] = settings
        return normalized

    def listen_port(self) -> int | None:
        """Port part of ``listen`` ("8888", ":8888" or "host:8888"), if any."""
        _, _, port = self.listen.strip().rpartition(":")
        if not port:
            return None
        try:
            return int(port)
        except ValueError as exc:
            raise ConfigurationError(f"invalid listen address {self.listen!r}") from exc


def load_file_config(path: str | Path) -> FileConfig:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"could not read config {path}: {exc}") from exc
    try:
        return FileConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"invalid config {path}: {describe_validation_error(exc)}"
        ) from exc


def build_controller(config: FileConfig) -> Controller:
    """Create a controller with the configured notifiers and seed stashes."""
    controller = Controller()
    for type_name, notifier_config in config.notifiers.items():
        controller.add_notifier(build_notifier(type_name, notifier_config))
    for stash in config.stashes:
        stash_id = controller.add_stash(stash)
        logger.debug("seeded stash %d from config", stash_id)
    return controller


def load_controller(path: str | Path | None) -> Controller:
    if not path:
        return Controller()
    return build_controller(load_file_config(path))


def validate_settings_for_env(settings: Settings) -> None:
    # Warn if binding to 0.0.0.0 in production
    if settings.app_env == "prod" and settings.bind_host == "0.0.0.0":
        msg = (
            "SECURITY WARNING: BIND_HOST=0.0.0.0 in production. "
            "Inbound events are not authenticated. "
            "Set BIND_HOST=127.0.0.1 and use a reverse proxy."
        )
        logger.warning(msg)
        warnings.warn(msg, stacklevel=2)

    if settings.app_env != "prod":
        return

    if not settings.config_path.strip():
        raise ValueError("invalid production configuration: CLOUDTAIL_CONFIG")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
