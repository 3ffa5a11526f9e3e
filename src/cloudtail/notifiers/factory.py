"""Notifier construction from configuration type names."""

from __future__ import annotations

from collections.abc import Mapping

from cloudtail.errors import ConfigurationError
from cloudtail.notifiers.base import Notifier
from cloudtail.notifiers.hipchat import HipchatNotifier
from cloudtail.notifiers.stdout import StdoutNotifier


def build_notifier(type_name: str, config: Mapping[str, str] | None = None) -> Notifier:
    if type_name == "stdout":
        return StdoutNotifier()
    if type_name == "hipchat":
        try:
            return HipchatNotifier.from_config(config or {})
        except ConfigurationError as exc:
            raise ConfigurationError(f"could not create Hipchat notifier: {exc}") from exc
    raise ConfigurationError(f"unknown notifier type '{type_name}'")
