"""Stash (suppression rule) model and the match decision."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from cloudtail.errors import DecodeError
from cloudtail.events.models import Event
from cloudtail.wire import describe_validation_error, fold_object


class Stash(BaseModel):
    """A suppression rule.

    Only ``event_name`` and ``user_name`` take part in matching. ``ttl``,
    ``expiration``, ``regex``, ``resource_name``, ``resource_type`` and
    ``destinations`` are accepted and echoed back but never consulted.
    """

    model_config = ConfigDict(extra="ignore")

    event_name: str = ""
    user_name: str = ""
    ttl: int = 0
    expiration: datetime | None = None
    regex: str = ""
    resource_name: str = ""
    resource_type: str = ""
    description: str = ""
    destinations: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        return fold_object(data, cls.model_fields)

    def is_empty(self) -> bool:
        return not (self.event_name or self.user_name)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_defaults=True)


def matches(stash: Stash, event: Event, destination: str = "") -> bool:
    """Return True if ``stash`` suppresses ``event``.

    Any set filter equal to the event field is enough; unset filters never
    match, so an empty stash is inert. ``destination`` names the notifier
    under consideration and is currently ignored.
    """
    del destination
    if stash.event_name and stash.event_name == event.event_name:
        return True
    if stash.user_name and stash.user_name == event.username:
        return True
    return False


def decode_stash(raw: bytes | str) -> Stash:
    """Decode one JSON object into a Stash, raising DecodeError on bad input."""
    try:
        return Stash.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(describe_validation_error(exc)) from exc
