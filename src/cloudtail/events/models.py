"""CloudTrail event model definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from cloudtail.errors import DecodeError
from cloudtail.wire import describe_validation_error, fold_object


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        return fold_object(data, [field.alias or name for name, field in cls.model_fields.items()])


class EventResource(_WireModel):
    resource_name: str | None = Field(alias="ResourceName", default=None)
    resource_type: str | None = Field(alias="ResourceType", default=None)


class Event(_WireModel):
    """One CloudTrail occurrence as submitted by the event source.

    Aliases follow the AWS SDK ``cloudtrail.Event`` JSON shape; they are the
    integration contract with the upstream and must not be renamed.
    """

    event_id: str | None = Field(alias="EventId", default=None)
    event_name: str | None = Field(alias="EventName", default=None)
    username: str | None = Field(alias="Username", default=None)
    event_time: datetime | None = Field(alias="EventTime", default=None)
    event_source: str | None = Field(alias="EventSource", default=None)
    access_key_id: str | None = Field(alias="AccessKeyId", default=None)
    read_only: str | None = Field(alias="ReadOnly", default=None)
    cloudtrail_event: str | None = Field(alias="CloudTrailEvent", default=None)
    resources: tuple[EventResource, ...] = Field(alias="Resources", default=())

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, exclude_defaults=True)


def decode_event(raw: bytes | str) -> Event:
    """Decode one JSON object into an Event, raising DecodeError on bad input."""
    try:
        return Event.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(describe_validation_error(exc)) from exc
