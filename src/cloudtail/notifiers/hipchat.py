"""HipChat room notifier using the v2 room notification API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

import httpx

from cloudtail.errors import ConfigurationError, DeliveryError

if TYPE_CHECKING:
    from cloudtail.events.models import Event

logger = logging.getLogger(__name__)

HIPCHAT_DEFAULT_ENDPOINT = "https://api.hipchat.com"


class HipchatNotifier:
    """Posts the id of each delivered event to a HipChat room."""

    def __init__(
        self,
        *,
        room: str,
        token: str,
        sender: str,
        endpoint: str = HIPCHAT_DEFAULT_ENDPOINT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.room = room
        self.token = token
        self.sender = sender
        self.endpoint = (endpoint or HIPCHAT_DEFAULT_ENDPOINT).rstrip("/")
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, str],
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> HipchatNotifier:
        """Build from a flat config map with keys room, token, from and endpoint."""
        for key in ("room", "token", "from"):
            if not config.get(key):
                raise ConfigurationError(f"hipchat: missing {key}")
        notifier = cls(
            room=str(config["room"]),
            token=str(config["token"]),
            sender=str(config["from"]),
            endpoint=str(config.get("endpoint") or HIPCHAT_DEFAULT_ENDPOINT),
            transport=transport,
        )
        logger.info(
            "hipchat notifier configured (endpoint=%s room=%s from=%s)",
            notifier.endpoint,
            notifier.room,
            notifier.sender,
        )
        return notifier

    @property
    def name(self) -> str:
        return "hipchat"

    @property
    def url(self) -> str:
        return f"{self.endpoint}/v2/room/{self.room}/notification"

    def send(self, event: Event) -> None:
        payload = {"from": self.sender, "message": event.event_id or ""}
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        try:
            with httpx.Client(transport=self._transport) as client:
                response = client.post(self.url, json=payload, headers=headers)
                body = response.text
        except httpx.HTTPError as exc:
            raise DeliveryError(f"hipchat request failed: {exc}", notifier=self.name) from exc
        if response.status_code >= 300:
            raise DeliveryError(
                f"unexpected status {response.status_code} - {body}",
                notifier=self.name,
            )
