"""Notifier protocol for event delivery sinks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cloudtail.events.models import Event


@runtime_checkable
class Notifier(Protocol):
    """Protocol that all notifiers must implement."""

    @property
    def name(self) -> str:
        """Stable identifier for this sink (e.g. 'stdout', 'hipchat')."""
        ...

    def send(self, event: Event) -> None:
        """Deliver one event. Raises DeliveryError when the sink rejects it."""
        ...
