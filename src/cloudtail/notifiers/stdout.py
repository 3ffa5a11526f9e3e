"""Console notifier writing one JSON line per event."""

from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING, TextIO

from cloudtail.errors import DeliveryError

if TYPE_CHECKING:
    from cloudtail.events.models import Event


class StdoutNotifier:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "stdout"

    def send(self, event: Event) -> None:
        line = event.to_json() + "\n"
        # sys.stdout is looked up per call so redirection after startup is honored
        stream = self._stream if self._stream is not None else sys.stdout
        try:
            with self._lock:
                stream.write(line)
                stream.flush()
        except (OSError, ValueError) as exc:
            raise DeliveryError(f"stdout write failed: {exc}", notifier=self.name) from exc
