import os

import pytest

from cloudtail.config import get_settings
from cloudtail.events.models import Event
from cloudtail.logging import clear_context, configure_logging

configure_logging("DEBUG", json_output=False)


class RecordingNotifier:
    """Notifier double that records every event it is asked to send."""

    def __init__(self, name: str = "recording", error: Exception | None = None) -> None:
        self._name = name
        self._error = error
        self.sent: list[Event] = []

    @property
    def name(self) -> str:
        return self._name

    def send(self, event: Event) -> None:
        self.sent.append(event)
        if self._error is not None:
            raise self._error


@pytest.fixture(autouse=True)
def test_env():
    os.environ["APP_ENV"] = "test"
    os.environ.pop("CLOUDTAIL_CONFIG", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    clear_context()


@pytest.fixture
def recording_notifier_cls() -> type[RecordingNotifier]:
    return RecordingNotifier
