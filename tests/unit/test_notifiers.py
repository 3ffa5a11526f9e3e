import io
import json

import httpx
import pytest

from cloudtail.errors import ConfigurationError, DeliveryError
from cloudtail.events.models import Event
from cloudtail.notifiers.base import Notifier
from cloudtail.notifiers.factory import build_notifier
from cloudtail.notifiers.hipchat import HIPCHAT_DEFAULT_ENDPOINT, HipchatNotifier
from cloudtail.notifiers.stdout import StdoutNotifier

HIPCHAT_CONFIG = {"room": "ops", "token": "secret", "from": "cloudtail"}


def test_notifiers_satisfy_protocol() -> None:
    assert isinstance(StdoutNotifier(), Notifier)
    assert isinstance(HipchatNotifier.from_config(HIPCHAT_CONFIG), Notifier)


def test_stdout_writes_one_json_line_per_event() -> None:
    stream = io.StringIO()
    notifier = StdoutNotifier(stream)
    notifier.send(Event(event_id="e1", event_name="CreateUser"))
    notifier.send(Event(event_id="e2"))
    lines = stream.getvalue().splitlines()
    assert notifier.name == "stdout"
    assert [json.loads(line) for line in lines] == [
        {"EventId": "e1", "EventName": "CreateUser"},
        {"EventId": "e2"},
    ]


def test_stdout_defaults_to_process_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    StdoutNotifier().send(Event(event_id="e3"))
    assert json.loads(capsys.readouterr().out) == {"EventId": "e3"}


def test_stdout_write_failure_is_delivery_error() -> None:
    stream = io.StringIO()
    stream.close()
    with pytest.raises(DeliveryError):
        StdoutNotifier(stream).send(Event(event_id="e4"))


@pytest.mark.parametrize("missing", ["room", "token", "from"])
def test_hipchat_requires_room_token_and_from(missing: str) -> None:
    config = {k: v for k, v in HIPCHAT_CONFIG.items() if k != missing}
    with pytest.raises(ConfigurationError, match=f"missing {missing}"):
        HipchatNotifier.from_config(config)


@pytest.mark.parametrize("blank", ["", None])
def test_hipchat_rejects_empty_values(blank: str | None) -> None:
    config = {**HIPCHAT_CONFIG, "token": blank}
    with pytest.raises(ConfigurationError, match="missing token"):
        HipchatNotifier.from_config(config)  # type: ignore[arg-type]


def test_hipchat_accepts_whitespace_values() -> None:
    notifier = HipchatNotifier.from_config({**HIPCHAT_CONFIG, "room": " ", "from": "\t"})
    assert notifier.room == " "
    assert notifier.sender == "\t"


def test_hipchat_endpoint_defaults() -> None:
    notifier = HipchatNotifier.from_config(HIPCHAT_CONFIG)
    assert notifier.endpoint == HIPCHAT_DEFAULT_ENDPOINT
    assert notifier.url == "https://api.hipchat.com/v2/room/ops/notification"
    assert notifier.name == "hipchat"


def test_hipchat_posts_event_id_with_bearer_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    notifier = HipchatNotifier.from_config(
        {**HIPCHAT_CONFIG, "endpoint": "http://hipchat.local/"},
        transport=httpx.MockTransport(handler),
    )
    notifier.send(Event(event_id="e5", event_name="CreateUser"))

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://hipchat.local/v2/room/ops/notification"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content.decode("utf-8")) == {"from": "cloudtail", "message": "e5"}


@pytest.mark.parametrize("status_code", [300, 404, 500])
def test_hipchat_status_at_or_above_300_is_delivery_error(status_code: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text="room not found")

    notifier = HipchatNotifier.from_config(HIPCHAT_CONFIG, transport=httpx.MockTransport(handler))
    with pytest.raises(DeliveryError, match=f"unexpected status {status_code} - room not found"):
        notifier.send(Event(event_id="e6"))


def test_hipchat_transport_failure_is_delivery_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    notifier = HipchatNotifier.from_config(HIPCHAT_CONFIG, transport=httpx.MockTransport(handler))
    with pytest.raises(DeliveryError, match="hipchat request failed"):
        notifier.send(Event(event_id="e7"))


def test_build_notifier_known_types() -> None:
    assert isinstance(build_notifier("stdout", {}), StdoutNotifier)
    assert isinstance(build_notifier("hipchat", HIPCHAT_CONFIG), HipchatNotifier)


def test_build_notifier_rejects_unknown_type() -> None:
    with pytest.raises(ConfigurationError, match="unknown notifier type 'slack'"):
        build_notifier("slack", {})


def test_build_notifier_wraps_hipchat_config_errors() -> None:
    with pytest.raises(ConfigurationError, match="could not create Hipchat notifier: .*missing token"):
        build_notifier("hipchat", {"room": "ops", "from": "cloudtail"})
