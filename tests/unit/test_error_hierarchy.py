"""Tests for error hierarchy."""

from cloudtail.errors import (
    CloudtailError,
    ConfigurationError,
    DecodeError,
    DeliveryError,
)


def test_hierarchy() -> None:
    assert issubclass(DecodeError, CloudtailError)
    assert issubclass(ConfigurationError, CloudtailError)
    assert issubclass(DeliveryError, CloudtailError)


def test_nothing_is_retryable() -> None:
    assert CloudtailError("test").retryable is False
    assert DecodeError("test").retryable is False
    assert ConfigurationError("test").retryable is False
    assert DeliveryError("test").retryable is False


def test_delivery_error_carries_notifier_name() -> None:
    err = DeliveryError("backend down", notifier="hipchat")
    assert str(err) == "backend down"
    assert err.notifier == "hipchat"


def test_catch_as_cloudtail_error() -> None:
    try:
        raise DeliveryError("test")
    except CloudtailError as exc:
        assert exc.retryable is False
