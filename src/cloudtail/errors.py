"""Cloudtail exception hierarchy.

All cloudtail-specific exceptions inherit from CloudtailError,
enabling structured error handling and cleaner catch clauses.
"""


class CloudtailError(Exception):
    """Base exception for all cloudtail errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class DecodeError(CloudtailError):
    """Malformed inbound JSON for an event, a stash or a config file."""


class ConfigurationError(CloudtailError):
    """Invalid or missing configuration."""


class DeliveryError(CloudtailError):
    """A notifier failed to accept an event."""

    def __init__(self, message: str = "", *, notifier: str = "") -> None:
        super().__init__(message, retryable=False)
        self.notifier = notifier
