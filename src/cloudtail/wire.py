"""Helpers shared by the JSON-facing models."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ValidationError


def fold_object(data: object, names: Iterable[str]) -> object:
    """Normalize a decoded JSON object before model validation.

    Keys are matched case-insensitively against ``names`` and ``null`` values
    are dropped, so they fall back to the field default. Non-dict input is
    returned unchanged for the model to reject.
    """
    if not isinstance(data, dict):
        return data
    canonical = {name.lower(): name for name in names}
    folded: dict[object, object] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(key, str):
            key = canonical.get(key.lower(), key)
        folded[key] = value
    return folded


def describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = str(first.get("msg", "invalid payload"))
    return f"{loc}: {msg}" if loc else msg
