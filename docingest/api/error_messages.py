"""Pulls a human-readable message out of whatever error body the backend sent."""

import json
from collections.abc import Mapping
from typing import Any

GENERIC_ERROR = "An unexpected error occurred"

_MESSAGE_KEYS = ("message", "detail", "error")


def normalize_error_message(value: Any) -> str:
    """Recursively extract a message from strings, lists, and nested objects.

    FastAPI style ``{"detail": [...]}`` bodies come out joined with ", ".
    """
    if value is None:
        return GENERIC_ERROR
    if isinstance(value, str):
        return value or GENERIC_ERROR
    if isinstance(value, (bool, int, float)):
        return str(value)
    if isinstance(value, list):
        parts = [normalize_error_message(item) for item in value]
        parts = [p for p in parts if p and p != GENERIC_ERROR]
        return ", ".join(parts) if parts else GENERIC_ERROR
    if isinstance(value, Mapping):
        for key in _MESSAGE_KEYS:
            if value.get(key):
                nested = normalize_error_message(value[key])
                if nested != GENERIC_ERROR:
                    return nested
        try:
            encoded = json.dumps(value, default=str)
        except (TypeError, ValueError):
            return GENERIC_ERROR
        return encoded if encoded not in ("{}", "[]") else GENERIC_ERROR
    return GENERIC_ERROR
