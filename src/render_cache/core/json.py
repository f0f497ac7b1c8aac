"""Deterministic JSON encoding for cache keys."""

from typing import Any
import json

import msgspec
import orjson


class JSONEncodeError(Exception):
    """Value could not be serialized."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def _default(obj: Any) -> Any:
    """Encode models and plain objects by their fields."""
    if callable(obj):
        raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dict__"):
        return vars(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def _stringify(obj: Any) -> Any:
    try:
        return _default(obj)
    except TypeError:
        return str(obj)


_encoder = msgspec.json.Encoder(enc_hook=_default, order="sorted")


def stable_json_dumps(obj: Any) -> str:
    """
    Encode object to compact JSON with sorted keys.

    Equal structures always produce the same string, which makes the output
    usable as part of a cache key.

    Args:
        obj: Object to encode

    Returns:
        JSON string

    Raises:
        JSONEncodeError: If no backend can encode the object
    """
    # orjson first (fastest)
    try:
        return orjson.dumps(obj, default=_default, option=orjson.OPT_SORT_KEYS).decode("utf-8")
    except (TypeError, ValueError, OverflowError):
        # Edge cases, e.g. integers outside 64-bit range or non-str keys
        pass

    try:
        return _encoder.encode(obj).decode("utf-8")
    except (TypeError, ValueError, OverflowError, RecursionError):
        pass

    # stdlib as last resort, stringifying whatever else is left
    try:
        return json.dumps(obj, sort_keys=True, separators=(",", ":"), default=_stringify)
    except (TypeError, ValueError) as e:
        raise JSONEncodeError(f"Cannot serialize {type(obj).__name__}: {e}", e)


__all__ = ["stable_json_dumps", "JSONEncodeError"]
