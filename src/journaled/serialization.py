"""EnvelopeSerializer — JSON encoding for built envelopes."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .exceptions import JournaledSerializationError


def _json_serializer(obj: Any) -> Any:
    """Serialize datetimes, nested read-only mappings and sets."""
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class EnvelopeSerializer:
    """Serialize envelopes to JSON bytes and decode them back to dicts.

    Decoding does not restore datetimes; consumers read ``created_at`` as an
    ISO-8601 string.
    """

    def serialize(self, envelope: Mapping[str, Any]) -> bytes:
        """Encode *envelope* to UTF-8 JSON bytes."""
        try:
            return json.dumps(dict(envelope), default=_json_serializer).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise JournaledSerializationError(str(e)) from e

    def deserialize(self, raw: bytes) -> dict[str, Any]:
        """Decode JSON bytes produced by :meth:`serialize`."""
        try:
            data = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise JournaledSerializationError(str(e)) from e
        if not isinstance(data, dict):
            raise JournaledSerializationError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        return data
