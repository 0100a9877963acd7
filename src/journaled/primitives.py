"""Identifier and clock strategies used when building envelopes."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Protocol


class IIDGenerator(Protocol):
    """Protocol for envelope identifier strategies."""

    def next_id(self) -> str:
        """Return a new identifier, unique with overwhelming probability."""
        ...


class UUID4Generator(IIDGenerator):
    """Random 128-bit UUIDv4 identifiers."""

    def next_id(self) -> str:
        return str(uuid.uuid4())


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)
