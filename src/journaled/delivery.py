"""JournaledDelivery — the record handed to a transport."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SkipValidation


class JournaledDelivery(BaseModel):
    """Immutable delivery record for a single journaled event.

    ``envelope`` is the built attribute mapping; ``serialized_event`` is its
    JSON encoding, ready for the wire.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    envelope: SkipValidation[Mapping[str, Any]]
    serialized_event: bytes
    schema_name: str
    event_type: str = Field(..., description="Envelope discriminator, e.g. 'order_placed'")
    partition_key: str
    stream_name: str | None = None
    app_name: str | None = None

    @property
    def event_id(self) -> str:
        return str(self.envelope["id"])
