"""IJournalTransport — delivery port for built envelopes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .delivery import JournaledDelivery


@runtime_checkable
class IJournalTransport(Protocol):
    """
    Port for handing a built envelope to durable delivery.

    Concrete adapters own queueing, retries, batching and the wire format.
    """

    async def deliver(
        self, delivery: JournaledDelivery, enqueue_options: Mapping[str, Any]
    ) -> None:
        """
        Deliver one event.

        Args:
            delivery: Fully built envelope plus resolved routing fields.
            enqueue_options: Job/queue options resolved for this event
                (``priority``, ``queue``, …).
        """
        ...
