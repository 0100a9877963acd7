"""InMemoryJournalTransport — IJournalTransport with assertion helpers for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .ports import IJournalTransport

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .delivery import JournaledDelivery


class InMemoryJournalTransport(IJournalTransport):
    """Records deliveries instead of sending them anywhere.

    ``get_delivered()`` and ``assert_delivered()`` support test assertions.
    """

    def __init__(self) -> None:
        self._delivered: list[tuple[JournaledDelivery, dict[str, Any]]] = []

    async def deliver(
        self, delivery: JournaledDelivery, enqueue_options: Mapping[str, Any]
    ) -> None:
        self._delivered.append((delivery, dict(enqueue_options)))

    def get_delivered(self) -> list[tuple[JournaledDelivery, dict[str, Any]]]:
        """Return all (delivery, enqueue_options) pairs so far."""
        return list(self._delivered)

    def assert_delivered(
        self,
        event_type: str,
        count: int = 1,
        stream_name: str | None = None,
    ) -> None:
        """Assert that exactly `count` deliveries with this event_type were made.

        Optionally restrict to a specific stream. Raises AssertionError if not met.
        """
        delivered = [d for d, _ in self._delivered]
        if stream_name is not None:
            delivered = [d for d in delivered if d.stream_name == stream_name]
        matching = [d for d in delivered if d.event_type == event_type]
        assert len(matching) == count, (
            f"Expected {count} delivery(ies) with event_type={event_type!r}, "
            f"got {len(matching)}. Delivered: {[d.event_type for d in delivered]}"
        )

    def clear(self) -> None:
        self._delivered.clear()
