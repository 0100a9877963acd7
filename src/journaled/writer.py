"""JournalWriter — resolves delivery fields and hands events to a transport."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .config import JournaledSettings, get_settings
from .delivery import JournaledDelivery
from .exceptions import WriterNotConfiguredError
from .serialization import EnvelopeSerializer

if TYPE_CHECKING:
    from .event import JournaledEvent
    from .ports import IJournalTransport

logger = logging.getLogger("journaled.writer")


class JournalWriter:
    """Builds one delivery per event and passes it to the transport.

    Settings are read at journal time unless pinned in the constructor.
    Transport errors propagate unchanged.

    Usage::

        writer = JournalWriter(InMemoryJournalTransport())
        await writer.journal(OrderPlaced(order_id="o-1"))
    """

    def __init__(
        self,
        transport: IJournalTransport,
        settings: JournaledSettings | None = None,
        serializer: EnvelopeSerializer | None = None,
    ) -> None:
        self._transport = transport
        self._settings = settings
        self._serializer = serializer or EnvelopeSerializer()

    @property
    def settings(self) -> JournaledSettings:
        if self._settings is not None:
            return self._settings
        return get_settings()

    def build_delivery(self, event: JournaledEvent) -> JournaledDelivery:
        """Build the envelope and resolve the routing fields for *event*."""
        envelope = event.journaled_attributes()
        return JournaledDelivery(
            envelope=envelope,
            serialized_event=self._serializer.serialize(envelope),
            schema_name=event.journaled_schema_name(),
            event_type=str(envelope["event_type"]),
            partition_key=event.journaled_partition_key(),
            stream_name=event.journaled_stream_name(),
            app_name=self.settings.app_name,
        )

    async def journal(self, event: JournaledEvent) -> None:
        settings = self.settings
        delivery = self.build_delivery(event)
        if not settings.enabled:
            logger.debug(
                "Journaling disabled; skipped %s (%s)",
                delivery.event_type,
                delivery.event_id,
            )
            return

        enqueue_options = {
            **settings.default_enqueue_opts,
            **event.journaled_enqueue_opts(),
        }
        await self._transport.deliver(delivery, enqueue_options)
        logger.info(
            "Journaled %s (%s) to stream %s",
            delivery.event_type,
            delivery.event_id,
            delivery.stream_name or "<transport default>",
        )


_default_writer: JournalWriter | None = None


def get_default_writer() -> JournalWriter:
    """Return the process default writer.

    Raises:
        WriterNotConfiguredError: if :func:`set_default_writer` was never called.
    """
    if _default_writer is None:
        raise WriterNotConfiguredError(
            "No default JournalWriter configured; call set_default_writer() "
            "or pass a writer to journal()."
        )
    return _default_writer


def set_default_writer(writer: JournalWriter | None) -> None:
    """Set (or clear, with ``None``) the process default writer."""
    global _default_writer
    _default_writer = writer
