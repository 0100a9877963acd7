"""journaled — canonical event envelopes with scoped tag context.

Application events subclass :class:`JournaledEvent`; their envelopes are
built once, tagged from the current :mod:`journaled.tags` context and handed
to a :class:`JournalWriter` for delivery.
"""

from __future__ import annotations

from .config import JournaledSettings, configure, get_settings, reset_settings
from .delivery import JournaledDelivery
from .event import (
    RESERVED_ATTRIBUTES,
    JournaledEvent,
    build_envelope,
    journal_attributes,
)
from .exceptions import (
    DuplicateEventTypeError,
    JournaledError,
    JournaledSerializationError,
    MissingAttributeImplementation,
    WriterNotConfiguredError,
)
from .memory import InMemoryJournalTransport
from .naming import event_type_name, schema_name, underscore
from .ports import IJournalTransport
from .primitives import IIDGenerator, UUID4Generator, utc_now
from .registry import JournaledEventRegistry
from .serialization import EnvelopeSerializer
from .tags import (
    clear_tags,
    current_tags,
    propagate_tags,
    tag,
    tagged,
    with_tags,
)
from .writer import JournalWriter, get_default_writer, set_default_writer

__all__: list[str] = [
    # Events
    "JournaledEvent",
    "RESERVED_ATTRIBUTES",
    "build_envelope",
    "journal_attributes",
    "JournaledEventRegistry",
    # Naming
    "event_type_name",
    "schema_name",
    "underscore",
    # Tags
    "clear_tags",
    "current_tags",
    "propagate_tags",
    "tag",
    "tagged",
    "with_tags",
    # Delivery
    "EnvelopeSerializer",
    "IJournalTransport",
    "InMemoryJournalTransport",
    "JournaledDelivery",
    "JournalWriter",
    "get_default_writer",
    "set_default_writer",
    # Configuration
    "JournaledSettings",
    "configure",
    "get_settings",
    "reset_settings",
    # Primitives
    "IIDGenerator",
    "UUID4Generator",
    "utc_now",
    # Exceptions
    "DuplicateEventTypeError",
    "JournaledError",
    "JournaledSerializationError",
    "MissingAttributeImplementation",
    "WriterNotConfiguredError",
]
