"""JournaledEventRegistry — maps event types to their classes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from .exceptions import DuplicateEventTypeError, MissingAttributeImplementation

if TYPE_CHECKING:
    from .event import JournaledEvent

logger = logging.getLogger("journaled.registry")

EventT = TypeVar("EventT", bound="type[JournaledEvent]")


class JournaledEventRegistry:
    """Registry for ``event_type: str`` → ``type[JournaledEvent]``.

    Registration checks that every declared journaled attribute is
    implemented, so a missing implementation fails at import time rather
    than on the first build. ``register`` returns the class and works as a
    decorator.

    Usage::

        registry = JournaledEventRegistry()

        @registry.register
        class OrderPlaced(JournaledEvent):
            ...
    """

    def __init__(self) -> None:
        self._registry: dict[str, type[JournaledEvent]] = {}

    def register(self, event_class: EventT) -> EventT:
        """Validate and register *event_class* under its event type."""
        missing = event_class.missing_journaled_attributes()
        if missing:
            raise MissingAttributeImplementation(event_class, missing[0])

        event_type = event_class.event_type()
        existing = self._registry.get(event_type)
        if existing is not None and existing is not event_class:
            raise DuplicateEventTypeError(event_type, existing, event_class)

        self._registry[event_type] = event_class
        logger.debug(
            "Registered event type %s -> %s", event_type, event_class.__qualname__
        )
        return event_class

    def get(self, event_type: str) -> type[JournaledEvent] | None:
        """Look up an event class by event type."""
        return self._registry.get(event_type)

    def has(self, event_type: str) -> bool:
        """Return ``True`` if *event_type* is registered."""
        return event_type in self._registry

    def list_registered(self) -> list[str]:
        """Return all registered event types."""
        return list(self._registry.keys())

    def schema_names(self) -> dict[str, str]:
        """Return ``event_type → schema name`` for every registered class."""
        return {
            event_type: event_class.journaled_schema_name()
            for event_type, event_class in self._registry.items()
        }

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._registry.clear()
