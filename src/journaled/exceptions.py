"""Exceptions for journaled."""

from __future__ import annotations


class JournaledError(Exception):
    """Root exception for the journaled package."""


class MissingAttributeImplementation(JournaledError, AttributeError):
    """Raised when a declared journaled attribute has no backing capability.

    This is a programming defect in the event class, never a runtime
    condition to recover from.
    """

    def __init__(self, event_class: type, attribute_name: str) -> None:
        self.event_class = event_class
        self.attribute_name = attribute_name
        super().__init__(
            f"{event_class.__qualname__} declares journaled attribute "
            f"{attribute_name!r} but does not implement it"
        )


class DuplicateEventTypeError(JournaledError):
    """Raised when two event classes register under the same event type."""

    def __init__(self, event_type: str, existing: type, duplicate: type) -> None:
        self.event_type = event_type
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Event type {event_type!r} is already registered to "
            f"{existing.__qualname__}; cannot register {duplicate.__qualname__}"
        )


class WriterNotConfiguredError(JournaledError):
    """Raised when an event is journaled without a writer available."""


class JournaledSerializationError(JournaledError):
    """Raised when envelope serialization or deserialization fails."""
