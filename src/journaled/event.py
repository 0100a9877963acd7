"""JournaledEvent base class and the envelope build protocol."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .config import get_settings
from .exceptions import MissingAttributeImplementation
from .naming import event_type_name, schema_name
from .primitives import Clock, IIDGenerator, UUID4Generator, utc_now
from .tags import current_tags
from .utils import deep_merge, freeze

if TYPE_CHECKING:
    from .writer import JournalWriter

E = TypeVar("E", bound="JournaledEvent")
EventT = TypeVar("EventT", bound="type[JournaledEvent]")

RESERVED_ATTRIBUTES = ("id", "created_at", "event_type")


class JournaledEvent(BaseModel):
    """Base class for events delivered to a journal stream.

    Subclasses declare which attributes go into the envelope, either through
    the ``journaled_attribute_names`` class variable or the
    :func:`journal_attributes` decorator. Each declared name must resolve to
    a field, property or zero-argument method on the event.

    Usage::

        @journal_attributes("order_id", "total", tagged=True)
        class OrderPlaced(JournaledEvent):
            order_id: str
            total: int

        OrderPlaced(order_id="o-1", total=30).journaled_attributes()
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    journaled_attribute_names: ClassVar[tuple[str, ...]] = ()
    journaled_tagged: ClassVar[bool] = False
    journaled_enqueue_with: ClassVar[Mapping[str, Any]] = MappingProxyType({})
    journaled_stream: ClassVar[str | None] = None
    journaled_name: ClassVar[str | None] = None
    journaled_id_generator: ClassVar[IIDGenerator] = UUID4Generator()
    journaled_clock: ClassVar[Clock] = utc_now

    _journaled_attributes: Mapping[str, Any] | None = PrivateAttr(default=None)
    _enqueue_overrides: dict[str, Any] = PrivateAttr(default_factory=dict)

    # ── Copying ─────────────────────────────────────────────────────

    def __copy__(self: E) -> E:
        copied = super().__copy__()
        copied._reset_journaled_state(self._enqueue_overrides)
        return copied

    def __deepcopy__(self: E, memo: dict[int, Any] | None = None) -> E:
        copied = super().__deepcopy__(memo)
        copied._reset_journaled_state(self._enqueue_overrides)
        return copied

    def _reset_journaled_state(self, enqueue_overrides: Mapping[str, Any]) -> None:
        # A copy is a new occurrence: it gets its own envelope and overrides.
        self._journaled_attributes = None
        self._enqueue_overrides = dict(enqueue_overrides)

    # ── Naming ──────────────────────────────────────────────────────

    @classmethod
    def journaled_type_name(cls) -> str:
        """Namespaced type name the naming transforms are derived from.

        Defaults to the class ``__qualname__`` with any function-local
        prefix dropped; set ``journaled_name`` to override.
        """
        if cls.journaled_name:
            return cls.journaled_name
        return cls.__qualname__.rsplit("<locals>.", 1)[-1]

    @classmethod
    def journaled_schema_name(cls) -> str:
        return schema_name(cls.journaled_type_name())

    @classmethod
    def event_type(cls) -> str:
        return event_type_name(cls.journaled_type_name())

    def journaled_partition_key(self) -> str:
        """Routing key for ordered delivery. Override for finer partitioning."""
        return self.event_type()

    def journaled_stream_name(self) -> str | None:
        """Explicit stream, else the configured default, else ``None``."""
        if self.journaled_stream is not None:
            return self.journaled_stream
        return get_settings().default_stream_name

    # ── Attributes ──────────────────────────────────────────────────

    def tags(self) -> Mapping[str, Any]:
        """Event-level tags, merged over the tag context when tagged."""
        return {}

    @classmethod
    def implements_journaled_attribute(cls, name: str) -> bool:
        return name in cls.model_fields or hasattr(cls, name)

    @classmethod
    def missing_journaled_attributes(cls) -> list[str]:
        """Declared attribute names with no field, property or method."""
        return [
            name
            for name in cls.journaled_attribute_names
            if not cls.implements_journaled_attribute(name)
        ]

    def journaled_attributes(self) -> Mapping[str, Any]:
        """Build the envelope once and return the cached mapping after."""
        if self._journaled_attributes is None:
            self._journaled_attributes = self._build_journaled_attributes()
        return self._journaled_attributes

    def _build_journaled_attributes(self) -> Mapping[str, Any]:
        cls = type(self)
        attributes: dict[str, Any] = {
            "id": cls.journaled_id_generator.next_id(),
            "created_at": cls.journaled_clock(),
            "event_type": self.event_type(),
        }
        for name in cls.journaled_attribute_names:
            attributes[name] = self._produce_attribute(name)
        if cls.journaled_tagged:
            attributes["tags"] = freeze(deep_merge(current_tags(), self.tags()))
        return MappingProxyType(attributes)

    def _produce_attribute(self, name: str) -> Any:
        if not self.implements_journaled_attribute(name):
            raise MissingAttributeImplementation(type(self), name)
        value = getattr(self, name)
        if inspect.ismethod(value):
            return value()
        return value

    # ── Delivery ────────────────────────────────────────────────────

    @classmethod
    def journaled_enqueue_defaults(cls) -> dict[str, Any]:
        """Type-level enqueue options declared with ``enqueue_with``."""
        return dict(cls.journaled_enqueue_with)

    def journaled_enqueue_opts(self) -> dict[str, Any]:
        """Type-level defaults with instance overrides applied on top."""
        return {**self.journaled_enqueue_defaults(), **self._enqueue_overrides}

    def enqueue_with(self: E, **opts: Any) -> E:
        """Set instance-level enqueue option overrides and return the event."""
        self._enqueue_overrides.update(opts)
        return self

    async def journal(self, writer: JournalWriter | None = None) -> None:
        """Hand this event to *writer*, or the process default writer."""
        if writer is None:
            from .writer import get_default_writer

            writer = get_default_writer()
        await writer.journal(self)


def journal_attributes(
    *names: str,
    tagged: bool | None = None,
    enqueue_with: Mapping[str, Any] | None = None,
) -> Any:
    """Class decorator declaring journaled attributes and options.

    Names accumulate across repeated applications and inherited
    declarations. ``tagged`` and ``enqueue_with`` are only changed when given.

    Usage::

        @journal_attributes("foo", "bar", enqueue_with={"priority": 34})
        class SomethingHappened(JournaledEvent):
            def foo(self) -> str: ...
            def bar(self) -> str: ...
    """

    def decorator(cls: EventT) -> EventT:
        declared = cls.journaled_attribute_names
        cls.journaled_attribute_names = declared + tuple(
            name for name in dict.fromkeys(names) if name not in declared
        )
        if tagged is not None:
            cls.journaled_tagged = tagged
        if enqueue_with is not None:
            cls.journaled_enqueue_with = MappingProxyType(
                {**cls.journaled_enqueue_with, **enqueue_with}
            )
        return cls

    return decorator


def build_envelope(event: JournaledEvent) -> Mapping[str, Any]:
    """Return the memoized envelope for *event*."""
    return event.journaled_attributes()
