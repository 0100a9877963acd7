"""Deterministic naming transforms for event types.

``SomeModule::SomeClassName`` and ``SomeModule.SomeClassName`` both become
``some_module/some_class_name`` as a schema name and
``some_module_some_class_name`` as an event type.
"""

from __future__ import annotations

import re

_NAMESPACE_SEPARATOR = re.compile(r"::|\.")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Lowercase, underscore-delimited form of *name*, namespaces as ``/``."""
    word = _NAMESPACE_SEPARATOR.sub("/", name)
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def schema_name(name: str) -> str:
    """Path-style identifier used for schema lookup."""
    return underscore(name)


def event_type_name(name: str) -> str:
    """Flat identifier embedded in the envelope as ``event_type``."""
    return underscore(name).replace("/", "_")
