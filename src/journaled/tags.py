"""Tag context: scoped key/value annotations merged into tagged envelopes.

State lives in ``ContextVar`` storage, so every thread and every asyncio task
sees its own stack. asyncio tasks start from a snapshot of their parent's
context (the runtime copies it on task creation); plain threads start empty.
Use :func:`propagate_tags` to carry tags across a thread boundary explicitly.

Usage::

    tag(host="worker-3")

    with tagged(request_id="r-1"):
        with tagged(user_id="u-9"):
            current_tags()  # {"host": "worker-3", "request_id": "r-1", "user_id": "u-9"}
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from contextvars import ContextVar, Token
from typing import Any, TypeVar

logger = logging.getLogger("journaled.tags")

T = TypeVar("T")

_EMPTY: Mapping[str, Any] = {}

# Layers are stored as immutable tuples so a reset token always restores
# the exact prior stack.
_permanent_tags: ContextVar[Mapping[str, Any]] = ContextVar(
    "journaled_permanent_tags", default=_EMPTY
)
_tag_stack: ContextVar[tuple[Mapping[str, Any], ...]] = ContextVar(
    "journaled_tag_stack", default=()
)


def _layer(tags: Mapping[str, Any] | None, extra: Mapping[str, Any]) -> dict[str, Any]:
    layer = dict(tags or {})
    layer.update(extra)
    return layer


def tag(tags: Mapping[str, Any] | None = None, /, **extra: Any) -> None:
    """Merge tags into the permanent layer beneath the stack.

    Permanent tags are never popped. Later calls override the same keys.
    """
    merged = dict(_permanent_tags.get())
    merged.update(_layer(tags, extra))
    _permanent_tags.set(merged)


def current_tags() -> dict[str, Any]:
    """Return permanent tags merged with every stack layer, innermost last."""
    merged = dict(_permanent_tags.get())
    for layer in _tag_stack.get():
        merged.update(layer)
    return merged


class tagged:
    """Push a tag layer for the duration of a ``with`` (or ``async with``) block.

    The layer is removed on every exit path, including exceptions and task
    cancellation. As a decorator it wraps both plain and ``async def``
    functions; coroutine functions keep the layer for the whole await.
    """

    def __init__(self, tags: Mapping[str, Any] | None = None, /, **extra: Any) -> None:
        self._layer = _layer(tags, extra)
        self._tokens: list[Token[tuple[Mapping[str, Any], ...]]] = []

    def __enter__(self) -> None:
        self._tokens.append(_tag_stack.set((*_tag_stack.get(), self._layer)))
        logger.debug("Entered tag scope %s", sorted(self._layer))

    def __exit__(self, *exc_info: object) -> None:
        _tag_stack.reset(self._tokens.pop())
        logger.debug("Left tag scope %s", sorted(self._layer))

    async def __aenter__(self) -> None:
        self.__enter__()

    async def __aexit__(self, *exc_info: object) -> None:
        self.__exit__(*exc_info)

    def __call__(self, func: Callable[..., T]) -> Callable[..., T]:
        layer = self._layer

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with tagged(layer):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            with tagged(layer):
                return func(*args, **kwargs)

        return wrapper


def with_tags(
    tags: Mapping[str, Any], func: Callable[..., T], *args: Any, **kwargs: Any
) -> T:
    """Call ``func(*args, **kwargs)`` inside a :func:`tagged` scope."""
    with tagged(tags):
        return func(*args, **kwargs)


def propagate_tags(func: Callable[..., T]) -> Callable[..., T]:
    """Capture the caller's current tags for use in another thread.

    The returned callable runs *func* with the captured tags pushed as a
    single layer on top of whatever the executing context already has.
    """
    captured = current_tags()

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        with tagged(captured):
            return func(*args, **kwargs)

    return wrapper


def clear_tags() -> None:
    """Drop permanent tags and every stack layer in the current context."""
    _permanent_tags.set(_EMPTY)
    _tag_stack.set(())
