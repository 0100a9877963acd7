"""Tests for the tag context stack."""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from journaled.tags import (
    clear_tags,
    current_tags,
    propagate_tags,
    tag,
    tagged,
    with_tags,
)


def test_empty_context_has_no_tags() -> None:
    assert current_tags() == {}


def test_nested_scopes_merge_and_reset() -> None:
    with tagged(a=1):
        with tagged(b=2):
            assert current_tags() == {"a": 1, "b": 2}
        assert current_tags() == {"a": 1}
    assert current_tags() == {}


def test_inner_scope_overrides_outer() -> None:
    with tagged(env="outer", a=1), tagged(env="inner"):
        assert current_tags() == {"env": "inner", "a": 1}


def test_accepts_mapping_and_keywords() -> None:
    with tagged({"x-request-id": "r-1"}, user="u-1"):
        assert current_tags() == {"x-request-id": "r-1", "user": "u-1"}


def test_scope_is_popped_on_exception() -> None:
    with pytest.raises(RuntimeError, match="boom"), tagged(a=1):
        with tagged(b=2):
            raise RuntimeError("boom")
    assert current_tags() == {}


def test_current_tags_returns_a_copy() -> None:
    with tagged(a=1):
        tags = current_tags()
        tags["a"] = "modified"
        assert current_tags() == {"a": 1}


def test_permanent_tags_survive_scopes() -> None:
    tag(host="worker-1")
    with tagged(request="r-1"):
        assert current_tags() == {"host": "worker-1", "request": "r-1"}
    assert current_tags() == {"host": "worker-1"}


def test_permanent_tags_merge_and_are_overridden_by_scopes() -> None:
    tag(host="worker-1", region="eu")
    tag(region="us")
    assert current_tags() == {"host": "worker-1", "region": "us"}
    with tagged(region="ap"):
        assert current_tags() == {"host": "worker-1", "region": "ap"}
    assert current_tags()["region"] == "us"


def test_permanent_tag_added_inside_scope_outlives_it() -> None:
    with tagged(a=1):
        tag(b=2)
    assert current_tags() == {"b": 2}


def test_with_tags_returns_result() -> None:
    result = with_tags({"a": 1}, lambda extra: {**current_tags(), **extra}, {"b": 2})
    assert result == {"a": 1, "b": 2}
    assert current_tags() == {}


def test_tagged_as_decorator() -> None:
    @tagged(job="cleanup")
    def run() -> dict[str, object]:
        return current_tags()

    assert run() == {"job": "cleanup"}
    assert run() == {"job": "cleanup"}
    assert current_tags() == {}


def test_clear_tags() -> None:
    tag(a=1)
    clear_tags()
    assert current_tags() == {}


def test_threads_start_without_tags() -> None:
    seen: dict[str, object] = {}

    def work() -> None:
        seen["tags"] = current_tags()

    with tagged(a=1):
        thread = threading.Thread(target=work)
        thread.start()
        thread.join()

    assert seen["tags"] == {}


def test_propagate_tags_to_thread_pool() -> None:
    with tagged(a=1), ThreadPoolExecutor(max_workers=1) as executor:
        result = executor.submit(propagate_tags(current_tags)).result()
    assert result == {"a": 1}


@pytest.mark.asyncio
async def test_task_tags_do_not_leak_to_parent() -> None:
    async def child() -> dict[str, object]:
        with tagged(child=True):
            await asyncio.sleep(0)
            return current_tags()

    with tagged(parent=1):
        result = await asyncio.create_task(child())
        assert current_tags() == {"parent": 1}

    assert result == {"parent": 1, "child": True}
    assert current_tags() == {}


@pytest.mark.asyncio
async def test_concurrent_tasks_are_isolated() -> None:
    async def work(request_id: str) -> list[dict[str, object]]:
        seen = []
        with tagged(request_id=request_id):
            for _ in range(3):
                await asyncio.sleep(0)
                seen.append(current_tags())
        return seen

    first, second = await asyncio.gather(work("r-1"), work("r-2"))
    assert all(tags == {"request_id": "r-1"} for tags in first)
    assert all(tags == {"request_id": "r-2"} for tags in second)


@pytest.mark.asyncio
async def test_scope_is_popped_on_cancellation() -> None:
    started = asyncio.Event()
    after: list[dict[str, object]] = []

    async def worker() -> None:
        with tagged(outer=1):
            try:
                with tagged(job="j-1"):
                    started.set()
                    await asyncio.sleep(10)
            except asyncio.CancelledError:
                after.append(current_tags())
                raise

    task = asyncio.create_task(worker())
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert after == [{"outer": 1}]


@pytest.mark.asyncio
async def test_tagged_as_decorator_on_coroutine_function() -> None:
    @tagged(job="sync-orders")
    async def run() -> dict[str, object]:
        await asyncio.sleep(0)
        return current_tags()

    assert await run() == {"job": "sync-orders"}
    assert await run() == {"job": "sync-orders"}
    assert current_tags() == {}


@pytest.mark.asyncio
async def test_tagged_as_async_context_manager() -> None:
    async with tagged(a=1):
        await asyncio.sleep(0)
        assert current_tags() == {"a": 1}
    assert current_tags() == {}


def test_reentering_the_same_scope() -> None:
    scope = tagged(a=1)
    with scope:
        with scope:
            assert current_tags() == {"a": 1}
        assert current_tags() == {"a": 1}
    assert current_tags() == {}
