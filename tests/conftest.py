"""Pytest fixtures for journaled tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

from journaled.config import reset_settings
from journaled.event import JournaledEvent
from journaled.memory import InMemoryJournalTransport
from journaled.tags import clear_tags
from journaled.writer import JournalWriter, set_default_writer

FAKE_UUID = "FAKE_UUID"
FROZEN_TIME = datetime(2017, 2, 15, 13, 0, tzinfo=timezone.utc)


class CountingIdGenerator:
    """Returns a fixed id and counts how often it was asked."""

    def __init__(self, value: str = FAKE_UUID) -> None:
        self.value = value
        self.calls = 0

    def next_id(self) -> str:
        self.calls += 1
        return self.value


@pytest.fixture(autouse=True)
def _isolate_journaled_state() -> Iterator[None]:
    clear_tags()
    reset_settings()
    set_default_writer(None)
    yield
    clear_tags()
    reset_settings()
    set_default_writer(None)


@pytest.fixture
def id_generator(monkeypatch: pytest.MonkeyPatch) -> CountingIdGenerator:
    generator = CountingIdGenerator()
    monkeypatch.setattr(JournaledEvent, "journaled_id_generator", generator)
    return generator


@pytest.fixture
def frozen_time(monkeypatch: pytest.MonkeyPatch) -> datetime:
    monkeypatch.setattr(JournaledEvent, "journaled_clock", lambda: FROZEN_TIME)
    return FROZEN_TIME


@pytest.fixture
def transport() -> InMemoryJournalTransport:
    return InMemoryJournalTransport()


@pytest.fixture
def writer(transport: InMemoryJournalTransport) -> JournalWriter:
    return JournalWriter(transport)
