from __future__ import annotations

import pytest
from pydantic import ValidationError

from journaled.config import JournaledSettings, configure, get_settings, reset_settings


def test_defaults() -> None:
    settings = get_settings()
    assert settings.default_stream_name is None
    assert settings.app_name is None
    assert settings.enabled is True
    assert settings.default_enqueue_opts == {}


def test_configure_merges_overrides() -> None:
    configure(default_stream_name="my_app_events")
    settings = configure(app_name="billing")
    assert settings.default_stream_name == "my_app_events"
    assert settings.app_name == "billing"
    assert get_settings() is settings


def test_configure_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        configure(stream="oops")
    assert get_settings() == JournaledSettings()


def test_settings_are_frozen() -> None:
    with pytest.raises(ValidationError):
        get_settings().enabled = False  # type: ignore[misc]


def test_reset_settings() -> None:
    configure(enabled=False)
    reset_settings()
    assert get_settings().enabled is True
