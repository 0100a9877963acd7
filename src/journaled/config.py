"""Process-wide settings read by events and writers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JournaledSettings(BaseModel):
    """Immutable journaled configuration.

    ``default_stream_name`` is used when an event does not name its own
    stream; ``None`` means "use the transport default".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_stream_name: str | None = None
    app_name: str | None = None
    enabled: bool = True
    default_enqueue_opts: dict[str, Any] = Field(default_factory=dict)


_settings = JournaledSettings()


def get_settings() -> JournaledSettings:
    """Return the current process-wide settings."""
    return _settings


def configure(**overrides: Any) -> JournaledSettings:
    """Replace the process-wide settings with a copy carrying *overrides*.

    Unknown keys raise ``pydantic.ValidationError``.
    """
    global _settings
    _settings = JournaledSettings.model_validate(
        {**_settings.model_dump(), **overrides}
    )
    return _settings


def reset_settings() -> None:
    """Restore default settings (testing utility)."""
    global _settings
    _settings = JournaledSettings()
