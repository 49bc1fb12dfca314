"""Engine settings, overridable through ``HIGHLIGHT_ENGINE_*`` variables."""

from __future__ import annotations

from dataclasses import dataclass

from highlight_engine.runtime.telemetry import env_flag, env_value
from highlight_engine.spans import DEFAULT_COLOR, ColorTag

DEFAULT_QUIET_MS = 300


def _env_int(name: str, fallback: int) -> int:
    raw = env_value(name)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    quiet_ms: int = DEFAULT_QUIET_MS
    default_color: ColorTag = DEFAULT_COLOR
    eof_padding: bool = True

    def __post_init__(self) -> None:
        if self.quiet_ms < 0:
            raise ValueError("quiet_ms must be non-negative")

    @classmethod
    def from_env(cls) -> "HighlightConfig":
        color_name = env_value("DEFAULT_COLOR")
        try:
            color = ColorTag.from_label(color_name) if color_name else DEFAULT_COLOR
        except ValueError:
            color = DEFAULT_COLOR
        return cls(
            quiet_ms=max(0, _env_int("QUIET_MS", DEFAULT_QUIET_MS)),
            default_color=color,
            eof_padding=env_flag("EOF_PADDING", True),
        )


__all__ = ["DEFAULT_QUIET_MS", "HighlightConfig"]
