"""Logging and profiling for the highlight engine, built on telelog.

Everything else in the package talks to telelog through four helpers:

``configure(...)`` -- pick an explicit config or a named preset
``get_logger(name)`` -- cached, configured logger per component
``record_event(name, ...)`` -- structured event at a chosen level
``span(name, ...)`` -- profile a block, optionally as a tracked component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HIGHLIGHT_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "highlight_engine")

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def env_value(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env_value(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def _preset(name: str) -> Any:
    config = tl.Config()
    key = name.lower()
    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "quiet":
        config.with_min_level("WARNING")
        config.with_console_output(False)
    elif key == "file":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(env_value("LOG_FILE") or "highlight_engine.log")
        config.with_buffering(True)
    else:
        raise ValueError(f"Unknown preset '{name}'.")
    return config


def _from_env() -> Any:
    config = tl.Config()
    config.with_min_level((env_value("LOG_LEVEL") or "INFO").upper())
    if env_flag("DISABLE_CONSOLE", False):
        config.with_console_output(False)
    else:
        config.with_console_output(True)
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = env_value("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration.

    ``config`` adopts an explicit ``tl.Config``; ``preset`` builds one of
    ``"development"``, ``"quiet"`` or ``"file"``. Passing neither rebuilds the
    configuration from ``HIGHLIGHT_ENGINE_*`` environment variables. Cached
    loggers are dropped so the next ``get_logger`` call picks up the change.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _preset(preset)
    elif config is None:
        config = _from_env()
    config.with_profiling(True)
    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    if _CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return _LOGGERS[logger_name]


def _level_method(logger: Any, level: str) -> tuple[Any, bool]:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    method, structured = _level_method(log, level)
    if structured:
        method(f"event::{name}", _pairs(payload))
    else:
        method(f"event::{name} {payload}")


@dataclass
class SpanHandle:
    """Lets the body of a ``span`` attach metadata or report failure."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.name, "reason": reason, **self.metadata}
        if self.component:
            payload["component"] = self.component
        method, structured = _level_method(self.logger, "error")
        if structured:
            method("span::fail", _pairs(payload))
        else:
            method(f"span::fail {payload}")


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` also tracks the block as a component of the same name;
    a string tracks it under that name instead. ``metadata`` is pushed as
    logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    pushed: list[str] = []
    for key, value in (metadata or {}).items():
        log.add_context(key, _text(value))
        pushed.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            name=name,
            component=component_name,
            metadata={key: _text(value) for key, value in (metadata or {}).items()},
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in pushed:
                log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "SpanHandle",
    "configure",
    "env_flag",
    "env_value",
    "get_logger",
    "record_event",
    "span",
]
