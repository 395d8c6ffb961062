"""Structured logging for format cycles, backed by telelog.

Every layer reports through two helpers:

``phase(component, step, ...)`` profiles one step of a cycle as the span
``<component>::<step>`` and logs ``phase.failed`` if the step raises.
``record_event(Event.X, ...)`` logs one outcome with flat key/value fields.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, cast

import telelog  # type: ignore[import]

from format_engine.buffer.state import Position, Selection

tl = cast(Any, telelog)

ENV_PREFIX = "FORMAT_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "format_engine")

_PRESET_LEVELS = {"development": "DEBUG", "production": "INFO", "quiet": "ERROR"}

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


class Event(str, Enum):
    FORMAT_DONE = "format.done"
    FORMAT_NO_CHANGE = "format.no_change"
    FORMAT_FAILED = "format.failed"
    PHASE_FAILED = "phase.failed"
    SELECTION_DROPPED = "selections.dropped"
    SELECTION_FALLBACK = "selections.fallback"
    CONFIG_UNREADABLE = "styles.config_unreadable"
    HOST_LOG = "host.log"


def _setting(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _enabled(name: str) -> bool:
    raw = _setting(name)
    return raw is not None and raw.strip().lower() in {"1", "true", "yes", "on"}


def build_config(preset: Optional[str] = None) -> Any:
    """Telelog configuration for ``preset``, or from ``FORMAT_ENGINE_*`` settings.

    ``production`` logs to a buffered file instead of the console; ``quiet``
    only keeps errors. ``LOG_FILE`` and ``LOG_JSON`` apply in every mode.
    """

    if preset is None:
        level = (_setting("LOG_LEVEL") or "INFO").upper()
    elif preset.lower() in _PRESET_LEVELS:
        preset = preset.lower()
        level = _PRESET_LEVELS[preset]
    else:
        raise ValueError(f"Unknown preset '{preset}'.")

    config = tl.Config()
    config.with_min_level(level)
    console = preset in (None, "development") and not _enabled("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)

    log_file = _setting("LOG_FILE")
    if preset == "production":
        log_file = log_file or "format_engine.log"
    if log_file:
        config.with_file_output(log_file)
    if preset == "production" or _enabled("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_setting("LOG_BUFFER_SIZE") or "2048"))

    config.with_profiling(True)
    return config


def configure(preset: Optional[str] = None, *, config: Optional[Any] = None) -> None:
    """Install ``config`` (or one built for ``preset``) and drop cached loggers."""

    global _config
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    _config = config if config is not None else build_config(preset)
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _loggers:
        if _config is None:
            _config = build_config()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def format_field(value: Any) -> str:
    """Render a log field; positions and selections use ``line:column``."""

    if isinstance(value, Position):
        return f"{value.line}:{value.column}"
    if isinstance(value, Selection):
        if value.is_empty:
            return format_field(value.start)
        return f"{format_field(value.start)}-{format_field(value.end)}"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return ",".join(format_field(item) for item in value)
    return str(value)


def _emit(log: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    pairs: List[Tuple[str, str]] = [
        (key, format_field(value)) for key, value in fields.items()
    ]
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(" ".join([message, *(f"{key}={value}" for key, value in pairs)]))


def record_event(
    event: Event,
    *,
    level: str = "info",
    logger_name: Optional[str] = None,
    **fields: Any,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{event.value}", fields)


class PhaseHandle:
    """Collects result fields for a running phase; they are logged on exit."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.results: Dict[str, Any] = {}

    def annotate(self, key: str, value: Any) -> None:
        self.results[key] = value


@contextmanager
def phase(
    component: str,
    step: str,
    *,
    logger_name: Optional[str] = None,
    **context: Any,
) -> Iterator[PhaseHandle]:
    """Profile ``step`` of ``component``.

    ``context`` is attached to every record logged inside the block, with
    keys prefixed by ``component``.
    """

    log = get_logger(logger_name)
    handle = PhaseHandle(f"{component}::{step}")
    for key, value in context.items():
        log.add_context(f"{component}.{key}", format_field(value))

    with ExitStack() as stack:
        stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(handle.name))
        try:
            yield handle
        except Exception as exc:
            record_event(
                Event.PHASE_FAILED,
                level="error",
                logger_name=logger_name,
                phase=handle.name,
                reason=exc,
                **handle.results,
            )
            raise
        else:
            if handle.results:
                _emit(log, "debug", f"phase::{handle.name}", handle.results)
        finally:
            for key in context:
                log.remove_context(f"{component}.{key}")


configure()

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "Event",
    "PhaseHandle",
    "build_config",
    "configure",
    "format_field",
    "get_logger",
    "phase",
    "record_event",
]
