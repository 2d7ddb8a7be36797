"""telelog wiring for the editor.

The editor owns the terminal, so logging is off the console unless asked
for: the default ``quiet`` preset keeps only errors, and only on disk when
``VIPIX_LOG_FILE`` is set.

``VIPIX_LOG_PRESET``  ``quiet`` (default), ``development`` or ``file``
``VIPIX_LOG_LEVEL``   overrides the preset's minimum level
``VIPIX_LOG_FILE``    log file path (``file`` preset default: ``vipix.log``)
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ROOT_LOGGER = "vipix"
PRESETS = ("quiet", "development", "file")

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _text(value: Any) -> str:
    if isinstance(value, (set, frozenset)):
        return repr(sorted(value))
    return value if isinstance(value, str) else repr(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def build_config(preset: str) -> Any:
    """telelog config for ``preset``, with ``VIPIX_LOG_*`` overrides applied."""

    log_file = os.getenv("VIPIX_LOG_FILE", "")
    config = tl.Config()
    if preset == "quiet":
        level = "ERROR"
        config.with_console_output(False)
    elif preset == "development":
        level = "DEBUG"
        config.with_console_output(True)
        config.with_colored_output(True)
    elif preset == "file":
        level = "INFO"
        config.with_console_output(False)
        log_file = log_file or "vipix.log"
        config.with_buffering(True)
    else:
        raise ValueError(f"Unknown preset '{preset}', expected one of {PRESETS}.")

    config.with_min_level(os.getenv("VIPIX_LOG_LEVEL", level).upper())
    if log_file:
        config.with_file_output(log_file)
    return config


def configure(preset: Optional[str] = None) -> None:
    """Switch every logger to ``preset`` (default: ``VIPIX_LOG_PRESET`` or quiet)."""

    global _config
    _config = build_config((preset or os.getenv("VIPIX_LOG_PRESET", "quiet")).lower())
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    name = name or ROOT_LOGGER
    if name not in _loggers:
        if _config is None:
            configure()
        _loggers[name] = tl.Logger.with_config(name, _config)
    return _loggers[name]


def _log(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
    else:
        getattr(logger, level)(f"{message} {data}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level.lower(), f"event::{name}", payload)


@dataclass
class SpanHandle:
    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def _report(self, level: str, message: str, reason: str) -> None:
        data: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            data["component"] = self.component
        _log(self.logger, level, message, data)

    def fail(self, reason: str) -> None:
        self._report("error", "span::fail", reason)

    def warn(self, reason: str) -> None:
        self._report("warning", "span::warn", reason)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block; ``metadata`` is logger context while it runs.

    ``component=True`` tracks the block as a component named ``name``.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(log, name, component_name, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
