"""Telemetry for the triage engine, backed by telelog.

Loggers are configured lazily on first use from ``TRIAGE_ENGINE_*``
environment variables or a named preset. Engine layers log through:

``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- profile a block, failing the span on exceptions
``paint_pass(phase, ...)`` -- span around one compositor pass
``file_io(verb, path)`` -- span around a document read or write
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TRIAGE_ENGINE_"
ROOT_LOGGER = "triage_engine"
PRESETS = ("development", "production", "performance")

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None
_CONFIGURED = False


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def _log_path(fallback: str) -> str:
    return _env("LOG_FILE") or fallback


def _preset_config(preset: str) -> Any:
    key = preset.lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown log preset '{preset}'.")
    config = tl.Config()
    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "production":
        # The TUI owns the terminal, so nothing goes to the console.
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_log_path("triage_engine.log"))
        config.with_buffering(True)
    else:
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        config.with_file_output(_log_path("triage_engine-performance.log"))
    config.with_profiling(True)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    quiet = _env_flag("DISABLE_CONSOLE")
    config.with_console_output(not quiet)
    if not quiet:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    if _env("LOG_FILE"):
        config.with_file_output(_log_path(""))
    config.with_profiling(True)
    return config


def _supports_config() -> bool:
    return hasattr(tl, "Config")


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    ``preset`` is one of :data:`PRESETS`; ``config`` is an explicit
    ``telelog.Config``. Passing both is an error. Releases of telelog
    without ``Config`` keep their built-in defaults.
    """

    global _CONFIG, _CONFIGURED
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset and preset.lower() not in PRESETS:
        raise ValueError(f"Unknown log preset '{preset}'.")

    if config is None and _supports_config():
        config = _preset_config(preset) if preset else _env_config()
    _CONFIG = config
    _CONFIGURED = True
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or ROOT_LOGGER
    if not _CONFIGURED:
        configure()
    if logger_name not in _LOGGERS:
        if _CONFIG is not None:
            _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
        else:
            _LOGGERS[logger_name] = tl.create_logger(logger_name)
    return _LOGGERS[logger_name]


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    logger: Any
    span_name: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        _emit(
            self.logger,
            "error",
            "span::fail",
            {"span": self.span_name, **self.metadata, "reason": reason},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block as ``name``, optionally tracked under ``component``.

    ``metadata`` is attached as logger context for the duration of the
    block. An exception escaping the block is logged as ``span::fail``
    and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(logger=log, span_name=name, metadata=dict(context))

    with ExitStack() as stack:
        if hasattr(log, "add_context"):
            for key, value in context.items():
                log.add_context(key, value)
                stack.callback(log.remove_context, key)
        if component and hasattr(log, "track_component"):
            stack.enter_context(log.track_component(component))
        if hasattr(log, "profile"):
            stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


@contextmanager
def paint_pass(
    phase: str, *, logger_name: Optional[str] = None, **metadata: Any
) -> Iterator[SpanHandle]:
    with span(
        f"compositor::{phase}",
        logger_name=logger_name,
        component="compositor",
        metadata=metadata,
    ) as handle:
        yield handle


@contextmanager
def file_io(verb: str, path: Any) -> Iterator[SpanHandle]:
    with span(
        f"document::{verb}",
        logger_name=f"{ROOT_LOGGER}.document",
        component="document",
        metadata={"path": str(path)},
    ) as handle:
        yield handle


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "file_io",
    "get_logger",
    "paint_pass",
    "record_event",
    "span",
]
