"""telelog plumbing for registries: cached loggers, events and dispatch spans.

Loggers are configured from ``KBEHDZ_*`` environment variables:
``LOG_LEVEL`` (default ``WARNING``), ``LOG_FILE``, ``LOG_JSON``,
``DISABLE_CONSOLE`` and ``NO_COLOR``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "KBEHDZ_"
DEFAULT_LOGGER_NAME = "kbehdz"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
# Context values currently pushed onto each logger, so nested spans can
# restore what an outer span set instead of dropping it.
_ACTIVE_CONTEXT: Dict[str, Dict[str, str]] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env_flag(name: str) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    return raw is not None and raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _build_config() -> Any:
    config = tl.Config()
    config.with_min_level((os.getenv(f"{ENV_PREFIX}LOG_LEVEL") or "WARNING").upper())
    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    # spans are built on logger.profile
    config.with_profiling(True)
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (or re-read the environment) and drop cached loggers."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = config if config is not None else _build_config()
    _LOGGER_CACHE.clear()
    _ACTIVE_CONTEXT.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    global _ACTIVE_CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = _build_config()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, [(key, _stringify(val)) for key, val in payload.items()])
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(
        get_logger(logger_name),
        level.lower(),
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-flight."""

    logger: Any
    span_name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

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
    """Profile a block, pushing ``metadata`` as logger context while it runs.

    Context keys an enclosing span already set are restored on exit, so a
    command that dispatches another input keeps the outer span's context.
    Exceptions escaping the block are reported through ``SpanHandle.fail``
    and re-raised unchanged.
    """

    log = get_logger(logger_name)
    active = _ACTIVE_CONTEXT.setdefault(logger_name or DEFAULT_LOGGER_NAME, {})
    pushed = {key: _stringify(value) for key, value in (metadata or {}).items()}
    previous = {key: active.get(key) for key in pushed}
    for key, value in pushed.items():
        log.add_context(key, value)
        active[key] = value

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(logger=log, span_name=name, metadata=dict(pushed))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key, value in previous.items():
                if value is None:
                    log.remove_context(key)
                    active.pop(key, None)
                else:
                    log.add_context(key, value)
                    active[key] = value


__all__ = ["SpanHandle", "configure", "get_logger", "record_event", "span"]
