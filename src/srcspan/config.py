"""ContextVar-based configuration for srcspan.

Conversions themselves take no options; the configuration governs the bug
reporting channel (see :mod:`srcspan.bug`).

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from srcspan.config import SpanConfig, span_config_context

    with span_config_context(SpanConfig(bug_log_level=logging.WARNING)):
        span = rng.to_span()

"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpanConfig:
    """Immutable srcspan configuration.

    Attributes:
        bug_log_level: Level at which internal defects are logged
        record_bugs: Keep the first exemplar of each reported defect

    """

    bug_log_level: int = logging.ERROR
    record_bugs: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> SpanConfig:
        """Create SpanConfig from dictionary.

        Only includes keys that are valid SpanConfig fields; unknown keys
        are silently ignored. ``bug_log_level`` may be given as a level name.

        Example:
            >>> SpanConfig.from_dict({"bug_log_level": "warning", "x": 1})
            SpanConfig(bug_log_level=30, record_bugs=True)

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        level = filtered.get("bug_log_level")
        if isinstance(level, str):
            resolved = logging.getLevelName(level.upper())
            if not isinstance(resolved, int):
                msg = f"Unknown log level: {level!r}"
                raise ValueError(msg)
            filtered["bug_log_level"] = resolved
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: SpanConfig = SpanConfig()

_span_config: ContextVar[SpanConfig] = ContextVar(
    "span_config",
    default=_DEFAULT_CONFIG,
)


def get_span_config() -> SpanConfig:
    """Get current configuration for this thread/context."""
    return _span_config.get()


def set_span_config(config: SpanConfig) -> None:
    """Set configuration for current context.

    Args:
        config: SpanConfig instance to use for this context.

    """
    _span_config.set(config)


def reset_span_config() -> None:
    """Reset to default configuration."""
    _span_config.set(_DEFAULT_CONFIG)


@contextmanager
def span_config_context(config: SpanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Args:
        config: SpanConfig to use within the context.

    """
    previous = _span_config.get()
    _span_config.set(config)
    try:
        yield
    finally:
        _span_config.set(previous)


__all__ = [
    "SpanConfig",
    "get_span_config",
    "set_span_config",
    "reset_span_config",
    "span_config_context",
]
