"""ContextVar-based expansion configuration for shortcodes.

Provides context-local configuration using Python's ContextVars (PEP 567).
An expander created without an explicit config reads the context config at
the start of every pass.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from shortcodes.config import ShortcodeConfig, config_context

    with config_context(ShortcodeConfig(strict_handlers=False)):
        html = expander.expand(text)
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ShortcodeConfig:
    """Immutable expansion configuration.

    Attributes:
        strict_handlers: Raise MissingHandlerError when a matched tag has no
            handler at invocation time. When False the matched text is left
            in place and a warning is logged.

    """

    strict_handlers: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ShortcodeConfig":
        """Create ShortcodeConfig from dictionary.

        Only includes keys that are valid ShortcodeConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ShortcodeConfig.from_dict({"strict_handlers": False, "x": 1})
            >>> config.strict_handlers
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ShortcodeConfig = ShortcodeConfig()

_shortcode_config: ContextVar[ShortcodeConfig] = ContextVar(
    "shortcode_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> ShortcodeConfig:
    """Get current expansion configuration (context-local)."""
    return _shortcode_config.get()


def set_config(config: ShortcodeConfig) -> None:
    """Set expansion configuration for current context."""
    _shortcode_config.set(config)


def reset_config() -> None:
    """Reset to default configuration."""
    _shortcode_config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: ShortcodeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with config_context(ShortcodeConfig(strict_handlers=False)):
        ...     get_config().strict_handlers
        False

    """
    previous = _shortcode_config.get()
    _shortcode_config.set(config)
    try:
        yield
    finally:
        _shortcode_config.set(previous)


__all__ = [
    "ShortcodeConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
]
