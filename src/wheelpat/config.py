"""ContextVar-based configuration for wheelpat.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Parsers and expanders read the active config when they run.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from wheelpat.config import PatternConfig, pattern_config_context

    with pattern_config_context(PatternConfig(max_depth=16)):
        result = parse("seq(seq($d, 2), 2)")

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True, slots=True)
class PatternConfig:
    """Immutable parse and expansion configuration.

    Attributes:
        max_depth: Maximum nesting of commands and sequences accepted by the
            parser and the expander
        allow_trailing_tokens: Ignore tokens left after a complete top-level
            pattern (the historical behavior). When False they are a parse
            error.

    """

    max_depth: int = DEFAULT_MAX_DEPTH
    allow_trailing_tokens: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PatternConfig":
        """Create PatternConfig from dictionary.

        Only includes keys that are valid PatternConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = PatternConfig.from_dict({"max_depth": 8, "other": 1})
            >>> config.max_depth
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PatternConfig = PatternConfig()

# Thread-local configuration via ContextVar
_pattern_config: ContextVar[PatternConfig] = ContextVar(
    "pattern_config",
    default=_DEFAULT_CONFIG,
)


def get_pattern_config() -> PatternConfig:
    """Get current configuration (thread-local)."""
    return _pattern_config.get()


def set_pattern_config(config: PatternConfig) -> None:
    """Set configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _pattern_config.set(config)


def reset_pattern_config() -> None:
    """Reset to default configuration."""
    _pattern_config.set(_DEFAULT_CONFIG)


@contextmanager
def pattern_config_context(config: PatternConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with pattern_config_context(PatternConfig(allow_trailing_tokens=False)):
        ...     result = parse("$d $h")
        >>> result.success
        False

    """
    previous = _pattern_config.get()
    _pattern_config.set(config)
    try:
        yield
    finally:
        _pattern_config.set(previous)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "PatternConfig",
    "get_pattern_config",
    "pattern_config_context",
    "reset_pattern_config",
    "set_pattern_config",
]
