"""Tests for ContextVar-based pattern configuration.

Validates thread isolation, context manager behavior, and that parsers and
expanders read the active config.
"""

from threading import Thread

import pytest

from wheelpat import (
    PatternConfig,
    PatternExpander,
    get_pattern_config,
    parse,
    pattern_config_context,
    reset_pattern_config,
    set_pattern_config,
)
from wheelpat.config import DEFAULT_MAX_DEPTH


class TestPatternConfigDataclass:
    """Test PatternConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = PatternConfig()
        assert config.max_depth == DEFAULT_MAX_DEPTH == 64
        assert config.allow_trailing_tokens is True

    def test_immutability(self) -> None:
        config = PatternConfig()
        with pytest.raises(AttributeError):
            config.max_depth = 3  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = PatternConfig.from_dict({"max_depth": 8, "theme": "dark"})
        assert config == PatternConfig(max_depth=8)

    def test_from_dict_empty(self) -> None:
        assert PatternConfig.from_dict({}) == PatternConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_pattern_config()

    def test_default_config(self) -> None:
        assert get_pattern_config() == PatternConfig()

    def test_set_and_get(self) -> None:
        set_pattern_config(PatternConfig(max_depth=5))
        assert get_pattern_config().max_depth == 5

    def test_reset_restores_default(self) -> None:
        set_pattern_config(PatternConfig(allow_trailing_tokens=False))
        reset_pattern_config()
        assert get_pattern_config().allow_trailing_tokens is True


class TestPatternConfigContext:
    """Test pattern_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with pattern_config_context(PatternConfig(max_depth=2)):
            assert get_pattern_config().max_depth == 2
        assert get_pattern_config().max_depth == DEFAULT_MAX_DEPTH

    def test_nested_contexts(self) -> None:
        with pattern_config_context(PatternConfig(max_depth=2)):
            with pattern_config_context(PatternConfig(allow_trailing_tokens=False)):
                assert get_pattern_config().max_depth == DEFAULT_MAX_DEPTH
                assert get_pattern_config().allow_trailing_tokens is False
            assert get_pattern_config().max_depth == 2
        assert get_pattern_config() == PatternConfig()

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with pattern_config_context(PatternConfig(max_depth=1)):
                raise ValueError("test")
        assert get_pattern_config().max_depth == DEFAULT_MAX_DEPTH


class TestConfigIsApplied:
    """Parsers and expanders read the active config."""

    def test_parser_depth_limit(self) -> None:
        source = "mir(mir(mir($d)))"
        assert parse(source).success
        with pattern_config_context(PatternConfig(max_depth=3)):
            result = parse(source)
        assert not result.success
        assert result.error.message == "Pattern nesting exceeds maximum depth of 3"

    def test_trailing_tokens(self) -> None:
        assert parse("$d $h").success
        with pattern_config_context(PatternConfig(allow_trailing_tokens=False)):
            result = parse("$d $h")
        assert not result.success
        assert result.error.message == "Unexpected trailing input: $"

    def test_expander_reads_config_at_construction(self) -> None:
        with pattern_config_context(PatternConfig(max_depth=7)):
            expander = PatternExpander()
        assert expander._max_depth == 7

    def test_explicit_limit_wins(self) -> None:
        with pattern_config_context(PatternConfig(max_depth=7)):
            assert PatternExpander(max_depth=2)._max_depth == 2


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        """Each thread sees its own config."""
        results: dict[int, bool] = {}
        source = "mir(mir($d))"

        def worker(thread_id: int, config: PatternConfig) -> None:
            set_pattern_config(config)
            results[thread_id] = parse(source).success

        configs = [
            PatternConfig(max_depth=1),
            PatternConfig(max_depth=2),
            PatternConfig(max_depth=3),
            PatternConfig(),
        ]

        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: False, 1: False, 2: True, 3: True}
        # The main thread is untouched
        assert get_pattern_config() == PatternConfig()
