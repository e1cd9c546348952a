"""Tests for command metadata and pattern-language detection."""

import pytest

from wheelpat.commands import COMMANDS, get_command


class TestCommandTable:
    def test_names(self) -> None:
        assert set(COMMANDS) == {"seq", "mir", "space"}

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_command("SEQ") is COMMANDS["seq"]
        assert get_command("rot") is None

    @pytest.mark.parametrize(
        ("name", "message"),
        [
            ("seq", "seq command requires at least 2 arguments"),
            ("mir", "mir command requires exactly 1 argument"),
            ("space", "space command requires at least 2 arguments"),
        ],
    )
    def test_arity_messages(self, name: str, message: str) -> None:
        assert COMMANDS[name].arity_message() == message

    def test_accepts(self) -> None:
        seq, mir = COMMANDS["seq"], COMMANDS["mir"]
        assert not seq.accepts(1)
        assert seq.accepts(2)
        assert seq.accepts(20)
        assert mir.accepts(1)
        assert not mir.accepts(0)
        assert not mir.accepts(2)

    def test_counted_commands(self) -> None:
        assert COMMANDS["seq"].counted
        assert COMMANDS["space"].counted
        assert not COMMANDS["mir"].counted

    @pytest.mark.parametrize("name", sorted(COMMANDS))
    def test_examples_compile(self, name: str) -> None:
        """Each example reads ``call -> result``."""
        from wheelpat.compiler import compile_pattern_string

        call, expected = COMMANDS[name].example.split(" -> ")
        assert compile_pattern_string("$" + call) == expected

    def test_uncounted_command_expands_every_argument(self) -> None:
        """A number passed to mir is a pattern, not a count."""
        from wheelpat.compiler import compile_pattern_string

        assert compile_pattern_string("$mir(3)") == "xxx"
        assert compile_pattern_string("$seq(d, 3)") == "ddd"
