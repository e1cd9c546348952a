"""Built-in pattern commands.

Static metadata for ``seq``, ``mir`` and ``space``: argument bounds, a
one-line description and an example, used by the expander for arity checks
and by editors for help text.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandDefinition:
    """Description of one pattern command.

    Attributes:
        name: Command name as written in patterns (lowercase)
        min_args: Minimum number of arguments, including a trailing count
        max_args: Maximum number of arguments, or None for unbounded
        counted: Whether the last argument is the repeat/spacing count
        description: Short help text
        example: Example call and its compiled result
    """

    name: str
    min_args: int
    max_args: int | None
    counted: bool
    description: str
    example: str

    def arity_message(self) -> str:
        """Error message used when a call has the wrong number of arguments."""
        if self.max_args == self.min_args:
            noun = "argument" if self.min_args == 1 else "arguments"
            return f"{self.name} command requires exactly {self.min_args} {noun}"
        return f"{self.name} command requires at least {self.min_args} arguments"

    def accepts(self, arg_count: int) -> bool:
        if arg_count < self.min_args:
            return False
        return self.max_args is None or arg_count <= self.max_args


COMMANDS: dict[str, CommandDefinition] = {
    "seq": CommandDefinition(
        name="seq",
        min_args=2,
        max_args=None,
        counted=True,
        description="Sequence patterns together, repeat n times",
        example="seq($d, $h, $l, 3) -> dhldhldhl",
    ),
    "mir": CommandDefinition(
        name="mir",
        min_args=1,
        max_args=1,
        counted=False,
        description="Mirror (reverse) a pattern",
        example="mir($dhlv) -> vlhd",
    ),
    "space": CommandDefinition(
        name="space",
        min_args=2,
        max_args=None,
        counted=True,
        description="Insert n spacer strokes between patterns",
        example="space($d, $h, $l, 2) -> dxxhxxl",
    ),
}


def get_command(name: str) -> CommandDefinition | None:
    """Look up a command by name (case-insensitive)."""
    return COMMANDS.get(name.lower())


__all__ = [
    "COMMANDS",
    "CommandDefinition",
    "get_command",
]
