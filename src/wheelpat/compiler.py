"""Compilation between pattern ASTs and basic grammar strings.

A basic grammar string is the flat per-ring storage form: one character
per stroke, uppercase when rotated, with optional digit runs as repeat
counts when written by hand (``d3H2``). Compiled output is always fully
unrolled (``seq($dh, 3)`` compiles to ``dhdhdh``).

The solid-ring pattern ``-`` passes through unchanged in both directions.

"""

from __future__ import annotations

from collections.abc import Iterable

from wheelpat.errors import WheelpatError
from wheelpat.expander import PatternExpander
from wheelpat.nodes import SOLID_RING, STROKE_ALPHABET, GrammarItem, PatternNode, Symbol
from wheelpat.parser import Parser
from wheelpat.utils.logger import get_logger

logger = get_logger(__name__)


class PatternCompiler:
    """Compiles pattern-language text and ASTs down to basic strings."""

    __slots__ = ()

    def compile_pattern(self, pattern: PatternNode) -> str:
        """Compile a pattern AST to a basic character string.

        Examples:
            - ``$Vx`` -> ``Vx``
            - ``mir($dh)`` -> ``hd``
            - ``seq($dh, 3)`` -> ``dhdhdh``

        Returns an empty string (and logs a warning) when the AST cannot be
        expanded.
        """
        if isinstance(pattern, Symbol) and pattern.char == SOLID_RING:
            return SOLID_RING

        try:
            items = PatternExpander().expand(pattern)
        except WheelpatError as error:
            logger.warning("Pattern compilation failed: %s", error)
            return ""
        return grammar_to_string(items)

    def compile_pattern_string(self, pattern_string: str) -> str:
        """Compile pattern text to a basic character string.

        Text without a leading ``$`` is already basic and is returned
        unchanged. If pattern text fails to parse, the ``$`` is stripped and
        the rest returned as-is.
        """
        if not pattern_string or not pattern_string.strip():
            return ""

        if pattern_string.strip() == SOLID_RING:
            return SOLID_RING

        if not pattern_string.startswith("$"):
            return pattern_string

        result = Parser(pattern_string).parse()
        if result.success and result.ast is not None:
            return self.compile_pattern(result.ast)

        logger.warning("Pattern string compilation failed: %s", result.error)
        return pattern_string[1:]


def parse_grammar(grammar_string: str) -> list[GrammarItem]:
    """Read a basic grammar string into grammar items.

    Each stroke letter may be followed by a digit run giving its repeat
    count; uppercase letters are rotated. Other characters are skipped.

    Example:
        >>> [item.to_char() for item in parse_grammar("d2H")]
        ['d', 'd', 'H']
    """
    items: list[GrammarItem] = []
    length = len(grammar_string)
    i = 0
    while i < length:
        raw = grammar_string[i]
        j = i + 1
        while j < length and grammar_string[j].isdigit():
            j += 1

        base = raw.lower()
        if base in STROKE_ALPHABET:
            repeat = int(grammar_string[i + 1 : j]) if j > i + 1 else 1
            items.extend([GrammarItem(char=base, rotated=raw != base)] * repeat)  # type: ignore[arg-type]
            i = j
        else:
            i += 1
    return items


def grammar_to_string(items: Iterable[GrammarItem]) -> str:
    """Fold grammar items into a basic string, uppercase when rotated."""
    return "".join(item.to_char() for item in items)


# Shared instance; PatternCompiler holds no state
pattern_compiler = PatternCompiler()


def compile_pattern(pattern: PatternNode) -> str:
    """Compile a pattern AST to a basic character string."""
    return pattern_compiler.compile_pattern(pattern)


def compile_pattern_string(pattern_string: str) -> str:
    """Compile pattern text to a basic character string."""
    return pattern_compiler.compile_pattern_string(pattern_string)


__all__ = [
    "PatternCompiler",
    "compile_pattern",
    "compile_pattern_string",
    "grammar_to_string",
    "parse_grammar",
    "pattern_compiler",
]
