"""Pattern expansion: AST to a flat list of grammar items.

Walks a pattern AST with match-based dispatch and unrolls every repeat,
command and element count into the ordered stroke list the renderer
draws around a ring.

Expansion errors are raised (not returned): callers that need structured
results use ``wheelpat.parse_pattern``, which converts them.

Thread Safety:
    PatternExpander keeps only a recursion depth counter. Create one per
    expansion or use the module-level ``expand`` function.

"""

from __future__ import annotations

from wheelpat.commands import get_command
from wheelpat.config import get_pattern_config
from wheelpat.errors import ExpansionError, NestingDepthError, UnsupportedNodeError
from wheelpat.nodes import (
    SOLID_RING,
    SPACER,
    STROKE_ALPHABET,
    Command,
    ElementCount,
    GrammarItem,
    PatternNode,
    Sequence,
    Symbol,
    VariableReference,
)

_SPACER_ITEM = GrammarItem(char=SPACER, rotated=False)


class PatternExpander:
    """Expands pattern ASTs into grammar items.

    Usage:
            >>> from wheelpat.parser import parse
            >>> PatternExpander().expand(parse("mir($dh)").ast)
            [GrammarItem(char='h', rotated=False), GrammarItem(char='d', rotated=False)]

    Nesting of sequences and commands is bounded by
    ``PatternConfig.max_depth``; deeper trees raise NestingDepthError.

    """

    __slots__ = ("_depth", "_max_depth")

    def __init__(self, max_depth: int | None = None) -> None:
        self._depth = 0
        self._max_depth = (
            max_depth if max_depth is not None else get_pattern_config().max_depth
        )

    def expand(self, ast: PatternNode) -> list[GrammarItem]:
        """Expand a pattern AST.

        Raises:
            ExpansionError: Unknown command, bad arity, bad count argument or
                a symbol outside the stroke alphabet
            UnsupportedNodeError: A variable reference was found
            NestingDepthError: The tree is deeper than the configured limit
        """
        self._depth = 0
        return self._expand_node(ast)

    def _expand_node(self, node: PatternNode) -> list[GrammarItem]:
        nested = isinstance(node, (Sequence, Command))
        if nested:
            self._depth += 1
            if self._depth > self._max_depth:
                raise NestingDepthError(self._max_depth)
        try:
            match node:
                case Symbol():
                    return self._expand_symbol(node)
                case Sequence():
                    return self._expand_sequence(node)
                case Command():
                    return self._expand_command(node)
                case ElementCount():
                    return self._expand_element_count(node)
                case VariableReference():
                    raise UnsupportedNodeError(
                        "Variable references are not supported by the expander: "
                        f"@{node.name}"
                    )
                case _:
                    raise ExpansionError(f"Unknown node type: {type(node).__name__}")
        finally:
            if nested:
                self._depth -= 1

    def _expand_symbol(self, node: Symbol) -> list[GrammarItem]:
        if node.char == SOLID_RING:
            raise ExpansionError(
                "Solid ring marker '-' cannot be expanded into strokes"
            )
        if node.char not in STROKE_ALPHABET:
            raise ExpansionError(f"Unknown symbol: {node.char!r}")
        count = node.count if node.count is not None else 1
        return [GrammarItem(char=node.char, rotated=node.rotated)] * count  # type: ignore[arg-type]

    def _expand_sequence(self, node: Sequence) -> list[GrammarItem]:
        items: list[GrammarItem] = []
        for pattern in node.patterns:
            items.extend(self._expand_node(pattern))
        if node.count is not None:
            items = items * node.count
        return items

    def _expand_command(self, node: Command) -> list[GrammarItem]:
        match node.name:
            case "seq":
                return self._expand_seq(node)
            case "mir":
                return self._expand_mir(node)
            case "space":
                return self._expand_space(node)
            case _:
                raise ExpansionError(f"Unknown command: {node.name}")

    def _check_args(
        self, node: Command
    ) -> tuple[tuple[PatternNode, ...], int | None]:
        """Check arity and split off the trailing count of counted commands.

        The count is carried by the last argument, which must be a Symbol:
        a bare number such as the ``3`` in ``seq($dh, 3)``, or a stroke
        letter, whose unwritten count means 1. A count of zero is rejected.
        """
        definition = get_command(node.name)
        assert definition is not None
        if not definition.accepts(len(node.args)):
            raise ExpansionError(definition.arity_message())
        if not definition.counted:
            return node.args, None

        last = node.args[-1]
        count = None
        if isinstance(last, Symbol):
            count = last.count
            if count is None and last.char in STROKE_ALPHABET:
                count = 1
        if not count:
            raise ExpansionError(
                f"{node.name} command requires a count as the last argument"
            )
        return node.args[:-1], count

    def _expand_seq(self, node: Command) -> list[GrammarItem]:
        patterns, repeat_count = self._check_args(node)
        once: list[GrammarItem] = []
        for pattern in patterns:
            once.extend(self._expand_node(pattern))
        return once * repeat_count  # type: ignore[operator]

    def _expand_mir(self, node: Command) -> list[GrammarItem]:
        (pattern,), _ = self._check_args(node)
        items = self._expand_node(pattern)
        items.reverse()
        return items

    def _expand_space(self, node: Command) -> list[GrammarItem]:
        patterns, space_count = self._check_args(node)
        gap = [_SPACER_ITEM] * space_count  # type: ignore[operator]
        items: list[GrammarItem] = []
        for index, pattern in enumerate(patterns):
            if index:
                items.extend(gap)
            items.extend(self._expand_node(pattern))
        return items

    def _expand_element_count(self, node: ElementCount) -> list[GrammarItem]:
        """Tile the inner expansion cyclically to exactly ``count`` items."""
        items = self._expand_node(node.pattern)
        if not items:
            return []
        full_repeats, remainder = divmod(node.count, len(items))
        return items * full_repeats + items[:remainder]


def expand(ast: PatternNode) -> list[GrammarItem]:
    """Expand a pattern AST into grammar items.

    Args:
        ast: Pattern AST from ``wheelpat.parser.parse``

    Returns:
        Ordered list of GrammarItem, one per stroke placement.

    Raises:
        ExpansionError: See PatternExpander.expand
    """
    return PatternExpander().expand(ast)


__all__ = [
    "PatternExpander",
    "expand",
]
