"""Source formatting: ASTs back to pattern and document text.

The inverse of parsing, used when an artwork edited through controls is
exported as a document. Formatting is canonical, not a byte-exact
reproduction of the original text: ``parse(format_pattern(ast))`` expands
to the same grammar items as ``ast``.

Nodes the grammar cannot express in a given position (an element count
inside a command, a variable reference outside an argument list, a color
reference in a palette) raise ValueError.
"""

from __future__ import annotations

from wheelpat.nodes import (
    SOLID_RING,
    SPACER,
    STROKE_ALPHABET,
    ColorFunction,
    ColorHsb,
    ColorNode,
    ColorReference,
    ColorRgb,
    Command,
    Document,
    DotDefinition,
    ElementCount,
    PatternNode,
    RingDefinition,
    Sequence,
    Symbol,
    VariableReference,
)


def format_pattern(node: PatternNode) -> str:
    """Format a pattern AST as pattern text.

    Example:
        >>> format_pattern(parse("seq( $dh ,3 )").ast)
        'seq($dh, 3)'
    """
    match node:
        case ElementCount():
            return f"{_format_top(node.pattern)}:{node.count}"
        case _:
            return _format_top(node)


def _format_top(node: PatternNode) -> str:
    match node:
        case Symbol():
            return _format_symbol(node)
        case Sequence() if _is_word(node):
            return _format_word(node)
        case Sequence() if node.count is None:
            return _format_sequence(node)
        case Sequence() | Command():
            return _format_unit(node)
        case ElementCount():
            raise ValueError("Element count is only allowed at the top level")
        case VariableReference():
            raise ValueError(
                f"Variable reference @{node.name} is only allowed as a command argument"
            )
    raise ValueError(f"Cannot format {type(node).__name__}")


def _format_symbol(node: Symbol) -> str:
    if node.char == SOLID_RING:
        return SOLID_RING
    text = node.char.upper() if node.rotated else node.char
    if node.count is not None:
        text += str(node.count)
    return text


def _is_word(node: Sequence) -> bool:
    """Whether a sequence is what the parser builds from one symbol word."""
    return (
        node.count is None
        and len(node.patterns) > 1
        and all(
            isinstance(pattern, Symbol) and pattern.char in STROKE_ALPHABET
            for pattern in node.patterns
        )
    )


def _format_word(node: Sequence) -> str:
    # d3H2: each letter takes the digits after it, so no separators
    return "".join(_format_symbol(pattern) for pattern in node.patterns)  # type: ignore[arg-type]


def _format_sequence(node: Sequence) -> str:
    body = _format_inline(node.patterns)
    if not body:
        raise ValueError("Cannot format an empty sequence")
    return "$" + body


def _format_inline(patterns: tuple[PatternNode, ...]) -> str:
    """Format sequence members back to back.

    Parts that would merge into one word are separated by a space.
    """
    text = ""
    for pattern in patterns:
        match pattern:
            case Symbol():
                part = _format_symbol(pattern)
            case Sequence() if _is_word(pattern):
                part = _format_word(pattern)
            case Sequence() if pattern.count is None:
                part = _format_inline(pattern.patterns)
            case Sequence() | Command():
                part = _format_unit(pattern)
            case _:
                raise ValueError(
                    f"{type(pattern).__name__} cannot appear inside a sequence"
                )
        if text and part and text[-1].isalnum() and part[0].isalnum():
            text += " "
        text += part
    return text


def _format_unit(node: Sequence | Command) -> str:
    """Format a sequence or command call; a repeat count becomes ``seq``."""
    if isinstance(node, Sequence):
        inner = _format_sequence(Sequence(patterns=node.patterns))
    else:
        args = ", ".join(_format_argument(arg) for arg in node.args)
        inner = f"{node.name}({args})"
    if node.count is None:
        return inner
    return f"seq({inner}, {node.count})"


def _format_argument(node: PatternNode) -> str:
    match node:
        case Symbol(char=char, rotated=False, count=count) if (
            char == SPACER and count is not None
        ):
            # Bare numbers parse to this node
            return str(count)
        case Symbol():
            return _format_symbol(node)
        case Sequence():
            if _is_word(node):
                return _format_word(node)
            if node.count is None:
                return _format_sequence(node)
            return _format_unit(node)
        case Command():
            return _format_unit(node)
        case VariableReference():
            return f"@{node.name}"
    raise ValueError(f"{type(node).__name__} cannot appear as a command argument")


# =============================================================================
# Documents
# =============================================================================


def _format_number(value: float) -> str:
    """Format a float so the document number grammar reads it back."""
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = f"{value:f}"
    return text


def format_color(color: ColorNode) -> str:
    """Format a palette color expression."""
    match color:
        case ColorRgb():
            return f"rgb({color.r}, {color.g}, {color.b})"
        case ColorHsb():
            return f"hsb({color.h}, {color.s}, {color.b})"
        case ColorFunction():
            params = ", ".join(
                f"{key}: {_format_number(value)}" for key, value in color.params.items()
            )
            return f"{color.name}({params})"
        case ColorReference():
            raise ValueError(f"Color reference {color.name!r} cannot be written to a palette")
    raise ValueError(f"Cannot format {type(color).__name__}")


def format_ring(ring: RingDefinition) -> str:
    """Format one ring line."""
    text = (
        f"O({_format_number(ring.radius)}, {ring.element_count}): "
        f"{format_pattern(ring.pattern)}"
    )
    if ring.colors:
        text += f" [{', '.join(ring.colors)}]"
    return text


def _format_dot(dot: DotDefinition) -> list[str]:
    lines = ["dot:"]
    if dot.size is not None:
        lines.append(f"size: {_format_number(dot.size)}")
    if dot.color is not None:
        lines.append(f"color: {dot.color}")
    if dot.visible is not None:
        lines.append(f"visible: {'true' if dot.visible else 'false'}")
    return lines


def format_document(doc: Document) -> str:
    """Format a document AST as document text.

    Sections are written in the order rings, dot, guides, variables,
    palette and separated by blank lines. Empty optional sections are
    omitted.
    """
    sections: list[list[str]] = []

    if doc.rings:
        sections.append(["rings:", *(format_ring(ring) for ring in doc.rings)])
    if doc.dot is not None:
        sections.append(_format_dot(doc.dot))
    if doc.guides is not None:
        sections.append(["guides:"])
    if doc.variables:
        sections.append(
            [
                "variables:",
                *(f"@{var.name} = {format_pattern(var.pattern)}" for var in doc.variables),
            ]
        )
    if doc.palette is not None:
        sections.append(
            [
                "palette:",
                *(f"{name} = {format_color(color)}" for name, color in doc.palette.items()),
            ]
        )

    return "\n\n".join("\n".join(lines) for lines in sections) + "\n"


__all__ = [
    "format_color",
    "format_document",
    "format_pattern",
    "format_ring",
]
