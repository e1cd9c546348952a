"""Typed AST nodes for wheelpat.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Pattern matching: match statements work naturally

Pattern and color nodes carry a ``type`` discriminator (``"symbol"``,
``"colorRgb"``, ...) for callers that switch on node kind without
importing the classes.

Node Hierarchy:
PatternNode
├── Symbol
├── Sequence
├── Command
├── ElementCount
└── VariableReference
ColorNode
├── ColorFunction
├── ColorRgb
├── ColorHsb
└── ColorReference
Document
├── RingDefinition
├── DotDefinition
├── GuidesDefinition
└── VariableDefinition

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Literal, TypeAlias

# Stroke alphabet: the only characters a GrammarItem may carry
STROKE_ALPHABET: frozenset[str] = frozenset("dhlvx")

# Pattern marking a ring drawn as one continuous band
SOLID_RING = "-"

# Filler stroke inserted by space()
SPACER = "x"

StrokeChar = Literal["d", "h", "l", "v", "x"]


# =============================================================================
# Pattern Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Symbol:
    """A stroke symbol.

    Pattern: ``d``, ``H``, ``v3``

    ``rotated`` is True when the symbol was written uppercase. ``count`` is
    None when no repeat digits were written.

    """

    type: ClassVar[str] = "symbol"

    char: str
    rotated: bool = False
    count: int | None = None

    @property
    def is_solid_ring(self) -> bool:
        return self.char == SOLID_RING


@dataclass(frozen=True, slots=True)
class Sequence:
    """An ordered list of sub-patterns.

    Pattern: ``$dh2v``

    """

    type: ClassVar[str] = "sequence"

    patterns: tuple[PatternNode, ...]
    count: int | None = None


@dataclass(frozen=True, slots=True)
class Command:
    """A named operation applied to its arguments.

    Pattern: ``seq($dh, 3)``, ``mir($dhl)``, ``space($d, $h, 2)``

    Argument count and kind are checked by the expander, not the parser.

    """

    type: ClassVar[str] = "command"

    name: str
    args: tuple[PatternNode, ...]
    count: int | None = None


@dataclass(frozen=True, slots=True)
class ElementCount:
    """A pattern tiled cyclically to exactly ``count`` elements.

    Pattern: ``$dh:7``

    """

    type: ClassVar[str] = "elementCount"

    pattern: PatternNode
    count: int


@dataclass(frozen=True, slots=True)
class VariableReference:
    """A reference to a pattern variable.

    Pattern: ``@base`` (argument position only)

    """

    type: ClassVar[str] = "variableReference"

    name: str


PatternNode: TypeAlias = Symbol | Sequence | Command | ElementCount | VariableReference


@dataclass(frozen=True, slots=True)
class GrammarItem:
    """One stroke placement: a symbol of the stroke alphabet and a rotation flag.

    This is the only output type the renderer consumes. Repetition is
    always unrolled into separate items.

    """

    char: StrokeChar
    rotated: bool = False

    def to_char(self) -> str:
        """Basic-string form: uppercase when rotated."""
        return self.char.upper() if self.rotated else self.char


# =============================================================================
# Color Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorFunction:
    """A palette generator call.

    Pattern: ``triadic(baseHue: 180, saturation: 85)``

    """

    type: ClassVar[str] = "colorFunction"

    name: str
    params: Mapping[str, float] = field(hash=False)

    def __post_init__(self) -> None:
        # Stored read-only; callers may pass a plain dict
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


@dataclass(frozen=True, slots=True)
class ColorRgb:
    """Pattern: ``rgb(255, 128, 64)``"""

    type: ClassVar[str] = "colorRgb"

    r: int
    g: int
    b: int


@dataclass(frozen=True, slots=True)
class ColorHsb:
    """Pattern: ``hsb(180, 85, 90)``"""

    type: ClassVar[str] = "colorHsb"

    h: int
    s: int
    b: int


@dataclass(frozen=True, slots=True)
class ColorReference:
    """A reference to another palette entry by name."""

    type: ClassVar[str] = "colorReference"

    name: str


ColorNode: TypeAlias = ColorFunction | ColorRgb | ColorHsb | ColorReference


# =============================================================================
# Document Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class RingDefinition:
    """One ring of the artwork.

    Document line: ``O(120.0, 16): $d [A, B]``

    """

    radius: float
    element_count: int
    pattern: PatternNode
    colors: tuple[str, ...] | None = None

    @property
    def is_solid(self) -> bool:
        return isinstance(self.pattern, Symbol) and self.pattern.is_solid_ring


@dataclass(frozen=True, slots=True)
class DotDefinition:
    """The center dot. Unset fields keep the caller's defaults."""

    size: float | None = None
    color: str | None = None
    visible: bool | None = None


@dataclass(frozen=True, slots=True)
class GuidesDefinition:
    """Placeholder for guide-grid controls; carries no settings yet."""


@dataclass(frozen=True, slots=True)
class VariableDefinition:
    """Document line: ``@base = seq($d, 2)``"""

    name: str
    pattern: PatternNode


@dataclass(frozen=True, slots=True)
class Document:
    """Root of a parsed artwork document."""

    rings: tuple[RingDefinition, ...] = ()
    dot: DotDefinition | None = None
    guides: GuidesDefinition | None = None
    variables: tuple[VariableDefinition, ...] = ()
    palette: Mapping[str, ColorNode] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if self.palette is not None:
            object.__setattr__(self, "palette", MappingProxyType(dict(self.palette)))


__all__ = [
    "SOLID_RING",
    "SPACER",
    "STROKE_ALPHABET",
    "ColorFunction",
    "ColorHsb",
    "ColorNode",
    "ColorReference",
    "ColorRgb",
    "Command",
    "Document",
    "DotDefinition",
    "ElementCount",
    "GrammarItem",
    "GuidesDefinition",
    "PatternNode",
    "RingDefinition",
    "Sequence",
    "StrokeChar",
    "Symbol",
    "VariableDefinition",
    "VariableReference",
]
