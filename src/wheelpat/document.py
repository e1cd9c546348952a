"""Line-oriented parser for artwork documents.

A document is newline-separated text made of sections:

    rings:
    O(120.0, 16): $d
    O(180.0, 32): mir($dh) [A, B]
    dot:
    size: 80.0
    visible: true
    variables:
    @base = seq($d, 2)
    palette:
    A = triadic(baseHue: 180)
    B = rgb(255, 128, 64)

A section header is a whole trimmed line. A section body runs until end of
input, a blank line, or the next header. Lines starting with ``;;`` are
comments. Ring and variable patterns go through the pattern parser;
palette colors go through ``wheelpat.palette``.

Outside any section a line is tried once as a ring definition and dropped
if that fails, so older documents without headers still load.

Thread Safety:
    DocumentParser instances are single-use. Create one per parse.

"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from wheelpat.errors import ParseError, WheelpatError
from wheelpat.location import SourceLocation
from wheelpat.nodes import (
    SOLID_RING,
    ColorNode,
    Document,
    DotDefinition,
    GuidesDefinition,
    PatternNode,
    RingDefinition,
    Symbol,
    VariableDefinition,
)
from wheelpat.palette import leading_float, parse_color_expression
from wheelpat.parser import Parser
from wheelpat.utils.logger import get_logger

logger = get_logger(__name__)

SECTION_HEADERS: frozenset[str] = frozenset(
    {"rings:", "dot:", "guides:", "variables:", "palette:"}
)
COMMENT_PREFIX = ";;"

_RING_RE = re.compile(r"^O\((\d+(?:\.\d+)?),\s*(\d+)\):\s*(.+)$")
_RING_COLORS_RE = re.compile(r"\s*\[\s*([A-Z](?:\s*,\s*[A-Z])*)\s*\]\s*$")
_DOT_PROPERTY_RE = re.compile(r"^(\w+):\s*(.+)$")
_VARIABLE_RE = re.compile(r"^@(\w+)\s*=\s*(.+)$")
_PALETTE_RE = re.compile(r"^([A-Z])\s*=\s*(.+)$")


@dataclass(frozen=True, slots=True)
class DocumentParseResult:
    """Outcome of parsing a document. Exactly one of ``ast`` and ``error`` is set."""

    success: bool
    ast: Document | None = None
    error: ParseError | None = None

    @classmethod
    def ok(cls, ast: Document) -> DocumentParseResult:
        return cls(success=True, ast=ast)

    @classmethod
    def fail(cls, error: ParseError) -> DocumentParseResult:
        return cls(success=False, error=error)


@dataclass(frozen=True, slots=True)
class _Line:
    """One trimmed source line with its coordinates."""

    text: str
    number: int  # 1-indexed
    offset: int  # offset of the first non-blank character
    indent: int

    def location(self, column_delta: int = 0) -> SourceLocation:
        return SourceLocation(
            line=self.number,
            column=self.indent + 1 + column_delta,
            offset=self.offset + column_delta,
        )


class DocumentParser:
    """Section-aware document parser.

    Usage:
            >>> result = DocumentParser("rings:\\nO(120.0, 16): $d").parse()
            >>> result.ast.rings[0].element_count
            16

    Thread Safety:
        Single-use and not thread-safe. The variable table is per instance.

    """

    __slots__ = (
        "_source",
        "_lines",
        "_current_line",
        "_rings",
        "_dot",
        "_guides",
        "_variables",
        "_variable_table",
        "_palette",
    )

    def __init__(self, source: str) -> None:
        self._source = source
        self._lines = self._split_lines(source)
        self._current_line = 1
        self._rings: list[RingDefinition] = []
        self._dot: DotDefinition | None = None
        self._guides: GuidesDefinition | None = None
        self._variables: list[VariableDefinition] = []
        self._variable_table: dict[str, PatternNode] = {}
        self._palette: dict[str, ColorNode] | None = None

    @property
    def variables(self) -> Mapping[str, PatternNode]:
        """Variables defined so far, by name (read-only view).

        Populated while parsing; references are not substituted.
        """
        return MappingProxyType(self._variable_table)

    def parse(self) -> DocumentParseResult:
        """Parse the whole document.

        Never raises for malformed input. The first failing section line
        aborts the parse and is returned as the error.
        """
        try:
            self._parse_document()
        except ParseError as error:
            return DocumentParseResult.fail(error)
        except WheelpatError as error:
            return DocumentParseResult.fail(
                ParseError(str(error), line=self._current_line, column=1)
            )

        logger.debug(
            "Parsed document: %d rings, %d variables",
            len(self._rings),
            len(self._variables),
        )
        return DocumentParseResult.ok(
            Document(
                rings=tuple(self._rings),
                dot=self._dot,
                guides=self._guides,
                variables=tuple(self._variables),
                palette=self._palette,
            )
        )

    # =========================================================================
    # Document structure
    # =========================================================================

    @staticmethod
    def _split_lines(source: str) -> list[_Line]:
        lines: list[_Line] = []
        offset = 0
        for number, raw in enumerate(source.split("\n"), start=1):
            stripped = raw.lstrip()
            indent = len(raw) - len(stripped)
            lines.append(
                _Line(
                    text=stripped.rstrip(),
                    number=number,
                    offset=offset + indent,
                    indent=indent,
                )
            )
            offset += len(raw) + 1
        return lines

    def _parse_document(self) -> None:
        index = 0
        total = len(self._lines)
        while index < total:
            line = self._lines[index]
            self._current_line = line.number
            index += 1

            if not line.text or line.text.startswith(COMMENT_PREFIX):
                continue

            if line.text in SECTION_HEADERS:
                body, index = self._collect_body(index)
                self._parse_section(line.text, body)
                continue

            self._parse_loose_line(line)

    def _collect_body(self, start: int) -> tuple[list[_Line], int]:
        """Gather section body lines starting at ``start``.

        Returns the non-comment body lines and the index of the line that
        ended the section.
        """
        body: list[_Line] = []
        index = start
        while index < len(self._lines):
            line = self._lines[index]
            if not line.text or line.text in SECTION_HEADERS:
                break
            if not line.text.startswith(COMMENT_PREFIX):
                body.append(line)
            index += 1
        return body, index

    def _parse_section(self, header: str, body: list[_Line]) -> None:
        match header:
            case "rings:":
                self._parse_rings(body)
            case "dot:":
                self._parse_dot(body)
            case "guides:":
                self._parse_guides(body)
            case "variables:":
                self._parse_variables(body)
            case "palette:":
                self._parse_palette(body)

    def _parse_loose_line(self, line: _Line) -> None:
        """Try a line outside any section as a ring definition."""
        try:
            ring = self._match_ring(line)
        except ParseError as error:
            logger.debug("Dropped line %d: %s", line.number, error.message)
            return
        if ring is None:
            logger.debug("Dropped unrecognized line %d: %r", line.number, line.text)
            return
        self._rings.append(ring)

    # =========================================================================
    # Sections
    # =========================================================================

    def _parse_rings(self, body: list[_Line]) -> None:
        for line in body:
            self._current_line = line.number
            ring = self._match_ring(line)
            if ring is None:
                raise ParseError.at(
                    f"Invalid ring definition: {line.text}",
                    line.location(),
                    suggestion="Expected O(<radius>, <count>): <pattern>",
                )
            self._rings.append(ring)

    def _parse_dot(self, body: list[_Line]) -> None:
        fields: dict[str, object] = {}
        for line in body:
            prop = _DOT_PROPERTY_RE.match(line.text)
            if prop is None:
                logger.debug("Ignored dot line %d: %r", line.number, line.text)
                continue
            key, value = prop.group(1), prop.group(2)
            match key:
                case "size":
                    size = leading_float(value)
                    if size is None:
                        logger.debug("Ignored dot size %r on line %d", value, line.number)
                    else:
                        fields["size"] = size
                case "color":
                    fields["color"] = value
                case "visible":
                    fields["visible"] = value.lower() == "true"
                case _:
                    logger.debug("Ignored dot property %r on line %d", key, line.number)
        self._dot = DotDefinition(**fields)  # type: ignore[arg-type]

    def _parse_guides(self, body: list[_Line]) -> None:
        # Reserved for grid controls; body lines carry no settings yet
        self._guides = GuidesDefinition()

    def _parse_variables(self, body: list[_Line]) -> None:
        for line in body:
            self._current_line = line.number
            match = _VARIABLE_RE.match(line.text)
            if match is None:
                raise ParseError.at(
                    f"Invalid variable definition: {line.text}",
                    line.location(),
                    suggestion="Expected @name = <pattern>",
                )
            name = match.group(1)
            pattern = self._parse_embedded_pattern(line, match.group(2), match.start(2))
            self._variables.append(VariableDefinition(name=name, pattern=pattern))
            self._variable_table[name] = pattern

    def _parse_palette(self, body: list[_Line]) -> None:
        palette = self._palette if self._palette is not None else {}
        for line in body:
            self._current_line = line.number
            match = _PALETTE_RE.match(line.text)
            if match is None:
                raise ParseError.at(
                    f"Invalid palette definition: {line.text}",
                    line.location(),
                    suggestion="Expected <A-Z> = <color>",
                )
            name, expression = match.group(1), match.group(2)
            color = parse_color_expression(expression)
            if color is None:
                raise ParseError.at(
                    f"Invalid color expression: {expression}",
                    line.location(match.start(2)),
                    suggestion="Use rgb(r, g, b), hsb(h, s, b) or name(key: value, ...)",
                )
            palette[name] = color
        self._palette = palette

    # =========================================================================
    # Line grammars
    # =========================================================================

    def _match_ring(self, line: _Line) -> RingDefinition | None:
        """Match ``O(radius, count): pattern [colors]``.

        Returns None when the line does not have ring shape. Raises
        ParseError when it does but the pattern is invalid.
        """
        match = _RING_RE.match(line.text)
        if match is None:
            return None

        radius = float(match.group(1))
        element_count = int(match.group(2))
        pattern_text = match.group(3)

        colors: tuple[str, ...] | None = None
        colors_match = _RING_COLORS_RE.search(pattern_text)
        if colors_match is not None:
            colors = tuple(name.strip() for name in colors_match.group(1).split(","))
            pattern_text = pattern_text[: colors_match.start()]

        if pattern_text.strip() == SOLID_RING:
            pattern: PatternNode = Symbol(char=SOLID_RING, rotated=False)
        else:
            pattern = self._parse_embedded_pattern(line, pattern_text, match.start(3))

        return RingDefinition(
            radius=radius,
            element_count=element_count,
            pattern=pattern,
            colors=colors,
        )

    def _parse_embedded_pattern(self, line: _Line, text: str, column: int) -> PatternNode:
        """Parse pattern text found at ``column`` (0-based) of a document line.

        Errors are rebased so they point into the document.
        """
        result = Parser(text).parse()
        if not result.success or result.ast is None:
            assert result.error is not None
            raise result.error.rebased(
                line_delta=line.number - 1,
                column_delta=line.indent + column,
                offset_delta=line.offset + column,
            )
        return result.ast


def parse_document(source: str) -> DocumentParseResult:
    """Parse an artwork document.

    Args:
        source: Multi-line document text

    Returns:
        DocumentParseResult with ``ast`` on success or ``error`` on failure.
    """
    return DocumentParser(source).parse()


__all__ = [
    "COMMENT_PREFIX",
    "SECTION_HEADERS",
    "DocumentParseResult",
    "DocumentParser",
    "parse_document",
]
