"""Exception classes for wheelpat.

Provides standardized exceptions for error handling throughout wheelpat.

Parse errors are raised inside the parsers but never escape ``parse()``:
they are returned as data on the result object. Expansion errors are
raised to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wheelpat.location import SourceLocation


class WheelpatError(Exception):
    """Base exception for all wheelpat errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(WheelpatError):
    """Error during pattern or document parsing.

    Carries enough information to point a user at the offending character.
    """

    def __init__(
        self,
        message: str,
        position: int = 0,
        line: int = 1,
        column: int = 1,
        suggestion: str | None = None,
    ) -> None:
        """Initialize parse error with location.

        Args:
            message: Error description
            position: Offset of the offending character (0-indexed)
            line: Line number where error occurred (1-indexed)
            column: Column where error occurred (1-indexed)
            suggestion: Optional hint on how to fix the input
        """
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        self.suggestion = suggestion
        super().__init__(f"{line}:{column} {message}")

    @classmethod
    def at(
        cls, message: str, location: SourceLocation, suggestion: str | None = None
    ) -> ParseError:
        """Create an error positioned at a source location."""
        return cls(
            message,
            position=location.offset,
            line=location.line,
            column=location.column,
            suggestion=suggestion,
        )

    @property
    def location(self) -> SourceLocation:
        """Location of the error as a SourceLocation."""
        from wheelpat.location import SourceLocation

        return SourceLocation(line=self.line, column=self.column, offset=self.position)

    def rebased(
        self, line_delta: int, column_delta: int = 0, offset_delta: int = 0
    ) -> ParseError:
        """Return a copy positioned inside an enclosing source.

        Used by the document parser to report errors from a pattern that
        was parsed out of one document line.
        """
        return ParseError.at(
            self.message,
            self.location.shifted(line_delta, column_delta, offset_delta),
            suggestion=self.suggestion,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return (
            self.message == other.message
            and self.position == other.position
            and self.line == other.line
            and self.column == other.column
            and self.suggestion == other.suggestion
        )

    def __hash__(self) -> int:
        return hash((self.message, self.position, self.line, self.column))

    def __repr__(self) -> str:
        return (
            f"ParseError({self.message!r}, position={self.position}, "
            f"line={self.line}, column={self.column})"
        )


class ExpansionError(WheelpatError):
    """Error while expanding a pattern AST into grammar items.

    Raised for unknown commands, wrong argument counts or kinds, and
    symbols outside the stroke alphabet.
    """

    pass


class UnsupportedNodeError(ExpansionError):
    """Raised when the expander meets a node kind it cannot expand.

    Variable references are parsed and recorded but not substituted.
    """

    pass


class NestingDepthError(ExpansionError):
    """Raised when a pattern nests deeper than the configured maximum."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Pattern nesting exceeds maximum depth of {max_depth}")
