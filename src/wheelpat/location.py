"""Source location tracking for error messages.

Provides SourceLocation dataclass for tracking positions in pattern and
document text.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages.

    Lines and columns are 1-indexed; offset is the 0-based index of the
    first character in the source string.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Absolute offset in source

    Examples:
            >>> loc = SourceLocation(line=2, column=5, offset=12)
            >>> str(loc)
            '2:5'

    """

    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        """Format location as "line:column"."""
        return f"{self.line}:{self.column}"

    def shifted(
        self, line_delta: int, column_delta: int = 0, offset_delta: int = 0
    ) -> SourceLocation:
        """Return this location moved into an enclosing source.

        Used when a pattern embedded in a document line is parsed on its
        own: the column shift only applies to text on the first line.
        """
        column = self.column + column_delta if self.line == 1 else self.column
        return SourceLocation(
            line=self.line + line_delta,
            column=column,
            offset=self.offset + offset_delta,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create a placeholder location at the start of input."""
        return cls(line=1, column=1, offset=0)
