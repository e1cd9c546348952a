"""Token and TokenType definitions for the wheelpat lexer.

The lexer produces a flat list of Token objects that the parser consumes.
Each Token has a type, value, and source coordinates.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wheelpat.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer."""

    # Punctuation
    DOLLAR = auto()  # $
    AT = auto()  # @
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # ,
    COLON = auto()  # :
    EQUALS = auto()  # =
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]

    # Words and literals
    IDENTIFIER = auto()  # seq, mir, space, triadic, rgb, ...
    NUMBER = auto()  # 1, 2, 30
    SYMBOL = auto()  # d, H, d3h2, any non-keyword word
    STRING = auto()  # "name" or 'name'

    EOF = auto()


# Single-character punctuation -> token type
PUNCTUATION: dict[str, TokenType] = {
    "$": TokenType.DOLLAR,
    "@": TokenType.AT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "=": TokenType.EQUALS,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

# Words lexed as IDENTIFIER (compared case-insensitively)
KEYWORDS: frozenset[str] = frozenset(
    {
        "seq",
        "mir",
        "space",
        "triadic",
        "complementary",
        "tetradic",
        "analogous",
        "rgb",
        "hsb",
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw string value from source
        position: Offset of the first character (0-indexed)
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy cache uses idempotent write (safe for concurrent access).

    """

    type: TokenType
    value: str
    position: int
    line: int
    column: int
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from wheelpat.location import SourceLocation

        loc = SourceLocation(line=self.line, column=self.column, offset=self.position)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def describe(self) -> str:
        """Human-readable name of this token for error messages."""
        if self.type is TokenType.EOF:
            return "end of input"
        return self.value

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.line}:{self.column})"
