"""Recursive descent parser producing a typed pattern AST.

Consumes the token list from Lexer and builds immutable pattern nodes.

Grammar:
    topLevel := pattern (':' NUMBER)?
    pattern  := sequence | command | symbol
    sequence := '$' (symbol | command)+
    command  := IDENTIFIER '(' [argument (',' argument)*] ')'
    argument := sequence | '@' NAME | command | symbol | NUMBER

Rotation is structural: a stroke letter written uppercase is rotated.
A NUMBER argument becomes ``Symbol('x', count=N)``, which is how ``seq``
and ``space`` receive their trailing count.

Thread Safety:
- Parser instances are single-use; create one per parse
- Configuration is read from ContextVar (thread-local)
- The resulting AST is immutable and safe to share

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wheelpat.config import get_pattern_config
from wheelpat.errors import ParseError
from wheelpat.lexer import Lexer
from wheelpat.nodes import (
    SPACER,
    STROKE_ALPHABET,
    Command,
    ElementCount,
    PatternNode,
    Sequence,
    Symbol,
    VariableReference,
)
from wheelpat.tokens import Token, TokenType

if TYPE_CHECKING:
    from wheelpat.nodes import GrammarItem

# Tokens that end a sequence body
_SEQUENCE_TERMINATORS = frozenset(
    {TokenType.EOF, TokenType.COLON, TokenType.RPAREN, TokenType.COMMA}
)


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing one pattern.

    Exactly one of ``ast`` and ``error`` is set. ``expanded`` is filled by
    ``wheelpat.parse_pattern`` only.
    """

    success: bool
    ast: PatternNode | None = None
    error: ParseError | None = None
    expanded: tuple[GrammarItem, ...] | None = None

    @classmethod
    def ok(
        cls, ast: PatternNode, expanded: tuple[GrammarItem, ...] | None = None
    ) -> ParseResult:
        return cls(success=True, ast=ast, expanded=expanded)

    @classmethod
    def fail(cls, error: ParseError) -> ParseResult:
        return cls(success=False, error=error)


def split_symbol_word(word: str) -> PatternNode:
    """Split a SYMBOL word into stroke symbols.

    Each stroke letter takes the digits that follow it as its count; other
    characters are skipped. ``d3H2`` becomes
    ``Sequence((Symbol('d', False, 3), Symbol('h', True, 2)))``.

    A word with no stroke letters becomes a single Symbol holding the whole
    lowercased word, which the expander later rejects.
    """
    symbols: list[Symbol] = []
    length = len(word)
    i = 0
    while i < length:
        char = word[i]
        base = char.lower()
        if base in STROKE_ALPHABET:
            j = i + 1
            while j < length and word[j].isdigit():
                j += 1
            count = int(word[i + 1 : j]) if j > i + 1 else None
            symbols.append(Symbol(char=base, rotated=char != base, count=count))
            i = j
        else:
            i += 1

    if len(symbols) == 1:
        return symbols[0]
    if symbols:
        return Sequence(patterns=tuple(symbols))
    return Symbol(char=word.lower(), rotated=False)


class Parser:
    """Recursive descent parser for one pattern expression.

    Usage:
            >>> Parser("seq($dh, 3)").parse().ast
        Command(name='seq', args=(Sequence(...), Symbol(char='x', rotated=False, count=3)))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation.

    """

    __slots__ = (
        "_source",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_depth",
        "_max_depth",
    )

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens: list[Token] = Lexer(source).tokenize()
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._current: Token = self._tokens[0]
        self._depth = 0
        self._max_depth = get_pattern_config().max_depth

    def parse(self) -> ParseResult:
        """Parse the source into a pattern AST.

        Never raises for malformed input; failures are returned on the
        result.
        """
        try:
            return ParseResult.ok(self._parse_top_level())
        except ParseError as error:
            return ParseResult.fail(error)

    # =========================================================================
    # Grammar rules
    # =========================================================================

    def _parse_top_level(self) -> PatternNode:
        ast = self._parse_pattern()

        if self._current.type is TokenType.COLON:
            self._advance()
            count_token = self._expect(
                TokenType.NUMBER,
                suggestion="Write the element count as a whole number, e.g. $dh:8",
            )
            ast = ElementCount(pattern=ast, count=int(count_token.value))

        if not self._at_end() and not get_pattern_config().allow_trailing_tokens:
            raise self._error(f"Unexpected trailing input: {self._current.describe()}")

        return ast

    def _parse_pattern(self) -> PatternNode:
        token = self._current
        if token.type is TokenType.DOLLAR:
            return self._parse_sequence()
        if token.type is TokenType.IDENTIFIER:
            return self._parse_command()
        if token.type is TokenType.SYMBOL:
            return self._parse_symbol()
        raise self._error(
            f"Unexpected token: {token.describe()}",
            suggestion="A pattern starts with $, a command such as seq(...), "
            "or stroke symbols d, h, l, v, x",
        )

    def _parse_sequence(self) -> PatternNode:
        dollar = self._expect(TokenType.DOLLAR)
        patterns: list[PatternNode] = []

        self._enter(dollar)
        while self._current.type not in _SEQUENCE_TERMINATORS:
            if self._current.type is TokenType.SYMBOL:
                patterns.append(self._parse_symbol())
            elif self._current.type is TokenType.IDENTIFIER:
                patterns.append(self._parse_command())
            else:
                break
        self._depth -= 1

        if not patterns:
            raise self._error(
                "Empty sequence after $",
                suggestion="Add at least one symbol after $, e.g. $dh",
            )
        return Sequence(patterns=tuple(patterns))

    def _parse_symbol(self) -> PatternNode:
        token = self._expect(TokenType.SYMBOL)
        node = split_symbol_word(token.value)
        if isinstance(node, Sequence):
            self._enter(token)
            self._depth -= 1
        return node

    def _parse_command(self) -> PatternNode:
        name_token = self._expect(TokenType.IDENTIFIER)
        self._expect(TokenType.LPAREN)

        self._enter(name_token)
        args: list[PatternNode] = []
        while self._current.type is not TokenType.RPAREN:
            args.append(self._parse_argument())
            if self._current.type is TokenType.COMMA:
                self._advance()
            elif self._current.type is not TokenType.RPAREN:
                raise self._error("Expected comma or closing parenthesis")
        self._expect(TokenType.RPAREN)
        self._depth -= 1

        return Command(name=name_token.value.lower(), args=tuple(args))

    def _parse_argument(self) -> PatternNode:
        token = self._current

        if token.type is TokenType.DOLLAR:
            return self._parse_sequence()

        if token.type is TokenType.AT:
            self._advance()
            name_token = self._current
            if name_token.type not in (TokenType.SYMBOL, TokenType.IDENTIFIER):
                raise self._error(
                    f"Expected variable name after @, got {name_token.describe()}"
                )
            self._advance()
            return VariableReference(name=name_token.value)

        if token.type is TokenType.IDENTIFIER:
            following = self._peek()
            if following is not None and following.type is TokenType.LPAREN:
                return self._parse_command()
            return self._parse_symbol()

        if token.type is TokenType.SYMBOL:
            return self._parse_symbol()

        if token.type is TokenType.NUMBER:
            self._advance()
            return Symbol(char=SPACER, rotated=False, count=int(token.value))

        raise self._error(f"Unexpected token in argument: {token.describe()}")

    # =========================================================================
    # Token navigation
    # =========================================================================

    def _at_end(self) -> bool:
        return self._current.type is TokenType.EOF

    def _advance(self) -> Token:
        """Consume the current token and return it.

        The cursor never moves past the trailing EOF.
        """
        token = self._current
        if self._pos < self._tokens_len - 1:
            self._pos += 1
            self._current = self._tokens[self._pos]
        return token

    def _peek(self, offset: int = 1) -> Token | None:
        pos = self._pos + offset
        if pos < self._tokens_len:
            return self._tokens[pos]
        return None

    def _expect(self, token_type: TokenType, suggestion: str | None = None) -> Token:
        if self._current.type is not token_type:
            raise self._error(
                f"Expected {token_type.name}, got {self._current.type.name}",
                suggestion=suggestion,
            )
        return self._advance()

    def _enter(self, token: Token) -> None:
        """Count one level of sequence or command nesting."""
        self._depth += 1
        if self._depth > self._max_depth:
            raise ParseError.at(
                f"Pattern nesting exceeds maximum depth of {self._max_depth}",
                token.location,
            )

    def _error(self, message: str, suggestion: str | None = None) -> ParseError:
        return ParseError.at(message, self._current.location, suggestion=suggestion)


def parse(source: str) -> ParseResult:
    """Parse one pattern expression.

    Args:
        source: Pattern text such as ``$dh:7`` or ``mir(seq($dh, 2))``

    Returns:
        ParseResult with ``ast`` on success or ``error`` on failure.
    """
    return Parser(source).parse()


__all__ = [
    "ParseResult",
    "Parser",
    "parse",
    "split_symbol_word",
]
