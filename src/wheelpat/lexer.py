"""Single-pass lexer for the wheelpat pattern language.

Converts raw pattern text into a flat list of tokens, tracking line and
column for diagnostics. The lexer knows nothing about grammar.

Unrecognized characters are dropped without a token or an error, so the
lexer always terminates and never fails.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable

from wheelpat.tokens import KEYWORDS, PUNCTUATION, Token, TokenType


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


class Lexer:
    """Character-at-a-time lexer.

    Usage:
            >>> Lexer("seq($dh, 3)").tokenize()
        [Token(IDENTIFIER, 'seq', 1:1), Token(LPAREN, '(', 1:4), ...]

    Every token list ends with exactly one EOF token.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_line",
        "_column",
    )

    def __init__(self, source: str) -> None:
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        Returns:
            List of tokens ending with a single EOF token.
        """
        tokens: list[Token] = []
        source = self._source

        while self._pos < self._source_len:
            char = source[self._pos]

            if char.isspace():
                self._skip_whitespace(char)
                continue

            token_type = PUNCTUATION.get(char)
            if token_type is not None:
                tokens.append(self._make_token(token_type, char))
                self._step()
                continue

            if char == '"' or char == "'":
                tokens.append(self._read_string(char))
                continue

            if _is_digit(char):
                tokens.append(self._read_while(TokenType.NUMBER, _is_digit))
                continue

            if _is_letter(char):
                tokens.append(self._read_word())
                continue

            # Unknown character: dropped silently
            self._step()

        tokens.append(self._make_token(TokenType.EOF, ""))
        return tokens

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        return Token(
            type=token_type,
            value=value,
            position=self._pos,
            line=self._line,
            column=self._column,
        )

    def _step(self) -> None:
        self._pos += 1
        self._column += 1

    def _skip_whitespace(self, char: str) -> None:
        if char == "\n":
            self._line += 1
            self._column = 1
            self._pos += 1
        else:
            self._step()

    def _read_while(self, token_type: TokenType, accept: Callable[[str], bool]) -> Token:
        position, line, column = self._pos, self._line, self._column
        while self._pos < self._source_len and accept(self._source[self._pos]):
            self._step()
        return Token(
            type=token_type,
            value=self._source[position : self._pos],
            position=position,
            line=line,
            column=column,
        )

    def _read_word(self) -> Token:
        """Read a letter-led run of letters and digits.

        Keywords become IDENTIFIER tokens, every other word is a SYMBOL.
        """
        token = self._read_while(
            TokenType.SYMBOL, lambda c: _is_letter(c) or _is_digit(c)
        )
        if token.value.lower() in KEYWORDS:
            return Token(
                type=TokenType.IDENTIFIER,
                value=token.value,
                position=token.position,
                line=token.line,
                column=token.column,
            )
        return token

    def _read_string(self, quote: str) -> Token:
        """Read a quoted string verbatim up to the matching quote.

        No escape sequences. An unterminated string runs to end of input.
        """
        position, line, column = self._pos, self._line, self._column
        self._step()  # opening quote
        begin = self._pos
        while self._pos < self._source_len and self._source[self._pos] != quote:
            if self._source[self._pos] == "\n":
                self._line += 1
                self._column = 1
                self._pos += 1
            else:
                self._step()
        value = self._source[begin : self._pos]
        if self._pos < self._source_len:
            self._step()  # closing quote
        return Token(
            type=TokenType.STRING,
            value=value,
            position=position,
            line=line,
            column=column,
        )


def tokenize(source: str) -> list[Token]:
    """Tokenize pattern text.

    Args:
        source: Raw pattern text

    Returns:
        List of tokens ending with a single EOF token.
    """
    return Lexer(source).tokenize()


__all__ = [
    "Lexer",
    "tokenize",
]
