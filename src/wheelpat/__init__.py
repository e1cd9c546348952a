"""
wheelpat: pattern language for generative ring artwork

Compiles compact pattern strings and multi-section artwork documents into
typed ASTs and flat stroke sequences for a ring renderer.

Quick Start:
    >>> from wheelpat import parse_pattern
    >>> result = parse_pattern("seq($dH, 2)")
    >>> "".join(item.to_char() for item in result.expanded)
    'dHdH'

    >>> from wheelpat import compile_pattern_string
    >>> compile_pattern_string("$dh:5")
    'dhdhd'

Documents:
    >>> from wheelpat import parse_document
    >>> doc = parse_document("rings:\\nO(120.0, 16): mir($dh)").ast
    >>> doc.rings[0].radius
    120.0

Pattern syntax:
    d h l v x     stroke symbols (uppercase = rotated), ``d3`` repeats
    $...          sequence
    seq(p, n)     repeat patterns n times
    mir(p)        reverse
    space(p, n)   n spacer strokes between patterns
    p:n           tile to exactly n elements
"""

from wheelpat.commands import COMMANDS, CommandDefinition
from wheelpat.compiler import (
    PatternCompiler,
    compile_pattern,
    compile_pattern_string,
    grammar_to_string,
    parse_grammar,
)
from wheelpat.config import (
    PatternConfig,
    get_pattern_config,
    pattern_config_context,
    reset_pattern_config,
    set_pattern_config,
)
from wheelpat.document import DocumentParser, DocumentParseResult, parse_document
from wheelpat.errors import (
    ExpansionError,
    NestingDepthError,
    ParseError,
    UnsupportedNodeError,
    WheelpatError,
)
from wheelpat.expander import PatternExpander, expand
from wheelpat.formatter import format_document, format_pattern
from wheelpat.lexer import Lexer, tokenize
from wheelpat.location import SourceLocation
from wheelpat.nodes import (
    ColorFunction,
    ColorHsb,
    ColorNode,
    ColorReference,
    ColorRgb,
    Command,
    Document,
    DotDefinition,
    ElementCount,
    GrammarItem,
    GuidesDefinition,
    PatternNode,
    RingDefinition,
    Sequence,
    Symbol,
    VariableDefinition,
    VariableReference,
)
from wheelpat.parser import ParseResult, Parser, parse
from wheelpat.serialization import from_dict, from_json, to_dict, to_json
from wheelpat.tokens import Token, TokenType

__version__ = "0.1.0"


def parse_pattern(source: str) -> ParseResult:
    """Parse and expand a pattern.

    Expansion errors (unknown command, bad arity, variable references) are
    returned as a ParseError at the start of input rather than raised.

    Args:
        source: Pattern text

    Returns:
        ParseResult with ``ast`` and ``expanded`` on success.

    Example:
        >>> result = parse_pattern("mir($dh)")
        >>> [item.char for item in result.expanded]
        ['h', 'd']
    """
    result = parse(source)
    if not result.success or result.ast is None:
        return result

    try:
        expanded = PatternExpander().expand(result.ast)
    except ExpansionError as error:
        return ParseResult.fail(ParseError.at(str(error), SourceLocation.unknown()))
    return ParseResult.ok(result.ast, expanded=tuple(expanded))


__all__ = [
    # Parsing
    "parse",
    "parse_pattern",
    "parse_document",
    "tokenize",
    "Lexer",
    "Parser",
    "DocumentParser",
    "ParseResult",
    "DocumentParseResult",
    # Expansion and compilation
    "expand",
    "PatternExpander",
    "PatternCompiler",
    "compile_pattern",
    "compile_pattern_string",
    "parse_grammar",
    "grammar_to_string",
    # Commands
    "COMMANDS",
    "CommandDefinition",
    # Configuration
    "PatternConfig",
    "get_pattern_config",
    "set_pattern_config",
    "reset_pattern_config",
    "pattern_config_context",
    # Errors
    "WheelpatError",
    "ParseError",
    "ExpansionError",
    "UnsupportedNodeError",
    "NestingDepthError",
    # Serialization and formatting
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "format_pattern",
    "format_document",
    # Tokens and locations
    "Token",
    "TokenType",
    "SourceLocation",
    # Nodes
    "PatternNode",
    "Symbol",
    "Sequence",
    "Command",
    "ElementCount",
    "VariableReference",
    "GrammarItem",
    "ColorNode",
    "ColorFunction",
    "ColorRgb",
    "ColorHsb",
    "ColorReference",
    "Document",
    "RingDefinition",
    "DotDefinition",
    "GuidesDefinition",
    "VariableDefinition",
]
