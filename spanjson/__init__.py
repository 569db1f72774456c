"""
spanjson - a small, dependency-light JSON reader.

spanjson turns JSON text into a tree of JsonValue nodes in two stages: a
tokenizer that records the source span of every token, and a recursive-descent
parser built from a handful of matching primitives.

Quick Start:
    import spanjson
    value = spanjson.parse('{"name": "spanjson", "tags": ["json", "parser"]}')
    value["tags"][0]                 # JsonString(value='json')
    spanjson.loads('[1, 2.5, null]')  # [1.0, 2.5, None]

    # Tokens keep their spans
    for token in spanjson.tokenize('{"a": 1}'):
        print(token)                 # LBRACE['{'] @ 0..1, ...

    # Parse a specific shape from a token sequence
    cursor, value = spanjson.parse_array(spanjson.tokenize("[true, false]"))

Strings are returned with their quotes stripped but escape sequences are not
decoded, and every number is a float.
"""

from .core.engine import (
    loads,
    parse,
    parse_array,
    parse_boolean,
    parse_null,
    parse_number,
    parse_object,
    parse_string,
    parse_value,
)
from .core.matchers import Cursor, match_kind, match_text
from .core.tokenizer import Lexer, Position, Span, Token, TokenKind, tokenize
from .core.values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)
from .security.exceptions import LexError, ParseError, SecurityError, SpanJSONError
from .utils.config import ParseConfig, ParseLimits

__version__ = "0.1.0"
__author__ = "spanjson contributors"

__all__ = [
    # Text entry points
    "parse", "loads",
    # Grammar rules
    "parse_value", "parse_object", "parse_array", "parse_string",
    "parse_number", "parse_boolean", "parse_null",
    # Tokens and matching
    "tokenize", "Lexer", "Token", "TokenKind", "Span", "Position",
    "Cursor", "match_kind", "match_text",
    # Values
    "JsonValue", "JsonObject", "JsonArray", "JsonString", "JsonNumber",
    "JsonBoolean", "JsonNull",
    # Configuration classes
    "ParseConfig", "ParseLimits",
    # Exception classes
    "SpanJSONError", "ParseError", "LexError", "SecurityError",
]
