"""
spanjson Core Parsing Engine.

This module provides the tokenizer, the matching primitives and the JSON grammar.
"""

from .engine import parse, loads, parse_value
from .matchers import Cursor, match_kind, match_text
from .tokenizer import Lexer, Token, TokenKind, Span, Position, tokenize

__all__ = [
    'parse', 'loads', 'parse_value',
    'Cursor', 'match_kind', 'match_text',
    'Lexer', 'Token', 'TokenKind', 'Span', 'Position', 'tokenize',
]
