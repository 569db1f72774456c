"""
Common constants and lexical patterns used by the spanjson tokenizer.
"""

import re

# Import here to avoid circular imports
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokenizer import TokenKind

NUMBER_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")

# A quote, any run of non-quote/non-backslash characters or escaped pairs, a quote.
# An escaped pair never spans a newline.
STRING_PATTERN = re.compile(r'"(?:[^"\\]|\\.)*"')

WHITESPACE_PATTERN = re.compile(r"\s+")


def get_structural_token_map() -> dict[str, "TokenKind"]:
    """Get the mapping of structural characters to TokenKind members."""
    # Import here to avoid circular imports
    from .tokenizer import TokenKind  # pylint: disable=import-outside-toplevel

    return {
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
        ":": TokenKind.COLON,
        ",": TokenKind.COMMA,
    }


def get_keyword_token_map() -> dict[str, "TokenKind"]:
    """Get the mapping of literal keywords to TokenKind members."""
    from .tokenizer import TokenKind  # pylint: disable=import-outside-toplevel

    return {
        "true": TokenKind.TRUE,
        "false": TokenKind.FALSE,
        "null": TokenKind.NULL,
    }
