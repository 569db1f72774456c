"""
Lexer for spanjson - tokenizes input strings for parsing.

Each token keeps a reference to the source text and the span it was matched
from, so its text is always ``source[span.start:span.end]``.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Union

from ..security.exceptions import ErrorSuggestionEngine, LexError, locate
from .constants import (
    NUMBER_PATTERN,
    STRING_PATTERN,
    WHITESPACE_PATTERN,
    get_keyword_token_map,
    get_structural_token_map,
)

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    """Token kinds for JSON parsing."""

    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    COLON = ":"
    COMMA = ","

    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    NUMBER = "number"
    STRING = "string"

    WHITESPACE = "whitespace"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Span:
    """Half-open range of character offsets into the source text."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass
class Position:
    """Position in source text (line and column)."""

    line: int
    column: int


TokenValue = Union[float, str, None]


class Token(NamedTuple):
    """Token with kind, payload, span and a reference to its source."""

    kind: TokenKind
    value: TokenValue
    span: Span
    source: str

    @property
    def text(self) -> str:
        """The exact source text this token was scanned from."""
        return self.source[self.span.start : self.span.end]

    @property
    def position(self) -> Position:
        """Line and column of the token's first character."""
        return locate(self.source, self.span.start)

    def __repr__(self) -> str:
        return f"{self.kind.name}[{self.text!r}] @ {self.span.start}..{self.span.end}"


def _to_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


class Lexer:
    """Lexical analyzer for JSON input."""

    def __init__(self, text: str, strict: bool = True) -> None:
        self.text = text
        self.strict = strict
        self.pos = 0
        self._structural = get_structural_token_map()
        self._keywords = get_keyword_token_map()

    def peek(self, offset: int = 0) -> str:
        """Peek at character at given offset without consuming it."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def _make_token(self, kind: TokenKind, end: int, value: TokenValue = None) -> Token:
        token = Token(kind, value, Span(self.pos, end), self.text)
        self.pos = end
        return token

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the input text into a sequence of tokens.

        Whitespace is consumed but never yielded. On input that matches no
        token pattern, the strict lexer raises LexError; otherwise scanning
        stops and the remaining text is dropped.
        """
        produced: list[Token] = []
        while self.pos < len(self.text):
            if self._skip_whitespace():
                continue

            token = (
                self._try_structural_token()
                or self._try_keyword_token()
                or self._try_number_token()
                or self._try_string_token()
            )
            if token is None:
                self._handle_unrecognized(produced)
                return

            produced.append(token)
            yield token

    def _skip_whitespace(self) -> bool:
        match = WHITESPACE_PATTERN.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return True
        return False

    def _try_structural_token(self) -> Optional[Token]:
        """Try to create structural tokens (braces, brackets, etc.)."""
        kind = self._structural.get(self.peek())
        if kind is not None:
            return self._make_token(kind, self.pos + 1)
        return None

    def _try_keyword_token(self) -> Optional[Token]:
        """Try to create a true/false/null token."""
        for keyword, kind in self._keywords.items():
            if self.text.startswith(keyword, self.pos):
                return self._make_token(kind, self.pos + len(keyword))
        return None

    def _try_number_token(self) -> Optional[Token]:
        """Try to create a number token carrying its float value."""
        match = NUMBER_PATTERN.match(self.text, self.pos)
        if match:
            return self._make_token(TokenKind.NUMBER, match.end(), _to_float(match.group()))
        return None

    def _try_string_token(self) -> Optional[Token]:
        """Try to create a string token; the payload keeps its quotes."""
        match = STRING_PATTERN.match(self.text, self.pos)
        if match:
            return self._make_token(TokenKind.STRING, match.end(), match.group())
        return None

    def _handle_unrecognized(self, produced: list[Token]) -> None:
        char = self.peek()
        if not self.strict:
            logger.warning(
                f"Unrecognized input {char!r} at offset {self.pos}; "
                f"dropping {len(self.text) - self.pos} trailing characters"
            )
            return

        if char == '"':
            message = "Unterminated string"
        else:
            message = f"Unexpected character {char!r}"
        raise LexError(
            message,
            suggestions=ErrorSuggestionEngine.suggest_for_unexpected_token(char),
            offset=self.pos,
            source=self.text,
            tokens=produced,
        )

    def get_all_tokens(self) -> list[Token]:
        """Get all tokens as a list."""
        return list(self.tokenize())


def tokenize(source: str, strict: bool = True) -> list[Token]:
    """Scan ``source`` into a list of tokens, skipping whitespace."""
    tokens = Lexer(source, strict=strict).get_all_tokens()
    logger.debug(f"Tokenized {len(source)} characters into {len(tokens)} tokens")
    return tokens
