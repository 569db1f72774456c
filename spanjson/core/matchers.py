"""
Matching primitives shared by the spanjson grammar.

A matcher is any callable taking a Cursor and returning ``(cursor, result)``,
where the returned cursor has moved past what was matched. Failures raise
ParseError and never consume input: cursors are immutable, so the caller's
cursor is exactly where it was.

Only the handful of combinators the JSON grammar needs live here.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, Tuple, TypeVar, Union

from ..security.exceptions import ErrorSuggestionEngine, ParseError, locate
from ..security.limits import LimitValidator
from .tokenizer import Position, Token, TokenKind

T = TypeVar("T")

Matcher = Callable[["Cursor"], Tuple["Cursor", T]]


@dataclass(frozen=True)
class Cursor:
    """The remaining suffix of a token sequence."""

    tokens: Sequence[Token]
    pos: int = 0
    validator: Optional[LimitValidator] = field(default=None, compare=False, repr=False)

    @classmethod
    def of(
        cls,
        tokens: Union["Cursor", Sequence[Token]],
        validator: Optional[LimitValidator] = None,
    ) -> "Cursor":
        """Wrap a token sequence; cursors are returned unchanged."""
        if isinstance(tokens, Cursor):
            return tokens
        return cls(tuple(tokens), 0, validator)

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    @property
    def remaining(self) -> Sequence[Token]:
        return self.tokens[self.pos :]

    def __len__(self) -> int:
        return max(0, len(self.tokens) - self.pos)

    def peek(self) -> Optional[Token]:
        """The next token, or None at end of input."""
        if self.at_end:
            return None
        return self.tokens[self.pos]

    def advance(self, count: int = 1) -> "Cursor":
        return replace(self, pos=min(self.pos + count, len(self.tokens)))

    @property
    def offset(self) -> int:
        """Source offset of the next token, or of the end of the last one."""
        token = self.peek()
        if token is not None:
            return token.span.start
        if self.tokens:
            return self.tokens[-1].span.end
        return 0

    @property
    def source(self) -> Optional[str]:
        """The text the tokens were scanned from, if there are any tokens."""
        if not self.tokens:
            return None
        return self.tokens[0].source

    @property
    def position(self) -> Optional[Position]:
        if self.source is None:
            return None
        return locate(self.source, self.offset)

    def describe_next(self) -> str:
        token = self.peek()
        if token is None:
            return "end of input"
        return f"{token.kind.name} {token.text!r}"

    def error(self, message: str, suggestions: Optional[list[str]] = None) -> ParseError:
        """Build a ParseError located at this cursor."""
        if suggestions is None:
            token = self.peek()
            suggestions = ErrorSuggestionEngine.suggest_for_unexpected_token(
                token.text if token is not None else ""
            )
        return ParseError(
            message,
            suggestions=suggestions,
            offset=self.offset,
            index=self.pos,
            source=self.source,
        )


def _is_uncommitted(error: ParseError, cursor: Cursor) -> bool:
    # A failure at the starting token consumed nothing and may be retried.
    return error.index == cursor.pos


def describe_kind(kind: TokenKind) -> str:
    if kind in (TokenKind.NUMBER, TokenKind.STRING, TokenKind.WHITESPACE):
        return kind.value
    return f"'{kind.value}'"


def match_kind(kind: TokenKind) -> Matcher[Token]:
    """Match one token whose kind is exactly ``kind``."""

    def matcher(cursor: Cursor) -> tuple[Cursor, Token]:
        token = cursor.peek()
        if token is None or token.kind is not kind:
            raise cursor.error(
                f"Expected {describe_kind(kind)}, found {cursor.describe_next()}"
            )
        return cursor.advance(), token

    return matcher


def match_text(literal: str) -> Matcher[Token]:
    """Match one token whose source text is exactly ``literal``."""

    def matcher(cursor: Cursor) -> tuple[Cursor, Token]:
        token = cursor.peek()
        if token is None or token.text != literal:
            raise cursor.error(
                f"Expected text {literal!r}, found {cursor.describe_next()}"
            )
        return cursor.advance(), token

    return matcher


def alternative(*parsers: Matcher[Any], expected: str) -> Matcher[Any]:
    """Return the result of the first parser that succeeds.

    A parser that fails after consuming input is committed: its error is
    raised as is instead of trying the remaining parsers.
    """

    def parser(cursor: Cursor) -> tuple[Cursor, Any]:
        for candidate in parsers:
            try:
                return candidate(cursor)
            except ParseError as error:
                if not _is_uncommitted(error, cursor):
                    raise
        raise cursor.error(f"Expected {expected}, found {cursor.describe_next()}")

    return parser


def sequence(*parsers: Matcher[Any]) -> Matcher[tuple[Any, ...]]:
    """Run parsers one after another and collect their results."""

    def parser(cursor: Cursor) -> tuple[Cursor, tuple[Any, ...]]:
        results = []
        for step in parsers:
            cursor, result = step(cursor)
            results.append(result)
        return cursor, tuple(results)

    return parser


def delimited(
    opening: Matcher[Any], inner: Matcher[T], closing: Matcher[Any]
) -> Matcher[T]:
    """Match ``opening inner closing`` and keep only the inner result."""

    def parser(cursor: Cursor) -> tuple[Cursor, T]:
        cursor, _ = opening(cursor)
        cursor, result = inner(cursor)
        cursor, _ = closing(cursor)
        return cursor, result

    return parser


def separated_list(item: Matcher[T], separator: Matcher[Any]) -> Matcher[list[T]]:
    """Zero or more items separated by ``separator``.

    Every separator must be followed by an item, so a trailing separator fails.
    """

    def parser(cursor: Cursor) -> tuple[Cursor, list[T]]:
        try:
            cursor, first = item(cursor)
        except ParseError as error:
            if not _is_uncommitted(error, cursor):
                raise
            return cursor, []

        results = [first]
        while True:
            try:
                after_separator, _ = separator(cursor)
            except ParseError as error:
                if not _is_uncommitted(error, cursor):
                    raise
                return cursor, results
            cursor, value = item(after_separator)
            results.append(value)

    return parser
