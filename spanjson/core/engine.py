"""
Parser for spanjson - converts tokens into a JSON value tree.

Every grammar rule is a plain function ``rule(cursor) -> (cursor, JsonValue)``
built from the primitives in ``matchers``. The rules accept either a Cursor or
a token sequence, so callers can parse a specific top-level shape directly:

    cursor, value = parse_array(tokenize("[1, 2]"))

The value grammar is LL(1): every alternative of parse_value starts with a
distinct token kind, so alternation never backtracks over consumed input.
"""

import logging
from collections.abc import Sequence
from typing import Any, Callable, Optional, Union, cast

from ..security.exceptions import (
    ErrorReporter,
    ErrorSuggestionEngine,
    ParseError,
    SecurityError,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .matchers import (
    Cursor,
    Matcher,
    alternative,
    delimited,
    match_kind,
    separated_list,
    sequence,
)
from .tokenizer import Token, TokenKind, tokenize
from .values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)

logger = logging.getLogger(__name__)

CursorLike = Union[Cursor, Sequence[Token]]
ParseResult = tuple[Cursor, JsonValue]


def _nested_value(cursor: Cursor) -> ParseResult:
    return _value(cursor)


def _opening(kind: TokenKind) -> Matcher[Token]:
    """Match an opening bracket and enter a nesting level."""
    match_open = match_kind(kind)

    def matcher(cursor: Cursor) -> tuple[Cursor, Token]:
        cursor, token = match_open(cursor)
        if cursor.validator:
            cursor.validator.enter_structure(token)
        return cursor, token

    return matcher


def _closing(kind: TokenKind, structure: str, expected: str) -> Matcher[Token]:
    """Match a closing bracket and leave the nesting level."""
    match_close = match_kind(kind)

    def matcher(cursor: Cursor) -> tuple[Cursor, Token]:
        try:
            cursor, token = match_close(cursor)
        except ParseError:
            raise cursor.error(
                f"Expected {expected} in {structure}, found {cursor.describe_next()}",
                suggestions=ErrorSuggestionEngine.suggest_for_unclosed_structure(structure),
            ) from None
        if cursor.validator:
            cursor.validator.exit_structure()
        return cursor, token

    return matcher


def _parse_key(cursor: Cursor) -> tuple[Cursor, str]:
    token = cursor.peek()
    if token is None or token.kind is not TokenKind.STRING:
        raise cursor.error(
            f"Expected string key, found {cursor.describe_next()}",
            suggestions=ErrorSuggestionEngine.suggest_for_object_key(
                token.text if token is not None else "the key"
            ),
        )
    if cursor.validator:
        cursor.validator.validate_string(token)
    return cursor.advance(), token.text[1:-1]


_parse_member = sequence(_parse_key, match_kind(TokenKind.COLON), _nested_value)

_object_body = delimited(
    _opening(TokenKind.LBRACE),
    separated_list(_parse_member, match_kind(TokenKind.COMMA)),
    _closing(TokenKind.RBRACE, "object", "a string key, ',' or '}'"),
)

_array_body = delimited(
    _opening(TokenKind.LBRACKET),
    separated_list(_nested_value, match_kind(TokenKind.COMMA)),
    _closing(TokenKind.RBRACKET, "array", "',' or ']'"),
)


def _object(cursor: Cursor) -> ParseResult:
    opening = cursor.peek()
    cursor, pairs = _object_body(cursor)
    members: dict[str, JsonValue] = {}
    for key, _, value in pairs:
        members[key] = value
    if cursor.validator:
        cursor.validator.validate_object_keys(len(members), opening)
    return cursor, JsonObject(members)


def _array(cursor: Cursor) -> ParseResult:
    opening = cursor.peek()
    cursor, items = _array_body(cursor)
    if cursor.validator:
        cursor.validator.validate_array_items(len(items), opening)
    return cursor, JsonArray(tuple(items))


def _guarded(rule: Callable[[Cursor], ParseResult], cursor: CursorLike) -> ParseResult:
    """Run a recursive rule, reporting stack exhaustion as a SecurityError."""
    cursor = Cursor.of(cursor)
    try:
        return rule(cursor)
    except RecursionError:
        raise SecurityError(
            "Nesting too deep to parse within the interpreter recursion limit",
            suggestions=["Parse with limits enabled to bound the nesting depth"],
            offset=cursor.offset,
            source=cursor.source,
        ) from None


def parse_value(cursor: CursorLike) -> ParseResult:
    """Parse any JSON value, trying object, array, string, number, boolean, null."""
    return _guarded(_value, cursor)


def parse_object(cursor: CursorLike) -> ParseResult:
    """Parse ``{ "key": value, ... }`` into a JsonObject.

    Keys keep the position of their first occurrence; when a key repeats,
    the last value wins.
    """
    return _guarded(_object, cursor)


def parse_array(cursor: CursorLike) -> ParseResult:
    """Parse ``[ value, ... ]`` into a JsonArray."""
    return _guarded(_array, cursor)


def parse_string(cursor: CursorLike) -> ParseResult:
    """Parse a string token, dropping exactly one quote from each end.

    Escape sequences are not decoded.
    """
    cursor = Cursor.of(cursor)
    token = cursor.peek()
    if token is None or token.kind is not TokenKind.STRING:
        raise cursor.error(f"Expected string, found {cursor.describe_next()}")
    if cursor.validator:
        cursor.validator.validate_string(token)
    return cursor.advance(), JsonString(token.text[1:-1])


def parse_number(cursor: CursorLike) -> ParseResult:
    """Parse a number token into its float payload."""
    cursor = Cursor.of(cursor)
    token = cursor.peek()
    if token is None or token.kind is not TokenKind.NUMBER:
        raise cursor.error(f"Expected number, found {cursor.describe_next()}")
    if cursor.validator:
        cursor.validator.validate_number(token)
    return cursor.advance(), JsonNumber(cast(float, token.value))


_match_true = match_kind(TokenKind.TRUE)
_match_false = match_kind(TokenKind.FALSE)
_match_null = match_kind(TokenKind.NULL)


def _parse_true(cursor: Cursor) -> ParseResult:
    cursor, _ = _match_true(cursor)
    return cursor, JsonBoolean(True)


def _parse_false(cursor: Cursor) -> ParseResult:
    cursor, _ = _match_false(cursor)
    return cursor, JsonBoolean(False)


_boolean = alternative(_parse_true, _parse_false, expected="'true' or 'false'")


def parse_boolean(cursor: CursorLike) -> ParseResult:
    """Parse ``true`` or ``false``, matched by token kind."""
    return _boolean(Cursor.of(cursor))


def parse_null(cursor: CursorLike) -> ParseResult:
    """Parse ``null``."""
    cursor, _ = _match_null(Cursor.of(cursor))
    return cursor, JsonNull()


_value = alternative(
    _object,
    _array,
    parse_string,
    parse_number,
    parse_boolean,
    parse_null,
    expected="a JSON value",
)


def parse(text: str, config: Optional[ParseConfig] = None) -> JsonValue:
    """Tokenize and parse a complete JSON document.

    Args:
        text: The JSON text.
        config: Parsing configuration; defaults to ParseConfig().

    Returns:
        The root JsonValue.

    Raises:
        ParseError: On the first lexical or grammatical mismatch, or when
            tokens remain after the root value. LexError and SecurityError
            are subclasses.
    """
    if config is None:
        config = ParseConfig()
    log = config.logger or logger
    validator = LimitValidator(config.limits) if config.enforce_limits and config.limits else None

    try:
        if validator:
            validator.validate_input_size(text)
        tokens = tokenize(text, strict=config.strict_lexing)
        cursor, value = parse_value(Cursor.of(tokens, validator))
        if not cursor.at_end:
            raise cursor.error(
                f"Extra data after JSON value: {cursor.describe_next()}",
                suggestions=["A document holds exactly one root value"],
            )
    except ParseError as error:
        _decorate_error(error, text, config)
        log.debug(f"Parse failed: {error.message}")
        raise

    log.debug(f"Parsed {len(tokens)} tokens into {type(value).__name__}")
    return value


def _decorate_error(error: ParseError, text: str, config: ParseConfig) -> None:
    if not config.include_position:
        error.position = None
        error.context = None
        return
    if config.include_context:
        ErrorReporter(text, config.max_error_context).attach_context(error)


def loads(text: str, config: Optional[ParseConfig] = None) -> Any:
    """Parse JSON text into plain Python dict/list/str/float/bool/None."""
    return parse(text, config).to_python()
