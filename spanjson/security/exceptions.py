"""
Exception types and error reporting for spanjson.

Every failure raised by the tokenizer, the matchers and the grammar is a
ParseError (or a subclass of it), so callers only need a single except clause.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..core.tokenizer import Position, Token


@dataclass
class ErrorContext:
    """Source excerpt surrounding an error."""

    text: str
    position: "Position"
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class SpanJSONError(Exception):
    """Base exception for all spanjson errors."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(message)

    def __str__(self) -> str:
        result = self.message
        if self.position is not None:
            result += f" at line {self.position.line}, column {self.position.column}"

        if self.context is not None:
            result += "\n\nContext:\n"
            result += f"  {self.context.line_text}\n"
            result += f"  {self.context.column_indicator}"

        if self.suggestions:
            result += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                result += f"\n  - {suggestion}"

        return result


def locate(text: str, offset: int) -> "Position":
    """Translate a character offset into a 1-based line/column, clamped to ``text``."""
    from ..core.tokenizer import Position  # pylint: disable=import-outside-toplevel

    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1)


class ParseError(SpanJSONError):
    """Raised when the input does not match the JSON grammar.

    ``offset`` is the character offset into the source where matching failed
    and ``index`` the token index of the cursor at that point.

    When raised with a ``source`` instead of a position, the line and column
    are worked out from the offset the first time ``position`` is read.
    """

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        *,
        offset: Optional[int] = None,
        index: Optional[int] = None,
        source: Optional[str] = None,
    ):
        super().__init__(message, position, context, suggestions)
        self.offset = offset
        self.index = index
        if position is None:
            self._source = source

    @property
    def position(self) -> Optional["Position"]:
        if self._position is None and self._source is not None and self.offset is not None:
            self._position = locate(self._source, self.offset)
            self._source = None
        return self._position

    @position.setter
    def position(self, value: Optional["Position"]) -> None:
        self._position = value
        self._source = None


class LexError(ParseError):
    """Raised by the strict tokenizer on input no token pattern recognizes."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        *,
        offset: Optional[int] = None,
        source: Optional[str] = None,
        tokens: Optional[list["Token"]] = None,
    ):
        super().__init__(message, position, context, suggestions, offset=offset, source=source)
        self.tokens = tokens or []


class SecurityError(ParseError):
    """Raised when input exceeds a configured resource limit."""


class ErrorReporter:
    """Builds error contexts against a source text."""

    def __init__(self, text: str, max_context: int = 50):
        self.text = text
        self.lines = text.split("\n")
        self.max_context = max_context

    def position_at(self, offset: int) -> "Position":
        """Translate a character offset into a 1-based line/column."""
        return locate(self.text, offset)

    def offset_of(self, position: "Position") -> int:
        """Translate a line/column back into a clamped character offset."""
        line_index = max(0, min(position.line - 1, len(self.lines) - 1))
        offset = sum(len(line) + 1 for line in self.lines[:line_index])
        column = max(0, min(position.column - 1, len(self.lines[line_index])))
        return offset + column

    def build_context(self, position: "Position") -> ErrorContext:
        """Build the excerpt shown under an error message."""
        offset = self.offset_of(position)
        half = self.max_context // 2

        line_index = max(0, min(position.line - 1, len(self.lines) - 1))
        line_text = self.lines[line_index] if self.lines else ""
        column = max(0, min(position.column - 1, len(line_text)))

        return ErrorContext(
            text=self.text,
            position=position,
            context_before=self.text[max(0, offset - half) : offset],
            context_after=self.text[offset : offset + half],
            error_char=self.text[offset] if offset < len(self.text) else "",
            line_text=line_text,
            column_indicator=" " * column + "^",
        )

    def create_parse_error(
        self,
        message: str,
        position: "Position",
        suggestions: Optional[list[str]] = None,
    ) -> ParseError:
        """Create a ParseError carrying context for ``position``."""
        return ParseError(
            message,
            position=position,
            context=self.build_context(position),
            suggestions=suggestions,
            offset=self.offset_of(position),
        )

    def create_security_error(
        self, message: str, offset: Optional[int] = None
    ) -> SecurityError:
        """Create a SecurityError, located at ``offset`` when one is given."""
        return SecurityError(message, offset=offset, source=self.text)

    def attach_context(self, error: ParseError) -> ParseError:
        """Fill in position and context on an error raised without them."""
        if error.position is None and error.offset is not None:
            error.position = self.position_at(error.offset)
        if error.context is None and error.position is not None:
            error.context = self.build_context(error.position)
        return error


class ErrorSuggestionEngine:
    """Canned hints for common JSON mistakes."""

    @staticmethod
    def suggest_for_unexpected_token(token_text: str) -> list[str]:
        """Suggestions for a token the grammar did not expect."""
        suggestions = []
        if token_text == '"':
            suggestions.append("Check for an unterminated string or a missing closing quote")
        elif token_text in ("}", "]"):
            suggestions.append("Remove the trailing comma before the closing bracket")
            suggestions.append("Check for a missing value")
        elif token_text == ":":
            suggestions.append("Object keys must be followed by exactly one colon")
        elif token_text == ",":
            suggestions.append("Check for a missing value between commas")
        elif token_text == "":
            suggestions.append("The input ended early; check for unclosed brackets")
        else:
            suggestions.extend(ErrorSuggestionEngine.suggest_for_invalid_value(token_text))
        if not suggestions:
            suggestions.append("Check the JSON syntax around this position")
        return suggestions

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        """Suggestions for an object or array that is never closed."""
        if structure_type == "object":
            return [
                "Add a closing '}' to end the object",
                "Separate members with ',' and keys from values with ':'",
            ]
        if structure_type == "array":
            return [
                "Add a closing ']' to end the array",
                "Separate items with ','",
            ]
        return [f"Close the {structure_type}"]

    @staticmethod
    def suggest_for_invalid_value(value: str) -> list[str]:
        """Suggestions for bare words that resemble JSON literals."""
        lowered = value.lower()
        if lowered in ("true", "false") and value != lowered:
            return [f"Use lowercase '{lowered}' for boolean values"]
        if lowered in ("none", "nil", "null", "undefined") and value != "null":
            return ["Use 'null' for missing values"]
        if value.startswith("'"):
            return ["Use double quotes for strings"]
        return []

    @staticmethod
    def suggest_for_object_key(found: Any) -> list[str]:
        """Suggestions for an object key that is not a string."""
        return [
            "Object keys must be double-quoted strings",
            f"Wrap {found} in double quotes",
        ]
