"""
Resource limits for spanjson.

The grammar is recursive, so nesting depth is also what keeps deeply nested
input from exhausting the Python stack.

Checks on a token raise a SecurityError located at that token, so limit
violations carry a line, column and source excerpt like any other ParseError.
"""

from typing import TYPE_CHECKING, Optional

from ..utils.config import ParseLimits
from .exceptions import SecurityError

if TYPE_CHECKING:
    from ..core.tokenizer import Token


def _violation(message: str, at: Optional["Token"] = None) -> SecurityError:
    if at is None:
        return SecurityError(message)
    return SecurityError(message, offset=at.span.start, source=at.source)


class LimitValidator:
    """Tracks one parse call against its ParseLimits."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits
        self.nesting_depth = 0

    def validate_input_size(self, text: str) -> None:
        if len(text) > self.limits.max_input_size:
            raise _violation(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}"
            )

    def validate_string(self, token: "Token") -> None:
        """Check the raw length of a string token, quotes included."""
        length = len(token.span)
        if length > self.limits.max_string_length:
            raise _violation(
                f"String length {length} exceeds limit {self.limits.max_string_length}",
                token,
            )

    def validate_number(self, token: "Token") -> None:
        """Check the text length of a number token."""
        length = len(token.span)
        if length > self.limits.max_number_length:
            raise _violation(
                f"Number length {length} exceeds limit {self.limits.max_number_length}",
                token,
            )

    def enter_structure(self, opening: Optional["Token"] = None) -> None:
        """Count one more level of nesting, opened by ``opening``."""
        self.nesting_depth += 1
        if self.nesting_depth > self.limits.max_nesting_depth:
            raise _violation(
                f"Nesting depth {self.nesting_depth} exceeds limit "
                f"{self.limits.max_nesting_depth}",
                opening,
            )

    def exit_structure(self) -> None:
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def validate_object_keys(self, key_count: int, opening: Optional["Token"] = None) -> None:
        """Check the distinct key count of the object opened by ``opening``."""
        if key_count > self.limits.max_object_keys:
            raise _violation(
                f"Object key count {key_count} exceeds limit {self.limits.max_object_keys}",
                opening,
            )

    def validate_array_items(self, item_count: int, opening: Optional["Token"] = None) -> None:
        """Check the item count of the array opened by ``opening``."""
        if item_count > self.limits.max_array_items:
            raise _violation(
                f"Array item count {item_count} exceeds limit {self.limits.max_array_items}",
                opening,
            )
