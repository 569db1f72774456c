"""
spanjson errors and resource limits.

This module provides limit validation and exception handling.
"""

from .exceptions import ParseError, LexError, SecurityError, SpanJSONError, ErrorReporter
from .limits import LimitValidator

__all__ = ['ParseError', 'LexError', 'SecurityError', 'SpanJSONError', 'ErrorReporter', 'LimitValidator']
