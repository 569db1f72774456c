"""
Configuration and limits for spanjson parsing.

This module defines resource limits and configuration options for parse() and loads().
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class SizeLimits:
    """Input and token size limits."""
    max_input_size: int = 10 * 1024 * 1024
    max_string_length: int = 1024 * 1024
    max_number_length: int = 100


@dataclass
class StructureLimits:
    """JSON structure complexity limits."""
    max_nesting_depth: int = 100
    max_object_keys: int = 10000
    max_array_items: int = 100000


@dataclass
class ParseLimits:
    """Resource limits for JSON parsing."""

    size_limits: Optional[SizeLimits] = None
    structure_limits: Optional[StructureLimits] = None

    def __init__(
        self,
        *,
        size_limits: Optional[SizeLimits] = None,
        structure_limits: Optional[StructureLimits] = None,
        **flat_limits: int,
    ):
        defaults = SizeLimits()
        self.size_limits = size_limits or SizeLimits(
            max_input_size=flat_limits.get("max_input_size", defaults.max_input_size),
            max_string_length=flat_limits.get("max_string_length", defaults.max_string_length),
            max_number_length=flat_limits.get("max_number_length", defaults.max_number_length),
        )

        structure_defaults = StructureLimits()
        self.structure_limits = structure_limits or StructureLimits(
            max_nesting_depth=flat_limits.get(
                "max_nesting_depth", structure_defaults.max_nesting_depth
            ),
            max_object_keys=flat_limits.get("max_object_keys", structure_defaults.max_object_keys),
            max_array_items=flat_limits.get("max_array_items", structure_defaults.max_array_items),
        )

        unknown = set(flat_limits) - {
            "max_input_size", "max_string_length", "max_number_length",
            "max_nesting_depth", "max_object_keys", "max_array_items",
        }
        if unknown:
            raise TypeError(f"Unknown limit(s): {', '.join(sorted(unknown))}")

        if self.size_limits.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.structure_limits.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")

    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters."""
        assert self.size_limits is not None
        return self.size_limits.max_input_size

    @property
    def max_string_length(self) -> int:
        """Maximum raw length of a string token."""
        assert self.size_limits is not None
        return self.size_limits.max_string_length

    @property
    def max_number_length(self) -> int:
        """Maximum text length of a number token."""
        assert self.size_limits is not None
        return self.size_limits.max_number_length

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nesting depth of objects and arrays."""
        assert self.structure_limits is not None
        return self.structure_limits.max_nesting_depth

    @property
    def max_object_keys(self) -> int:
        """Maximum number of members in one object."""
        assert self.structure_limits is not None
        return self.structure_limits.max_object_keys

    @property
    def max_array_items(self) -> int:
        """Maximum number of items in one array."""
        assert self.structure_limits is not None
        return self.structure_limits.max_array_items


@dataclass
class LexingBehavior:
    """Tokenizer behavior settings."""
    strict: bool = True


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""
    include_position: bool = True
    include_context: bool = True
    max_error_context: int = 50


@dataclass
class ParseConfig:
    """Configuration options for spanjson parsing."""

    limits: Optional[ParseLimits] = None
    lexing: Optional[LexingBehavior] = None
    error_reporting: Optional[ErrorReporting] = None
    enforce_limits: bool = True
    logger: Optional[logging.Logger] = None

    def __init__(
        self,
        *,
        limits: Optional[ParseLimits] = None,
        lexing: Optional[LexingBehavior] = None,
        error_reporting: Optional[ErrorReporting] = None,
        enforce_limits: bool = True,
        logger: Optional[logging.Logger] = None,
        **config_options: Any,
    ):
        self.limits = limits or ParseLimits()
        self.enforce_limits = enforce_limits
        self.logger = logger

        if lexing is not None:
            self.lexing = lexing
        else:
            self.lexing = LexingBehavior(
                strict=config_options.pop("strict_lexing", True),
            )

        if error_reporting is not None:
            self.error_reporting = error_reporting
        else:
            self.error_reporting = ErrorReporting(
                include_position=config_options.pop("include_position", True),
                include_context=config_options.pop("include_context", True),
                max_error_context=config_options.pop("max_error_context", 50),
            )

        if config_options:
            raise TypeError(f"Unknown option(s): {', '.join(sorted(config_options))}")

    @property
    def strict_lexing(self) -> bool:
        """Whether unrecognized input raises LexError instead of truncating."""
        assert self.lexing is not None
        return self.lexing.strict

    @strict_lexing.setter
    def strict_lexing(self, value: bool) -> None:
        assert self.lexing is not None
        self.lexing.strict = value

    @property
    def include_position(self) -> bool:
        """Whether errors report line and column."""
        assert self.error_reporting is not None
        return self.error_reporting.include_position

    @include_position.setter
    def include_position(self, value: bool) -> None:
        assert self.error_reporting is not None
        self.error_reporting.include_position = value

    @property
    def include_context(self) -> bool:
        """Whether errors carry a source excerpt."""
        assert self.error_reporting is not None
        return self.error_reporting.include_context

    @include_context.setter
    def include_context(self, value: bool) -> None:
        assert self.error_reporting is not None
        self.error_reporting.include_context = value

    @property
    def max_error_context(self) -> int:
        """Maximum characters of surrounding text kept in an error context."""
        assert self.error_reporting is not None
        return self.error_reporting.max_error_context

    @max_error_context.setter
    def max_error_context(self, value: int) -> None:
        assert self.error_reporting is not None
        self.error_reporting.max_error_context = value
