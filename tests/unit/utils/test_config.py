"""
Test cases for parsing configuration.
"""

import logging
import unittest

from spanjson.utils.config import (
    ErrorReporting,
    LexingBehavior,
    ParseConfig,
    ParseLimits,
    SizeLimits,
    StructureLimits,
)


class TestParseLimits(unittest.TestCase):
    """Test ParseLimits construction."""

    def test_defaults(self):
        """Test default limits."""
        limits = ParseLimits()
        self.assertEqual(limits.max_input_size, 10 * 1024 * 1024)
        self.assertEqual(limits.max_nesting_depth, 100)
        self.assertEqual(limits.max_number_length, 100)

    def test_flat_arguments(self):
        """Test flat keyword overrides."""
        limits = ParseLimits(max_string_length=5, max_array_items=7)
        self.assertEqual(limits.max_string_length, 5)
        self.assertEqual(limits.max_array_items, 7)
        self.assertEqual(limits.max_object_keys, 10000)

    def test_grouped_arguments(self):
        """Test grouped dataclass arguments."""
        limits = ParseLimits(
            size_limits=SizeLimits(max_input_size=10),
            structure_limits=StructureLimits(max_nesting_depth=2),
        )
        self.assertEqual(limits.max_input_size, 10)
        self.assertEqual(limits.max_nesting_depth, 2)

    def test_invalid_limits(self):
        """Test validation of limit values and names."""
        with self.assertRaises(ValueError):
            ParseLimits(max_input_size=0)
        with self.assertRaises(ValueError):
            ParseLimits(max_nesting_depth=-1)
        with self.assertRaises(TypeError):
            ParseLimits(max_depth=3)


class TestParseConfig(unittest.TestCase):
    """Test ParseConfig construction and properties."""

    def test_defaults(self):
        """Test the default configuration."""
        config = ParseConfig()
        self.assertTrue(config.strict_lexing)
        self.assertTrue(config.include_position)
        self.assertTrue(config.include_context)
        self.assertEqual(config.max_error_context, 50)
        self.assertTrue(config.enforce_limits)
        self.assertIsInstance(config.limits, ParseLimits)
        self.assertIsNone(config.logger)

    def test_flat_options(self):
        """Test flat keyword options map onto groups."""
        config = ParseConfig(strict_lexing=False, include_context=False, max_error_context=10)
        self.assertFalse(config.lexing.strict)
        self.assertFalse(config.error_reporting.include_context)
        self.assertEqual(config.error_reporting.max_error_context, 10)

    def test_grouped_options(self):
        """Test grouped dataclass options."""
        config = ParseConfig(
            lexing=LexingBehavior(strict=False),
            error_reporting=ErrorReporting(include_position=False),
        )
        self.assertFalse(config.strict_lexing)
        self.assertFalse(config.include_position)

    def test_setters(self):
        """Test property setters write through to groups."""
        config = ParseConfig()
        config.strict_lexing = False
        config.include_context = False
        config.include_position = False
        config.max_error_context = 5
        self.assertEqual(
            config.error_reporting,
            ErrorReporting(include_position=False, include_context=False, max_error_context=5),
        )
        self.assertEqual(config.lexing, LexingBehavior(strict=False))

    def test_unknown_option(self):
        """Test that unknown options are rejected."""
        with self.assertRaises(TypeError):
            ParseConfig(fallback=True)

    def test_logger(self):
        """Test a custom logger is kept."""
        logger = logging.getLogger("custom")
        self.assertIs(ParseConfig(logger=logger).logger, logger)


if __name__ == '__main__':
    unittest.main()
