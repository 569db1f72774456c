"""
Test cases for the spanjson grammar rules and text entry points.
"""

import logging
import unittest
from unittest import mock

from spanjson.core.engine import (
    loads,
    parse,
    parse_array,
    parse_boolean,
    parse_null,
    parse_number,
    parse_object,
    parse_string,
    parse_value,
)
from spanjson.core.matchers import Cursor
from spanjson.core.tokenizer import Position, Token, TokenKind, tokenize
from spanjson.core.values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
)
from spanjson.security.exceptions import LexError, ParseError, SecurityError
from spanjson.utils.config import ParseConfig


class TestScalarRules(unittest.TestCase):
    """Test the single-token grammar rules."""

    def test_parse_string(self):
        """Test that exactly one quote is stripped from each end."""
        _, value = parse_string(tokenize('"abc"'))
        self.assertEqual(value, JsonString("abc"))

        _, value = parse_string(tokenize('""'))
        self.assertEqual(value, JsonString(""))

    def test_parse_string_keeps_escapes(self):
        """Test that escapes are passed through literally."""
        _, value = parse_string(tokenize(r'"a\"b\né"'))
        self.assertEqual(value, JsonString(r'a\"b\né'))

    def test_parse_number(self):
        """Test number values."""
        test_cases = [("123", 123.0), ("-3.5e2", -350.0), ("0.25", 0.25)]

        for text, expected in test_cases:
            with self.subTest(text=text):
                _, value = parse_number(tokenize(text))
                self.assertEqual(value, JsonNumber(expected))

    def test_parse_boolean(self):
        """Test booleans."""
        _, value = parse_boolean(tokenize("true"))
        self.assertEqual(value, JsonBoolean(True))
        _, value = parse_boolean(tokenize("false"))
        self.assertEqual(value, JsonBoolean(False))

    def test_parse_boolean_rejects_null(self):
        """Test that null is not a boolean."""
        with self.assertRaises(ParseError) as cm:
            parse_boolean(tokenize("null"))
        self.assertIn("Expected 'true' or 'false'", cm.exception.message)

    def test_parse_null(self):
        """Test null."""
        rest, value = parse_null(tokenize("null"))
        self.assertEqual(value, JsonNull())
        self.assertTrue(rest.at_end)

    def test_rules_report_mismatch(self):
        """Test each scalar rule on the wrong token."""
        rules = [
            (parse_string, "1", "Expected string"),
            (parse_number, '"1"', "Expected number"),
            (parse_null, "false", "Expected 'null'"),
        ]

        for rule, text, message in rules:
            with self.subTest(rule=rule.__name__):
                with self.assertRaises(ParseError) as cm:
                    rule(tokenize(text))
                self.assertIn(message, cm.exception.message)
                self.assertEqual(cm.exception.index, 0)


class TestCompositeRules(unittest.TestCase):
    """Test objects and arrays."""

    def test_empty_structures(self):
        """Test {} and []."""
        _, value = parse_object(tokenize("{}"))
        self.assertEqual(value, JsonObject({}))
        self.assertEqual(len(value), 0)

        _, value = parse_array(tokenize("[]"))
        self.assertEqual(value, JsonArray(()))

    def test_parse_array(self):
        """Test a mixed array."""
        _, value = parse_array(tokenize('["abc", "def", 1, true, null]'))
        self.assertEqual(
            value,
            JsonArray((
                JsonString("abc"),
                JsonString("def"),
                JsonNumber(1.0),
                JsonBoolean(True),
                JsonNull(),
            )),
        )

    def test_parse_object(self):
        """Test object members and key order."""
        _, value = parse_object(tokenize('{"name": "John Doe", "address": "杭州"}'))
        self.assertEqual(value.keys(), ["name", "address"])
        self.assertEqual(value["name"], JsonString("John Doe"))
        self.assertEqual(value["address"], JsonString("杭州"))

    def test_nested_object(self):
        """Test nested objects and arrays."""
        source = """
            {
                "name": "John Doe",
                "address": {"city": "Springfield", "state": [1, 12]}
            }"""
        _, value = parse_object(tokenize(source))
        expected = JsonObject({
            "name": JsonString("John Doe"),
            "address": JsonObject({
                "city": JsonString("Springfield"),
                "state": JsonArray((JsonNumber(1.0), JsonNumber(12.0))),
            }),
        })
        self.assertEqual(value, expected)

    def test_duplicate_keys_keep_first_position_last_value(self):
        """Test the duplicate key policy."""
        _, value = parse_object(tokenize('{"a": 1, "b": 2, "a": 3}'))
        self.assertEqual(value["a"], JsonNumber(3.0))
        self.assertEqual(value.keys(), ["a", "b"])

    def test_non_string_key_fails(self):
        """Test that keys must be strings."""
        error_cases = ['{1: 2}', '{"a": 1, 2: 3}', '{true: 1}', '{null: 1}']

        for text in error_cases:
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_object(tokenize(text))

    def test_non_string_key_message(self):
        """Test the message after a comma."""
        with self.assertRaises(ParseError) as cm:
            parse_object(tokenize('{"a": 1, 2: 3}'))
        self.assertIn("Expected string key, found NUMBER '2'", cm.exception.message)
        self.assertTrue(cm.exception.suggestions)

    def test_trailing_commas_fail(self):
        """Test that a comma must be followed by an element."""
        for text in ["[1,2,]", '{"a": 1,}', "[,]", "[1,,2]"]:
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_value(tokenize(text))

    def test_missing_value_after_colon(self):
        """Test {"a":} fails at the closing brace."""
        tokens = tokenize('{"a":}')
        with self.assertRaises(ParseError) as cm:
            parse_value(tokens)
        self.assertIn("Expected a JSON value, found RBRACE '}'", cm.exception.message)
        self.assertEqual(cm.exception.index, 3)

    def test_missing_separator(self):
        """Test that elements need separators."""
        with self.assertRaises(ParseError) as cm:
            parse_array(tokenize("[1 2]"))
        self.assertIn("Expected ',' or ']' in array, found NUMBER '2'", cm.exception.message)
        self.assertTrue(any("]" in s for s in cm.exception.suggestions))

    def test_unclosed_structures(self):
        """Test end of input inside structures."""
        for text in ["[1, 2", '{"a": 1', "[", '{"a"', '{"a":']:
            with self.subTest(text=text):
                with self.assertRaises(ParseError) as cm:
                    parse_value(tokenize(text))
                self.assertIn("end of input", cm.exception.message)


class TestParseValue(unittest.TestCase):
    """Test value alternation."""

    def test_all_value_kinds_reachable(self):
        """Test that every value kind is reachable from parse_value."""
        test_cases = [
            ("{}", JsonObject({})),
            ("[]", JsonArray(())),
            ('"x"', JsonString("x")),
            ("1", JsonNumber(1.0)),
            ("true", JsonBoolean(True)),
            ("false", JsonBoolean(False)),
            ("null", JsonNull()),
        ]

        for text, expected in test_cases:
            with self.subTest(text=text):
                rest, value = parse_value(tokenize(text))
                self.assertEqual(value, expected)
                self.assertTrue(rest.at_end)

    def test_returns_remaining_cursor(self):
        """Test that parse_value stops after one value."""
        rest, value = parse_value(tokenize("[1] [2]"))
        self.assertEqual(value, JsonArray((JsonNumber(1.0),)))
        self.assertEqual(rest.pos, 3)
        self.assertEqual(rest.peek().kind, TokenKind.LBRACKET)

    def test_accepts_cursor(self):
        """Test parsing from a cursor in the middle of a sequence."""
        cursor = Cursor.of(tokenize("[1] 2")).advance(3)
        rest, value = parse_value(cursor)
        self.assertEqual(value, JsonNumber(2.0))
        self.assertTrue(rest.at_end)

    def test_empty_input(self):
        """Test that no tokens is an end-of-input error."""
        with self.assertRaises(ParseError) as cm:
            parse_value([])
        self.assertIn("Expected a JSON value, found end of input", cm.exception.message)

    def test_truncated_sequence_fails_downstream(self):
        """Test that non-strict truncation surfaces as a parse failure."""
        tokens = tokenize('{"a": [1, 2 @ 3]}', strict=False)
        with self.assertRaises(ParseError) as cm:
            parse_value(tokens)
        self.assertIn("end of input", cm.exception.message)


class TestParsingCost(unittest.TestCase):
    """Test that successful parses never translate offsets into positions."""

    def _document(self, count):
        return "[\n" + ",\n".join(['"a"', "1.5", "true", "null", "{}"] * count) + "\n]"

    def test_failed_alternatives_do_not_locate(self):
        """Test that errors discarded by alternation never scan the source."""
        text = self._document(400)
        with mock.patch(
            "spanjson.security.exceptions.locate"
        ) as locate, mock.patch.object(
            Token, "position", new_callable=mock.PropertyMock
        ) as token_position:
            value = parse(text)
            parse(text, ParseConfig(enforce_limits=False))

        self.assertEqual(len(value), 2000)
        locate.assert_not_called()
        token_position.assert_not_called()

    def test_errors_still_locate_on_demand(self):
        """Test that a raised error resolves its position when read."""
        with self.assertRaises(ParseError) as cm:
            parse_value(tokenize('[\n  1,\n  ]'))
        self.assertEqual(cm.exception.offset, 9)
        self.assertEqual(cm.exception.position, Position(3, 3))

    def test_large_flat_array(self):
        """Test a large document parses in one pass."""
        value = parse(self._document(4000))
        self.assertEqual(len(value), 20000)
        self.assertEqual(value[19999], JsonObject({}))
        self.assertEqual(value[19997], JsonBoolean(True))


class TestDeepNesting(unittest.TestCase):
    """Test nesting beyond what the interpreter stack can recurse through."""

    DEPTH = 5000

    def test_rules_on_token_lists(self):
        """Test each recursive entry point without a limit validator."""
        cases = [
            (parse_value, "[" * self.DEPTH + "]" * self.DEPTH),
            (parse_array, "[" * self.DEPTH + "]" * self.DEPTH),
            (parse_object, '{"a":' * self.DEPTH + "1" + "}" * self.DEPTH),
        ]
        for rule, text in cases:
            with self.subTest(rule=rule.__name__):
                with self.assertRaises(SecurityError) as cm:
                    rule(tokenize(text))
                self.assertIsInstance(cm.exception, ParseError)
                self.assertEqual(cm.exception.offset, 0)
                self.assertIn("Nesting too deep", cm.exception.message)

    def test_parse_without_limits(self):
        """Test parse() and loads() with limits turned off."""
        config = ParseConfig(enforce_limits=False)
        text = "[" * self.DEPTH + "]" * self.DEPTH
        with self.assertRaises(SecurityError) as cm:
            parse(text, config)
        self.assertEqual(cm.exception.position, Position(1, 1))
        with self.assertRaises(SecurityError):
            loads(text, config)

    def test_moderate_nesting_on_token_lists(self):
        """Test that nesting the stack can hold still parses."""
        _, value = parse_value(tokenize("[" * 50 + "]" * 50))
        for _ in range(49):
            value = value[0]
        self.assertEqual(value, JsonArray(()))

    def test_cursor_usable_after_failure(self):
        """Test that parsing again after stack exhaustion works."""
        tokens = tokenize("[" * self.DEPTH + "]" * self.DEPTH)
        with self.assertRaises(SecurityError):
            parse_value(tokens)
        cursor, value = parse_value(tokenize("[[1]]"))
        self.assertTrue(cursor.at_end)
        self.assertEqual(value, JsonArray((JsonArray((JsonNumber(1.0),)),)))


class TestTextEntryPoints(unittest.TestCase):
    """Test parse() and loads()."""

    def test_parse(self):
        """Test a document round trip into values."""
        value = parse('{"x": {"y": [1, 2]}}')
        self.assertEqual(
            value,
            JsonObject({
                "x": JsonObject({"y": JsonArray((JsonNumber(1.0), JsonNumber(2.0)))}),
            }),
        )

    def test_loads(self):
        """Test conversion to plain Python values."""
        self.assertEqual(
            loads('{"a": [1, 2.5, "s", true, false, null], "b": {}}'),
            {"a": [1.0, 2.5, "s", True, False, None], "b": {}},
        )

    def test_extra_data_rejected(self):
        """Test that trailing tokens are an error."""
        with self.assertRaises(ParseError) as cm:
            parse("[1] [2]")
        self.assertIn("Extra data after JSON value", cm.exception.message)
        self.assertEqual(cm.exception.offset, 4)

    def test_errors_gain_context(self):
        """Test that parse() attaches a source excerpt."""
        with self.assertRaises(ParseError) as cm:
            parse('{\n  "a": }')

        error = cm.exception
        self.assertEqual(error.position.line, 2)
        self.assertEqual(error.position.column, 8)
        self.assertIsNotNone(error.context)
        self.assertEqual(error.context.line_text, '  "a": }')
        self.assertEqual(error.context.column_indicator, "       ^")
        self.assertIn("at line 2, column 8", str(error))

    def test_context_can_be_disabled(self):
        """Test include_context and include_position settings."""
        with self.assertRaises(ParseError) as cm:
            parse("[1,]", ParseConfig(include_context=False))
        self.assertIsNone(cm.exception.context)
        self.assertIsNotNone(cm.exception.position)

        with self.assertRaises(ParseError) as cm:
            parse("[1,]", ParseConfig(include_position=False))
        self.assertIsNone(cm.exception.position)
        self.assertNotIn("at line", str(cm.exception))

    def test_strict_lexing(self):
        """Test that parse() raises LexError by default."""
        with self.assertRaises(LexError):
            parse("[1, 2] // comment")

    def test_non_strict_lexing(self):
        """Test that truncated input parses when the kept prefix is complete."""
        config = ParseConfig(strict_lexing=False)
        with self.assertLogs("spanjson.core.tokenizer", level=logging.WARNING):
            self.assertEqual(loads("[1, 2] // comment", config), [1.0, 2.0])

        with self.assertLogs("spanjson.core.tokenizer", level=logging.WARNING):
            with self.assertRaises(ParseError) as cm:
                parse("[1, ~ 2]", config)
        self.assertNotIsInstance(cm.exception, LexError)

    def test_custom_logger(self):
        """Test that parse() logs through the configured logger."""
        custom = logging.getLogger("spanjson.tests.custom")
        with self.assertLogs(custom, level=logging.DEBUG) as logs:
            parse("[]", ParseConfig(logger=custom))
        self.assertTrue(any("JsonArray" in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
