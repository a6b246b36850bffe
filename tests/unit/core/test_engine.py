"""
Test cases for the public repair entry points.
"""

import json
import unittest
from unittest.mock import patch

from jsonsalvage.core import engine
from jsonsalvage.core.engine import (
    repair,
    repair_to_array,
    repair_to_object,
    repair_to_text,
    repair_to_value,
    safe_parse,
    try_repair,
)
from jsonsalvage.preprocessing.extractors import BoundaryExtractor
from jsonsalvage.preprocessing.flatteners import FlatteningFallback
from jsonsalvage.preprocessing.pipeline import RepairPipeline
from jsonsalvage.security.exceptions import (
    InvalidInputError,
    NoBoundaryFoundError,
    ParseFailureError,
    RepairError,
)
from jsonsalvage.utils.config import (
    RepairBackend,
    RepairConfig,
    RepairLimits,
    RepairSettings,
)


GARBAGE_WITH_DELIMITERS = [
    "Sorry, I cannot help with that {",
    "Error: rate limit exceeded [retry later",
    "{{{{",
    "}{",
    "The set {x | x > 0} is infinite",
]


def _failing_pipeline():
    return RepairPipeline([BoundaryExtractor()], fallback=FlatteningFallback())


class TestRepairToText(unittest.TestCase):
    """Test repair_to_text on common corruption patterns."""

    def test_valid_json_is_unchanged(self):
        """Test that parseable input comes back byte for byte."""
        text = '{"a": 1,   "b": [1, 2]}'
        self.assertEqual(repair_to_text(text), text)

    def test_markdown_fences(self):
        """Test that a fenced payload is unwrapped."""
        result = repair_to_text('```json\n{"a": 1}\n```')
        self.assertEqual(result, '{"a": 1}')

    def test_surrounding_prose(self):
        """Test extraction from LLM chatter."""
        result = repair_to_text('Here is the data: {"a": 1} Hope this helps!')
        self.assertEqual(result, '{"a": 1}')

    def test_trailing_comma(self):
        """Test trailing comma repair through the library backend."""
        result = repair_to_text('{"a": 1, "b": 2,}')
        self.assertEqual(json.loads(result), {"a": 1, "b": 2})

    def test_single_quotes(self):
        """Test single-quoted keys and values."""
        self.assertEqual(json.loads(repair_to_text("{'a': 'b'}")), {"a": "b"})

    def test_raw_newline_inside_string_is_preserved(self):
        """Test that a line break in a value survives as an escape."""
        result = repair_to_text('{"a": "line1\nline2"}')
        self.assertEqual(json.loads(result), {"a": "line1\nline2"})

    def test_raw_crlf_inside_string(self):
        """Test that CRLF inside a value keeps its line feed."""
        result = repair_to_text('{"a": "line1\r\nline2"}')
        self.assertEqual(json.loads(result), {"a": "line1\nline2"})

    def test_unbalanced_structure(self):
        """Test that a missing closing brace is added."""
        self.assertEqual(json.loads(repair_to_text('{"a": 1')), {"a": 1})

    def test_nan_is_never_returned(self):
        """Test that non-standard constants are normalised."""
        result = repair_to_text('{"a": NaN, "b": Infinity}')
        self.assertEqual(json.loads(result), {"a": None, "b": None})

    def test_idempotent(self):
        """Test that repairing repaired text changes nothing."""
        payloads = [
            '```json\n{"a": 1,}\n```',
            "Sure! {'name': 'Ada', 'tags': ['x',]}",
            '{"a": "line1\nline2"}',
        ]
        for payload in payloads:
            with self.subTest(payload=payload):
                once = repair_to_text(payload)
                self.assertEqual(repair_to_text(once), once)

    def test_no_boundary(self):
        """Test that text without '{' or '[' is rejected."""
        with self.assertRaises(NoBoundaryFoundError):
            repair_to_text("no structured data here")

    def test_invalid_inputs(self):
        """Test empty, blank and non-string payloads."""
        for raw in ["", "   \n", None, b'{"a": 1}', 42]:
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidInputError):
                    repair_to_text(raw)

    def test_size_limit(self):
        """Test that oversized payloads are rejected before repair."""
        config = RepairConfig(limits=RepairLimits(max_input_size=10))
        with self.assertRaises(InvalidInputError):
            repair_to_text('{"key": "value"}', config)

    def test_heuristic_backend(self):
        """Test the built-in repair battery through the pipeline."""
        config = RepairConfig(repair=RepairSettings(backend=RepairBackend.HEURISTIC))
        result = repair_to_text("{name: John, age: 30, tags: ['x', 'y'],}", config)
        self.assertEqual(
            json.loads(result), {"name": "John", "age": 30, "tags": ["x", "y"]}
        )

    def test_terminal_failure_raises_parse_failure(self):
        """Test that exhausting every stage raises ParseFailureError."""
        with self.assertRaises(ParseFailureError) as cm:
            repair_to_text("Sorry, I cannot help with\nthat {")

        error = cm.exception
        self.assertEqual(error.flattened_text, "Sorry, I cannot help with that {")
        self.assertTrue(error.diagnostic)
        self.assertIsInstance(error, ValueError)

    def test_prose_with_delimiters_is_rejected(self):
        """Test that text which merely contains a delimiter never succeeds."""
        for payload in GARBAGE_WITH_DELIMITERS:
            with self.subTest(payload=payload):
                with self.assertRaises(ParseFailureError) as cm:
                    repair_to_text(payload)
                self.assertEqual(cm.exception.flattened_text, payload)

    def test_prose_with_delimiters_heuristic_backend(self):
        """Test the same rejection with the built-in battery."""
        config = RepairConfig(repair=RepairSettings(backend=RepairBackend.HEURISTIC))
        for payload in GARBAGE_WITH_DELIMITERS:
            with self.subTest(payload=payload):
                with self.assertRaises(ParseFailureError):
                    repair_to_text(payload, config)

    def test_custom_pipeline_failure(self):
        """Test that repair_to_text reports a failing pipeline's flattened text."""
        with patch.object(engine, "_PIPELINE", _failing_pipeline()):
            with self.assertRaises(ParseFailureError) as cm:
                repair_to_text('{"a":\n}')
        self.assertEqual(cm.exception.flattened_text, '{"a": }')


class TestRepairToValue(unittest.TestCase):
    """Test typed parsing helpers."""

    def test_object(self):
        self.assertEqual(repair_to_object("Sure! {'name': 'Ada'}"), {"name": "Ada"})

    def test_array(self):
        self.assertEqual(repair_to_array("```\n[1, 2, 3,]\n```"), [1, 2, 3])

    def test_type_mismatch_returns_none(self):
        self.assertIsNone(repair_to_array('{"a": 1}'))
        self.assertIsNone(repair_to_object("[1]"))

    def test_expected_type_tuple(self):
        self.assertEqual(repair_to_value("[1]", (list, dict)), [1])

    def test_duplicate_keys_keep_last(self):
        self.assertEqual(repair_to_value('{"a": 1, "a": 2}'), {"a": 2})

    def test_errors_propagate(self):
        with self.assertRaises(RepairError):
            repair_to_value("nothing to see")


class TestNonRaisingHelpers(unittest.TestCase):
    """Test try_repair and safe_parse."""

    def test_try_repair_success(self):
        result = try_repair('{"a": 1,}')
        self.assertTrue(result.success)
        self.assertEqual(json.loads(result.repaired_text), {"a": 1})

    def test_try_repair_invalid_input(self):
        result = try_repair("")
        self.assertFalse(result.success)
        self.assertIsNone(result.repaired_text)
        self.assertIn("non-empty", result.diagnostic)

    def test_try_repair_keeps_flattened_text(self):
        result = try_repair("Error: rate limit exceeded\r\n[retry later")
        self.assertFalse(result.success)
        self.assertEqual(result.repaired_text, "Error: rate limit exceeded [retry later")
        self.assertEqual(result.stage, "diagnostic")
        self.assertTrue(result.diagnostic)

    def test_try_repair_rejects_prose_with_delimiters(self):
        for payload in GARBAGE_WITH_DELIMITERS:
            with self.subTest(payload=payload):
                result = try_repair(payload)
                self.assertFalse(result.success)
                self.assertEqual(result.repaired_text, payload)

    def test_repair_reports_stage(self):
        self.assertEqual(repair('{"a": 1}').stage, "unchanged")
        self.assertEqual(repair('```json\n{"a": 1}\n```').stage, "markdown_fences")

    def test_safe_parse_valid(self):
        outcome = safe_parse('{"a": 1}')
        self.assertTrue(outcome.success)
        self.assertEqual(outcome.data, {"a": 1})
        self.assertIsNone(outcome.error)

    def test_safe_parse_repairs(self):
        outcome = safe_parse("{'a': [1, 2,]}")
        self.assertTrue(outcome.success)
        self.assertEqual(outcome.data, {"a": [1, 2]})

    def test_safe_parse_rejects_nan(self):
        outcome = safe_parse('{"a": NaN}')
        self.assertTrue(outcome.success)
        self.assertEqual(outcome.data, {"a": None})

    def test_safe_parse_failure(self):
        outcome = safe_parse("plain prose")
        self.assertFalse(outcome.success)
        self.assertIsNone(outcome.data)
        self.assertIn("No JSON object or array found", outcome.error)

    def test_safe_parse_non_string(self):
        outcome = safe_parse(None)
        self.assertFalse(outcome.success)


if __name__ == "__main__":
    unittest.main()
