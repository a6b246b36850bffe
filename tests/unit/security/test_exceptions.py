"""
Test cases for the jsonsalvage exception hierarchy.
"""

import unittest

from jsonsalvage.security.exceptions import (
    InvalidInputError,
    NoBoundaryFoundError,
    ParseFailureError,
    RepairError,
    UnbalancedStructureError,
)


class TestRepairError(unittest.TestCase):
    """Test the base exception formatting."""

    def test_basic_message(self):
        error = RepairError("Something failed")
        self.assertEqual(str(error), "Something failed")
        self.assertEqual(error.message, "Something failed")
        self.assertEqual(error.suggestions, [])

    def test_diagnostic_is_appended(self):
        error = RepairError("Repair failed", diagnostic="Expecting value")
        self.assertEqual(str(error), "Repair failed (Expecting value)")

    def test_suggestions_are_listed(self):
        error = RepairError("Repair failed", suggestions=["Try A", "Try B"])
        message = str(error)
        self.assertIn("Suggestions:", message)
        self.assertIn("  - Try A", message)
        self.assertIn("  - Try B", message)

    def test_context_is_stored(self):
        error = RepairError("Repair failed", context='{"a": }')
        self.assertEqual(error.context, '{"a": }')
        self.assertNotIn('{"a": }', str(error))


class TestSpecificErrors(unittest.TestCase):
    """Test the concrete error types."""

    def test_hierarchy(self):
        for error_class in (
            InvalidInputError,
            NoBoundaryFoundError,
            UnbalancedStructureError,
            ParseFailureError,
        ):
            with self.subTest(error_class=error_class):
                self.assertTrue(issubclass(error_class, RepairError))

        self.assertTrue(issubclass(InvalidInputError, ValueError))
        self.assertTrue(issubclass(ParseFailureError, ValueError))

    def test_no_boundary_defaults(self):
        error = NoBoundaryFoundError()
        self.assertEqual(error.message, "No JSON object or array found")
        self.assertEqual(len(error.suggestions), 1)

    def test_no_boundary_custom_suggestions(self):
        error = NoBoundaryFoundError(suggestions=["Check the prompt"])
        self.assertEqual(error.suggestions, ["Check the prompt"])

    def test_unbalanced_closer_suggestion(self):
        error = UnbalancedStructureError("Unclosed array", opener="[")
        self.assertEqual(error.opener, "[")
        self.assertIn("']'", str(error))

    def test_parse_failure_keeps_flattened_text(self):
        error = ParseFailureError(
            "Unable to repair JSON payload",
            diagnostic="Expecting value: line 1 column 7 (char 6)",
            flattened_text='{"a": }',
        )
        self.assertEqual(error.flattened_text, '{"a": }')
        self.assertEqual(error.context, '{"a": }')
        self.assertIn("Expecting value", str(error))


if __name__ == "__main__":
    unittest.main()
