"""
Test cases for repair and batch configuration.
"""

import unittest

from jsonsalvage.utils.config import (
    DEFAULT_SENTINEL_FILENAME,
    BatchConfig,
    ExtractionSettings,
    RepairBackend,
    RepairConfig,
    RepairLimits,
)


class TestRepairConfig(unittest.TestCase):
    """Test RepairConfig defaults and presets."""

    def test_defaults(self):
        config = RepairConfig()
        self.assertTrue(config.strip_markdown_fences)
        self.assertTrue(config.string_aware_boundaries)
        self.assertFalse(config.strip_all_backslashes)
        self.assertIs(config.backend, RepairBackend.LIBRARY)
        self.assertEqual(config.max_input_size, 10 * 1024 * 1024)

    def test_default_preset_matches_constructor(self):
        self.assertEqual(RepairConfig.default(), RepairConfig())

    def test_partial_groups_fill_defaults(self):
        config = RepairConfig(extraction=ExtractionSettings(strip_markdown_fences=False))
        self.assertFalse(config.strip_markdown_fences)
        self.assertTrue(config.string_aware_boundaries)
        self.assertIsNotNone(config.sanitizer)
        self.assertIsNotNone(config.limits)

    def test_legacy(self):
        config = RepairConfig.legacy()
        self.assertTrue(config.strip_markdown_fences)
        self.assertFalse(config.string_aware_boundaries)
        self.assertTrue(config.strip_all_backslashes)
        self.assertIs(config.backend, RepairBackend.HEURISTIC)

    def test_from_features_disables_unnamed(self):
        config = RepairConfig.from_features(set())
        self.assertFalse(config.strip_markdown_fences)
        self.assertFalse(config.string_aware_boundaries)
        self.assertFalse(config.strip_all_backslashes)
        self.assertIs(config.backend, RepairBackend.LIBRARY)

    def test_from_features_enables_named(self):
        config = RepairConfig.from_features(
            {"strip_markdown_fences", "strip_all_backslashes", "heuristic_repair"}
        )
        self.assertTrue(config.strip_markdown_fences)
        self.assertFalse(config.string_aware_boundaries)
        self.assertTrue(config.strip_all_backslashes)
        self.assertIs(config.backend, RepairBackend.HEURISTIC)

    def test_from_features_unknown(self):
        with self.assertRaises(ValueError):
            RepairConfig.from_features({"auto_fix_everything"})


class TestLimitsAndBatchConfig(unittest.TestCase):
    """Test validation in the smaller settings classes."""

    def test_invalid_input_size(self):
        for size in (0, -1):
            with self.subTest(size=size):
                with self.assertRaises(ValueError):
                    RepairLimits(max_input_size=size)

    def test_batch_defaults(self):
        config = BatchConfig()
        self.assertEqual(config.sentinel_filename, DEFAULT_SENTINEL_FILENAME)
        self.assertEqual(config.encoding, "utf-8")
        self.assertIsNone(config.max_workers)

    def test_invalid_workers(self):
        with self.assertRaises(ValueError):
            BatchConfig(max_workers=0)


if __name__ == "__main__":
    unittest.main()
