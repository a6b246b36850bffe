"""
Configuration for jsonsalvage repair and batch processing.

This module defines the settings that select between the faithful and the
bug-compatible behaviour of individual repair stages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_SENTINEL_FILENAME = "_file.txt"


class RepairBackend(Enum):
    """Implementation used by the structural repair stage."""

    LIBRARY = "library"  # json_repair.repair_json
    HEURISTIC = "heuristic"  # built-in rewrite battery


@dataclass
class ExtractionSettings:
    """Settings for content extraction."""
    strip_markdown_fences: bool = True
    string_aware_boundaries: bool = True


@dataclass
class SanitizerSettings:
    """Settings for the character sanitizer."""
    strip_all_backslashes: bool = False


@dataclass
class RepairSettings:
    """Settings for structural repair."""
    backend: RepairBackend = RepairBackend.LIBRARY


@dataclass
class RepairLimits:
    """Input limits applied before any stage runs."""
    max_input_size: int = 10 * 1024 * 1024

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")


@dataclass
class RepairConfig:
    """Granular control over the repair pipeline."""

    extraction: Optional[ExtractionSettings] = None
    sanitizer: Optional[SanitizerSettings] = None
    repair: Optional[RepairSettings] = None
    limits: Optional[RepairLimits] = None

    def __post_init__(self) -> None:
        if self.extraction is None:
            self.extraction = ExtractionSettings()
        if self.sanitizer is None:
            self.sanitizer = SanitizerSettings()
        if self.repair is None:
            self.repair = RepairSettings()
        if self.limits is None:
            self.limits = RepairLimits()

    @property
    def strip_markdown_fences(self) -> bool:
        """Whether to strip leading/trailing markdown fence markers."""
        assert self.extraction is not None
        return self.extraction.strip_markdown_fences

    @property
    def string_aware_boundaries(self) -> bool:
        """Whether boundary depth counting skips string literals."""
        assert self.extraction is not None
        return self.extraction.string_aware_boundaries

    @property
    def strip_all_backslashes(self) -> bool:
        """Whether the sanitizer drops every backslash, escapes included."""
        assert self.sanitizer is not None
        return self.sanitizer.strip_all_backslashes

    @property
    def backend(self) -> RepairBackend:
        """Structural repair backend."""
        assert self.repair is not None
        return self.repair.backend

    @property
    def max_input_size(self) -> int:
        """Maximum accepted payload size in characters."""
        assert self.limits is not None
        return self.limits.max_input_size

    @classmethod
    def default(cls) -> "RepairConfig":
        """Create the default configuration."""
        return cls()

    @classmethod
    def legacy(cls) -> "RepairConfig":
        """Create the legacy bug-compatible configuration."""
        return cls(
            extraction=ExtractionSettings(string_aware_boundaries=False),
            sanitizer=SanitizerSettings(strip_all_backslashes=True),
            repair=RepairSettings(backend=RepairBackend.HEURISTIC),
        )

    @classmethod
    def from_features(cls, enabled_features: set[str]) -> "RepairConfig":
        """Create configuration from a set of enabled feature names.

        Boolean features not named are disabled. ``heuristic_repair`` selects
        the built-in repair battery instead of the library backend.
        """
        config = cls(
            extraction=ExtractionSettings(
                strip_markdown_fences=False,
                string_aware_boundaries=False,
            ),
            sanitizer=SanitizerSettings(strip_all_backslashes=False),
            repair=RepairSettings(),
        )

        field_mapping = {
            "strip_markdown_fences": ("extraction", "strip_markdown_fences"),
            "string_aware_boundaries": ("extraction", "string_aware_boundaries"),
            "strip_all_backslashes": ("sanitizer", "strip_all_backslashes"),
        }

        for feature_name in enabled_features:
            if feature_name in field_mapping:
                group_name, attr_name = field_mapping[feature_name]
                group = getattr(config, group_name)
                setattr(group, attr_name, True)
            elif feature_name == "heuristic_repair":
                assert config.repair is not None
                config.repair.backend = RepairBackend.HEURISTIC
            else:
                raise ValueError(f"Unknown feature: {feature_name}")

        return config


@dataclass
class BatchConfig:
    """Settings for walking and rewriting a file tree."""
    sentinel_filename: str = DEFAULT_SENTINEL_FILENAME
    encoding: str = "utf-8"
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError("max_workers must be positive")
