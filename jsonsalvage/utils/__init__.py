"""Configuration for jsonsalvage."""

from .config import (
    DEFAULT_SENTINEL_FILENAME,
    BatchConfig,
    ExtractionSettings,
    RepairBackend,
    RepairConfig,
    RepairLimits,
    RepairSettings,
    SanitizerSettings,
)

__all__ = [
    "DEFAULT_SENTINEL_FILENAME",
    "BatchConfig",
    "ExtractionSettings",
    "RepairBackend",
    "RepairConfig",
    "RepairLimits",
    "RepairSettings",
    "SanitizerSettings",
]
