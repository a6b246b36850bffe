"""
JSON repair steps.

This module provides the staged repair pipeline for recovering JSON from
corrupted text. Each step is a focused, single-responsibility transform; the
pipeline evaluates them in a fixed order.
"""

from .base import RepairStepBase
from .escapers import StringAwareEscaper
from .extractors import BoundaryExtractor, MarkdownFenceStripper, find_boundary
from .flatteners import FlatteningFallback
from .pipeline import RepairPipeline
from .repairers import HeuristicRepairer, StructuralRepairer
from .sanitizers import CharacterSanitizer

__all__ = [
    "RepairPipeline",
    "RepairStepBase",
    "MarkdownFenceStripper",
    "BoundaryExtractor",
    "find_boundary",
    "CharacterSanitizer",
    "StringAwareEscaper",
    "StructuralRepairer",
    "HeuristicRepairer",
    "FlatteningFallback",
]
