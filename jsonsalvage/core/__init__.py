"""
Core API, result types and the parseability predicate.
"""

from .engine import (
    repair,
    repair_to_array,
    repair_to_object,
    repair_to_text,
    repair_to_value,
    safe_parse,
    try_repair,
)
from .results import BoundarySpan, ParseOutcome, RepairResult
from .validation import is_parseable, strict_loads

__all__ = [
    "repair",
    "repair_to_text",
    "repair_to_value",
    "repair_to_array",
    "repair_to_object",
    "try_repair",
    "safe_parse",
    "RepairResult",
    "BoundarySpan",
    "ParseOutcome",
    "is_parseable",
    "strict_loads",
]
