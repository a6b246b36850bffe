"""
jsonsalvage - Recover JSON from text that was supposed to be JSON.

Language models and hand-edited stores often persist JSON wrapped in prose or
markdown fences, with stray control characters, raw line breaks inside
strings, trailing commas or single quotes. jsonsalvage runs such payloads
through a fixed-order pipeline of repair stages and returns the first result
the standard parser accepts, without ever accepting garbage.

Key Features:
- Extract the outermost object/array from surrounding text
- Strip markdown code fences and control characters
- Escape raw newlines inside strings instead of deleting them
- Repair trailing commas, single quotes, unquoted keys and NaN/undefined
- Repair every file under a directory tree in place

Quick Start:
    import jsonsalvage

    text = jsonsalvage.repair_to_text('```json\\n{"a": 1,}\\n```')
    data = jsonsalvage.repair_to_object("Sure! {'name': 'Ada'}")

    result = jsonsalvage.try_repair(untrusted)  # never raises
    if result.success:
        ...

    summary = jsonsalvage.sanitize_tree("responses/", delete_on_failure=True)
"""

from .core.engine import (
    repair,
    repair_to_array,
    repair_to_object,
    repair_to_text,
    repair_to_value,
    safe_parse,
    try_repair,
)
from .core.results import BoundarySpan, ParseOutcome, RepairResult
from .batch.processor import BatchSummary, FileOutcome, sanitize_file, sanitize_tree
from .preprocessing.pipeline import RepairPipeline
from .security.exceptions import (
    InvalidInputError,
    NoBoundaryFoundError,
    ParseFailureError,
    RepairError,
    UnbalancedStructureError,
)
from .utils.config import BatchConfig, RepairBackend, RepairConfig

__version__ = "0.1.0"
__author__ = "jsonsalvage contributors"

__all__ = [
    # Repair entry points
    "repair", "repair_to_text", "repair_to_value", "repair_to_array",
    "repair_to_object", "try_repair", "safe_parse",
    # Batch entry points
    "sanitize_file", "sanitize_tree", "FileOutcome", "BatchSummary",
    # Result types
    "RepairResult", "BoundarySpan", "ParseOutcome",
    # Configuration classes
    "RepairConfig", "RepairBackend", "BatchConfig",
    # Exception classes
    "RepairError", "InvalidInputError", "NoBoundaryFoundError",
    "UnbalancedStructureError", "ParseFailureError",
    # Advanced classes
    "RepairPipeline",
]
