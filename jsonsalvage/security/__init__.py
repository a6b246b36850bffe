"""
jsonsalvage error types and input validation.
"""

from .exceptions import (
    InvalidInputError,
    NoBoundaryFoundError,
    ParseFailureError,
    RepairError,
    UnbalancedStructureError,
)
from .limits import LimitValidator

__all__ = [
    "RepairError",
    "InvalidInputError",
    "NoBoundaryFoundError",
    "UnbalancedStructureError",
    "ParseFailureError",
    "LimitValidator",
]
