"""
Input validation for jsonsalvage.

Rejects payloads that cannot be repaired before any stage runs.
"""

from typing import Any

from ..utils.config import RepairLimits
from .exceptions import InvalidInputError


class LimitValidator:
    """Validates raw payloads against the configured limits."""

    def __init__(self, limits: RepairLimits):
        self.limits = limits

    def validate_payload(self, raw: Any) -> str:
        """Return the payload if it is usable text, raise otherwise."""
        if not isinstance(raw, str):
            raise InvalidInputError(
                f"Input must be a string, got {type(raw).__name__}"
            )
        if not raw.strip():
            raise InvalidInputError("Input must be a non-empty string")
        self.validate_input_size(raw)
        return raw

    def validate_input_size(self, text: str) -> None:
        """Validate that input text size is within limits."""
        if len(text) > self.limits.max_input_size:
            raise InvalidInputError(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}"
            )
