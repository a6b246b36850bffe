"""
Core interfaces for the repair pipeline.

This module defines the contract that repair steps implement so the
pipeline can evaluate them as a plain ordered sequence.
"""

from typing import Any, Callable, Protocol

from .results import RepairResult

ParseablePredicate = Callable[[str], bool]


class RepairStep(Protocol):
    """Protocol for steps in the repair pipeline."""

    name: str

    def should_apply(self, config: Any) -> bool:
        """Determine if this step should be applied given the configuration."""
        ...

    def process(self, text: str, config: Any) -> str:
        """Transform the input text; may raise a RepairError."""
        ...

    def run(
        self, text: str, config: Any, is_parseable: ParseablePredicate
    ) -> RepairResult:
        """Process the text and report whether the output is parseable."""
        ...
