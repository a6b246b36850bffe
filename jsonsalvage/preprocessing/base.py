"""
Base classes for repair steps.

This module contains the base class used by repair steps so they can be
evaluated uniformly by the pipeline.
"""

import logging

from ..core.interfaces import ParseablePredicate
from ..core.results import RepairResult
from ..security.exceptions import RepairError
from ..utils.config import RepairConfig

logger = logging.getLogger(__name__)


class RepairStepBase:
    """Base class for repair steps with common functionality."""

    name = "step"

    def should_apply(self, _config: RepairConfig) -> bool:
        """Default implementation - always apply. Override in subclasses."""
        return True

    def process(self, text: str, _config: RepairConfig) -> str:
        """Process the text. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement process()")

    def run(
        self, text: str, config: RepairConfig, is_parseable: ParseablePredicate
    ) -> RepairResult:
        """Process the text and check the output with the predicate.

        Stage failures are returned as a failed result carrying the input
        text so the next stage can continue from it.
        """
        try:
            result = self.process(text, config)
        except RepairError as e:
            logger.debug(f"Stage {self.name} failed: {e.message}")
            return RepairResult.failed(e.message, text, self.name)

        if is_parseable(result):
            return RepairResult.ok(result, self.name)
        return RepairResult.failed("Output is not parseable", result, self.name)
