"""
Repair pipeline for recovering JSON from corrupted text.

This module implements the fixed-order strategy chain: each step is tried
in turn against a shared parseability predicate and the first parseable
output wins.
"""

import logging
from typing import Any, Optional

from ..core.interfaces import ParseablePredicate, RepairStep
from ..core.results import RepairResult
from ..core.validation import diagnose, is_parseable
from ..security.exceptions import NoBoundaryFoundError
from ..security.limits import LimitValidator
from ..utils.config import RepairConfig
from .escapers import StringAwareEscaper
from .extractors import BoundaryExtractor, MarkdownFenceStripper, find_boundary
from .flatteners import FlatteningFallback
from .repairers import StructuralRepairer
from .sanitizers import CharacterSanitizer

logger = logging.getLogger(__name__)


class RepairPipeline:
    """Manages the ordered repair steps applied to a raw payload.

    ``steps`` are chained: each consumes the previous step's output. The
    ``fallback`` step restarts from the original payload and its output is
    handed to ``fallback_repairer``.
    """

    def __init__(
        self,
        steps: Optional[list[RepairStep]] = None,
        fallback: Optional[RepairStep] = None,
        fallback_repairer: Optional[RepairStep] = None,
        predicate: ParseablePredicate = is_parseable,
    ):
        self.steps = steps or []
        self.fallback = fallback
        self.fallback_repairer = fallback_repairer
        self.is_parseable = predicate

    def add_step(self, step: RepairStep) -> None:
        """Add a repair step to the chain."""
        self.steps.append(step)

    def repair(self, raw: Any, config: Optional[RepairConfig] = None) -> RepairResult:
        """
        Run the pipeline against a raw payload.

        Args:
            raw: Untrusted text
            config: RepairConfig for granular control

        Returns:
            RepairResult with the first parseable text, or a failed result
            carrying the parser diagnostic and the flattened payload

        Raises:
            InvalidInputError: If the payload is not usable text
            NoBoundaryFoundError: If the payload has neither '{' nor '['
        """
        if config is None:
            config = RepairConfig()
        assert config.limits is not None

        text = LimitValidator(config.limits).validate_payload(raw)
        if not find_boundary(text, string_aware=False).found:
            raise NoBoundaryFoundError()

        if self.is_parseable(text):
            return RepairResult.ok(text, "unchanged")

        result = self._run_chain(text, config)
        if result.success:
            return result

        return self._run_fallback(text, config, result)

    def _run_chain(self, text: str, config: RepairConfig) -> RepairResult:
        current = text
        last = RepairResult.failed(text=text)

        for step in self.steps:
            if not step.should_apply(config):
                continue

            last = step.run(current, config, self.is_parseable)
            if last.success:
                logger.debug(f"Repaired by stage {step.name}")
                return last

            logger.debug(f"Stage {step.name} did not produce parseable text")
            if last.repaired_text is not None:
                current = last.repaired_text

        return last

    def _run_fallback(
        self, raw: str, config: RepairConfig, previous: RepairResult
    ) -> RepairResult:
        if self.fallback is None:
            text = previous.repaired_text or raw
            return RepairResult.failed(diagnose(text), text, "diagnostic")

        flattened = self.fallback.run(raw, config, self.is_parseable)
        if flattened.success:
            logger.debug(f"Repaired by stage {self.fallback.name}")
            return flattened

        flat_text = flattened.repaired_text or raw
        if self.fallback_repairer is not None:
            repaired = self.fallback_repairer.run(flat_text, config, self.is_parseable)
            if repaired.success:
                logger.debug(
                    f"Repaired by stage {self.fallback_repairer.name} after flattening"
                )
                return repaired

        return RepairResult.failed(diagnose(flat_text), flat_text, "diagnostic")

    @classmethod
    def create_default_pipeline(cls) -> "RepairPipeline":
        """Create the default repair pipeline."""
        pipeline = cls()

        # Content extraction steps
        pipeline.add_step(MarkdownFenceStripper())
        pipeline.add_step(BoundaryExtractor())

        # Escape raw newlines before the sanitizer would delete them
        pipeline.add_step(StringAwareEscaper())
        pipeline.add_step(CharacterSanitizer())

        pipeline.add_step(StructuralRepairer())

        pipeline.fallback = FlatteningFallback()
        pipeline.fallback_repairer = StructuralRepairer()

        return pipeline
