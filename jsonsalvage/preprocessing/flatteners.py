"""
Flattening fallback step.

Last resort when every other stage has failed: collapses line breaks in
the original payload rather than in partially repaired text.
"""

import re

from ..utils.config import RepairConfig
from .base import RepairStepBase
from .sanitizers import replace_slash_quotes

LINE_BREAKS = re.compile(r"\r\n|\n|\r")


def flatten(text: str) -> str:
    """Collapse every line break variant to a single space."""
    return replace_slash_quotes(LINE_BREAKS.sub(" ", text))


class FlatteningFallback(RepairStepBase):
    """Flattens line breaks; the pipeline feeds it the original input."""

    name = "flatten"

    def process(self, text: str, _config: RepairConfig) -> str:
        return flatten(text)
