"""
Content extraction repair steps.

This module contains the steps that pull JSON content out of surrounding
text: markdown code fences and the outermost object/array span.
"""

import re

from ..core.results import BoundarySpan
from ..security.exceptions import NoBoundaryFoundError, UnbalancedStructureError
from ..utils.config import RepairConfig
from .base import RepairStepBase

LEADING_FENCE = re.compile(r"```[\w+-]*\s*")
TRAILING_FENCE = re.compile(r"\s*```\s*$")

DELIMITER_PAIRS = {"{": "}", "[": "]"}


class MarkdownFenceStripper(RepairStepBase):
    """Strips leading and trailing markdown code-fence markers."""

    name = "markdown_fences"

    def should_apply(self, config: RepairConfig) -> bool:
        """Apply if fence stripping is enabled."""
        return config.strip_markdown_fences

    def process(self, text: str, _config: RepairConfig) -> str:
        """Remove the first fence marker and a fence closing the text."""
        return self.strip_fences(text)

    @staticmethod
    def strip_fences(text: str) -> str:
        if "```" not in text:
            return text
        # ```json, ```js and bare ``` all open a block
        result = LEADING_FENCE.sub("", text, count=1)
        return TRAILING_FENCE.sub("", result)


def find_boundary(text: str, string_aware: bool = True) -> BoundarySpan:
    """
    Locate the outermost object or array span inside text.

    The earlier of the first '{' and the first '[' selects the delimiter
    pair; only that pair is counted while scanning for the matching close.

    Args:
        text: Arbitrary text that may contain JSON
        string_aware: If True, delimiters inside double-quoted strings are
            not counted. If False, every delimiter counts.

    Returns:
        BoundarySpan describing the match
    """
    start_curly = text.find("{")
    start_square = text.find("[")

    if start_curly == -1 and start_square == -1:
        return BoundarySpan(found=False)

    if start_square == -1 or (start_curly != -1 and start_curly < start_square):
        start = start_curly
    else:
        start = start_square

    opener = text[start]
    closer = DELIMITER_PAIRS[opener]
    depth = 0
    in_string = False
    escape_next = False

    for i in range(start, len(text)):
        char = text[i]

        if string_aware:
            if escape_next:
                escape_next = False
                continue
            if char == "\\" and in_string:
                escape_next = True
                continue
            if char == '"':
                in_string = not in_string
                continue
            if in_string:
                continue

        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return BoundarySpan(found=True, start=start, end=i + 1, balanced=True)

    return BoundarySpan(found=True, start=start, end=len(text), balanced=False)


class BoundaryExtractor(RepairStepBase):
    """Extracts the outermost object/array span from surrounding text."""

    name = "boundary"

    def process(self, text: str, config: RepairConfig) -> str:
        """Return the balanced span, or the whole text when unbalanced."""
        span = find_boundary(text, config.string_aware_boundaries)
        if not span.found:
            raise NoBoundaryFoundError()
        return span.text(text)

    @staticmethod
    def extract_strict(text: str, string_aware: bool = True) -> str:
        """Return the balanced span or raise if there is none."""
        span = find_boundary(text, string_aware)
        if not span.found:
            raise NoBoundaryFoundError()
        if not span.balanced:
            raise UnbalancedStructureError(
                f"Unbalanced '{text[span.start]}' opened at index {span.start}",
                opener=text[span.start],
            )
        return span.text(text)
