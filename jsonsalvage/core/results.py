"""
Result types shared by the repair stages and the public API.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class RepairResult:
    """Uniform return shape of every fallible repair operation."""

    success: bool
    repaired_text: Optional[str] = None
    diagnostic: Optional[str] = None
    stage: Optional[str] = None

    @classmethod
    def ok(cls, text: str, stage: Optional[str] = None) -> "RepairResult":
        return cls(success=True, repaired_text=text, stage=stage)

    @classmethod
    def failed(
        cls,
        diagnostic: Optional[str] = None,
        text: Optional[str] = None,
        stage: Optional[str] = None,
    ) -> "RepairResult":
        return cls(success=False, repaired_text=text, diagnostic=diagnostic, stage=stage)


@dataclass(frozen=True)
class BoundarySpan:
    """The outer delimiter region found inside arbitrary text.

    ``end`` is exclusive. When ``balanced`` is False the closing delimiter was
    never reached and ``text()`` falls back to the whole source.
    """

    found: bool
    start: int = -1
    end: int = -1
    balanced: bool = False

    def text(self, source: str) -> str:
        if self.found and self.balanced:
            return source[self.start : self.end]
        return source


@dataclass
class ParseOutcome:
    """Result of a never-raising parse attempt."""

    success: bool
    data: Any = None
    error: Optional[str] = None
    raw: Optional[str] = None
