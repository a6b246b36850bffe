"""
Exception hierarchy for jsonsalvage.

Intermediate stage failures never leave the pipeline; only the exceptions
below reach callers, each carrying enough context to debug the payload.
"""

from typing import Any, Optional


class RepairError(Exception):
    """Base exception for all jsonsalvage errors."""

    def __init__(
        self,
        message: str,
        diagnostic: Optional[str] = None,
        context: Optional[str] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.diagnostic = diagnostic
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.diagnostic:
            msg += f" ({self.diagnostic})"

        if self.suggestions:
            msg += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                msg += f"\n  - {suggestion}"

        return msg


class InvalidInputError(RepairError, ValueError):
    """Raised for empty, non-text or oversized payloads."""


class NoBoundaryFoundError(RepairError):
    """Raised when the payload contains neither '{' nor '['."""

    def __init__(
        self, message: str = "No JSON object or array found", **kwargs: Any
    ):
        kwargs.setdefault(
            "suggestions",
            ["Make sure the payload contains an object '{...}' or array '[...]'"],
        )
        super().__init__(message, **kwargs)


class UnbalancedStructureError(RepairError):
    """Raised when the outer delimiter depth never returns to zero."""

    def __init__(self, message: str, opener: str = "{", **kwargs: Any):
        closer = "}" if opener == "{" else "]"
        kwargs.setdefault(
            "suggestions", [f"Check for a missing closing '{closer}'"]
        )
        self.opener = opener
        super().__init__(message, **kwargs)


class ParseFailureError(RepairError, ValueError):
    """Raised once every repair stage has been exhausted.

    ``flattened_text`` holds the best-effort flattened payload produced by the
    last fallback stage; it is not valid JSON.
    """

    def __init__(
        self,
        message: str,
        diagnostic: Optional[str] = None,
        flattened_text: Optional[str] = None,
    ):
        self.flattened_text = flattened_text
        super().__init__(message, diagnostic=diagnostic, context=flattened_text)
