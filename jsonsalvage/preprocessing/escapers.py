"""
String-aware escaping repair step.

Converts raw line feeds inside string literals into the two-character
escape sequence instead of deleting them.
"""

from ..utils.config import RepairConfig
from .base import RepairStepBase
from .sanitizers import replace_slash_quotes


def escape_newlines_in_strings(text: str) -> str:
    """
    Escape raw newlines that occur inside double-quoted strings.

    A single left-to-right scan tracks whether the cursor is inside a string
    and whether the previous character was an unconsumed backslash.

    Args:
        text: JSON-like text

    Returns:
        Text with every in-string LF replaced by backslash-n
    """
    result = []
    in_string = False
    escaped = False

    for char in text:
        if escaped:
            result.append(char)
            escaped = False
            continue

        if char == "\\":
            result.append(char)
            escaped = True
            continue

        if char == '"':
            in_string = not in_string
            result.append(char)
            continue

        if in_string and char == "\n":
            result.append("\\n")
        else:
            result.append(char)

    return "".join(result)


class StringAwareEscaper(RepairStepBase):
    """Escapes raw newlines inside string literals."""

    name = "escaper"

    def process(self, text: str, _config: RepairConfig) -> str:
        return escape_newlines_in_strings(replace_slash_quotes(text))
