"""
Character sanitizing repair step.

Removes control and formatting noise with a fixed sequence of rewrites.
None of the rewrites is conditional on the text being parseable.
"""

import re

from ..utils.config import RepairConfig
from .base import RepairStepBase

LEFT_CURLY_QUOTE = "“"

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
WHITESPACE_RUN = re.compile(r"\s+")
# Valid escape pairs are consumed first so '\\x' keeps its escaped backslash
BACKSLASH_ESCAPE = re.compile(r'\\(["\\/bfnrt]|u[0-9a-fA-F]{4})|\\')
QUOTE_RUN = re.compile(r'"{2,}')
ESCAPE_CHARS = re.compile(r"[\b\f\n\r\t\v]")


def replace_slash_quotes(text: str) -> str:
    """Replace '/"' with a left curly quote."""
    return text.replace('/"', LEFT_CURLY_QUOTE)


def remove_invalid_backslashes(text: str) -> str:
    """Delete backslashes that do not begin a valid JSON escape."""
    return BACKSLASH_ESCAPE.sub(lambda m: m.group(0) if m.group(1) else "", text)


class CharacterSanitizer(RepairStepBase):
    """Removes control characters and other incompatible noise."""

    name = "sanitizer"

    def process(self, text: str, config: RepairConfig) -> str:
        """Apply the fixed rewrite sequence."""
        result = replace_slash_quotes(text)
        result = CONTROL_CHARS.sub("", result)
        result = WHITESPACE_RUN.sub(" ", result)

        if config.strip_all_backslashes:
            result = result.replace("\\", "")
        else:
            result = remove_invalid_backslashes(result)

        result = QUOTE_RUN.sub('"', result)
        result = ESCAPE_CHARS.sub(" ", result)
        return result.strip()
