"""
Utility functions for string processing that are commonly used across repair steps.

This module contains shared logic for splitting text on string literal
boundaries so rewrites can be limited to the structural parts of a payload.
"""

from collections.abc import Callable


def split_string_segments(text: str, quote_chars: str = '"') -> list[tuple[str, bool]]:
    """
    Split text into alternating structural and string-literal segments.

    Args:
        text: The text to split
        quote_chars: Characters that open a string literal

    Returns:
        List of (segment, in_string) tuples. String segments include their
        quotes; an unterminated string runs to the end of the text.
    """
    segments: list[tuple[str, bool]] = []
    start = 0
    i = 0

    while i < len(text):
        char = text[i]
        if char not in quote_chars:
            i += 1
            continue

        if i > start:
            segments.append((text[start:i], False))

        end = find_closing_quote(text, i)
        if end == -1:
            segments.append((text[i:], True))
            return segments

        segments.append((text[i : end + 1], True))
        i = end + 1
        start = i

    if start < len(text):
        segments.append((text[start:], False))
    return segments


def map_outside_strings(
    text: str, func: Callable[[str], str], quote_chars: str = '"'
) -> str:
    """Apply func to every segment of text that is not a string literal."""
    return "".join(
        segment if in_string else func(segment)
        for segment, in_string in split_string_segments(text, quote_chars)
    )


def find_closing_quote(text: str, start: int) -> int:
    """
    Find closing quote for a string starting at start position.
    Handles escape sequences properly.

    Args:
        text: Text to search in
        start: Position of opening quote

    Returns:
        Position of closing quote or -1 if not found
    """
    if start >= len(text) or text[start] not in ['"', "'"]:
        return -1

    quote_char = text[start]
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2  # Skip escaped character
            continue
        if text[i] == quote_char:
            return i
        i += 1

    return -1


def last_significant_char(chars: list[str]) -> str:
    """Return the last non-whitespace character emitted so far, or ''."""
    for chunk in reversed(chars):
        stripped = chunk.rstrip()
        if stripped:
            return stripped[-1]
    return ""
