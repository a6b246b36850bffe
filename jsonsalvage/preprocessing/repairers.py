"""
Structural repair steps.

This module contains the step that repairs JSON syntax deviations such as
trailing commas, single-quoted strings, unquoted keys and non-standard
literals. The library backend delegates to json_repair; the heuristic
backend is a built-in battery of string-aware rewrites.
"""

import re
from typing import Any

from json_repair import repair_json

from ..core.validation import strict_loads
from ..security.exceptions import NoBoundaryFoundError, RepairError
from ..utils.config import RepairBackend, RepairConfig
from .base import RepairStepBase
from .extractors import find_boundary
from .string_utils import (
    find_closing_quote,
    last_significant_char,
    map_outside_strings,
)

TRAILING_COMMA = re.compile(r",(\s*[}\]])")
UNQUOTED_KEY = re.compile(r"([{,]\s*)([A-Za-z_$][\w$]*)(\s*:)")
INVALID_LITERAL = re.compile(r"(?<![\w$.])-?(?:Infinity|NaN|undefined)(?![\w$])")
BARE_VALUE = re.compile(r"([:\[,]\s*)([A-Za-z_][\w .\-]*?)(\s*)(?=[,}\]])")

JSON_LITERALS = frozenset({"true", "false", "null"})
VALUE_OPENERS = ("", "{", "[", ",", ":")

# Fidelity check for library output
ESCAPE_SEQUENCE = re.compile(r"\\u[0-9a-fA-F]{4}|\\.")
NUMBER_TOKEN = re.compile(r"(?<![\w.])-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?(?![\w.])")
WORD_TOKEN = re.compile(r"[A-Za-z0-9_]+")
STRUCTURE_MARKS = frozenset("\"':,")
LITERAL_ALIASES = {"none": "null"}


class HeuristicRepairer:
    """Built-in structural repair battery.

    The rewrites run in a fixed order and can damage legitimate content
    containing apostrophes or bare words, so results are low confidence.
    """

    @classmethod
    def repair(cls, text: str) -> str:
        """Apply every rewrite in order."""
        result = cls.fix_trailing_commas(text)
        result = cls.quote_unquoted_keys(result)
        result = cls.convert_single_quotes(result)
        result = cls.replace_invalid_literals(result)
        result = cls.quote_bare_values(result)
        return result

    @staticmethod
    def fix_trailing_commas(text: str) -> str:
        """Remove trailing commas before closing braces/brackets."""
        return map_outside_strings(
            text, lambda segment: TRAILING_COMMA.sub(r"\1", segment), "\"'"
        )

    @staticmethod
    def quote_unquoted_keys(text: str) -> str:
        """Add quotes to identifier-style object keys."""
        return map_outside_strings(
            text, lambda segment: UNQUOTED_KEY.sub(r'\1"\2"\3', segment), "\"'"
        )

    @staticmethod
    def convert_single_quotes(text: str) -> str:
        """Convert single-quoted strings in value/key position to double quotes."""
        result: list[str] = []
        i = 0
        in_double_quote = False

        while i < len(text):
            char = text[i]

            if in_double_quote:
                result.append(char)
                if char == "\\" and i + 1 < len(text):
                    result.append(text[i + 1])
                    i += 2
                    continue
                if char == '"':
                    in_double_quote = False
                i += 1
                continue

            if char == '"':
                in_double_quote = True
                result.append(char)
                i += 1
                continue

            # Apostrophes inside bare words are left alone
            if char == "'" and last_significant_char(result) in VALUE_OPENERS:
                end = find_closing_quote(text, i)
                if end != -1:
                    content = text[i + 1 : end].replace("\\'", "'")
                    content = re.sub(r'(?<!\\)"', lambda _m: '\\"', content)
                    result.append(f'"{content}"')
                    i = end + 1
                    continue

            result.append(char)
            i += 1

        return "".join(result)

    @staticmethod
    def replace_invalid_literals(text: str) -> str:
        """Replace undefined, NaN and Infinity tokens with null."""
        return map_outside_strings(
            text, lambda segment: INVALID_LITERAL.sub("null", segment)
        )

    @staticmethod
    def quote_bare_values(text: str) -> str:
        """Quote bare word values that are not JSON literals."""

        def quote(match: re.Match[str]) -> str:
            word = match.group(2)
            if word in JSON_LITERALS:
                return match.group(0)
            return f'{match.group(1)}"{word}"{match.group(3)}'

        return map_outside_strings(text, lambda segment: BARE_VALUE.sub(quote, segment))


def content_words(text: str) -> set[str]:
    """Lower-cased words of JSON-like text; escapes and numbers are ignored."""
    text = ESCAPE_SEQUENCE.sub(" ", text)
    text = NUMBER_TOKEN.sub(" ", text)
    words = set()
    for word in WORD_TOKEN.findall(text):
        if word.isdigit():
            continue
        word = word.lower()
        words.add(LITERAL_ALIASES.get(word, word))
    return words


def _value_words(value: Any, words: set[str]) -> bool:
    """Collect the words of a parsed value; return True if it holds any data."""
    if isinstance(value, dict):
        has_data = False
        for key, item in value.items():
            words.update(word.lower() for word in WORD_TOKEN.findall(key))
            has_data = _value_words(item, words) or bool(key) or has_data
        return has_data
    if isinstance(value, list):
        has_data = False
        for item in value:
            has_data = _value_words(item, words) or has_data
        return has_data
    if isinstance(value, str):
        words.update(word.lower() for word in WORD_TOKEN.findall(value))
        return bool(value)
    if value is None:
        words.add("null")
    elif isinstance(value, bool):
        words.add("true" if value else "false")
    return True


def check_library_output(source: str, repaired: str) -> None:
    """
    Reject json_repair output that does not faithfully represent source.

    json_repair turns almost any text containing a delimiter into some
    container. Its output is accepted only when the source holds values and
    JSON punctuation, the container type is kept, the result holds data,
    and no word of the source was dropped.

    Args:
        source: Payload handed to the library, starting at its delimiter
        repaired: Text returned by the library

    Raises:
        RepairError: If the output is not an acceptable repair
    """
    if not WORD_TOKEN.search(ESCAPE_SEQUENCE.sub(" ", source)):
        raise RepairError("Payload holds delimiters but no values")

    try:
        value = strict_loads(repaired)
    except (ValueError, RecursionError) as e:
        raise RepairError("json_repair output is not valid JSON", diagnostic=str(e)) from e

    expected = dict if source[0] == "{" else list
    if not isinstance(value, expected):
        raise RepairError(
            f"json_repair changed '{source[0]}' into {type(value).__name__}"
        )

    output_words: set[str] = set()
    if not _value_words(value, output_words):
        raise RepairError("json_repair produced an empty container")

    source_words = content_words(source)
    if source_words and not STRUCTURE_MARKS.intersection(source):
        raise RepairError("Payload has words but no JSON punctuation")

    missing = source_words - output_words
    if missing:
        raise RepairError(
            "json_repair dropped payload content",
            diagnostic=", ".join(sorted(missing)[:5]),
        )


class StructuralRepairer(RepairStepBase):
    """Repairs syntax deviations with the configured backend."""

    name = "structural"

    def process(self, text: str, config: RepairConfig) -> str:
        if config.backend is RepairBackend.HEURISTIC:
            return HeuristicRepairer.repair(text)
        return self.repair_with_library(text)

    @staticmethod
    def trim_to_structure(text: str) -> str:
        """Drop text before the opening delimiter and after a balanced close."""
        span = find_boundary(text)
        if not span.found:
            raise NoBoundaryFoundError()
        if span.balanced:
            return text[span.start : span.end]
        return text[span.start :]

    @classmethod
    def repair_with_library(cls, text: str) -> str:
        """Delegate to json_repair and verify the result.

        Non-standard constants are normalised first because the library
        keeps NaN and Infinity, which the strict parser rejects.
        """
        prepared = HeuristicRepairer.replace_invalid_literals(cls.trim_to_structure(text))
        try:
            repaired = repair_json(prepared, ensure_ascii=False)
        except (ValueError, TypeError, IndexError, RecursionError) as e:
            raise RepairError("json_repair failed", diagnostic=str(e)) from e

        if not isinstance(repaired, str):
            raise RepairError("json_repair did not return text")
        check_library_output(prepared, repaired)
        return repaired
