"""
Parseability predicate shared by every repair stage.

Python's json module accepts NaN and Infinity by default; a standards
compliant parser does not, so those constants are rejected here.
"""

import json
from typing import Any, NoReturn


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"Non-standard JSON constant: {name}")


def strict_loads(text: str) -> Any:
    """Parse text with the standard parser, rejecting non-finite constants.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON
        ValueError: If the text contains NaN or Infinity
    """
    return json.loads(text, parse_constant=_reject_constant)


def is_parseable(text: str) -> bool:
    """Return True when the standard parser accepts the text."""
    try:
        strict_loads(text)
    except (ValueError, RecursionError):  # JSONDecodeError is a ValueError
        return False
    return True


def is_structured(text: str) -> bool:
    """Return True when the text parses to a JSON object or array."""
    try:
        value = strict_loads(text)
    except (ValueError, RecursionError):
        return False
    return isinstance(value, (dict, list))


def diagnose(text: str) -> str:
    """Return the parser's error message for text, or '' if it parses."""
    try:
        strict_loads(text)
    except (ValueError, RecursionError) as e:
        return str(e)
    return ""
