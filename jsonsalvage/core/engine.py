"""
Public repair entry points for jsonsalvage.
"""

import logging
from typing import Any, Optional, Union

from ..preprocessing.pipeline import RepairPipeline
from ..security.exceptions import ParseFailureError, RepairError
from ..utils.config import RepairConfig
from .results import ParseOutcome, RepairResult
from .validation import strict_loads

logger = logging.getLogger(__name__)

# Steps are stateless, so one pipeline serves every call
_PIPELINE = RepairPipeline.create_default_pipeline()


def repair(raw: Any, config: Optional[RepairConfig] = None) -> RepairResult:
    """
    Run the repair pipeline and return its result.

    Raises:
        InvalidInputError: If the payload is empty or not a string
        NoBoundaryFoundError: If the payload has neither '{' nor '['
    """
    return _PIPELINE.repair(raw, config)


def repair_to_text(raw: Any, config: Optional[RepairConfig] = None) -> str:
    """
    Repair a corrupted JSON payload and return parseable text.

    Text that is already valid JSON is returned unchanged.

    Args:
        raw: Untrusted text supposed to contain a JSON object or array
        config: Optional RepairConfig for advanced control

    Returns:
        Text accepted by the standard JSON parser

    Raises:
        InvalidInputError: If the payload is empty or not a string
        NoBoundaryFoundError: If the payload has neither '{' nor '['
        ParseFailureError: If no stage produced parseable text
    """
    result = repair(raw, config)
    if not result.success or result.repaired_text is None:
        raise ParseFailureError(
            "Unable to repair JSON payload",
            diagnostic=result.diagnostic,
            flattened_text=result.repaired_text,
        )
    return result.repaired_text


def repair_to_value(
    raw: Any,
    expected_type: Optional[Union[type, tuple[type, ...]]] = None,
    config: Optional[RepairConfig] = None,
) -> Any:
    """
    Repair a payload and parse it into Python data.

    Args:
        raw: Untrusted text
        expected_type: If given, values that are not instances of it yield None
        config: Optional RepairConfig

    Returns:
        The parsed value, or None on a type mismatch

    Raises:
        RepairError: If the payload cannot be repaired
    """
    value = strict_loads(repair_to_text(raw, config))
    if expected_type is not None and not isinstance(value, expected_type):
        return None
    return value


def repair_to_array(
    raw: Any, config: Optional[RepairConfig] = None
) -> Optional[list[Any]]:
    """Repair a payload expected to hold a JSON array."""
    return repair_to_value(raw, list, config)


def repair_to_object(
    raw: Any, config: Optional[RepairConfig] = None
) -> Optional[dict[str, Any]]:
    """Repair a payload expected to hold a JSON object."""
    return repair_to_value(raw, dict, config)


def try_repair(raw: Any, config: Optional[RepairConfig] = None) -> RepairResult:
    """
    Repair a payload without raising.

    On terminal failure ``repaired_text`` holds the flattened best-effort text
    (not valid JSON); callers must check ``success``.
    """
    try:
        return repair(raw, config)
    except RepairError as e:
        return RepairResult.failed(e.message)


def safe_parse(raw: Any, config: Optional[RepairConfig] = None) -> ParseOutcome:
    """Parse directly, then with repair; never raises."""
    if isinstance(raw, str):
        try:
            return ParseOutcome(success=True, data=strict_loads(raw), raw=raw)
        except (ValueError, RecursionError):
            pass

    try:
        return ParseOutcome(success=True, data=repair_to_value(raw, config=config), raw=raw)
    except RepairError as e:
        logger.debug(f"JSON repair failed: {e.message}")
        return ParseOutcome(success=False, error=str(e), raw=raw)
