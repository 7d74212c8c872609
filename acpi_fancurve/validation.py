"""Temperature sequence validation.

A temperature sequence is valid when every element is a non-negative
integer, the values never decrease, and its length matches the number of
calibration points of the resolved model. Rules are checked in that order
and the first violation wins.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .errors import ValidationError

_LOGGER = logging.getLogger(__name__)


def parse_non_negative(value: Any) -> int | None:
    """Return value as a non-negative int, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


def split_temperatures(text: str) -> list[str]:
    """Split space-joined user input into raw temperature tokens."""
    return text.split()


def find_violation(sequence: Sequence[Any], expected_length: int) -> str | None:
    """Describe the first rule the sequence breaks, or None if it is valid."""
    values = [parse_non_negative(raw) for raw in sequence]
    for index, (raw, value) in enumerate(zip(sequence, values)):
        if value is None:
            return f"element {index} ({raw!r}) is not a non-negative integer"

    for index in range(1, len(values)):
        if values[index] < values[index - 1]:
            return (
                f"element {index} ({values[index]}) is lower than "
                f"element {index - 1} ({values[index - 1]})"
            )

    if len(sequence) != expected_length:
        return f"expected {expected_length} temperatures, got {len(sequence)}"
    return None


def validate(sequence: Sequence[Any], expected_length: int) -> bool:
    """Return True if the sequence may be written to the firmware."""
    return find_violation(sequence, expected_length) is None


def check_temperatures(
    sequence: Sequence[Any], expected_length: int, raw_input: str | None = None
) -> tuple[int, ...]:
    """Validate a sequence and return it as integers.

    Raises:
        ValidationError: With the offending input and the broken rule.
    """
    reason = find_violation(sequence, expected_length)
    if reason is not None:
        shown = raw_input if raw_input is not None else " ".join(str(v) for v in sequence)
        _LOGGER.debug("Rejected temperatures %r: %s", shown, reason)
        raise ValidationError(f"Invalid temperatures '{shown}': {reason}")
    return tuple(parse_non_negative(v) for v in sequence)
