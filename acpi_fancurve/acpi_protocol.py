"""Wire format of the firmware call interface.

Requests are single lines written to the call interface::

    <WRITE_COMMAND> <address> <value>
    <READ_COMMAND> <address>

Arguments are plain decimal integers. After each call the interface holds
the result text: it may contain NUL bytes, it signals failure with the
case-insensitive token "error", and a successful read starts with four
hexadecimal digits holding the temperature.
"""
from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Any

from .const import ERROR_MARKER, READ_COMMAND, RESULT_HEX_DIGITS, WRITE_COMMAND
from .errors import ArgumentError, ParseError
from .validation import parse_non_negative

_LOGGER = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass
class AcpiResponse:
    """Result text read back from the call interface."""
    success: bool
    data: str | None = None
    error_message: str | None = None


def encode_argument(name: str, value: Any) -> str:
    """Format a required call argument as a decimal string.

    Raises:
        ArgumentError: If the argument is missing, empty or not a
            non-negative integer.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ArgumentError(f"Missing required {name} argument")
    number = parse_non_negative(value)
    if number is None:
        raise ArgumentError(f"Invalid {name} argument: {value!r}")
    return str(number)


def encode_temperature(value: Any) -> str:
    """Encode a temperature for a write call."""
    return encode_argument("value", value)


def decode_temperature(raw: str) -> int:
    """Decode the temperature held in the first four characters of a result.

    Raises:
        ParseError: If fewer than four characters are present or they are
            not hexadecimal digits.
    """
    digits = raw[:RESULT_HEX_DIGITS]
    if len(digits) < RESULT_HEX_DIGITS:
        raise ParseError(f"Result too short: {raw!r}")
    if not set(digits) <= _HEX_DIGITS:
        raise ParseError(f"Result is not hexadecimal: {raw!r}")
    return int(digits, 16)


@dataclass(frozen=True)
class WriteRequest:
    """Set the calibration point at address to value."""
    address: Any
    value: Any

    def encode(self) -> str:
        address = encode_argument("address", self.address)
        value = encode_temperature(self.value)
        return f"{WRITE_COMMAND} {address} {value}"


@dataclass(frozen=True)
class ReadRequest:
    """Read the calibration point at address."""
    address: Any

    def encode(self) -> str:
        return f"{READ_COMMAND} {encode_argument('address', self.address)}"


def parse_result(raw: str | None) -> AcpiResponse:
    """Interpret the text read back from the call interface.

    NUL bytes are stripped; any occurrence of "error" in any case marks
    the call as failed.
    """
    if raw is None:
        return AcpiResponse(success=False, error_message="No result")

    text = raw.replace("\x00", "")
    if ERROR_MARKER in text.lower():
        return AcpiResponse(success=False, data=text, error_message=f"Call failed: {text.strip()}")
    return AcpiResponse(success=True, data=text)
