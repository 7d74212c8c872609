"""ACPI call interface transport.

This module performs the request/response exchange with the firmware
through the acpi_call kernel interface: a command line is written to the
call file and the result is read back from the same file.

The call file is a process-wide singleton. No locking is done, so only one
instance of the tool may talk to it at a time; concurrent runs can
interleave their calls and read each other's results.
"""
from __future__ import annotations

import logging
from typing import Any

from .acpi_protocol import ReadRequest, WriteRequest, parse_result
from .const import CALL_FILE
from .errors import AcpiError

_LOGGER = logging.getLogger(__name__)


class AcpiCallInterface:
    """Represents the firmware call interface file.

    Every call is a single write followed by a single read. Failed calls
    are never retried, since repeating a firmware call is not known to be
    safe.

    Attributes:
        path: Path of the call interface file.
    """

    def __init__(self, path: str = CALL_FILE) -> None:
        self.path = path

    def _write_raw(self, command: str) -> None:
        """Write a command line to the call file."""
        try:
            with open(self.path, "w", encoding="ascii") as handle:
                handle.write(command)
        except (OSError, UnicodeError) as err:
            raise AcpiError(f"Cannot write to {self.path}: {err}") from err

    def _read_raw(self) -> str:
        """Read the current content of the call file."""
        try:
            with open(self.path, encoding="ascii", errors="replace") as handle:
                return handle.read()
        except OSError as err:
            raise AcpiError(f"Cannot read from {self.path}: {err}") from err

    def get_result(self) -> str:
        """Return the result of the last call with NUL bytes removed.

        Raises:
            AcpiError: If the call file is unreadable or reports an error.
        """
        response = parse_result(self._read_raw())
        _LOGGER.debug("Result: %r", response.data)
        if not response.success:
            raise AcpiError(response.error_message)
        return response.data

    def call(self, request: WriteRequest | ReadRequest) -> str:
        """Send one request and return its result.

        Raises:
            ArgumentError: If the request lacks a required argument.
            AcpiError: If the call fails.
        """
        command = request.encode()
        _LOGGER.debug("Sending: %s", command)
        self._write_raw(command)
        return self.get_result()

    def write(self, address: Any, value: Any) -> None:
        """Write value to address, discarding the result once it is checked."""
        self.call(WriteRequest(address, value))

    def read(self, address: Any) -> str:
        """Read address and return the raw result."""
        return self.call(ReadRequest(address))
