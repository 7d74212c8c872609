"""Fan curve operations.

Sequences model resolution, validation, firmware calls and persistence for
one invocation. Every step is fail-fast; calls already made when a later
call fails are not rolled back, since the firmware offers no undo.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .acpi_device import AcpiCallInterface
from .acpi_protocol import decode_temperature
from .config_store import ConfigStore
from .const import TEMPS_DEFAULT
from .errors import FanCurveError
from .model_database import ModelRecord, ModelResolver
from .settings import Settings
from .validation import check_temperatures, split_temperatures, validate

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FanCurveContext:
    """Read-only state shared by all operations of a run."""
    settings: Settings
    model: ModelRecord

    @classmethod
    def resolve(cls, settings: Settings) -> "FanCurveContext":
        """Resolve the host model once for this run.

        Raises:
            OSError: If the host identity cannot be detected.
            ParseError: If the matching database record is malformed.
        """
        return cls(settings, ModelResolver(settings).resolve())


@dataclass
class OperationResult:
    """Outcome of a fan curve operation."""
    success: bool
    data: Any = None
    error_message: str | None = None


class FanCurveController:
    """Reads and writes the fan curve of the resolved model."""

    def __init__(
        self,
        context: FanCurveContext,
        transport: AcpiCallInterface | None = None,
        store: ConfigStore | None = None,
    ) -> None:
        self.context = context
        self.transport = transport or AcpiCallInterface(context.settings.call_file)
        self.store = store or ConfigStore(context.settings.config_path)

    @property
    def model(self) -> ModelRecord:
        return self.context.model

    def select_temps(self, raw: str | None) -> tuple[int, ...]:
        """Turn the set-temps argument into a validated sequence.

        None selects the stored sequence, falling back to the model
        defaults when nothing usable is stored. The keyword "default"
        selects the model defaults.

        Raises:
            ValidationError: If the resulting sequence is invalid.
        """
        count = self.model.temp_count
        if raw is None:
            stored = self.store.load()
            if stored is not None and validate(stored, count):
                _LOGGER.info("Using stored temperatures")
                return check_temperatures(stored, count)
            if stored is not None:
                _LOGGER.warning("Stored temperatures do not fit model %s", self.model.identity)
            return check_temperatures(self.model.default_temps, count)

        if raw.strip().lower() == TEMPS_DEFAULT:
            return check_temperatures(self.model.default_temps, count)
        return check_temperatures(split_temperatures(raw), count, raw_input=raw)

    def apply(self, temps: Sequence[int]) -> None:
        """Write temps to every fan zone, then persist them.

        Zones are written in database order, each zone from the first
        calibration point to the last.
        """
        for base_address in self.model.base_addresses:
            for index, value in enumerate(temps):
                self.transport.write(base_address + index, value)
            _LOGGER.debug("Zone at %d written", base_address)
        self.store.save(temps)

    def read_temps(self) -> tuple[int, ...]:
        """Read the calibration points of the first fan zone."""
        base_address = self.model.base_addresses[0]
        return tuple(
            decode_temperature(self.transport.read(base_address + index))
            for index in range(self.model.temp_count)
        )

    def set_temps(self, raw: str | None = None) -> OperationResult:
        """Validate and write a temperature curve."""
        try:
            temps = self.select_temps(raw)
            self.apply(temps)
        except (FanCurveError, OSError) as err:
            _LOGGER.error("Setting temperatures failed: %s", err)
            return OperationResult(success=False, error_message=str(err))
        _LOGGER.info("Temperatures set to %s", temps)
        return OperationResult(success=True, data=temps)

    def get_temps(self) -> OperationResult:
        """Read the current temperature curve from the firmware."""
        try:
            temps = self.read_temps()
        except FanCurveError as err:
            _LOGGER.error("Reading temperatures failed: %s", err)
            return OperationResult(success=False, error_message=str(err))
        _LOGGER.info("Read temperatures %s", temps)
        return OperationResult(success=True, data=temps)

    def model_info(self) -> OperationResult:
        """Describe the resolved model and the stored temperatures."""
        return OperationResult(
            success=True,
            data={
                "identity": self.model.identity,
                "tested": self.model.tested,
                "base_addresses": list(self.model.base_addresses),
                "default_temps": list(self.model.default_temps),
                "stored_temps": list(self.store.load() or []),
            },
        )
