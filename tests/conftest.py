"""
Pytest configuration for fan curve tests.
"""
from __future__ import annotations

import re

import pytest

from acpi_fancurve.acpi_device import AcpiCallInterface
from acpi_fancurve.config_store import ConfigStore
from acpi_fancurve.fan_control import FanCurveContext, FanCurveController
from acpi_fancurve.model_database import ModelRecord
from acpi_fancurve.settings import Settings


class FakeCallInterface(AcpiCallInterface):
    """
    Call interface that records commands instead of touching /proc.

    responses maps an address to the raw result returned after a read of
    that address. Writes return write_result. Setting fail_on_call makes
    the n-th call (1-based) report an error.
    """

    def __init__(self, responses=None, write_result="0x0\x00", fail_on_call=None):
        super().__init__("/nonexistent/acpi/call")
        self.responses = responses or {}
        self.write_result = write_result
        self.fail_on_call = fail_on_call
        self.commands: list[str] = []
        self._result = ""

    def _write_raw(self, command: str) -> None:
        self.commands.append(command)
        if self.fail_on_call == len(self.commands):
            self._result = "Error: AE_AML_PACKAGE_LIMIT\x00"
            return
        parts = command.split()
        if len(parts) == 2:
            self._result = self.responses.get(int(parts[1]), "Error: not found")
        else:
            self._result = self.write_result

    def _read_raw(self) -> str:
        return self._result

    @property
    def writes(self) -> list[tuple[int, int]]:
        """(address, value) pairs of every write command sent."""
        return [
            (int(m.group(1)), int(m.group(2)))
            for m in (re.match(r"\S+ (\d+) (\d+)$", c) for c in self.commands)
            if m
        ]


@pytest.fixture
def fake_call():
    return FakeCallInterface()


@pytest.fixture
def identity_file(tmp_path):
    path = tmp_path / "product_name"
    path.write_text("XPS 9300\n")
    return path


@pytest.fixture
def model_db(tmp_path):
    path = tmp_path / "models.db"
    path.write_text(
        "# identity|addresses|temps|\n"
        "Inspiron7490|1335|52 57 62 66 70 74 78 82|\n"
        "XPS9300|1335 1400|50 55 60 65 70 75 80 85|\n"
        "XPS9300|2000|40 41 42|\n"
    )
    return path


@pytest.fixture
def settings(tmp_path, identity_file, model_db):
    return Settings(
        model_db_path=str(model_db),
        config_path=str(tmp_path / "etc" / "temps.conf"),
        call_file=str(tmp_path / "call"),
        identity_file=str(identity_file),
    )


@pytest.fixture
def make_controller(settings, fake_call):
    """Build a controller around a given model record."""

    def _make(model: ModelRecord, transport=None):
        context = FanCurveContext(settings, model)
        return FanCurveController(
            context,
            transport=transport or fake_call,
            store=ConfigStore(settings.config_path),
        )

    return _make
