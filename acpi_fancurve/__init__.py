"""ACPI fan curve configuration tool."""
from .const import VERSION as __version__

# Define public API
__all__ = [
    "AcpiCallInterface",
    "ConfigStore",
    "FanCurveContext",
    "FanCurveController",
    "ModelRecord",
    "ModelResolver",
    "Settings",
    "__version__",
]

from .acpi_device import AcpiCallInterface
from .config_store import ConfigStore
from .fan_control import FanCurveContext, FanCurveController
from .model_database import ModelRecord, ModelResolver
from .settings import Settings
