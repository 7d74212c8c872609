"""Constants for the ACPI fan curve tool."""
from __future__ import annotations

from pathlib import Path
from typing import Final

NAME: Final = "acpi-fancurve"
VERSION: Final = "1.0.0"

# Firmware call interface (acpi_call kernel module)
CALL_FILE: Final = "/proc/acpi/call"
READ_COMMAND: Final = r"\_SB.PCI0.LPCB.EC0.RTMP"
WRITE_COMMAND: Final = r"\_SB.PCI0.LPCB.EC0.WTMP"
ERROR_MARKER: Final = "error"
RESULT_HEX_DIGITS: Final = 4

# Host identity
IDENTITY_FILE: Final = "/sys/class/dmi/id/product_name"

# Files
MODEL_DB: Final = str(Path(__file__).parent / "data" / "models.db")
CONFIG_FILE: Final = "/etc/acpi-fancurve/temps.conf"
DB_FIELD_SEPARATOR: Final = "|"
DB_COMMENT: Final = "#"

# Conservative defaults used when the host is not in the model database
DEFAULT_FALLBACK_ADDRESSES: Final = "1335"
DEFAULT_FALLBACK_TEMPS: Final = "55 60 62 65 68 72 76 80"

# Environment
ENV_PREFIX: Final = "ACPI_FANCURVE_"
ENV_FALLBACK_ADDRESSES: Final = ENV_PREFIX + "FALLBACK_ADDRESSES"
ENV_FALLBACK_TEMPS: Final = ENV_PREFIX + "FALLBACK_TEMPS"
ENV_MODEL_DB: Final = ENV_PREFIX + "MODEL_DB"
ENV_CONFIG_FILE: Final = ENV_PREFIX + "CONFIG_FILE"
ENV_CALL_FILE: Final = ENV_PREFIX + "CALL_FILE"
ENV_IDENTITY_FILE: Final = ENV_PREFIX + "IDENTITY_FILE"

# Keywords accepted by set-temps
TEMPS_DEFAULT: Final = "default"

# Log levels for the command line
LOG_LEVELS: Final = {
    "error": "ERROR",
    "warning": "WARNING",
    "info": "INFO",
    "debug": "DEBUG",
}
DEFAULT_LOG_LEVEL: Final = "warning"
