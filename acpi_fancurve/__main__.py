"""Run the fan curve tool with ``python -m acpi_fancurve``."""
import sys

from .cli import main

sys.exit(main())
