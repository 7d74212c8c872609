"""Command line interface.

Usage:
    acpi-fancurve set-temps ["55 60 62 65 68 72 76 80" | default]
    acpi-fancurve get-temps
    acpi-fancurve model-info
    acpi-fancurve help
    acpi-fancurve about
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

from .const import DEFAULT_LOG_LEVEL, LOG_LEVELS, NAME, TEMPS_DEFAULT, VERSION
from .errors import FanCurveError
from .fan_control import FanCurveContext, FanCurveController
from .settings import Settings

_LOGGER = logging.getLogger(__name__)

ABOUT = f"""{NAME} {VERSION}
Configures the firmware fan curve of laptops that expose their fan
calibration points through ACPI calls (acpi_call kernel module)."""

HARDWARE_COMMANDS = ("set-temps", "get-temps")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=NAME,
        description="Read and write the firmware fan curve through ACPI calls",
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=list(LOG_LEVELS),
        default=DEFAULT_LOG_LEVEL,
        help=f"Log verbosity (default: {DEFAULT_LOG_LEVEL})",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")

    set_parser = subparsers.add_parser(
        "set-temps", help="Write a temperature curve to the firmware"
    )
    set_parser.add_argument(
        "temps",
        nargs="?",
        default=None,
        help=(
            "Space-joined, non-decreasing temperatures, or "
            f"'{TEMPS_DEFAULT}' for the model defaults (default: stored curve)"
        ),
    )
    subparsers.add_parser("get-temps", help="Read the temperature curve from the firmware")
    subparsers.add_parser("model-info", help="Show the detected model and its defaults")
    subparsers.add_parser("help", help="Show this help")
    subparsers.add_parser("about", help="Show version information")
    return parser


def check_preconditions(settings: Settings) -> str | None:
    """Return why hardware may not be touched, or None if it may."""
    if os.geteuid() != 0:
        return "Root privileges are required to access the ACPI call interface"
    if not os.path.exists(settings.call_file):
        return f"ACPI call interface {settings.call_file} not found (is acpi_call loaded?)"
    return None


def _print_model(info: dict) -> None:
    status = "tested" if info["tested"] else "untested (fallback values)"
    print(f"Model:          {info['identity']}")
    print(f"Status:         {status}")
    print(f"Base addresses: {' '.join(str(a) for a in info['base_addresses'])}")
    print(f"Default temps:  {' '.join(str(t) for t in info['default_temps'])}")
    stored = " ".join(str(t) for t in info["stored_temps"]) or "none"
    print(f"Stored temps:   {stored}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=LOG_LEVELS[args.log_level],
        format="%(levelname)s %(name)s: %(message)s",
    )
    _LOGGER.debug("Running command %s", args.command)

    if args.command in (None, "help"):
        parser.print_help()
        return 0
    if args.command == "about":
        print(ABOUT)
        return 0

    try:
        settings = Settings.from_env()
        if args.command in HARDWARE_COMMANDS:
            reason = check_preconditions(settings)
            if reason:
                print(f"Error: {reason}", file=sys.stderr)
                return 1
        context = FanCurveContext.resolve(settings)
    except (FanCurveError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    controller = FanCurveController(context)
    if not context.model.tested and args.command != "model-info":
        print(
            f"Warning: model {context.model.identity} is untested, using fallback values",
            file=sys.stderr,
        )

    if args.command == "set-temps":
        result = controller.set_temps(args.temps)
        if result.success:
            print(f"Temperatures set: {' '.join(str(t) for t in result.data)}")
    elif args.command == "get-temps":
        result = controller.get_temps()
        if result.success:
            print(" ".join(str(t) for t in result.data))
    else:
        result = controller.model_info()
        _print_model(result.data)

    if not result.success:
        print(f"Error: {result.error_message}", file=sys.stderr)
        return 1
    return 0
