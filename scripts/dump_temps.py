#!/usr/bin/env python3
"""
Dump the resolved model and the current firmware fan curve as JSON.

Usage:
    sudo python scripts/dump_temps.py [--call-file /proc/acpi/call] [--output temps.json]

The output file can be used in unit tests to check decoding against real
firmware results.
"""
import argparse
import json
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from acpi_fancurve.acpi_protocol import decode_temperature
from acpi_fancurve.errors import FanCurveError
from acpi_fancurve.fan_control import FanCurveContext, FanCurveController
from acpi_fancurve.settings import Settings


def dump_temps(settings: Settings) -> dict:
    """
    Read every calibration point of every fan zone.

    Returns a dict with:
    - metadata: timestamp, call file
    - model: model-info of the resolved model
    - raw: raw result for each address
    - temps: decoded temperatures per zone base address
    """
    context = FanCurveContext.resolve(settings)
    controller = FanCurveController(context)
    result = {
        "metadata": {
            "timestamp": datetime.now().isoformat(),
            "call_file": settings.call_file,
        },
        "model": controller.model_info().data,
        "raw": {},
        "temps": {},
    }

    print(f"Model {context.model.identity} (tested={context.model.tested})", file=sys.stderr)
    for base_address in context.model.base_addresses:
        zone = []
        for index in range(context.model.temp_count):
            address = base_address + index
            raw = controller.transport.read(address)
            result["raw"][str(address)] = raw
            zone.append(decode_temperature(raw))
        result["temps"][str(base_address)] = zone
        print(f"  Zone {base_address}: {' '.join(str(t) for t in zone)}", file=sys.stderr)

    return result


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--call-file", "-c", help="ACPI call interface to read from")
    parser.add_argument("--output", "-o", type=Path, help="JSON file (default: stdout)")
    args = parser.parse_args()

    try:
        settings = Settings.from_env()
        if args.call_file:
            settings = replace(settings, call_file=args.call_file)
        data = dump_temps(settings)
    except (FanCurveError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    text = json.dumps(data, indent=2)
    if args.output is None:
        print(text)
        return
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    print(f"Saved to: {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
