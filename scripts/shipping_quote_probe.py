# flake8: noqa E402
# Run via uv so project deps are loaded, e.g.:
# uv run scripts/shipping_quote_probe.py --origin 01310-100 --dest 20040-020 --weight 1.2
from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

# Ensure the src directory is importable when the script is invoked via uv/python directly.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import config
from domain.shipping import Parcel
from shipping import build_provider_from_settings
from utils.formatting import format_currency


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch live shipping quotes for a single parcel.")
    parser.add_argument("--origin", help="Origin postal code (default: SHIPPING_ORIGIN_POSTAL_CODE).")
    parser.add_argument("--dest", required=True, help="Destination postal code, e.g. 20040-020.")
    parser.add_argument("--weight", type=float, default=0.3, help="Parcel weight in kg (default: 0.3).")
    parser.add_argument("--height", type=float, default=10.0, help="Parcel height in cm (default: 10).")
    parser.add_argument("--width", type=float, default=15.0, help="Parcel width in cm (default: 15).")
    parser.add_argument("--length", type=float, default=20.0, help="Parcel length in cm (default: 20).")
    parser.add_argument("--insured-value", type=Decimal, default=Decimal("0"), help="Declared value to insure.")
    parser.add_argument("--timeout", type=float, help="Overall time budget in seconds for the call.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    settings = config()
    origin = args.origin or settings.origin_postal_code
    if not origin:
        raise SystemExit("origin postal code missing: pass --origin or set SHIPPING_ORIGIN_POSTAL_CODE")

    provider = build_provider_from_settings(settings)
    parcel = Parcel(weight_kg=args.weight, height_cm=args.height, width_cm=args.width, length_cm=args.length)
    options = provider.get_quotes(origin, args.dest, [parcel], args.insured_value, timeout=args.timeout)
    payload: list[dict[str, Any]] = [
        {
            "carrier": option.carrier,
            "service_code": option.service_code,
            "price": format_currency(option.price),
            "estimated_days": option.estimated_days,
        }
        for option in options
    ]
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
