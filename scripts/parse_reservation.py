"""Parse a captured booking response and print the decoded reservation."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ean_mobile.core.logging import configure_logging
from ean_mobile.hotels import DateFormatError
from ean_mobile.services import ServiceError, parse_reservation_response


def main() -> int:
    parser = argparse.ArgumentParser(description="Decode a HotelRoomReservationResponse capture")
    parser.add_argument("capture", type=Path, help="JSON file holding the raw response")
    parser.add_argument("--output", type=Path, help="Write the decoded reservation here instead of stdout")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    configure_logging(args.log_level)
    payload = json.loads(args.capture.read_text())
    try:
        reservation = parse_reservation_response(payload)
    except (DateFormatError, ServiceError) as exc:
        print(f"Unable to decode {args.capture}: {exc}", file=sys.stderr)
        return 1

    rendered = json.dumps(reservation.to_dict(), indent=2)
    if args.output:
        args.output.write_text(rendered)
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
