"""Print a tram plan for a boarding request as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from tramfinder.config import load_config
from tramfinder.data.topology import TopologyError
from tramfinder.logging_setup import configure_logging
from tramfinder.logic.boarding import BoardingRequestError, parse_boarding_request
from tramfinder.logic.planner import PlanningError
from tramfinder.service import build_service

logger = logging.getLogger("plan_trip")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to the YAML config file",
    )
    parser.add_argument(
        "--candidates",
        default=None,
        help='Boarding request JSON, e.g. \'{"15": {"direction": "0", '
        '"target_station_code": "15371", "walking_time": 8}}\'',
    )
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    try:
        request = parse_boarding_request(
            args.candidates if args.candidates else (config.planner.default_candidates or None)
        )
    except BoardingRequestError as exc:
        print(f"Invalid candidates: {exc}", file=sys.stderr)
        return 2

    try:
        service = build_service(config)
    except TopologyError as exc:
        logger.error("Cannot load topology: %s", exc)
        return 1

    try:
        result = service.get_trip_plan(request)
    except PlanningError as exc:
        print(f"Planning failed: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
