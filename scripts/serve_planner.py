"""HTTP server exposing the tram planner as JSON."""

from __future__ import annotations

import argparse
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qs, urlsplit

from tramfinder.config import load_config
from tramfinder.logging_setup import configure_logging
from tramfinder.logic.boarding import BoardingRequestError, parse_boarding_request
from tramfinder.logic.planner import PlanningError
from tramfinder.service import TripPlanService, build_service

logger = logging.getLogger("serve_planner")


class PlannerHandler(BaseHTTPRequestHandler):
    service: TripPlanService
    default_candidates: dict[str, Any] | None = None

    def do_GET(self) -> None:  # noqa: N802
        url = urlsplit(self.path)

        if url.path == "/healthz":
            self.send_response(200)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
            self.end_headers()
            self.wfile.write(b"ok")
            return

        if url.path == "/api/tram":
            params = parse_qs(url.query)
            raw = params.get("candidates", [None])[0]
            try:
                request = parse_boarding_request(raw if raw else self.default_candidates)
            except BoardingRequestError as exc:
                logger.info("Rejected candidates parameter: %s", exc)
                self._send_json(400, {"error": "Invalid candidates parameter"})
                return
            try:
                result = self.service.get_trip_plan(request)
            except PlanningError as exc:
                self._send_json(500, {"error": str(exc)})
                return
            self._send_json(200, result.to_dict())
            return

        self.send_response(404)
        self.end_headers()

    def _send_json(self, status: int, payload: dict[str, Any]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug(format, *args)


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml", help="Path to the YAML config file")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    PlannerHandler.service = build_service(config)
    PlannerHandler.default_candidates = config.planner.default_candidates or None

    server = ThreadingHTTPServer((args.host, args.port), PlannerHandler)
    logger.info("Serving tram planner on %s:%d", args.host, args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        return 0
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
