"""GiroMilano tpPortal API client."""

from __future__ import annotations

import logging
from typing import Any

import requests

from tramfinder.config import GIROMILANO_API_BASE
from tramfinder.data.wait_message import parse_wait_message

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json",
    "Origin": "https://giromilano.atm.it",
    "Referer": "https://giromilano.atm.it/",
}


class GiroMilanoClientError(Exception):
    """Raised when a GiroMilano API request fails or returns a non-200 response."""


class GiroMilanoClient:
    """Thin wrapper around the GiroMilano stop summary endpoint using requests."""

    def __init__(self, base_url: str = GIROMILANO_API_BASE, timeout_seconds: float = 8) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_line_summary(self, stop_code: str) -> list[dict]:
        """Fetch every line currently serving a stop; returns the raw ``Lines`` array."""
        response_json = self._get(f"/tpl/stops/{stop_code}/linesummary")
        if not isinstance(response_json, dict):
            raise GiroMilanoClientError("GiroMilano response was not a JSON object")
        lines = response_json.get("Lines") or []
        if not isinstance(lines, list):
            raise GiroMilanoClientError("GiroMilano response 'Lines' was not a list")
        return lines

    def get_wait_minutes(self, stop_code: str, line_code: str) -> int | None:
        """Return minutes until the next vehicle of a line at a stop, or None if unknown."""
        try:
            lines = self.get_line_summary(stop_code)
        except GiroMilanoClientError as exc:
            logger.warning("Wait time unavailable for stop %s line %s: %s", stop_code, line_code, exc)
            return None

        for entry in lines:
            if not isinstance(entry, dict):
                continue
            line = entry.get("Line")
            if isinstance(line, dict) and line.get("LineCode") == line_code:
                return parse_wait_message(entry.get("WaitMessage"))

        logger.debug("Line %s not listed at stop %s", line_code, stop_code)
        return None

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = requests.get(
                url, headers=REQUEST_HEADERS, params=params, timeout=self._timeout_seconds
            )
        except requests.RequestException as exc:
            raise GiroMilanoClientError(f"GiroMilano request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise GiroMilanoClientError(f"GiroMilano request failed: {detail}")

        try:
            return response.json()
        except ValueError as exc:
            raise GiroMilanoClientError("GiroMilano response was not valid JSON") from exc


__all__ = ["GiroMilanoClient", "GiroMilanoClientError", "REQUEST_HEADERS"]
