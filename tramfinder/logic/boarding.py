"""Boarding requests: which stop of which route the rider intends to board at."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import json
import math
from typing import Any, Mapping

DEFAULT_CANDIDATES: dict[str, dict[str, Any]] = {
    "15": {"direction": "0", "target_station_code": "15371", "walking_time": 8},
    "3": {"direction": "0", "target_station_code": "11139", "walking_time": 4},
}


class BoardingRequestError(ValueError):
    """Raised when a caller-supplied boarding request is malformed."""


@dataclass(frozen=True)
class BoardingCandidate:
    """Rider's boarding choice for one route code."""

    direction: str
    target_stop_code: str
    walking_time_minutes: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "direction": self.direction,
            "target_station_code": self.target_stop_code,
            "walking_time": self.walking_time_minutes,
        }


BoardingRequest = Mapping[str, BoardingCandidate]


def _parse_candidate(route_code: str, raw: Any) -> BoardingCandidate:
    if not isinstance(raw, dict):
        raise BoardingRequestError(f"Candidate for line '{route_code}' must be an object")

    missing = [key for key in ("direction", "target_station_code", "walking_time") if key not in raw]
    if missing:
        raise BoardingRequestError(
            f"Candidate for line '{route_code}' is missing: {', '.join(missing)}"
        )

    direction = raw["direction"]
    target = raw["target_station_code"]
    walking_time = raw["walking_time"]
    if not isinstance(direction, (str, int)) or isinstance(direction, bool):
        raise BoardingRequestError(f"'direction' for line '{route_code}' must be a string")
    if not isinstance(target, (str, int)) or isinstance(target, bool):
        raise BoardingRequestError(
            f"'target_station_code' for line '{route_code}' must be a string"
        )
    if isinstance(walking_time, bool) or not isinstance(walking_time, (int, float)):
        raise BoardingRequestError(f"'walking_time' for line '{route_code}' must be a number")
    try:
        minutes = float(walking_time)
    except OverflowError as exc:
        raise BoardingRequestError(f"'walking_time' for line '{route_code}' is too large") from exc
    if not math.isfinite(minutes) or minutes < 0:
        raise BoardingRequestError(
            f"'walking_time' for line '{route_code}' must be a non-negative finite number"
        )

    return BoardingCandidate(
        direction=str(direction),
        target_stop_code=str(target),
        walking_time_minutes=minutes,
    )


def parse_boarding_request(raw: str | Mapping[str, Any] | None) -> dict[str, BoardingCandidate]:
    """Validate a boarding request given as a JSON string or decoded mapping.

    ``None`` selects :data:`DEFAULT_CANDIDATES`.
    """
    if raw is None:
        raw = DEFAULT_CANDIDATES
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise BoardingRequestError("Invalid candidates parameter") from exc
    if not isinstance(raw, Mapping):
        raise BoardingRequestError("Candidates must be a JSON object keyed by line code")
    return {str(code): _parse_candidate(str(code), value) for code, value in raw.items()}


def boarding_request_key(request: BoardingRequest) -> str:
    """Stable hash of a boarding request, independent of key order."""
    canonical = json.dumps(
        {code: candidate.to_dict() for code, candidate in request.items()},
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


__all__ = [
    "DEFAULT_CANDIDATES",
    "BoardingCandidate",
    "BoardingRequest",
    "BoardingRequestError",
    "boarding_request_key",
    "parse_boarding_request",
]
