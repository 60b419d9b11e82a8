"""Static route/stop topology loaded once at startup."""

from __future__ import annotations

from dataclasses import dataclass, replace
import json
from typing import Any

DEFAULT_TRAVEL_TIME_MIN = 2.0


class TopologyError(Exception):
    """Raised when the route topology cannot be loaded or is inconsistent."""


@dataclass(frozen=True)
class Stop:
    """Single stop along a route."""

    name: str
    code: str
    index: int
    walking_time_minutes: float = 0.0
    is_boarding_candidate: bool = False

    def as_boarding_candidate(self, walking_time_minutes: float) -> "Stop":
        """Return a copy of this stop marked as the rider's boarding stop."""
        return replace(self, walking_time_minutes=walking_time_minutes, is_boarding_candidate=True)


@dataclass(frozen=True)
class Route:
    """One direction of a line: an ordered sequence of stops."""

    name: str
    code: str
    direction: str
    stops: tuple[Stop, ...]
    default_travel_time: float = DEFAULT_TRAVEL_TIME_MIN

    def stop_by_code(self, code: str) -> Stop | None:
        for stop in self.stops:
            if stop.code == code:
                return stop
        return None

    def stop_by_index(self, index: int) -> Stop | None:
        for stop in self.stops:
            if stop.index == index:
                return stop
        return None


def _parse_stop(raw: Any, context: str) -> Stop:
    if not isinstance(raw, dict):
        raise TopologyError(f"Stop entry in {context} must be a mapping")
    index = raw.get("index", 0)
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise TopologyError(f"Stop index in {context} must be a non-negative integer")
    return Stop(
        name=str(raw.get("name") or "Unknown"),
        code=str(raw.get("code") or ""),
        index=index,
    )


def _parse_route(raw: Any) -> Route:
    if not isinstance(raw, dict):
        raise TopologyError("Line entry must be a mapping")
    line_info = raw.get("line") or {}
    if not isinstance(line_info, dict):
        raise TopologyError("'line' must be a mapping")
    code = str(line_info.get("code") or "")
    direction = str(raw.get("direction") or "")
    context = f"line {code} direction {direction}"

    raw_stops = raw.get("stations") or []
    if not isinstance(raw_stops, list):
        raise TopologyError(f"'stations' in {context} must be a list")
    stops = sorted((_parse_stop(item, context) for item in raw_stops), key=lambda s: s.index)
    for previous, current in zip(stops, stops[1:]):
        if current.index == previous.index:
            raise TopologyError(f"Duplicate stop index {current.index} in {context}")

    return Route(
        name=str(line_info.get("description") or ""),
        code=code,
        direction=direction,
        stops=tuple(stops),
    )


def parse_topology(data: Any) -> tuple[Route, ...]:
    """Build routes from a decoded GiroMilano line dump."""
    if not isinstance(data, dict):
        raise TopologyError("Topology must contain a mapping at the top level")
    lines = data.get("lines") or []
    if not isinstance(lines, list):
        raise TopologyError("'lines' must be a list")
    return tuple(_parse_route(item) for item in lines)


def load_topology(path: str = "data/lines.json") -> tuple[Route, ...]:
    """Load the route topology from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise TopologyError(f"Topology file not found: {path}") from exc
    except OSError as exc:
        raise TopologyError(f"Topology file could not be read: {path}: {exc}") from exc
    except ValueError as exc:
        raise TopologyError(f"Topology file is not valid JSON: {path}") from exc
    return parse_topology(data)


__all__ = [
    "DEFAULT_TRAVEL_TIME_MIN",
    "Route",
    "Stop",
    "TopologyError",
    "load_topology",
    "parse_topology",
]
