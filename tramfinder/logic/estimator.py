"""Travel-rate estimation and vehicle segmentation from a wait reading chain."""

from __future__ import annotations

from dataclasses import dataclass
import math

from tramfinder.data.topology import DEFAULT_TRAVEL_TIME_MIN

MAX_VEHICLES = 3


@dataclass(frozen=True)
class DetectedVehicle:
    """A vehicle inferred from the reading chain."""

    raw_wait_minutes: int
    source_stop_index: int


def to_numeric(readings: list[int | None]) -> list[int]:
    """Map unknown readings to 0."""
    return [0 if reading is None else reading for reading in readings]


def estimate_travel_rate(
    readings: list[int | None],
    default: float = DEFAULT_TRAVEL_TIME_MIN,
) -> float:
    """Average per-stop decrease of the leading non-increasing run of readings.

    Falls back to ``default`` when the run has no pairs or its mean is not positive.
    """
    numeric = to_numeric(readings)
    differences: list[int] = []
    for current, following in zip(numeric, numeric[1:]):
        if following > current:
            break
        differences.append(current - following)

    if not differences:
        return default
    average = sum(differences) / len(differences)
    if average <= 0 or not math.isfinite(average):
        return default
    return average


def detect_vehicles(
    numeric: list[int],
    candidate_index: int,
    max_vehicles: int = MAX_VEHICLES,
) -> list[DetectedVehicle]:
    """Split the reading chain into vehicles.

    The boarding stop reading is always the first vehicle. Every strict
    increase relative to the previous position starts the countdown of an
    earlier vehicle further upstream.
    """
    if not numeric or max_vehicles <= 0:
        return []

    found = [DetectedVehicle(numeric[0], candidate_index)]
    for position in range(1, len(numeric)):
        if len(found) >= max_vehicles:
            break
        if numeric[position] > numeric[position - 1]:
            found.append(DetectedVehicle(numeric[position], candidate_index - position))
    return found


__all__ = [
    "MAX_VEHICLES",
    "DetectedVehicle",
    "detect_vehicles",
    "estimate_travel_rate",
    "to_numeric",
]
