"""Arrival projection and boarding feasibility for detected vehicles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tramfinder.logic.estimator import DetectedVehicle


@dataclass(frozen=True)
class Projection:
    """Projected arrival of one vehicle at the boarding stop."""

    arrival_minutes: float
    feasible: bool
    walk_minutes: float
    wait_at_stop_minutes: float | None
    raw_wait_minutes: int
    source_stop_index: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "arrival": self.arrival_minutes,
            "feasible": self.feasible,
            "walk_time": self.walk_minutes,
            "wait_at_stop": self.wait_at_stop_minutes,
            "raw_wait": self.raw_wait_minutes,
            "station_idx": self.source_stop_index,
        }


def project_arrival(
    vehicle: DetectedVehicle,
    candidate_index: int,
    travel_rate: float,
    walking_time: float,
) -> Projection:
    """Project when a vehicle reaches the boarding stop and whether the rider makes it."""
    distance = candidate_index - vehicle.source_stop_index
    arrival = vehicle.raw_wait_minutes + distance * travel_rate
    feasible = arrival >= walking_time
    return Projection(
        arrival_minutes=arrival,
        feasible=feasible,
        walk_minutes=walking_time,
        wait_at_stop_minutes=arrival - walking_time if feasible else None,
        raw_wait_minutes=vehicle.raw_wait_minutes,
        source_stop_index=vehicle.source_stop_index,
    )


def project_arrivals(
    vehicles: list[DetectedVehicle],
    candidate_index: int,
    travel_rate: float,
    walking_time: float,
) -> list[Projection]:
    """Project every vehicle, keeping discovery order."""
    return [
        project_arrival(vehicle, candidate_index, travel_rate, walking_time)
        for vehicle in vehicles
    ]


__all__ = ["Projection", "project_arrival", "project_arrivals"]
