from __future__ import annotations

from tramfinder.logic.estimator import DetectedVehicle
from tramfinder.logic.projector import Projection, project_arrival, project_arrivals


def test_project_feasible_at_boarding_stop() -> None:
    projection = project_arrival(DetectedVehicle(7, 3), candidate_index=3, travel_rate=2.0, walking_time=5)

    assert projection.arrival_minutes == 7
    assert projection.feasible
    assert projection.wait_at_stop_minutes == 2
    assert projection.walk_minutes == 5


def test_project_infeasible_has_no_wait() -> None:
    projection = project_arrival(DetectedVehicle(3, 3), candidate_index=3, travel_rate=2.0, walking_time=4)

    assert projection.arrival_minutes == 3
    assert not projection.feasible
    assert projection.wait_at_stop_minutes is None


def test_project_extrapolates_upstream_vehicle() -> None:
    projection = project_arrival(DetectedVehicle(6, 1), candidate_index=3, travel_rate=2.0, walking_time=4)

    assert projection.arrival_minutes == 10
    assert projection.feasible
    assert projection.wait_at_stop_minutes == 6
    assert projection.raw_wait_minutes == 6
    assert projection.source_stop_index == 1


def test_project_exact_walk_time_is_feasible() -> None:
    projection = project_arrival(DetectedVehicle(4, 2), candidate_index=2, travel_rate=2.0, walking_time=4)

    assert projection.feasible
    assert projection.wait_at_stop_minutes == 0


def test_project_arrivals_keeps_discovery_order() -> None:
    projections = project_arrivals(
        [DetectedVehicle(9, 3), DetectedVehicle(1, 2)],
        candidate_index=3,
        travel_rate=1.0,
        walking_time=0,
    )

    assert [p.arrival_minutes for p in projections] == [9, 2]


def test_projection_to_dict() -> None:
    projection = Projection(
        arrival_minutes=10.0,
        feasible=True,
        walk_minutes=4,
        wait_at_stop_minutes=6.0,
        raw_wait_minutes=6,
        source_stop_index=1,
    )

    assert projection.to_dict() == {
        "arrival": 10.0,
        "feasible": True,
        "walk_time": 4,
        "wait_at_stop": 6.0,
        "raw_wait": 6,
        "station_idx": 1,
    }
