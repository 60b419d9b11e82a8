"""Per-route planning and best-option selection."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from typing import Any

from tramfinder.data.topology import Route, Stop
from tramfinder.logic.boarding import BoardingRequest
from tramfinder.logic.estimator import (
    MAX_VEHICLES,
    detect_vehicles,
    estimate_travel_rate,
    to_numeric,
)
from tramfinder.logic.projector import Projection, project_arrivals
from tramfinder.logic.sampler import DEFAULT_MAX_WORKERS, WaitTimeSource, sample_wait_sequence

logger = logging.getLogger(__name__)

RoutePlan = dict[str, list[Projection]]


class PlanningError(Exception):
    """Raised when a plan computation fails unexpectedly."""


@dataclass(frozen=True)
class BestOption:
    """Earliest feasible vehicle across a plan."""

    label: str
    projection: Projection

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "projection": self.projection.to_dict()}


def plan_label(stop: Stop, route: Route) -> str:
    return f"{stop.name} ({route.name}, Direction {route.direction})"


class RoutePlanner:
    """Runs sampling, estimation, segmentation and projection for each requested route."""

    def __init__(
        self,
        routes: tuple[Route, ...],
        client: WaitTimeSource,
        max_workers: int = DEFAULT_MAX_WORKERS,
        max_vehicles: int = MAX_VEHICLES,
        default_travel_time: float | None = None,
    ) -> None:
        self._routes = routes
        self._client = client
        self._max_workers = max_workers
        self._max_vehicles = max_vehicles
        self._default_travel_time = default_travel_time

    def boarding_targets(self, request: BoardingRequest) -> list[tuple[Route, Stop]]:
        """Routes matching the request, each paired with its marked boarding stop."""
        targets = []
        for route in self._routes:
            candidate = request.get(route.code)
            if candidate is None or candidate.direction != route.direction:
                continue
            stop = route.stop_by_code(candidate.target_stop_code)
            if stop is None:
                logger.warning(
                    "Stop %s not found on line %s direction %s",
                    candidate.target_stop_code,
                    route.code,
                    route.direction,
                )
                continue
            targets.append((route, stop.as_boarding_candidate(candidate.walking_time_minutes)))
        return targets

    def find_vehicles(self, route: Route, stop: Stop) -> list[Projection]:
        """Project up to ``max_vehicles`` upcoming vehicles for one boarding stop."""
        readings = sample_wait_sequence(self._client, route, stop.index, self._max_workers)
        logger.debug(
            "Raw waits for line %s (stop idx=%d -> 0): %s", route.code, stop.index, readings
        )
        if not readings:
            return []

        default = (
            self._default_travel_time
            if self._default_travel_time is not None
            else route.default_travel_time
        )
        travel_rate = estimate_travel_rate(readings, default=default)
        logger.debug("Average travel time for line %s = %.2f", route.code, travel_rate)

        vehicles = detect_vehicles(to_numeric(readings), stop.index, self._max_vehicles)
        return project_arrivals(vehicles, stop.index, travel_rate, stop.walking_time_minutes)

    def plan(self, request: BoardingRequest) -> RoutePlan:
        """Build a plan for every route selected by the request.

        Raises PlanningError if any route fails; no partial plan is returned.
        """
        try:
            targets = self.boarding_targets(request)
            if not targets:
                return {}
            with ThreadPoolExecutor(max_workers=len(targets)) as executor:
                results = list(executor.map(lambda target: self.find_vehicles(*target), targets))
        except Exception as exc:
            logger.exception("Trip planning failed")
            raise PlanningError("Trip planning failed") from exc

        route_plan: RoutePlan = {}
        for (route, stop), projections in zip(targets, results):
            if projections:
                route_plan[plan_label(stop, route)] = projections
        return route_plan


def select_best_option(route_plan: RoutePlan) -> BestOption | None:
    """Return the feasible projection with the smallest arrival.

    Ties go to the lexicographically smallest label, then to discovery order.
    """
    best: tuple[float, str, int] | None = None
    best_option: BestOption | None = None
    for label, projections in route_plan.items():
        for position, projection in enumerate(projections):
            if not projection.feasible:
                continue
            rank = (projection.arrival_minutes, label, position)
            if best is None or rank < best:
                best = rank
                best_option = BestOption(label=label, projection=projection)
    return best_option


__all__ = [
    "BestOption",
    "PlanningError",
    "RoutePlan",
    "RoutePlanner",
    "plan_label",
    "select_best_option",
]
