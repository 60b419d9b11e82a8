"""Cached trip planning: planner, best-option selection and plan cache wired together."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Any

from tramfinder.config import AppConfig
from tramfinder.data.giromilano_client import GiroMilanoClient
from tramfinder.data.topology import load_topology
from tramfinder.logic.boarding import BoardingRequest
from tramfinder.logic.plan_cache import PlanCache
from tramfinder.logic.planner import BestOption, RoutePlan, RoutePlanner, select_best_option


@dataclass(frozen=True)
class PlanResult:
    """Plan for one boarding request and its best option."""

    route_plan: RoutePlan
    best_option: BestOption | None
    computed_at: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "route_plan": {
                label: [projection.to_dict() for projection in projections]
                for label, projections in self.route_plan.items()
            },
            "best_option": self.best_option.to_dict() if self.best_option else None,
        }


class TripPlanService:
    """Serve plans from the cache, recomputing once the TTL expires."""

    def __init__(self, planner: RoutePlanner, cache: PlanCache[PlanResult]) -> None:
        self._planner = planner
        self._cache = cache

    def get_trip_plan(self, request: BoardingRequest) -> PlanResult:
        return self._cache.get_or_compute(request, lambda: self._compute(request))

    def _compute(self, request: BoardingRequest) -> PlanResult:
        route_plan = self._planner.plan(request)
        return PlanResult(
            route_plan=route_plan,
            best_option=select_best_option(route_plan),
            computed_at=time.time(),
        )


def build_service(config: AppConfig) -> TripPlanService:
    """Load the topology and wire a service from configuration.

    Raises TopologyError if the topology cannot be loaded.
    """
    routes = load_topology(config.planner.topology_path)
    client = GiroMilanoClient(
        base_url=config.telemetry.base_url,
        timeout_seconds=config.telemetry.timeout_seconds,
    )
    planner = RoutePlanner(
        routes,
        client,
        max_workers=config.telemetry.max_workers,
        max_vehicles=config.planner.max_vehicles,
        default_travel_time=config.planner.default_travel_time,
    )
    cache: PlanCache[PlanResult] = PlanCache(ttl_seconds=config.planner.cache_ttl_seconds)
    return TripPlanService(planner, cache)


__all__ = ["PlanResult", "TripPlanService", "build_service"]
