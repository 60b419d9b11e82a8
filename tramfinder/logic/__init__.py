"""Estimation engine."""

from tramfinder.logic.boarding import BoardingCandidate, BoardingRequestError, parse_boarding_request
from tramfinder.logic.plan_cache import PlanCache
from tramfinder.logic.planner import BestOption, PlanningError, RoutePlanner, select_best_option
from tramfinder.logic.projector import Projection

__all__ = [
    "BestOption",
    "BoardingCandidate",
    "BoardingRequestError",
    "PlanCache",
    "PlanningError",
    "Projection",
    "RoutePlanner",
    "parse_boarding_request",
    "select_best_option",
]
