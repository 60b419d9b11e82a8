"""Concurrent collection of wait readings from a boarding stop back to the origin."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Protocol

from tramfinder.data.topology import Route

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class WaitTimeSource(Protocol):
    def get_wait_minutes(self, stop_code: str, line_code: str) -> int | None: ...


def sample_wait_sequence(
    client: WaitTimeSource,
    route: Route,
    candidate_index: int,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[int | None]:
    """Fetch one reading per stop index, boarding stop first and route origin last.

    Position ``i`` of the result holds the reading for stop index
    ``candidate_index - i``. Fetches run concurrently; each one writes into its
    own slot so completion order never affects the result.
    """
    if candidate_index < 0:
        return []

    readings: list[int | None] = [None] * (candidate_index + 1)
    stops = {stop.index: stop for stop in route.stops}

    def _fetch(position: int, stop_code: str) -> None:
        readings[position] = client.get_wait_minutes(stop_code, route.code)

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(readings)))) as executor:
        futures = []
        for position in range(len(readings)):
            stop = stops.get(candidate_index - position)
            if stop is None:
                logger.debug(
                    "No stop at index %d on line %s; reading left unknown",
                    candidate_index - position,
                    route.code,
                )
                continue
            futures.append(executor.submit(_fetch, position, stop.code))
        for future in futures:
            future.result()

    return readings


__all__ = ["DEFAULT_MAX_WORKERS", "WaitTimeSource", "sample_wait_sequence"]
