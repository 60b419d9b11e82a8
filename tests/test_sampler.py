from __future__ import annotations

import threading
import time
from unittest.mock import MagicMock

from tramfinder.data.topology import Route, Stop
from tramfinder.logic.sampler import sample_wait_sequence


def _route(*codes: str, indices: list[int] | None = None) -> Route:
    indices = indices if indices is not None else list(range(len(codes)))
    return Route(
        name="Test line",
        code="15",
        direction="0",
        stops=tuple(Stop(name=code.upper(), code=code, index=index) for code, index in zip(codes, indices)),
    )


def test_sample_orders_from_candidate_to_origin() -> None:
    client = MagicMock()
    waits = {"s0": 1, "s1": 1, "s2": 4, "s3": 7}
    client.get_wait_minutes.side_effect = lambda stop_code, line_code: waits[stop_code]

    readings = sample_wait_sequence(client, _route("s0", "s1", "s2", "s3"), candidate_index=3)

    assert readings == [7, 4, 1, 1]
    assert client.get_wait_minutes.call_count == 4
    for call in client.get_wait_minutes.call_args_list:
        assert call.args[1] == "15"


def test_sample_ignores_completion_order() -> None:
    delays = {"s0": 0.0, "s1": 0.02, "s2": 0.04, "s3": 0.06}
    waits = {"s0": 10, "s1": 20, "s2": 30, "s3": 40}

    def _slow(stop_code: str, line_code: str) -> int:
        time.sleep(delays[stop_code])
        return waits[stop_code]

    client = MagicMock()
    client.get_wait_minutes.side_effect = _slow

    readings = sample_wait_sequence(client, _route("s0", "s1", "s2", "s3"), candidate_index=3, max_workers=4)

    assert readings == [40, 30, 20, 10]


def test_sample_runs_fetches_concurrently() -> None:
    barrier = threading.Barrier(3, timeout=2)

    def _wait_for_peers(stop_code: str, line_code: str) -> int:
        barrier.wait()
        return 5

    client = MagicMock()
    client.get_wait_minutes.side_effect = _wait_for_peers

    readings = sample_wait_sequence(client, _route("s0", "s1", "s2"), candidate_index=2, max_workers=3)

    assert readings == [5, 5, 5]


def test_sample_keeps_unknown_readings() -> None:
    client = MagicMock()
    client.get_wait_minutes.side_effect = lambda stop_code, line_code: None if stop_code == "s1" else 3

    readings = sample_wait_sequence(client, _route("s0", "s1", "s2"), candidate_index=2)

    assert readings == [3, None, 3]


def test_sample_index_gap_is_unknown_without_fetch() -> None:
    client = MagicMock()
    client.get_wait_minutes.return_value = 2

    readings = sample_wait_sequence(client, _route("s0", "s2", indices=[0, 2]), candidate_index=2)

    assert readings == [2, None, 2]
    assert client.get_wait_minutes.call_count == 2


def test_sample_candidate_at_origin() -> None:
    client = MagicMock()
    client.get_wait_minutes.return_value = 6

    readings = sample_wait_sequence(client, _route("s0"), candidate_index=0)

    assert readings == [6]
