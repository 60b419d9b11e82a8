"""Topology and live telemetry sources."""

from tramfinder.data.giromilano_client import GiroMilanoClient, GiroMilanoClientError
from tramfinder.data.topology import Route, Stop, TopologyError, load_topology
from tramfinder.data.wait_message import parse_wait_message

__all__ = [
    "GiroMilanoClient",
    "GiroMilanoClientError",
    "Route",
    "Stop",
    "TopologyError",
    "load_topology",
    "parse_wait_message",
]
