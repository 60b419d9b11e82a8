"""Configuration loader for the tram finder."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

GIROMILANO_API_BASE = "https://giromilano.atm.it/proxy.tpportal/api/tpPortal"


@dataclass(frozen=True)
class TelemetryConfig:
    """GiroMilano API configuration."""

    base_url: str
    timeout_seconds: float
    max_workers: int


@dataclass(frozen=True)
class PlannerConfig:
    """Estimation engine configuration."""

    topology_path: str
    default_travel_time: float
    max_vehicles: int
    cache_ttl_seconds: float
    default_candidates: dict[str, dict[str, Any]]


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    telemetry: TelemetryConfig
    planner: PlannerConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_positive(value: Any, key: str, context: str) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValueError(f"'{key}' in {context} config must be a positive number")
    return value


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    telemetry_section = _require_key(data, "telemetry", "telemetry")
    planner_section = _require_key(data, "planner", "planner")
    logging_section = _require_key(data, "logging", "logging")

    if not isinstance(telemetry_section, dict):
        raise ValueError("'telemetry' config must be a mapping")
    if not isinstance(planner_section, dict):
        raise ValueError("'planner' config must be a mapping")
    if not isinstance(logging_section, dict):
        raise ValueError("'logging' config must be a mapping")

    base_url = os.environ.get("GIROMILANO_API_BASE", "").strip()
    if not base_url:
        base_url = telemetry_section.get("base_url", GIROMILANO_API_BASE)
    if not isinstance(base_url, str) or not base_url.strip():
        raise ValueError("'base_url' in telemetry config must be a non-empty string")

    telemetry = TelemetryConfig(
        base_url=base_url.rstrip("/"),
        timeout_seconds=_require_positive(
            _require_key(telemetry_section, "timeout_seconds", "telemetry"),
            "timeout_seconds",
            "telemetry",
        ),
        max_workers=int(
            _require_positive(
                _require_key(telemetry_section, "max_workers", "telemetry"),
                "max_workers",
                "telemetry",
            )
        ),
    )

    default_candidates = planner_section.get("default_candidates") or {}
    if not isinstance(default_candidates, dict):
        raise ValueError("'default_candidates' in planner config must be a mapping")
    if default_candidates:
        # Deferred import: tramfinder.logic loads the client, which loads this module.
        from tramfinder.logic.boarding import BoardingRequestError, parse_boarding_request

        try:
            parse_boarding_request(default_candidates)
        except BoardingRequestError as exc:
            raise ValueError(f"Invalid 'default_candidates' in planner config: {exc}") from exc

    planner = PlannerConfig(
        topology_path=_require_key(planner_section, "topology_path", "planner"),
        default_travel_time=_require_positive(
            planner_section.get("default_travel_time", 2.0), "default_travel_time", "planner"
        ),
        max_vehicles=int(
            _require_positive(planner_section.get("max_vehicles", 3), "max_vehicles", "planner")
        ),
        cache_ttl_seconds=_require_positive(
            planner_section.get("cache_ttl_seconds", 60), "cache_ttl_seconds", "planner"
        ),
        default_candidates=default_candidates,
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(telemetry=telemetry, planner=planner, log=logging)
