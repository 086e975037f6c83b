"""Settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, TypeVar

from .exceptions import InvalidInput
from .geohash import MAX_PRECISION
from .grid import MAX_COVERING_PREFIXES
from .precision import MIN_ANNOTATION_PRECISION
from .zones import (
    DEFAULT_MAX_POINTS_PER_ZONE,
    LOW_COUNT_THRESHOLD,
    MAX_LISTED_ZONES,
    SUPPRESSION_PREFIX_FLOOR,
)

T = TypeVar("T")

MAX_LIST_POINTS = 50


@dataclass(frozen=True)
class ClusteringConfig:
    """Constants of the zone tree reduction."""

    max_points_per_zone: int = DEFAULT_MAX_POINTS_PER_ZONE
    max_listed_zones: int = MAX_LISTED_ZONES
    low_count_threshold: int = LOW_COUNT_THRESHOLD
    suppression_prefix_floor: int = SUPPRESSION_PREFIX_FLOOR
    min_precision: int = MIN_ANNOTATION_PRECISION
    max_precision: int = MAX_PRECISION
    max_list_points: int = MAX_LIST_POINTS
    max_covering_prefixes: int = MAX_COVERING_PREFIXES


@dataclass(frozen=True)
class Settings:
    base_url: str = "http://127.0.0.1:8000/v2"
    api_key: Optional[str] = None
    timeout: float = 10.0
    log_level: str = "INFO"
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``PARSEMAP_*`` variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    defaults = ClusteringConfig()

    clustering = ClusteringConfig(
        max_points_per_zone=_parse(
            env, "PARSEMAP_MAX_POINTS_PER_ZONE", int, defaults.max_points_per_zone
        ),
        max_listed_zones=_parse(
            env, "PARSEMAP_MAX_LISTED_ZONES", int, defaults.max_listed_zones
        ),
        low_count_threshold=_parse(
            env, "PARSEMAP_LOW_COUNT_THRESHOLD", int, defaults.low_count_threshold
        ),
        suppression_prefix_floor=_parse(
            env, "PARSEMAP_PREFIX_FLOOR", int, defaults.suppression_prefix_floor
        ),
        max_list_points=_parse(
            env, "PARSEMAP_MAX_LIST_POINTS", int, defaults.max_list_points
        ),
        max_covering_prefixes=_parse(
            env, "PARSEMAP_MAX_COVERING_PREFIXES", int, defaults.max_covering_prefixes
        ),
    )
    api_key = env.get("PARSEMAP_API_KEY", "").strip() or None
    return Settings(
        base_url=env.get("PARSEMAP_BASE_URL", Settings.base_url).strip(),
        api_key=api_key,
        timeout=_parse(env, "PARSEMAP_TIMEOUT", float, Settings.timeout),
        log_level=env.get("PARSEMAP_LOG_LEVEL", Settings.log_level).strip().upper(),
        clustering=clustering,
    )


def _parse(env: Mapping[str, str], name: str, kind: Callable[[str], T], default: T) -> T:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError as exc:
        raise InvalidInput(f"{name}={raw!r} is not a valid {kind.__name__}") from exc
