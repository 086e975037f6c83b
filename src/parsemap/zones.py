"""Zone tree reduction for zone listings and map annotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .geohash import MAX_PRECISION
from .models import ZoneStat

DEFAULT_MAX_POINTS_PER_ZONE = 200
# Ancestors shorter than this never suppress a child zone.
SUPPRESSION_PREFIX_FLOOR = 5
LOW_COUNT_THRESHOLD = 4
MAX_LISTED_ZONES = 200


@dataclass(frozen=True)
class AnnotationPartition:
    clusters: List[ZoneStat] = field(default_factory=list)
    low_count_cells: List[str] = field(default_factory=list)
    total_low_count: int = 0

    @property
    def has_points(self) -> bool:
        return bool(self.low_count_cells)


def reduce_for_zone_listing(
    zones: Iterable[ZoneStat],
    max_points_per_zone: int = DEFAULT_MAX_POINTS_PER_ZONE,
    prefix_floor: int = SUPPRESSION_PREFIX_FLOOR,
) -> List[ZoneStat]:
    """Drop dense zones and zones whose ancestor was accepted earlier.

    Single greedy pass in input order: a zone is suppressed when one of its
    prefixes of length ``prefix_floor`` up to ``len(cell) - 1`` is already in
    the accepted set.
    """
    accepted: Dict[str, bool] = {}
    result: List[ZoneStat] = []
    for zone in zones:
        if zone.point_count > max_points_per_zone:
            continue
        cell = zone.cell
        if any(cell[:length] in accepted for length in range(prefix_floor, len(cell))):
            continue
        accepted[cell] = True
        result.append(zone)
    return result


def partition_for_annotation(
    zones: Iterable[ZoneStat],
    precision: int,
    max_precision: int = MAX_PRECISION,
    low_count_threshold: int = LOW_COUNT_THRESHOLD,
) -> AnnotationPartition:
    """Split zones into cluster markers and cells shown as individual points.

    At ``max_precision`` there is no finer level, so every zone is shown as
    points.
    """
    clusters: List[ZoneStat] = []
    low_count_cells: List[str] = []
    total_low_count = 0
    for zone in zones:
        if zone.point_count <= low_count_threshold or precision == max_precision:
            low_count_cells.append(zone.cell)
            total_low_count += zone.point_count
        else:
            clusters.append(zone)
    return AnnotationPartition(
        clusters=clusters,
        low_count_cells=low_count_cells,
        total_low_count=total_low_count,
    )
