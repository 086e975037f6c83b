import os
import random
import sys
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from parsemap import AnnotationService, Point, ZoneStat, encode  # noqa: E402
from parsemap.config import load_settings  # noqa: E402
from parsemap.log import setup_logging  # noqa: E402


class SpreadStore:
    """Points held in memory, aggregated per cell the way the zone store does."""

    def __init__(self, points):
        self.points = points
        self.cells = {point.identifier: encode(point.latitude, point.longitude) for point in points}

    def _aggregate(self, precision, keep):
        grouped = defaultdict(list)
        for point in self.points:
            cell = self.cells[point.identifier][:precision]
            if keep(cell):
                grouped[cell].append(point)
        return [
            ZoneStat(
                geohash=cell,
                n_points=len(members),
                latitude=sum(p.latitude for p in members) / len(members),
                longitude=sum(p.longitude for p in members) / len(members),
            )
            for cell, members in sorted(grouped.items())
        ]

    def zone_stats(self, list_id, prefixes, precision):
        prefixes = tuple(prefixes)
        return self._aggregate(precision, lambda cell: cell.startswith(prefixes))

    def list_zones(self, list_id, max_points):
        zones = []
        for precision in range(5, 10):
            zones.extend(
                zone
                for zone in self._aggregate(precision, lambda cell: True)
                if zone.point_count <= max_points
            )
        return zones

    def points_with_prefixes(self, list_id, prefixes, limit):
        prefixes = tuple(prefixes)
        matched = [p for p in self.points if self.cells[p.identifier].startswith(prefixes)]
        return matched[:limit]

    def list_points(self, list_id, geohash, exclude=(), last_point_date=None, limit=None):
        excluded = tuple(exclude)
        matched = [
            p
            for p in self.points
            if self.cells[p.identifier].startswith(geohash)
            and not (excluded and self.cells[p.identifier].startswith(excluded))
            and (last_point_date is None or p.date_created > last_point_date)
        ]
        return matched[:limit]


def spread(count, latitude, longitude, radius, seed):
    rng = random.Random(seed)
    created = datetime.now(timezone.utc)
    return [
        Point(
            identifier=f"point:{i}",
            latitude=latitude + rng.uniform(-radius, radius),
            longitude=longitude + rng.uniform(-radius, radius),
            name="point test",
            provider="test",
            provider_id=f"testproviderid{i}",
            date_created=created,
        )
        for i in range(count)
    ]


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    count = int(os.getenv("SPREAD_POINTS", "1000"))
    seed = int(os.getenv("SPREAD_SEED", "42"))

    store = SpreadStore(spread(count, 48.863787, 2.344784, 0.08, seed))
    service = AnnotationService(zones=store, points=store, config=settings.clustering)

    viewports = [
        ("city", 0.4, 1334, 750),
        ("district", 0.1, 1334, 750),
        ("street", 0.01, 1334, 750),
        ("building", 0.0005, 1334, 750),
    ]
    for label, half_span, height, width in viewports:
        result = service.fetch_map_annotations(
            "list:spread",
            {
                "latitudeMin": 48.863787 - half_span,
                "longitudeMin": 2.344784 - half_span,
                "latitudeMax": 48.863787 + half_span,
                "longitudeMax": 2.344784 + half_span,
                "pixelWidth": width,
                "pixelHeight": height,
                "annotationWidth": 30,
                "annotationHeight": 30,
            },
        )
        clustered = sum(zone.point_count for zone in result.clusters)
        print(
            f"{label:<9} clusters={len(result.clusters):<4} "
            f"clustered_points={clustered:<5} points={len(result.points)}"
        )

    zones = service.fetch_list_zones("list:spread")
    print(f"zones     listed={len(zones)}")


if __name__ == "__main__":
    main()
