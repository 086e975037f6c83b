from typing import Any, Dict, List, Optional

import pytest


class FakeZoneStore:
    """In-memory zone statistics source and point lookup recording its calls."""

    def __init__(
        self,
        tree_rows: Optional[List[Any]] = None,
        list_rows: Optional[List[Any]] = None,
        point_rows: Optional[List[Any]] = None,
    ) -> None:
        self.tree_rows = tree_rows or []
        self.list_rows = list_rows or []
        self.point_rows = point_rows or []
        self.calls: List[Dict[str, Any]] = []

    def zone_stats(self, list_id, prefixes, precision):
        self.calls.append(
            {"op": "zone_stats", "list": list_id, "prefixes": set(prefixes), "precision": precision}
        )
        return self.tree_rows

    def list_zones(self, list_id, max_points):
        self.calls.append({"op": "list_zones", "list": list_id, "max_points": max_points})
        return self.list_rows

    def points_with_prefixes(self, list_id, prefixes, limit):
        self.calls.append(
            {"op": "points_with_prefixes", "list": list_id, "prefixes": list(prefixes), "limit": limit}
        )
        return self.point_rows

    def list_points(self, list_id, geohash, exclude=(), last_point_date=None, limit=None):
        self.calls.append(
            {
                "op": "list_points",
                "list": list_id,
                "geohash": geohash,
                "exclude": list(exclude),
                "last_point_date": last_point_date,
                "limit": limit,
            }
        )
        return self.point_rows

    def ops(self) -> List[str]:
        return [call["op"] for call in self.calls]


def point_row(identifier: str, latitude: float = 48.86, longitude: float = 2.34) -> Dict[str, Any]:
    return {
        "identifier": identifier,
        "latitude": latitude,
        "longitude": longitude,
        "name": "point test",
        "provider": "test",
        "provider_id": "testproviderid42",
        "date_created": "2015-06-01T12:00:00Z",
        "metas": [
            {
                "identifier": f"{identifier}-meta",
                "uid": "infos",
                "action": "merge",
                "content": "{\"price\": 500000}",
                "list": "list-1",
            }
        ],
    }


def zone_row(geohash: str, n_points: int, latitude: float = 0.0, longitude: float = 0.0) -> Dict[str, Any]:
    return {"geohash": geohash, "n_points": n_points, "latitude": latitude, "longitude": longitude}


@pytest.fixture
def store() -> FakeZoneStore:
    return FakeZoneStore()
