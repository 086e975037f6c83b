from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidInput


def check_coordinates(lat: float, lon: float) -> None:
    if not -90.0 <= lat <= 90.0:
        raise InvalidInput(f"latitude {lat} must be within [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise InvalidInput(f"longitude {lon} must be within [-180, 180]")


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float

    def __str__(self) -> str:
        return f"{self.lat},{self.lon}"


@dataclass(frozen=True)
class Bounds:
    """Latitude/longitude rectangle.

    ``longitude_min > longitude_max`` means the rectangle crosses the
    antimeridian.
    """

    latitude_min: float
    longitude_min: float
    latitude_max: float
    longitude_max: float

    def __post_init__(self) -> None:
        check_coordinates(self.latitude_min, self.longitude_min)
        check_coordinates(self.latitude_max, self.longitude_max)
        if self.latitude_min > self.latitude_max:
            raise InvalidInput(
                f"latitude_min {self.latitude_min} is greater than "
                f"latitude_max {self.latitude_max}"
            )

    @property
    def crosses_antimeridian(self) -> bool:
        return self.longitude_min > self.longitude_max

    @property
    def lat_diff(self) -> float:
        return self.latitude_max - self.latitude_min

    @property
    def lon_diff(self) -> float:
        diff = self.longitude_max - self.longitude_min
        if self.crosses_antimeridian:
            diff += 360.0
        return diff

    @property
    def corners(self) -> tuple[GeoPoint, GeoPoint, GeoPoint, GeoPoint]:
        return (
            GeoPoint(self.latitude_min, self.longitude_min),
            GeoPoint(self.latitude_min, self.longitude_max),
            GeoPoint(self.latitude_max, self.longitude_min),
            GeoPoint(self.latitude_max, self.longitude_max),
        )
