from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .geohash import check_cell
from .types import Bounds, GeoPoint


class ZoneStat(BaseModel):
    cell: str = Field(alias="geohash")
    point_count: int = Field(alias="n_points", ge=0)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("cell")
    @classmethod
    def _valid_cell(cls, value: str) -> str:
        check_cell(value)
        return value

    @property
    def centroid(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


class PointMeta(BaseModel):
    identifier: str
    uid: str
    action: str
    content: str
    list: Optional[str] = None


class Point(BaseModel):
    identifier: str
    latitude: float
    longitude: float
    name: str
    provider: str
    provider_id: str
    date_created: datetime
    metas: List[PointMeta] = Field(default_factory=list)


class AnnotationRequest(BaseModel):
    latitude_min: float = Field(alias="latitudeMin", ge=-90.0, le=90.0)
    longitude_min: float = Field(alias="longitudeMin", ge=-180.0, le=180.0)
    latitude_max: float = Field(alias="latitudeMax", ge=-90.0, le=90.0)
    longitude_max: float = Field(alias="longitudeMax", ge=-180.0, le=180.0)
    pixel_width: float = Field(alias="pixelWidth", gt=0)
    pixel_height: float = Field(alias="pixelHeight", gt=0)
    annotation_width: float = Field(alias="annotationWidth", gt=0)
    annotation_height: float = Field(alias="annotationHeight", gt=0)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="after")
    def _ordered_latitudes(self) -> "AnnotationRequest":
        if self.latitude_min > self.latitude_max:
            raise ValueError("latitudeMin must not be greater than latitudeMax")
        return self

    @property
    def bounds(self) -> Bounds:
        return Bounds(
            latitude_min=self.latitude_min,
            longitude_min=self.longitude_min,
            latitude_max=self.latitude_max,
            longitude_max=self.longitude_max,
        )


class AnnotationResult(BaseModel):
    clusters: List[ZoneStat] = Field(default_factory=list)
    points: List[Point] = Field(default_factory=list)
