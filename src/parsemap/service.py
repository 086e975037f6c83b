from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import ClusteringConfig
from .exceptions import InvalidInput, UpstreamDataError
from .geohash import check_cell
from .grid import coverage, covering_precision
from .models import AnnotationRequest, AnnotationResult, Point, ZoneStat
from .precision import resolve_precision
from .zones import partition_for_annotation, reduce_for_zone_listing

logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


class ZoneStatsSource(Protocol):
    def zone_stats(
        self, list_id: str, prefixes: Iterable[str], precision: int
    ) -> Sequence[Any]: ...

    def list_zones(self, list_id: str, max_points: int) -> Sequence[Any]: ...


class PointLookup(Protocol):
    def points_with_prefixes(
        self, list_id: str, prefixes: Iterable[str], limit: int
    ) -> Sequence[Any]: ...

    def list_points(
        self,
        list_id: str,
        geohash: str,
        exclude: Iterable[str] = (),
        last_point_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Any]: ...


class AnnotationService:
    """Entry points turning a viewport or a list into zones and points.

    Holds no state between calls besides its collaborators and config.
    """

    def __init__(
        self,
        zones: ZoneStatsSource,
        points: PointLookup,
        config: Optional[ClusteringConfig] = None,
    ) -> None:
        self.zones = zones
        self.points = points
        self.config = config or ClusteringConfig()

    def fetch_map_annotations(
        self,
        list_id: str,
        params: Union[AnnotationRequest, Mapping[str, Any]],
    ) -> AnnotationResult:
        request = self._annotation_request(params)
        bounds = request.bounds
        precision = resolve_precision(
            bounds.lat_diff,
            bounds.lon_diff,
            request.pixel_width,
            request.pixel_height,
            request.annotation_width,
            request.annotation_height,
            min_precision=self.config.min_precision,
            max_precision=self.config.max_precision,
        )
        prefix_precision = covering_precision(
            bounds, max(precision - 1, 1), self.config.max_covering_prefixes
        )
        prefixes = coverage(bounds, prefix_precision)
        zones = _as_models(
            self.zones.zone_stats(list_id, prefixes, precision), ZoneStat
        )

        partition = partition_for_annotation(
            zones,
            precision,
            max_precision=self.config.max_precision,
            low_count_threshold=self.config.low_count_threshold,
        )
        logger.debug(
            "list %s at precision %d: %d prefixes of length %d, %d zones, %d clusters, %d point cells",
            list_id,
            precision,
            len(prefixes),
            prefix_precision,
            len(zones),
            len(partition.clusters),
            len(partition.low_count_cells),
        )

        points: List[Point] = []
        if partition.has_points:
            points = _as_models(
                self.points.points_with_prefixes(
                    list_id, partition.low_count_cells, partition.total_low_count
                ),
                Point,
            )
        return AnnotationResult(clusters=partition.clusters, points=points)

    def fetch_list_zones(self, list_id: str) -> List[ZoneStat]:
        zones = _as_models(
            self.zones.list_zones(list_id, self.config.max_points_per_zone), ZoneStat
        )
        reduced = reduce_for_zone_listing(
            zones,
            max_points_per_zone=self.config.max_points_per_zone,
            prefix_floor=self.config.suppression_prefix_floor,
        )
        logger.debug("list %s: %d zones reduced to %d", list_id, len(zones), len(reduced))
        return reduced[: self.config.max_listed_zones]

    def fetch_list_points(
        self,
        list_id: str,
        geohash: str,
        exclude: Iterable[str] = (),
        last_point_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Point]:
        check_cell(geohash)
        excluded = list(exclude)
        for prefix in excluded:
            check_cell(prefix)
        max_points = self.config.max_list_points
        if limit is None or limit > max_points:
            limit = max_points
        elif limit <= 0:
            raise InvalidInput(f"limit must be positive, got {limit}")
        return _as_models(
            self.points.list_points(
                list_id,
                geohash,
                exclude=excluded,
                last_point_date=last_point_date,
                limit=limit,
            ),
            Point,
        )

    @staticmethod
    def _annotation_request(
        params: Union[AnnotationRequest, Mapping[str, Any]],
    ) -> AnnotationRequest:
        if isinstance(params, AnnotationRequest):
            return params
        try:
            return AnnotationRequest.model_validate(dict(params))
        except PydanticValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'request'}: {error['msg']}"
                for error in exc.errors()
            )
            raise InvalidInput(f"invalid annotation request: {problems}") from exc


def _as_models(rows: Sequence[Any], model: Type[TModel]) -> List[TModel]:
    if rows is None or isinstance(rows, (str, bytes, Mapping)):
        raise UpstreamDataError(
            f"expected a sequence of {model.__name__}, got {type(rows).__name__}"
        )
    result: List[TModel] = []
    for row in rows:
        if isinstance(row, model):
            result.append(row)
            continue
        try:
            result.append(model.model_validate(row))
        except PydanticValidationError as exc:
            raise UpstreamDataError(f"malformed {model.__name__}: {exc}") from exc
    return result
