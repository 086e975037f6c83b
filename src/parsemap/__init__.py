"""Geohash tiling and map annotation clustering."""

from .client import ParsemapClient
from .config import ClusteringConfig, Settings, load_settings
from .exceptions import (
    AuthenticationError,
    ConnectionError,
    InvalidInput,
    NotFoundError,
    ParsemapError,
    ServerError,
    UpstreamDataError,
)
from .geohash import decode, encode, grid_surrounding, neighbor_grid
from .grid import coverage, coverage_size, covering_precision
from .models import AnnotationRequest, AnnotationResult, Point, PointMeta, ZoneStat
from .precision import resolve_precision
from .service import AnnotationService
from .session import setup
from .types import Bounds, GeoPoint
from .zones import AnnotationPartition, partition_for_annotation, reduce_for_zone_listing

__all__ = [
    "AnnotationPartition",
    "AnnotationRequest",
    "AnnotationResult",
    "AnnotationService",
    "AuthenticationError",
    "Bounds",
    "ClusteringConfig",
    "ConnectionError",
    "GeoPoint",
    "InvalidInput",
    "NotFoundError",
    "ParsemapClient",
    "ParsemapError",
    "Point",
    "PointMeta",
    "ServerError",
    "Settings",
    "UpstreamDataError",
    "ZoneStat",
    "coverage",
    "coverage_size",
    "covering_precision",
    "decode",
    "encode",
    "grid_surrounding",
    "load_settings",
    "neighbor_grid",
    "partition_for_annotation",
    "reduce_for_zone_listing",
    "resolve_precision",
    "setup",
]
