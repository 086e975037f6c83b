from __future__ import annotations

import logging
import math

from .exceptions import InvalidInput
from .geohash import MAX_PRECISION

logger = logging.getLogger(__name__)

MIN_ANNOTATION_PRECISION = 5


def resolve_precision(
    lat_diff: float,
    lon_diff: float,
    pixel_width: float,
    pixel_height: float,
    annotation_width: float,
    annotation_height: float,
    min_precision: int = MIN_ANNOTATION_PRECISION,
    max_precision: int = MAX_PRECISION,
) -> int:
    """Pick the geohash precision giving about one cell per annotation footprint.

    The viewport fits ``max(pixel_width / (2 * annotation_width),
    pixel_height / (2 * annotation_height))`` annotations along its limiting
    axis. Dividing that axis's span by it gives the degrees covered by one
    annotation, and ``log2(180 / degrees)`` the matching cell length.
    """
    for name, value in (
        ("pixel_width", pixel_width),
        ("pixel_height", pixel_height),
        ("annotation_width", annotation_width),
        ("annotation_height", annotation_height),
    ):
        if not value > 0:
            raise InvalidInput(f"{name} must be positive, got {value}")
    for name, value in (("lat_diff", lat_diff), ("lon_diff", lon_diff)):
        if not value >= 0:
            raise InvalidInput(f"{name} must not be negative, got {value}")

    max_hor = pixel_width / (annotation_width * 2)
    max_ver = pixel_height / (annotation_height * 2)
    max_annotations = max(max_hor, max_ver)
    if max_hor > max_ver:
        degrees_per_annotation = lon_diff / max_annotations
    else:
        degrees_per_annotation = lat_diff / max_annotations

    if degrees_per_annotation <= 0 or math.isinf(180 / degrees_per_annotation):
        precision = max_precision
    else:
        precision = math.floor(math.log2(180 / degrees_per_annotation))
    precision = min(max(precision, min_precision), max_precision)

    logger.debug(
        "%.6f degrees per annotation resolves to precision %d",
        degrees_per_annotation,
        precision,
    )
    return precision
