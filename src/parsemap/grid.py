"""Cells covering a latitude/longitude rectangle."""

from __future__ import annotations

import logging
from typing import Set, Tuple

from . import geohash
from .exceptions import InvalidInput
from .types import Bounds

logger = logging.getLogger(__name__)

# Prefixes sent to the zone source for one viewport.
MAX_COVERING_PREFIXES = 64


def _extent(bounds: Bounds, precision: int) -> Tuple[int, int, int, int, int]:
    """First row, row count, first column, column count and grid width."""
    geohash.check_precision(precision)
    _, columns = geohash.axis_cells(precision)

    south_row, west_column = geohash.cell_index(
        geohash.encode(bounds.latitude_min, bounds.longitude_min, precision)
    )
    north_row, east_column = geohash.cell_index(
        geohash.encode(bounds.latitude_max, bounds.longitude_max, precision)
    )

    if bounds.lon_diff >= 360.0:
        width = columns
    else:
        width = (east_column - west_column) % columns + 1
        if bounds.crosses_antimeridian and east_column == west_column:
            width = columns
    return south_row, north_row - south_row + 1, west_column, width, columns


def coverage_size(bounds: Bounds, precision: int) -> int:
    """Number of cells :func:`coverage` returns, without enumerating them."""
    _, row_count, _, column_count, _ = _extent(bounds, precision)
    return row_count * column_count


def covering_precision(bounds: Bounds, precision: int, max_cells: int) -> int:
    """Finest length up to ``precision`` covering ``bounds`` in ``max_cells`` cells.

    Falls back to length 1 when no length fits.
    """
    if isinstance(max_cells, bool) or not isinstance(max_cells, int) or max_cells < 1:
        raise InvalidInput(f"max_cells must be a positive integer, got {max_cells!r}")
    geohash.check_precision(precision)
    for length in range(precision, 1, -1):
        if coverage_size(bounds, length) <= max_cells:
            return length
    return 1


def coverage(bounds: Bounds, precision: int) -> Set[str]:
    """Return every cell of ``precision`` intersecting ``bounds``.

    Rows run from the south-west corner's row to the north-east corner's,
    columns eastward from the south-west corner's column, wrapping at the
    antimeridian. A rectangle spanning 360 degrees, or wrapping back into its
    starting column, covers the full longitude band.
    """
    first_row, row_count, first_column, column_count, columns = _extent(bounds, precision)

    cells = {
        geohash.cell_at(row, (first_column + offset) % columns, precision)
        for row in range(first_row, first_row + row_count)
        for offset in range(column_count)
    }
    logger.debug("covered %s with %d cells at precision %d", bounds, len(cells), precision)
    return cells
