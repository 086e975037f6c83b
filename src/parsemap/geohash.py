"""Geohash cell codes.

A cell of precision ``p`` holds ``5 * p`` interleaved bits, longitude first.
Neighbor arithmetic runs on the integer grid of the maximum precision: the
cell's south-west corner is placed on that grid, stepped, re-encoded and
truncated back to the cell's own length.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .exceptions import InvalidInput
from .types import GeoPoint, check_coordinates

_BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
_DECODE = {char: index for index, char in enumerate(_BASE32)}
_BITS = [16, 8, 4, 2, 1]

MAX_PRECISION = 17
BITS_PER_CHAR = 5


def axis_bits(precision: int) -> Tuple[int, int]:
    """Return ``(lat_bits, lon_bits)`` for a cell of ``precision`` characters."""
    total = precision * BITS_PER_CHAR
    return total // 2, (total + 1) // 2


_MAX_LAT_BITS, _MAX_LON_BITS = axis_bits(MAX_PRECISION)
_LAT_ROWS = 1 << _MAX_LAT_BITS
_LON_COLUMNS = 1 << _MAX_LON_BITS


@dataclass(frozen=True)
class DecodedCell:
    centroid: GeoPoint
    lat_err: float
    lon_err: float

    @property
    def south(self) -> float:
        return self.centroid.lat - self.lat_err

    @property
    def north(self) -> float:
        return self.centroid.lat + self.lat_err

    @property
    def west(self) -> float:
        return self.centroid.lon - self.lon_err

    @property
    def east(self) -> float:
        return self.centroid.lon + self.lon_err


def check_precision(precision: int, low: int = 1, high: int = MAX_PRECISION) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidInput(f"precision must be an integer, got {precision!r}")
    if not low <= precision <= high:
        raise InvalidInput(f"precision {precision} must be within [{low}, {high}]")


def check_cell(cell: str) -> None:
    if not isinstance(cell, str) or not cell:
        raise InvalidInput("geohash must be a non-empty string")
    if len(cell) > MAX_PRECISION:
        raise InvalidInput(
            f"geohash {cell!r} is longer than {MAX_PRECISION} characters"
        )
    for char in cell:
        if char not in _DECODE:
            raise InvalidInput(f"geohash {cell!r} contains invalid character {char!r}")


def encode(lat: float, lon: float, precision: int = MAX_PRECISION) -> str:
    check_precision(precision)
    check_coordinates(lat, lon)
    lat_range = [-90.0, 90.0]
    lon_range = [-180.0, 180.0]
    bit = 0
    ch = 0
    even = True
    geohash = []

    while len(geohash) < precision:
        if even:
            mid = (lon_range[0] + lon_range[1]) / 2
            if lon >= mid:
                ch |= _BITS[bit]
                lon_range[0] = mid
            else:
                lon_range[1] = mid
        else:
            mid = (lat_range[0] + lat_range[1]) / 2
            if lat >= mid:
                ch |= _BITS[bit]
                lat_range[0] = mid
            else:
                lat_range[1] = mid
        even = not even
        if bit < 4:
            bit += 1
        else:
            geohash.append(_BASE32[ch])
            bit = 0
            ch = 0

    return "".join(geohash)


def decode(cell: str) -> DecodedCell:
    check_cell(cell)
    lat_range = [-90.0, 90.0]
    lon_range = [-180.0, 180.0]
    even = True

    for char in cell:
        value = _DECODE[char]
        for mask in _BITS:
            if even:
                mid = (lon_range[0] + lon_range[1]) / 2
                if value & mask:
                    lon_range[0] = mid
                else:
                    lon_range[1] = mid
            else:
                mid = (lat_range[0] + lat_range[1]) / 2
                if value & mask:
                    lat_range[0] = mid
                else:
                    lat_range[1] = mid
            even = not even

    centroid = GeoPoint(
        lat=(lat_range[0] + lat_range[1]) / 2,
        lon=(lon_range[0] + lon_range[1]) / 2,
    )
    return DecodedCell(
        centroid=centroid,
        lat_err=(lat_range[1] - lat_range[0]) / 2,
        lon_err=(lon_range[1] - lon_range[0]) / 2,
    )


def cell_span(precision: int) -> Tuple[int, int]:
    """Size of one cell of ``precision`` in max-precision grid units."""
    check_precision(precision)
    lat_bits, lon_bits = axis_bits(precision)
    return 1 << (_MAX_LAT_BITS - lat_bits), 1 << (_MAX_LON_BITS - lon_bits)


def step_multiplier(length: int) -> int:
    return (MAX_PRECISION - length) ** 2


def grid_index(cell: str) -> Tuple[int, int]:
    """Row and column of the cell's south-west corner on the max-precision grid."""
    check_cell(cell)
    value = 0
    for char in cell.ljust(MAX_PRECISION, "0"):
        value = (value << BITS_PER_CHAR) | _DECODE[char]

    total = MAX_PRECISION * BITS_PER_CHAR
    row = column = 0
    for position in range(total):
        bit = (value >> (total - 1 - position)) & 1
        if position % 2 == 0:
            column = (column << 1) | bit
        else:
            row = (row << 1) | bit
    return row, column


def axis_cells(precision: int) -> Tuple[int, int]:
    """Number of rows and columns in the grid of ``precision`` cells."""
    check_precision(precision)
    lat_bits, lon_bits = axis_bits(precision)
    return 1 << lat_bits, 1 << lon_bits


def cell_index(cell: str) -> Tuple[int, int]:
    """Row and column of ``cell`` in the grid of its own precision."""
    row, column = grid_index(cell)
    lat_span, lon_span = cell_span(len(cell))
    return row // lat_span, column // lon_span


def cell_at(row: int, column: int, precision: int) -> str:
    """Inverse of :func:`cell_index` for a cell of ``precision`` characters."""
    rows, columns = axis_cells(precision)
    if not 0 <= row < rows or not 0 <= column < columns:
        raise InvalidInput(
            f"cell ({row}, {column}) is outside the {rows}x{columns} grid"
        )
    lat_bits, lon_bits = axis_bits(precision)
    value = 0
    for position in range(precision * BITS_PER_CHAR):
        if position % 2 == 0:
            lon_bits -= 1
            bit = (column >> lon_bits) & 1
        else:
            lat_bits -= 1
            bit = (row >> lat_bits) & 1
        value = (value << 1) | bit

    chars = []
    for shift in range((precision - 1) * BITS_PER_CHAR, -1, -BITS_PER_CHAR):
        chars.append(_BASE32[(value >> shift) & 0x1F])
    return "".join(chars)


def _from_grid_index(row: int, column: int) -> str:
    total = MAX_PRECISION * BITS_PER_CHAR
    lat_shift = _MAX_LAT_BITS - 1
    lon_shift = _MAX_LON_BITS - 1
    value = 0
    for position in range(total):
        if position % 2 == 0:
            bit = (column >> lon_shift) & 1
            lon_shift -= 1
        else:
            bit = (row >> lat_shift) & 1
            lat_shift -= 1
        value = (value << 1) | bit

    chars = []
    for shift in range(total - BITS_PER_CHAR, -1, -BITS_PER_CHAR):
        chars.append(_BASE32[(value >> shift) & 0x1F])
    return "".join(chars)


def neighbor_grid(cell: str, lat_steps: int, lon_steps: int) -> str:
    """Step ``lat_steps``/``lon_steps`` max-precision units away from ``cell``.

    Longitude wraps around the antimeridian. Latitude stops at the polar row.
    """
    for name, steps in (("lat_steps", lat_steps), ("lon_steps", lon_steps)):
        if isinstance(steps, bool) or not isinstance(steps, int):
            raise InvalidInput(f"{name} must be an integer, got {steps!r}")
    row, column = grid_index(cell)
    row = min(max(row + lat_steps, 0), _LAT_ROWS - 1)
    column = (column + lon_steps) % _LON_COLUMNS
    return _from_grid_index(row, column)[: len(cell)]


def grid_surrounding(cell: str, radius: int) -> List[str]:
    """Cells around ``cell``, row-major with latitude outer and longitude inner.

    Each step is scaled by :func:`step_multiplier` of the cell length.
    """
    check_cell(cell)
    if isinstance(radius, bool) or not isinstance(radius, int) or radius < 0:
        raise InvalidInput(f"radius must be a non-negative integer, got {radius!r}")
    multiplier = step_multiplier(len(cell))
    result = []
    for i in range(-radius, radius + 1):
        for j in range(-radius, radius + 1):
            result.append(neighbor_grid(cell, i * multiplier, j * multiplier))
    return result
