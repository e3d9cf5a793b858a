from __future__ import annotations

import logging
import math
import numbers
from typing import Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon, box

from mercatortiles.constructs.cache import (
    DEFAULT_CACHE,
    ZoomLevelCache,
    ZoomLevelConstants,
)
from mercatortiles.constructs.tile import TileBounds
from mercatortiles.constructs.zoom import FractionalZoom, ZoomLike, as_zoom, tile_count
from mercatortiles.utils.constants import (
    D2R,
    DEFAULT_TILE_SIZE,
    EARTH_RADIUS,
    MAX_EXTENT,
    R2D,
    SINE_LIMIT,
)
from mercatortiles.utils.crs import Srs, SrsLike
from mercatortiles.utils.exceptions import InvalidArgument, InvalidTileSize

log = logging.getLogger(__name__)

Pair = Tuple[float, float]
BBox = Tuple[float, float, float, float]


class Projection:
    """
    Spherical mercator projection between longitude/latitude, web mercator meters and
    pixel coordinates of a tile pyramid.

    A Projection is parameterized by its tile size. The per-zoom-level scale constants
    for that size are looked up in a ZoomLevelCache (computed on first use and shared
    with every other Projection of the same size), so building many projections is cheap.
    A Projection never changes after construction.

    Zoom arguments accept either an int, which uses the precomputed constants and
    rounds pixel results, or a float, which recomputes the scale for that exact zoom
    and does not round. See `mercatortiles.constructs.zoom.as_zoom`.

    Args:
        size: The tile edge length in pixels. None or 0 selects the default of 256.
        cache: The ZoomLevelCache to take the per-level constants from. Defaults to
            the process wide DEFAULT_CACHE.

    Raises:
        InvalidTileSize: If size is negative or not an integer

    Examples:
        >>> from mercatortiles.projection import Projection
        >>> proj = Projection()
        >>> proj.to_pixel((-179, 85), 9)
        (364.0, 215.0)
        >>> proj.bbox(0, 0, 1, tms_style=True)
        (-180.0, -85.05112877980659, 0.0, 0.0)
        >>> proj.xyz((-180, -85.05112877980659, 180, 85.0511287798066), 0)
        TileBounds(min_x=0, min_y=0, max_x=0, max_y=0)
    """

    def __init__(
        self, size: Optional[int] = None, cache: Optional[ZoomLevelCache] = None
    ):
        self._size = _tile_size(size)
        self._cache = cache if cache is not None else DEFAULT_CACHE
        self._constants = self._cache.get(self._size)

    def __repr__(self):
        return f"Projection(size={self._size})"

    @property
    def size(self) -> int:
        return self._size

    @property
    def constants(self) -> ZoomLevelConstants:
        return self._constants

    @property
    def bc(self) -> Tuple[float, ...]:
        return self._constants.bc

    @property
    def cc(self) -> Tuple[float, ...]:
        return self._constants.cc

    @property
    def zc(self) -> Tuple[float, ...]:
        return self._constants.zc

    @property
    def ac(self) -> Tuple[float, ...]:
        return self._constants.ac

    def to_pixel(self, lonlat: Sequence[float], zoom: ZoomLike) -> Pair:
        """
        Convert a longitude/latitude pair to a pixel coordinate at the given zoom.

        The sine of the latitude is clamped to [-0.9999, 0.9999] so the poles map to a
        finite pixel. Results are clamped to the map size on the upper bound only; a
        pixel left of or above the map origin is returned as a negative value.

        Args:
            lonlat: A (longitude, latitude) pair in decimal degrees
            zoom: An integer zoom level (result rounded to the nearest pixel) or a
                float zoom (result not rounded)

        Returns:
            An (x, y) pixel coordinate with the origin at the top left of the map

        Raises:
            InvalidArgument: If the zoom is not supported or lonlat is not a pair

        Examples:
            >>> proj.to_pixel((-179, 85), 9)
            (364.0, 215.0)
            >>> proj.to_pixel((-179, 85), 8.6574)
            (287.12734093961626, 169.30444219392666)
        """
        z = as_zoom(zoom)
        lon, lat = _pair(lonlat, "lonlat")

        if isinstance(z, FractionalZoom):
            size = self._size * math.pow(2, z.value)
            d = size / 2.0
            bc = size / 360.0
            cc = size / (2.0 * math.pi)
            ac = size
        else:
            d = self.zc[z.level]
            bc = self.bc[z.level]
            cc = self.cc[z.level]
            ac = self.ac[z.level]

        f = min(max(math.sin(D2R * lat), -SINE_LIMIT), SINE_LIMIT)
        x = d + lon * bc
        y = d + 0.5 * math.log((1 + f) / (1 - f)) * -cc

        if not isinstance(z, FractionalZoom):
            x = _round(x)
            y = _round(y)

        # upper bound only
        if x > ac:
            x = ac
        if y > ac:
            y = ac

        return x, y

    def to_lonlat(self, pixel: Sequence[float], zoom: ZoomLike) -> Pair:
        """
        Convert a pixel coordinate at the given zoom to a longitude/latitude pair.

        This is the inverse of to_pixel. The result is not clamped, so pixels outside of
        the map produce longitudes beyond +/-180.

        Args:
            pixel: An (x, y) pixel coordinate with the origin at the top left of the map
            zoom: An integer or float zoom

        Returns:
            A (longitude, latitude) pair in decimal degrees

        Raises:
            InvalidArgument: If the zoom is not supported or pixel is not a pair

        Examples:
            >>> proj.to_lonlat((200, 200), 9)
            (-179.45068359375, 85.00351401304403)
        """
        z = as_zoom(zoom)
        px, py = _pair(pixel, "pixel")

        if isinstance(z, FractionalZoom):
            size = self._size * math.pow(2, z.value)
            bc = size / 360.0
            cc = size / (2.0 * math.pi)
            zc = size / 2.0
        else:
            bc = self.bc[z.level]
            cc = self.cc[z.level]
            zc = self.zc[z.level]

        g = (py - zc) / -cc
        lon = (px - zc) / bc
        lat = R2D * (2.0 * math.atan(_exp(g)) - 0.5 * math.pi)

        return lon, lat

    def forward(self, lonlat: Sequence[float]) -> Pair:
        """
        Convert a longitude/latitude pair to web mercator (EPSG:900913) meters.

        Both components are clamped to +/-MAX_EXTENT, so out of range longitudes and
        latitudes at or beyond the poles saturate to the edge of the projection.

        Args:
            lonlat: A (longitude, latitude) pair in decimal degrees

        Returns:
            An (x, y) pair in web mercator meters

        Raises:
            InvalidArgument: If lonlat is not a pair
        """
        lon, lat = _pair(lonlat, "lonlat")

        x = EARTH_RADIUS * lon * D2R
        if lat >= 90.0:
            y = MAX_EXTENT
        elif lat <= -90.0:
            y = -MAX_EXTENT
        else:
            y = EARTH_RADIUS * math.log(
                math.tan((math.pi * 0.25) + (0.5 * lat * D2R))
            )

        return _clamp_extent(x), _clamp_extent(y)

    def inverse(self, xy: Sequence[float]) -> Pair:
        """
        Convert web mercator (EPSG:900913) meters to a longitude/latitude pair.

        Args:
            xy: An (x, y) pair in web mercator meters

        Returns:
            A (longitude, latitude) pair in decimal degrees

        Raises:
            InvalidArgument: If xy is not a pair
        """
        x, y = _pair(xy, "xy")

        return (
            x * R2D / EARTH_RADIUS,
            ((math.pi * 0.5) - 2.0 * math.atan(_exp(-y / EARTH_RADIUS))) * R2D,
        )

    def convert(self, bbox: Sequence[float], to: SrsLike) -> BBox:
        """
        Reproject a bounding box between longitude/latitude and web mercator meters.

        The lower left and upper right corners are converted independently.

        Args:
            bbox: A (minx, miny, maxx, maxy) bounding box in the source system
            to: The target system; Srs.WEB_MERCATOR / "900913" runs forward, anything
                else accepted by Srs.parse runs inverse

        Returns:
            The bounding box in the target system

        Raises:
            InvalidArgument: If bbox does not have four values or the target is unknown

        Examples:
            >>> proj.convert((-240, -90, 240, 90), "900913")
            (-20037508.342789244, -20037508.342789244, 20037508.342789244, 20037508.342789244)
        """
        target = Srs.parse(to)
        bbox = _bbox(bbox)

        if target is Srs.WEB_MERCATOR:
            return self.forward(bbox[0:2]) + self.forward(bbox[2:4])
        return self.inverse(bbox[0:2]) + self.inverse(bbox[2:4])

    def bbox(
        self,
        x: float,
        y: float,
        zoom: ZoomLike,
        tms_style: bool = False,
        srs: SrsLike = Srs.WGS84,
    ) -> BBox:
        """
        Compute the bounding box of a tile.

        Args:
            x: The tile column
            y: The tile row, counted from the top (XYZ) or from the bottom (TMS)
            zoom: An integer or float zoom
            tms_style: If True, y follows the TMS scheme with the origin at the bottom left
            srs: The system of the result; WGS84 (default) or web mercator ("900913")

        Returns:
            The tile's (west, south, east, north) bounding box

        Raises:
            InvalidArgument: If the zoom or srs is not supported

        Examples:
            >>> proj.bbox(0, 0, 0, tms_style=True)
            (-180.0, -85.05112877980659, 180.0, 85.0511287798066)
        """
        z = as_zoom(zoom)
        srs = Srs.parse(srs)

        if tms_style:
            y = (tile_count(z) - 1) - y

        ll = (x * self._size, (y + 1) * self._size)
        ur = ((x + 1) * self._size, y * self._size)

        bounds = self.to_lonlat(ll, z) + self.to_lonlat(ur, z)

        if srs is Srs.WEB_MERCATOR:
            return self.convert(bounds, Srs.WEB_MERCATOR)

        return bounds

    def xyz(
        self,
        bbox: Sequence[float],
        zoom: ZoomLike,
        tms_style: bool = False,
        srs: SrsLike = Srs.WGS84,
    ) -> TileBounds:
        """
        Compute the range of tiles that cover a bounding box.

        The upper right pixel corner is moved back by one pixel before flooring so that a
        box edge lying exactly on a tile boundary does not pull in the neighbouring tile.
        Negative indices are raised to zero; the maximums are not clamped to the number
        of tiles at the zoom level.

        Args:
            bbox: A (west, south, east, north) bounding box
            zoom: An integer or float zoom
            tms_style: If True, rows of the result follow the TMS scheme
            srs: The system of bbox; WGS84 (default) or web mercator ("900913")

        Returns:
            The inclusive TileBounds covering the box

        Raises:
            InvalidArgument: If bbox does not have four values or the zoom or srs is
                not supported

        Examples:
            >>> proj.xyz((-240, -90, 240, 90), 4, tms_style=True)
            TileBounds(min_x=0, min_y=0, max_x=15, max_y=15)
        """
        z = as_zoom(zoom)
        srs = Srs.parse(srs)
        bbox = _bbox(bbox)

        if srs is Srs.WEB_MERCATOR:
            bbox = self.convert(bbox, Srs.WGS84)

        px_ll = self.to_pixel(bbox[0:2], z)
        px_ur = self.to_pixel(bbox[2:4], z)

        # row 0 is the top of the map, so the smallest row comes from the upper right corner
        x = [
            math.floor(px_ll[0] / self._size),
            math.floor((px_ur[0] - 1) / self._size),
        ]
        y = [
            math.floor(px_ur[1] / self._size),
            math.floor((px_ll[1] - 1) / self._size),
        ]

        min_x = _min_zero(x)
        min_y = _min_zero(y)
        # a box entirely off the map has only negative candidates; keep max >= min
        bounds = TileBounds(
            min_x=min_x,
            min_y=min_y,
            max_x=max(max(x), min_x),
            max_y=max(max(y), min_y),
        )

        if tms_style:
            top = tile_count(z) - 1
            bounds = bounds._replace(
                min_y=top - bounds.max_y, max_y=top - bounds.min_y
            )

        return bounds

    def tile_polygon(
        self,
        x: float,
        y: float,
        zoom: ZoomLike,
        tms_style: bool = False,
        srs: SrsLike = Srs.WGS84,
    ) -> Polygon:
        """
        Build the outline of a tile as a shapely Polygon.

        Args:
            x: The tile column
            y: The tile row
            zoom: An integer or float zoom
            tms_style: If True, y follows the TMS scheme
            srs: The system of the polygon coordinates

        Returns:
            A rectangular Polygon covering the tile's bounding box
        """
        west, south, east, north = self.bbox(x, y, zoom, tms_style=tms_style, srs=srs)
        return box(west, south, east, north)

    def forward_array(self, lonlats) -> np.ndarray:
        """
        Vectorized forward: convert an (n, 2) array of longitude/latitude rows to meters.

        Applies the same extent clamping as forward.

        Args:
            lonlats: Anything numpy can turn into an (n, 2) float array

        Returns:
            An (n, 2) array of web mercator x/y meters

        Raises:
            InvalidArgument: If the input does not have the shape (n, 2)
        """
        coords = _coords_array(lonlats)
        lon = coords[:, 0]
        lat = coords[:, 1]

        x = EARTH_RADIUS * lon * D2R
        with np.errstate(divide="ignore", invalid="ignore"):
            y = EARTH_RADIUS * np.log(np.tan((np.pi * 0.25) + (0.5 * lat * D2R)))
        y = np.where(lat >= 90.0, MAX_EXTENT, np.where(lat <= -90.0, -MAX_EXTENT, y))

        return np.column_stack(
            [np.clip(x, -MAX_EXTENT, MAX_EXTENT), np.clip(y, -MAX_EXTENT, MAX_EXTENT)]
        )

    def inverse_array(self, xys) -> np.ndarray:
        """
        Vectorized inverse: convert an (n, 2) array of web mercator meters to lon/lat.

        Args:
            xys: Anything numpy can turn into an (n, 2) float array

        Returns:
            An (n, 2) array of longitude/latitude rows in decimal degrees

        Raises:
            InvalidArgument: If the input does not have the shape (n, 2)
        """
        coords = _coords_array(xys)

        lon = coords[:, 0] * R2D / EARTH_RADIUS
        with np.errstate(over="ignore"):
            lat = (
                (np.pi * 0.5) - 2.0 * np.arctan(np.exp(-coords[:, 1] / EARTH_RADIUS))
            ) * R2D

        return np.column_stack([lon, lat])


def _tile_size(size) -> int:
    if size is None:
        return DEFAULT_TILE_SIZE
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise InvalidTileSize(
            f"tile size must be an integer, got {type(size).__name__}"
        )
    if size == 0:
        return DEFAULT_TILE_SIZE
    if size < 0:
        raise InvalidTileSize(f"tile size must be positive, got {size}")
    return int(size)


def _pair(values: Sequence[float], name: str) -> Pair:
    if len(values) != 2:
        raise InvalidArgument(f"{name} must have exactly 2 values, got {len(values)}")
    return float(values[0]), float(values[1])


def _bbox(values: Sequence[float]) -> BBox:
    if len(values) != 4:
        raise InvalidArgument(f"bbox must have exactly 4 values, got {len(values)}")
    return float(values[0]), float(values[1]), float(values[2]), float(values[3])


def _coords_array(values) -> np.ndarray:
    coords = np.asarray(values, dtype=float)
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise InvalidArgument(f"expected an array of shape (n, 2), got {coords.shape}")
    return coords


def _round(v: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    if not math.isfinite(v):
        return v
    t = math.trunc(v)
    if abs(v - t) >= 0.5:
        return t + math.copysign(1.0, v)
    return float(t)


def _exp(v: float) -> float:
    try:
        return math.exp(v)
    except OverflowError:
        return math.inf


def _clamp_extent(v: float) -> float:
    return min(max(v, -MAX_EXTENT), MAX_EXTENT)


def _min_zero(values):
    m = min(values)
    return 0 if m < 0 else m

