"""pyproj backed transforms between the two supported reference systems.

Projection computes spherical mercator in closed form; these helpers run the same
conversions through PROJ. They are used to reproject whole arrays of coordinates
between any two Srs values and to verify the closed form results.
"""

from functools import lru_cache
from typing import Tuple

import numpy as np
from pyproj import Transformer

from mercatortiles.utils.crs import Srs, SrsLike
from mercatortiles.utils.exceptions import InvalidArgument


@lru_cache(maxsize=None)
def _transformer(source: Srs, target: Srs) -> Transformer:
    return Transformer.from_crs(source.crs, target.crs, always_xy=True)


def get_transformer(source: SrsLike, target: SrsLike) -> Transformer:
    """
    Get a pyproj Transformer between two spatial reference systems.

    Transformers are built once per (source, target) pair and reused. They use
    always_xy=True, so coordinates are (longitude, latitude) or (x, y) regardless of
    the axis order declared by the CRS.

    Args:
        source: The system coordinates are in; anything Srs.parse accepts
        target: The system to transform to; anything Srs.parse accepts

    Returns:
        A pyproj Transformer

    Raises:
        InvalidArgument: If either system is not supported
    """
    return _transformer(Srs.parse(source), Srs.parse(target))


def transform_coords(coords, source: SrsLike, target: SrsLike) -> np.ndarray:
    """
    Reproject an (n, 2) array of coordinates from one system to another with pyproj.

    Unlike Projection.forward_array, web mercator results are not clamped to the
    maximum extent.

    Args:
        coords: Anything numpy can turn into an (n, 2) float array of x/y (lon/lat) rows
        source: The system of the input coordinates
        target: The system of the result

    Returns:
        An (n, 2) array in the target system

    Raises:
        InvalidArgument: If the input does not have the shape (n, 2) or a system is
            not supported

    Examples:
        >>> transform_coords([[-74.0060, 40.7128]], "WGS84", "900913")
        array([[-8238310.23..., 4970071.57...]])
    """
    arr = np.asarray(coords, dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidArgument(f"expected an array of shape (n, 2), got {arr.shape}")

    xs, ys = get_transformer(source, target).transform(arr[:, 0], arr[:, 1])

    return np.column_stack([xs, ys])


def xy_to_latlon(x: float, y: float) -> Tuple[float, float]:
    """
    Transform Web Mercator (EPSG:3857) coordinates to WGS84 latitude/longitude.

    Args:
        x: The x-coordinate (easting) in Web Mercator projection (meters)
        y: The y-coordinate (northing) in Web Mercator projection (meters)

    Returns:
        A tuple of (latitude, longitude) in decimal degrees (WGS84/EPSG:4326)

    Examples:
        >>> lat, lon = xy_to_latlon(-8238310.2, 4970071.6)
        >>> print(f"Lat: {lat:.4f}, Lon: {lon:.4f}")
        Lat: 40.7128, Lon: -74.0060
    """
    lon, lat = get_transformer(Srs.WEB_MERCATOR, Srs.WGS84).transform(x, y)

    return lat, lon


def latlon_to_xy(lat: float, lon: float) -> Tuple[float, float]:
    """
    Transform WGS84 latitude/longitude to Web Mercator (EPSG:3857) coordinates.

    Unlike Projection.forward, the result is not clamped to the maximum extent.

    Args:
        lat: The latitude in decimal degrees
        lon: The longitude in decimal degrees

    Returns:
        A tuple of (x, y) in Web Mercator projection meters (EPSG:3857)

    Examples:
        >>> x, y = latlon_to_xy(40.7128, -74.0060)
        >>> print(f"X: {x:.1f}m, Y: {y:.1f}m")
        X: -8238310.2m, Y: 4970071.6m
    """
    return get_transformer(Srs.WGS84, Srs.WEB_MERCATOR).transform(lon, lat)
