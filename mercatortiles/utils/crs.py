"""Coordinate Reference System (CRS) constants used throughout mercatortiles.

This module defines the two reference systems the projection converts between:
- LATLON_CRS: WGS84 geographic coordinates (EPSG:4326)
- XY_CRS: Web Mercator projected coordinates (EPSG:3857, historically EPSG:900913)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pyproj import CRS

from mercatortiles.utils.exceptions import InvalidArgument

# WGS84 latitude/longitude coordinate system (EPSG:4326)
# Coordinates in decimal degrees
LATLON_CRS = CRS(4326)

# Web Mercator projected coordinate system (EPSG:3857)
# Coordinates are in meters (easting, northing)
XY_CRS = CRS(3857)


class Srs(Enum):
    """
    Enumeration of the spatial reference systems a bounding box can be expressed in.

    The values are the legacy names used by tile servers: "900913" for spherical
    mercator meters and "WGS84" for longitude/latitude degrees.

    Values:
        WEB_MERCATOR: Spherical mercator meters (EPSG:900913 / EPSG:3857)
        WGS84: Longitude/latitude in decimal degrees (EPSG:4326)

    Examples:
        >>> Srs.parse("900913")
        <Srs.WEB_MERCATOR: '900913'>
        >>> Srs.parse("EPSG:4326")
        <Srs.WGS84: 'WGS84'>
        >>> Srs.parse("")
        <Srs.WGS84: 'WGS84'>
    """

    WEB_MERCATOR = "900913"
    WGS84 = "WGS84"

    @property
    def crs(self) -> CRS:
        """The pyproj CRS matching this reference system."""
        return XY_CRS if self is Srs.WEB_MERCATOR else LATLON_CRS

    @classmethod
    def parse(cls, value: Any) -> Srs:
        """
        Resolve a caller supplied spatial reference into an Srs member.

        Args:
            value: An Srs member, one of the names "900913", "WGS84", "EPSG:3857",
                "3857", "EPSG:4326", "4326" (case-insensitive), a pyproj CRS equal to
                EPSG:3857 or EPSG:4326, or None / "" for WGS84.

        Returns:
            The matching Srs member

        Raises:
            InvalidArgument: If the value does not name one of the two systems
        """
        if isinstance(value, Srs):
            return value
        if value is None:
            return cls.WGS84
        if isinstance(value, CRS):
            if value == XY_CRS:
                return cls.WEB_MERCATOR
            if value == LATLON_CRS:
                return cls.WGS84
            raise InvalidArgument(
                f"unsupported crs {value.to_string()}; expected EPSG:3857 or EPSG:4326"
            )
        if isinstance(value, str):
            try:
                return _SRS_ALIASES[value.strip().upper()]
            except KeyError:
                raise InvalidArgument(f"unsupported srs name: {value!r}") from None

        raise InvalidArgument(f"srs of type {type(value).__name__} not supported")


# anything Srs.parse accepts
SrsLike = Optional[Union[str, Srs, CRS]]

_SRS_ALIASES = {
    "": Srs.WGS84,
    "WGS84": Srs.WGS84,
    "4326": Srs.WGS84,
    "EPSG:4326": Srs.WGS84,
    "900913": Srs.WEB_MERCATOR,
    "EPSG:900913": Srs.WEB_MERCATOR,
    "3857": Srs.WEB_MERCATOR,
    "EPSG:3857": Srs.WEB_MERCATOR,
}
