from __future__ import annotations

import math
import numbers
from typing import NamedTuple, Union

from mercatortiles.utils.constants import ZOOM_LEVELS
from mercatortiles.utils.exceptions import InvalidArgument


class IntegerZoom(NamedTuple):
    """
    A discrete zoom level that indexes the precomputed per-level constants.

    Pixel coordinates produced at an integer zoom are rounded to the nearest pixel.

    Attributes:
        level: The zoom level, between 0 and 29 inclusive
    """

    level: int

    @property
    def value(self) -> float:
        return float(self.level)


class FractionalZoom(NamedTuple):
    """
    A continuous zoom value; the scale constants are recomputed on every call.

    Pixel coordinates produced at a fractional zoom are not rounded.

    Attributes:
        value: Any finite zoom value, e.g. 8.6574
    """

    value: float


Zoom = Union[IntegerZoom, FractionalZoom]

# anything as_zoom accepts
ZoomLike = Union[int, float, IntegerZoom, FractionalZoom]


def as_zoom(zoom: ZoomLike) -> Zoom:
    """
    Resolve a caller supplied zoom argument into one of the two zoom variants.

    Python ints (and numpy integers) become an IntegerZoom and python floats (and numpy
    floats) become a FractionalZoom, so `9` and `9.0` take different code paths.
    Existing IntegerZoom and FractionalZoom values pass through after validation.

    Args:
        zoom: The zoom argument to resolve

    Returns:
        An IntegerZoom or a FractionalZoom

    Raises:
        InvalidArgument: If the zoom has an unsupported type, is an integer outside of
            [0, 29], or is a float that is not finite

    Examples:
        >>> as_zoom(9)
        IntegerZoom(level=9)
        >>> as_zoom(8.6574)
        FractionalZoom(value=8.6574)
    """
    if isinstance(zoom, IntegerZoom):
        return _integer_zoom(zoom.level)
    if isinstance(zoom, FractionalZoom):
        return _fractional_zoom(zoom.value)

    # bool is an int subclass but never a meaningful zoom
    if isinstance(zoom, bool):
        raise InvalidArgument(f"zoom ({type(zoom).__name__}) not supported")
    if isinstance(zoom, numbers.Integral):
        return _integer_zoom(zoom)
    if isinstance(zoom, numbers.Real):
        return _fractional_zoom(zoom)

    raise InvalidArgument(f"zoom ({type(zoom).__name__}) not supported")


def zoom_value(zoom: ZoomLike) -> float:
    """
    The numeric value of a zoom, as used by the TMS row flip `2**zoom - 1 - y`.
    """
    return as_zoom(zoom).value


def tile_count(zoom: Zoom) -> Union[int, float]:
    """Number of tiles along one axis of the pyramid at the given zoom."""
    if isinstance(zoom, IntegerZoom):
        return 1 << zoom.level
    return math.pow(2, zoom.value)


def _integer_zoom(level) -> IntegerZoom:
    level = int(level)
    if not 0 <= level < ZOOM_LEVELS:
        raise InvalidArgument(
            f"integer zoom must be between 0 and {ZOOM_LEVELS - 1}, got {level}"
        )
    return IntegerZoom(level)


def _fractional_zoom(value) -> FractionalZoom:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidArgument(f"fractional zoom must be finite, got {value}")
    return FractionalZoom(value)
