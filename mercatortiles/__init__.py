from mercatortiles.constructs.cache import DEFAULT_CACHE, ZoomLevelCache
from mercatortiles.constructs.tile import Tile, TileBounds
from mercatortiles.constructs.zoom import FractionalZoom, IntegerZoom, as_zoom
from mercatortiles.projection import Projection
from mercatortiles.utils.crs import Srs
from mercatortiles.utils.exceptions import (
    InvalidArgument,
    InvalidTileSize,
    MercatorException,
)

__version__ = "0.1.0"
