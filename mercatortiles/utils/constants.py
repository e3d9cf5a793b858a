"""Numeric constants shared by the spherical mercator projection.

These values define the tile pyramid and the sphere the projection is built on.
Every Projection instance reads them; none of them are configurable at runtime.
"""

import math

# Edge length, in pixels, of a single tile when no size is given
DEFAULT_TILE_SIZE = 256

# Number of precomputed zoom levels (0 through 29)
ZOOM_LEVELS = 30

# Spherical earth radius used by EPSG:900913 / EPSG:3857, in meters
EARTH_RADIUS = 6378137.0

# Largest valid web mercator coordinate magnitude, in meters (pi * EARTH_RADIUS)
MAX_EXTENT = 20037508.342789244

# Sine of latitude is clamped to this magnitude before the log-tangent transform
# so that the poles map to a finite pixel
SINE_LIMIT = 0.9999

D2R = math.pi / 180.0
R2D = 180.0 / math.pi
