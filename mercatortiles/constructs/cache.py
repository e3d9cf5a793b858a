from __future__ import annotations

import logging
import math
import threading
from typing import Dict, NamedTuple, Tuple

from mercatortiles.utils.constants import ZOOM_LEVELS

log = logging.getLogger(__name__)


class ZoomLevelConstants(NamedTuple):
    """
    Scale and offset constants for every precomputed zoom level of one tile size.

    Entry d of each tuple belongs to a virtual world map of `size * 2**d` pixels square.

    Attributes:
        bc: Pixels per degree of longitude
        cc: Pixels per radian of longitude
        zc: Pixel offset of the map center (half the map size)
        ac: Map size in pixels
    """

    bc: Tuple[float, ...]
    cc: Tuple[float, ...]
    zc: Tuple[float, ...]
    ac: Tuple[float, ...]

    @classmethod
    def compute(cls, size: int) -> ZoomLevelConstants:
        """
        Compute the constants for all zoom levels of the given tile size.

        Args:
            size: The tile edge length in pixels

        Returns:
            A new ZoomLevelConstants with ZOOM_LEVELS entries per array
        """
        bc, cc, zc, ac = [], [], [], []

        map_size = float(size)
        for _ in range(ZOOM_LEVELS):
            bc.append(map_size / 360.0)
            cc.append(map_size / (2.0 * math.pi))
            zc.append(map_size / 2.0)
            ac.append(map_size)
            map_size *= 2

        return cls(bc=tuple(bc), cc=tuple(cc), zc=tuple(zc), ac=tuple(ac))


class ZoomLevelCache:
    """
    A registry of precomputed zoom level constants keyed by tile size.

    Entries are computed the first time a size is requested and are never evicted or
    mutated afterwards, so every Projection with the same tile size shares the same
    ZoomLevelConstants instance. Population is guarded by a lock, which makes it safe
    to construct the first Projection of a size from several threads at once.

    Examples:
        >>> cache = ZoomLevelCache()
        >>> a = Projection(256, cache=cache)
        >>> b = Projection(256, cache=cache)
        >>> a.constants is b.constants
        True
    """

    def __init__(self):
        self._entries: Dict[int, ZoomLevelConstants] = {}
        self._lock = threading.Lock()

    def __contains__(self, size: int) -> bool:
        return size in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, size: int) -> ZoomLevelConstants:
        """
        Return the constants for a tile size, computing them on first use.

        Args:
            size: The tile edge length in pixels; assumed to be a positive integer

        Returns:
            The shared ZoomLevelConstants for this size
        """
        constants = self._entries.get(size)
        if constants is not None:
            return constants

        with self._lock:
            # another thread may have populated the entry while we waited
            constants = self._entries.get(size)
            if constants is None:
                log.debug(f"computing zoom level constants for tile size {size}")
                constants = ZoomLevelConstants.compute(size)
                self._entries[size] = constants

        return constants


# used by every Projection that is not given its own cache
DEFAULT_CACHE = ZoomLevelCache()
