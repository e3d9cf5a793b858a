from __future__ import annotations

from typing import Any, Dict, Iterator, NamedTuple, Union

from mercatortiles.constructs.zoom import IntegerZoom, ZoomLike, as_zoom
from mercatortiles.utils.exceptions import InvalidArgument


class Tile(NamedTuple):
    x: int
    y: int
    z: int

    def to_string(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"

    def to_json(self) -> Dict[str, Any]:
        return self._asdict()

    @classmethod
    def from_string(cls, s: str) -> Tile:
        z, x, y = s.strip("/").split("/")
        return cls(int(x), int(y), int(z))

    @classmethod
    def from_json(cls, json: Dict[str, Any]) -> Tile:
        return cls(**json)


class TileBounds(NamedTuple):
    """
    An inclusive range of tile indices at a single zoom level.

    TileBounds is what Projection.xyz returns for a bounding box. The minimums are
    never negative; the maximums are not clamped to the size of the pyramid, so a
    box that extends past the edge of the world can produce indices beyond it.

    Attributes:
        min_x: The smallest tile column
        min_y: The smallest tile row
        max_x: The largest tile column
        max_y: The largest tile row

    Examples:
        >>> bounds = TileBounds(min_x=0, min_y=0, max_x=1, max_y=1)
        >>> bounds.count()
        4
        >>> [t.to_string() for t in bounds.tiles(1)]
        ['1/0/0', '1/1/0', '1/0/1', '1/1/1']
    """

    min_x: Union[int, float]
    min_y: Union[int, float]
    max_x: Union[int, float]
    max_y: Union[int, float]

    def count(self) -> int:
        """
        The number of tiles covered by this range; 0 if the range is inverted.
        """
        width = int(self.max_x) - int(self.min_x) + 1
        height = int(self.max_y) - int(self.min_y) + 1
        if width <= 0 or height <= 0:
            return 0
        return width * height

    def tiles(self, zoom: ZoomLike) -> Iterator[Tile]:
        """
        Iterate every tile in the range, row by row.

        Args:
            zoom: The integer zoom level the range was computed at

        Returns:
            An iterator of Tile objects, ordered by row then column

        Raises:
            InvalidArgument: If the zoom is not a valid integer zoom level (raised on
                the first iteration)
        """
        z = as_zoom(zoom)
        if not isinstance(z, IntegerZoom):
            raise InvalidArgument("tiles can only be enumerated at an integer zoom level")

        for y in range(int(self.min_y), int(self.max_y) + 1):
            for x in range(int(self.min_x), int(self.max_x) + 1):
                yield Tile(x, y, z.level)

    def to_dict(self) -> Dict[str, Any]:
        return self._asdict()

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> TileBounds:
        return cls(
            min_x=d["min_x"],
            min_y=d["min_y"],
            max_x=d["max_x"],
            max_y=d["max_y"],
        )
