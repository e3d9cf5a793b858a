from unittest import TestCase

from mercatortiles.constructs.tile import Tile, TileBounds
from mercatortiles.utils.exceptions import InvalidArgument


class TestTile(TestCase):
    def test_to_string(self):
        self.assertEqual(Tile(4, 5, 3).to_string(), "3/4/5")

    def test_from_string(self):
        self.assertEqual(Tile.from_string("3/4/5"), Tile(x=4, y=5, z=3))
        self.assertEqual(Tile.from_string("/3/4/5/"), Tile(x=4, y=5, z=3))

    def test_json(self):
        tile = Tile(1, 2, 3)

        self.assertEqual(tile.to_json(), {"x": 1, "y": 2, "z": 3})
        self.assertEqual(Tile.from_json(tile.to_json()), tile)


class TestTileBounds(TestCase):
    def test_count(self):
        self.assertEqual(TileBounds(0, 0, 0, 0).count(), 1)
        self.assertEqual(TileBounds(0, 0, 15, 15).count(), 256)
        self.assertEqual(TileBounds(2, 3, 4, 3).count(), 3)

    def test_count_of_inverted_range_is_zero(self):
        self.assertEqual(TileBounds(0, 0, -1, 0).count(), 0)

    def test_tiles_are_row_major(self):
        tiles = list(TileBounds(0, 0, 1, 1).tiles(1))

        self.assertEqual(
            [t.to_string() for t in tiles], ["1/0/0", "1/1/0", "1/0/1", "1/1/1"]
        )

    def test_tiles_matches_count(self):
        bounds = TileBounds(3, 5, 7, 6)

        self.assertEqual(len(list(bounds.tiles(4))), bounds.count())

    def test_tiles_requires_integer_zoom(self):
        with self.assertRaises(InvalidArgument):
            list(TileBounds(0, 0, 1, 1).tiles(1.5))

    def test_dict_round_trip(self):
        bounds = TileBounds(min_x=1, min_y=2, max_x=3, max_y=4)

        self.assertEqual(
            bounds.to_dict(), {"min_x": 1, "min_y": 2, "max_x": 3, "max_y": 4}
        )
        self.assertEqual(TileBounds.from_dict(bounds.to_dict()), bounds)
