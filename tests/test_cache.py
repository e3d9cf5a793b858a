import math
from concurrent.futures import ThreadPoolExecutor
from unittest import TestCase
from unittest.mock import patch

from mercatortiles.constructs.cache import (
    DEFAULT_CACHE,
    ZoomLevelCache,
    ZoomLevelConstants,
)
from mercatortiles.projection import Projection
from mercatortiles.utils.constants import ZOOM_LEVELS
from mercatortiles.utils.exceptions import InvalidTileSize


class TestZoomLevelCache(TestCase):
    def test_constants_have_one_entry_per_zoom_level(self):
        constants = ZoomLevelConstants.compute(256)

        for values in constants:
            self.assertEqual(len(values), ZOOM_LEVELS)

    def test_constants_double_per_level(self):
        constants = ZoomLevelConstants.compute(256)

        for d in range(ZOOM_LEVELS):
            size = 256 * 2**d
            self.assertEqual(constants.ac[d], size)
            self.assertEqual(constants.zc[d], size / 2)
            self.assertAlmostEqual(constants.bc[d], size / 360)
            self.assertAlmostEqual(constants.cc[d], size / (2 * math.pi))

    def test_projections_of_same_size_share_constants(self):
        cache = ZoomLevelCache()
        a = Projection(256, cache=cache)
        b = Projection(256, cache=cache)

        self.assertIs(a.constants, b.constants)
        self.assertIs(a.bc, b.bc)
        self.assertEqual(len(cache), 1)

    def test_different_sizes_get_different_entries(self):
        cache = ZoomLevelCache()
        a = Projection(256, cache=cache)
        b = Projection(512, cache=cache)

        self.assertIsNot(a.constants, b.constants)
        self.assertIn(256, cache)
        self.assertIn(512, cache)
        self.assertEqual(b.ac[0], 512)

    def test_constants_computed_once(self):
        cache = ZoomLevelCache()
        with patch.object(
            ZoomLevelConstants, "compute", wraps=ZoomLevelConstants.compute
        ) as compute:
            for _ in range(5):
                Projection(1024, cache=cache)

        self.assertEqual(compute.call_count, 1)

    def test_concurrent_first_use(self):
        cache = ZoomLevelCache()

        def build(_):
            return Projection(2048, cache=cache).constants

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(build, range(64)))

        first = results[0]
        for constants in results:
            self.assertIs(constants, first)
        self.assertEqual(len(cache), 1)

    def test_default_cache_is_used(self):
        proj = Projection(768)

        self.assertIn(768, DEFAULT_CACHE)
        self.assertIs(proj.constants, DEFAULT_CACHE.get(768))


class TestTileSize(TestCase):
    def test_default_size(self):
        self.assertEqual(Projection().size, 256)
        self.assertEqual(Projection(None).size, 256)
        self.assertEqual(Projection(0).size, 256)

    def test_custom_size(self):
        proj = Projection(512)

        self.assertEqual(proj.size, 512)
        self.assertEqual(proj.to_pixel((0, 0), 0), (256, 256))
        self.assertEqual(proj.xyz((-180, -85, 180, 85), 1), (0, 0, 1, 1))

    def test_invalid_sizes(self):
        for size in [-1, -256, 2.5, 256.0, True, "256"]:
            with self.assertRaises(InvalidTileSize):
                Projection(size)

    def test_invalid_tile_size_is_value_error(self):
        with self.assertRaises(ValueError):
            Projection(-1)

    def test_repr(self):
        self.assertEqual(repr(Projection(512)), "Projection(size=512)")
