from unittest import TestCase

import numpy as np

from mercatortiles.projection import Projection
from mercatortiles.utils.constants import MAX_EXTENT
from mercatortiles.utils.exceptions import InvalidArgument
from mercatortiles.utils.crs import Srs
from mercatortiles.utils.geo import (
    get_transformer,
    latlon_to_xy,
    transform_coords,
    xy_to_latlon,
)

POINTS = [(-179.5, -85), (-74.006, 40.7128), (0, 0), (12.5, -45.25), (151.2, -33.86)]


class TestPyprojAgreement(TestCase):
    """The closed form projection should agree with PROJ's EPSG:3857"""

    def setUp(self):
        self.proj = Projection()

    def test_forward_matches_pyproj(self):
        for lon, lat in POINTS:
            x, y = self.proj.forward((lon, lat))
            px, py = latlon_to_xy(lat, lon)

            self.assertAlmostEqual(x, px, delta=1e-3)
            self.assertAlmostEqual(y, py, delta=1e-3)

    def test_inverse_matches_pyproj(self):
        for lon, lat in POINTS:
            x, y = latlon_to_xy(lat, lon)
            got_lon, got_lat = self.proj.inverse((x, y))
            want_lat, want_lon = xy_to_latlon(x, y)

            self.assertAlmostEqual(got_lon, want_lon, places=7)
            self.assertAlmostEqual(got_lat, want_lat, places=7)

    def test_transform_coords_matches_forward_array(self):
        got = transform_coords(POINTS, "WGS84", "900913")

        np.testing.assert_allclose(got, self.proj.forward_array(POINTS), atol=1e-3)

    def test_transform_coords_round_trip(self):
        xys = transform_coords(POINTS, Srs.WGS84, "EPSG:3857")
        got = transform_coords(xys, "EPSG:3857", "")

        np.testing.assert_allclose(got, np.array(POINTS, dtype=float), atol=1e-9)

    def test_transform_coords_identity(self):
        got = transform_coords(POINTS, "WGS84", "4326")

        np.testing.assert_allclose(got, np.array(POINTS, dtype=float))

    def test_transform_coords_bad_input(self):
        with self.assertRaises(InvalidArgument):
            transform_coords([1, 2], "WGS84", "900913")
        with self.assertRaises(InvalidArgument):
            transform_coords(POINTS, "WGS84", "EPSG:2263")

    def test_transformers_are_reused(self):
        a = get_transformer("900913", "WGS84")
        b = get_transformer(Srs.WEB_MERCATOR, "EPSG:4326")

        self.assertIs(a, b)


class TestArrays(TestCase):
    def setUp(self):
        self.proj = Projection()

    def test_forward_array_matches_forward(self):
        lonlats = POINTS + [(-240, -90), (240, 90), (0, 120)]
        got = self.proj.forward_array(lonlats)

        want = np.array([self.proj.forward(p) for p in lonlats])
        np.testing.assert_allclose(got, want, rtol=1e-12, atol=1e-6)

    def test_forward_array_saturates(self):
        got = self.proj.forward_array([[-240, -90], [240, 90]])

        np.testing.assert_array_equal(
            got, [[-MAX_EXTENT, -MAX_EXTENT], [MAX_EXTENT, MAX_EXTENT]]
        )

    def test_inverse_array_matches_inverse(self):
        xys = [self.proj.forward(p) for p in POINTS] + [(0, 1e12), (0, -1e12)]
        got = self.proj.inverse_array(xys)

        want = np.array([self.proj.inverse(p) for p in xys])
        np.testing.assert_allclose(got, want, rtol=1e-12, atol=1e-9)

    def test_array_round_trip(self):
        lonlats = np.array(POINTS, dtype=float)

        got = self.proj.inverse_array(self.proj.forward_array(lonlats))

        np.testing.assert_allclose(got, lonlats, atol=1e-9)

    def test_bad_shape(self):
        with self.assertRaises(InvalidArgument):
            self.proj.forward_array([1, 2])
        with self.assertRaises(InvalidArgument):
            self.proj.inverse_array([[1, 2, 3]])
