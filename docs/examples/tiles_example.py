"""
# Tiles Example

An example of using a Projection to move between coordinates, pixels and map tiles
"""


def main():
    """
    First, we build a projection.
    The only parameter is the tile size in pixels, which defaults to the 256 pixel tiles most web maps use.
    """

    from mercatortiles.projection import Projection

    proj = Projection()

    """
    Let's find where New York City lands on the map at zoom level 12.
    Coordinates are always given as (longitude, latitude) pairs.
    An integer zoom rounds the result to the nearest whole pixel:
    """

    nyc = (-74.0060, 40.7128)

    px = proj.to_pixel(nyc, 12)
    print(px)

    """
    Passing a float zoom takes the continuous code path, which is handy for maps that zoom smoothly between levels.
    Here the pixel coordinate is not rounded:
    """

    print(proj.to_pixel(nyc, 12.5))

    """
    Going the other way, `to_lonlat` converts a pixel back into a longitude/latitude pair.
    Because the pixel was rounded we only get back to within a pixel's worth of the original:
    """

    print(proj.to_lonlat(px, 12))

    """
    Web mercator meters (EPSG:900913, also known as EPSG:3857) are available through `forward` and `inverse`.
    Values past the edge of the projection, like the poles, saturate at the maximum extent rather than going to infinity:
    """

    print(proj.forward(nyc))
    print(proj.forward((0, 90)))

    """
    Now for tiles. The tile containing our pixel is just the pixel divided by the tile size,
    but usually we want to go from a bounding box to the range of tiles that cover it:
    """

    manhattan = (-74.03, 40.69, -73.90, 40.88)

    bounds = proj.xyz(manhattan, 12)
    print(bounds, bounds.count())

    for tile in bounds.tiles(12):
        print(tile.to_string(), proj.bbox(tile.x, tile.y, tile.z))

    """
    TMS tile servers number rows from the bottom of the map instead of the top.
    Pass `tms_style=True` to flip the rows, and `srs="900913"` to work in web mercator meters instead of degrees:
    """

    print(proj.xyz(manhattan, 12, tms_style=True))
    print(proj.bbox(0, 0, 1, tms_style=True, srs="900913"))

    """
    Lastly, a tile can be turned into a shapely polygon for spatial operations:
    """

    poly = proj.tile_polygon(1205, 1539, 12)
    print(poly.wkt)


if __name__ == "__main__":
    main()
