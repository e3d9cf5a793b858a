class MercatorException(Exception):
    """
    Base class for every error raised by mercatortiles.
    """


class InvalidArgument(MercatorException, ValueError):
    """
    Raised when an argument has an unsupported type or shape.

    This covers zoom values that are neither an integer nor a float, integer zoom
    levels outside of the precomputed range, coordinate pairs and bounding boxes of
    the wrong length, and unknown spatial reference names.
    """


class InvalidTileSize(MercatorException, ValueError):
    """
    Raised when a Projection is built with a negative or non-integer tile size.
    """
