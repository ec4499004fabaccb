"""Geometry literals used as expected values in spatial tests.

The point and polygon constants are the same geometry in every encoding:
``POINT(10 10.01)`` and a five-vertex polygon ring, both in SRID 4326 where
an SRID is present.
"""

from __future__ import annotations

import re

REGEXP_WKB_HEX = re.compile(r"[A-Fa-f0-9\s]+")

POINT_WKT = "POINT(10 10.01)"
POINT_EWKT = "SRID=4326; POINT(10 10.01)"
POINT_EWKT_WITH_DEFAULT = "SRID=default; POINT(10 10.01)"
POINT_WKB = "0101000000000000000000244085EB51B81E052440"
POINT_WKB_BIN = b"\x01\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x24\x40\x85\xEB\x51\xB8\x1E\x05\x24\x40"
POINT_EWKB = "0101000020E6100000000000000000244085EB51B81E052440"
POINT_EWKB_BIN = b"\x01\x01\x00\x00\x20\xE6\x10\x00\x00\x00\x00\x00\x00\x00\x00\x24\x40\x85\xEB\x51\xB8\x1E\x05\x24\x40"
POINT_G_LAT_LNG = "(10.01, 10)"
POINT_G_LAT_LNG_URL_VALUE = "10.01,10"

POLYGON_WKT = "POLYGON((0 0, 1 1, 2.5 2.5, 5 5, 0 0))"
POLYGON_EWKT = "SRID=4326; POLYGON((0 0, 1 1, 2.5 2.5, 5 5, 0 0))"

POLYGON_WKB = re.sub(
    r"\s",
    "",
    """
    0103000000010000000500000000000000000000000000000000000000000000000000F
    03F000000000000F03F0000000000000440000000000000044000000000000014400000
    00000000144000000000000000000000000000000000
    """,
)

POLYGON_WKB_BIN = b"".join(
    [
        b"\x01\x03\x00\x00\x00\x01\x00\x00\x00\x05\x00\x00\x00\x00\x00\x00\x00\x00\x00",
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\xF0\x3F\x00",
        b"\x00\x00\x00\x00\x00\xF0\x3F\x00\x00\x00\x00\x00\x00\x04\x40\x00\x00\x00\x00",
        b"\x00\x00\x04\x40\x00\x00\x00\x00\x00\x00\x14\x40\x00\x00\x00\x00\x00\x00\x14",
        b"\x40\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00",
    ]
)

POLYGON_EWKB = re.sub(
    r"\s",
    "",
    """
    0103000020E610000001000000050000000000000000000000000000000000000000000
    0000000F03F000000000000F03F00000000000004400000000000000440000000000000
    1440000000000000144000000000000000000000000000000000
    """,
)

POLYGON_EWKB_BIN = b"".join(
    [
        b"\x01\x03\x00\x00\x20\xE6\x10\x00\x00\x01\x00\x00\x00\x05\x00\x00\x00",
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00",
        b"\x00\x00\x00\x00\x00\xF0\x3F\x00\x00\x00\x00\x00\x00\xF0\x3F\x00\x00",
        b"\x00\x00\x00\x00\x04\x40\x00\x00\x00\x00\x00\x00\x04\x40\x00\x00\x00",
        b"\x00\x00\x00\x14\x40\x00\x00\x00\x00\x00\x00\x14\x40\x00\x00\x00\x00",
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00",
    ]
)

POLYGON_WITH_INTERIOR_RING = "POLYGON((0 0, 5 0, 5 5, 0 5, 0 0),(4 4, 4 1, 1 1, 1 4, 4 4))"

LINESTRING_WKT = "LINESTRING (0 0, 5 5, 5 10, 10 10)"

GEOMETRYCOLLECTION_WKT = """GEOMETRYCOLLECTION (
    MULTIPOLYGON (
      ((0 0, 1 0, 1 1, 0 1, 0 0)),
      (
        (10 10, 10 14, 14 14, 14 10, 10 10),
        (11 11, 11 12, 12 12, 12 11, 11 11)
      )
    ),
    POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0)),
    POLYGON ((0 0, 5 0, 5 5, 0 5, 0 0), (4 4, 4 1, 1 1, 1 4, 4 4)),
    MULTILINESTRING ((0 0, 2 3), (10 10, 3 4)),
    LINESTRING (0 0, 2 3),
    MULTIPOINT ((0 0), (2 3)),
    POINT (9 0)
  )"""

BOUNDS_G_LAT_LNG = "((0.1, 0.1), (5.2, 5.2))"
BOUNDS_G_LAT_LNG_URL_VALUE = "0.1,0.1,5.2,5.2"
