"""Tests for geometry encodings and the literal constants."""

from __future__ import annotations

import pytest
import shapely
from shapely.geometry import GeometryCollection, LineString, Point, Polygon

from spatialrecord import literals
from spatialrecord.geometry import (
    GeometryParseError,
    lat,
    lng,
    read_geometry,
    srid,
    to_ewkb,
    to_ewkb_hex,
    to_ewkt,
    to_g_lat_lng,
    to_g_lat_lng_bounds,
    to_g_lat_lng_bounds_url_value,
    to_g_lat_lng_url_value,
    to_wkb,
    to_wkb_hex,
    to_wkt,
)
from spatialrecord.testing import assert_saneness_of_point, assert_saneness_of_polygon


class TestPointEncodings:
    @pytest.mark.parametrize(
        "value",
        [
            literals.POINT_WKT,
            literals.POINT_EWKT,
            literals.POINT_WKB,
            literals.POINT_WKB_BIN,
            literals.POINT_EWKB,
            literals.POINT_EWKB_BIN,
        ],
    )
    def test_every_encoding_is_the_sample_point(self, value):
        assert_saneness_of_point(read_geometry(value))

    def test_ewkt_srid(self):
        assert srid(read_geometry(literals.POINT_EWKT)) == 4326

    def test_ewkb_srid(self):
        assert srid(read_geometry(literals.POINT_EWKB)) == 4326
        assert srid(read_geometry(literals.POINT_EWKB_BIN)) == 4326

    def test_wkt_has_no_srid(self):
        assert srid(read_geometry(literals.POINT_WKT)) == 0

    def test_ewkt_with_default_srid(self):
        point = read_geometry(literals.POINT_EWKT_WITH_DEFAULT, default_srid=4269)
        assert_saneness_of_point(point)
        assert srid(point) == 4269

    def test_default_srid_does_not_override_explicit(self):
        assert srid(read_geometry(literals.POINT_EWKT, default_srid=4269)) == 4326

    def test_lat_lng(self):
        point = read_geometry(literals.POINT_WKT)
        assert lat(point) == 10.01
        assert lng(point) == 10

    def test_lowercase_hex(self):
        assert_saneness_of_point(read_geometry(literals.POINT_WKB.lower()))


class TestPolygonEncodings:
    @pytest.mark.parametrize(
        "value",
        [
            literals.POLYGON_WKT,
            literals.POLYGON_EWKT,
            literals.POLYGON_WKB,
            literals.POLYGON_WKB_BIN,
            literals.POLYGON_EWKB,
            literals.POLYGON_EWKB_BIN,
        ],
    )
    def test_every_encoding_is_the_sample_polygon(self, value):
        assert_saneness_of_polygon(read_geometry(value))

    def test_hex_with_whitespace(self):
        spaced = " ".join(literals.POLYGON_WKB[i : i + 16] for i in range(0, len(literals.POLYGON_WKB), 16))
        assert_saneness_of_polygon(read_geometry(spaced))

    def test_interior_ring(self):
        polygon = read_geometry(literals.POLYGON_WITH_INTERIOR_RING)
        assert isinstance(polygon, Polygon)
        assert len(polygon.interiors) == 1
        assert list(polygon.interiors[0].coords)[0] == (4, 4)


class TestOtherGeometries:
    def test_linestring(self):
        line = read_geometry(literals.LINESTRING_WKT)
        assert isinstance(line, LineString)
        assert list(line.coords) == [(0, 0), (5, 5), (5, 10), (10, 10)]

    def test_multiline_geometry_collection(self):
        collection = read_geometry(literals.GEOMETRYCOLLECTION_WKT)
        assert isinstance(collection, GeometryCollection)
        assert [g.geom_type for g in collection.geoms] == [
            "MultiPolygon",
            "Polygon",
            "Polygon",
            "MultiLineString",
            "LineString",
            "MultiPoint",
            "Point",
        ]

    def test_shapely_geometry_passthrough(self):
        point = Point(10, 10.01)
        assert read_geometry(point) is point

    def test_shapely_geometry_gets_default_srid(self):
        assert srid(read_geometry(Point(1, 2), default_srid=4326)) == 4326


class TestInvalidInput:
    def test_garbage_wkt(self):
        with pytest.raises(GeometryParseError):
            read_geometry("POINT(banana)")

    def test_truncated_wkb(self):
        with pytest.raises(GeometryParseError):
            read_geometry(literals.POINT_WKB[:10])

    def test_unsupported_type(self):
        with pytest.raises(GeometryParseError):
            read_geometry(42)


class TestWriters:
    def test_wkb_hex_matches_literal(self):
        assert to_wkb_hex(read_geometry(literals.POINT_EWKT)) == literals.POINT_WKB
        assert to_wkb_hex(read_geometry(literals.POLYGON_WKT)) == literals.POLYGON_WKB

    def test_ewkb_hex_matches_literal(self):
        assert to_ewkb_hex(read_geometry(literals.POINT_EWKT)) == literals.POINT_EWKB
        assert to_ewkb_hex(read_geometry(literals.POLYGON_EWKT)) == literals.POLYGON_EWKB

    def test_binary_matches_literal(self):
        point = read_geometry(literals.POINT_EWKT)
        assert to_wkb(point) == literals.POINT_WKB_BIN
        assert to_ewkb(point) == literals.POINT_EWKB_BIN

    def test_wkt(self):
        assert to_wkt(read_geometry(literals.POINT_WKB)) == "POINT (10 10.01)"

    def test_ewkt(self):
        assert to_ewkt(read_geometry(literals.POINT_EWKB)) == "SRID=4326; POINT (10 10.01)"

    def test_ewkt_reads_back(self):
        point = read_geometry(to_ewkt(read_geometry(literals.POINT_EWKB)))
        assert_saneness_of_point(point)
        assert srid(point) == 4326


class TestLatLngStrings:
    def test_point(self):
        point = read_geometry(literals.POINT_WKT)
        assert to_g_lat_lng(point) == literals.POINT_G_LAT_LNG
        assert to_g_lat_lng_url_value(point) == literals.POINT_G_LAT_LNG_URL_VALUE

    def test_bounds(self):
        line = shapely.from_wkt("LINESTRING (0.1 0.1, 5.2 5.2)")
        assert to_g_lat_lng_bounds(line) == literals.BOUNDS_G_LAT_LNG
        assert to_g_lat_lng_bounds_url_value(line) == literals.BOUNDS_G_LAT_LNG_URL_VALUE

    def test_small_values_not_in_exponent_form(self):
        point = Point(0.00002, 0.00001)
        assert to_g_lat_lng(point) == "(0.00001, 0.00002)"
        assert to_g_lat_lng_url_value(point) == "0.00001,0.00002"

    def test_bounds_order_is_south_west_then_north_east(self):
        polygon = read_geometry("POLYGON((1 2, 3 2, 3 4, 1 4, 1 2))")
        assert to_g_lat_lng_bounds(polygon) == "((2, 1), (4, 3))"


class TestHexRegexp:
    def test_matches_literals(self):
        assert literals.REGEXP_WKB_HEX.fullmatch(literals.POINT_WKB)
        assert literals.REGEXP_WKB_HEX.fullmatch(literals.POLYGON_EWKB)
        assert not literals.REGEXP_WKB_HEX.fullmatch(literals.POINT_WKT)
