"""Assertion helpers for spatial test suites."""

from __future__ import annotations

import structlog
from shapely.geometry import Point, Polygon
from shapely.geometry.base import BaseGeometry

from spatialrecord.geometry import lat, lng
from spatialrecord.logging import debug_logging_enabled

SAMPLE_POLYGON_RING = [
    [0, 0],
    [1, 1],
    [2.5, 2.5],
    [5, 5],
    [0, 0],
]


def assert_saneness_of_point(point: BaseGeometry) -> None:
    """The geometry is the sample point POINT(10 10.01)."""
    assert isinstance(point, Point), f"expected a Point, got {point.geom_type}"
    assert lat(point) == 10.01
    assert lng(point) == 10


def assert_saneness_of_polygon(polygon: BaseGeometry) -> None:
    """The geometry is the sample polygon with its five-vertex exterior ring."""
    assert isinstance(polygon, Polygon), f"expected a Polygon, got {polygon.geom_type}"
    assert [list(coord) for coord in polygon.exterior.coords] == SAMPLE_POLYGON_RING


def log_test_start(nodeid: str) -> None:
    if not debug_logging_enabled():
        return
    structlog.get_logger("spatialrecord").debug(f"Beginning tests for {nodeid}")
