"""Geometry encodings: WKT, EWKT, WKB and EWKB readers and writers on top of shapely.

Every reader returns a shapely geometry that carries its SRID (0 when the
input had none). Coordinates follow the x = longitude, y = latitude
convention.
"""

from __future__ import annotations

import re
from decimal import Decimal

import shapely
from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry

REGEXP_WKB_HEX = re.compile(r"^[A-Fa-f0-9\s]+$")
REGEXP_EWKT = re.compile(r"^\s*SRID=(?P<srid>-?\d+|default)\s*;\s*(?P<wkt>.+)$", re.DOTALL | re.IGNORECASE)

_WHITESPACE = re.compile(r"\s+")


class GeometryParseError(ValueError):
    """Raised when a value cannot be read as any supported geometry encoding."""


def read_geometry(value: str | bytes | BaseGeometry, default_srid: int | None = None) -> BaseGeometry:
    """Read a geometry from WKT, EWKT, hex or binary WKB/EWKB, or a shapely geometry.

    ``SRID=default`` in EWKT, and inputs with no SRID at all, take
    ``default_srid`` when one is given.
    """
    if isinstance(value, BaseGeometry):
        geom = value
    elif isinstance(value, (bytes, bytearray, memoryview)):
        geom = _from_wkb(bytes(value))
    elif isinstance(value, str):
        geom = _read_text(value, default_srid)
    else:
        raise GeometryParseError(f"cannot read a geometry from {type(value).__name__}")

    if default_srid is not None and not shapely.get_srid(geom):
        geom = shapely.set_srid(geom, default_srid)
    return geom


def _read_text(value: str, default_srid: int | None) -> BaseGeometry:
    if REGEXP_WKB_HEX.match(value):
        return _from_wkb(_WHITESPACE.sub("", value))

    match = REGEXP_EWKT.match(value)
    if match:
        geom = _from_wkt(match.group("wkt"))
        srid = match.group("srid")
        if srid.lower() == "default":
            return shapely.set_srid(geom, default_srid or 0)
        return shapely.set_srid(geom, int(srid))

    return _from_wkt(value)


def _from_wkt(text: str) -> BaseGeometry:
    try:
        return shapely.from_wkt(text.strip())
    except GEOSException as exc:
        raise GeometryParseError(f"invalid WKT: {text!r}") from exc


def _from_wkb(data: str | bytes) -> BaseGeometry:
    # shapely reads str input as hex and honours the EWKB SRID flag
    try:
        return shapely.from_wkb(data)
    except GEOSException as exc:
        raise GeometryParseError("invalid WKB") from exc


def srid(geom: BaseGeometry) -> int:
    return int(shapely.get_srid(geom))


def to_wkt(geom: BaseGeometry) -> str:
    return shapely.to_wkt(geom, trim=True)


def to_ewkt(geom: BaseGeometry) -> str:
    return f"SRID={srid(geom)}; {to_wkt(geom)}"


def to_wkb(geom: BaseGeometry) -> bytes:
    return shapely.to_wkb(geom, byte_order=1, include_srid=False)


def to_wkb_hex(geom: BaseGeometry) -> str:
    return shapely.to_wkb(geom, hex=True, byte_order=1, include_srid=False).upper()


def to_ewkb(geom: BaseGeometry) -> bytes:
    return shapely.to_wkb(geom, byte_order=1, include_srid=True)


def to_ewkb_hex(geom: BaseGeometry) -> str:
    return shapely.to_wkb(geom, hex=True, byte_order=1, include_srid=True).upper()


def lat(point: BaseGeometry) -> float:
    return point.y


def lng(point: BaseGeometry) -> float:
    return point.x


def _number(value: float) -> str:
    """Render 10.0 as '10', 10.01 as '10.01' and 1e-05 as '0.00001'."""
    if float(value).is_integer():
        return str(int(value))
    # Shortest round-tripping digits, never in exponent form
    return format(Decimal(repr(float(value))), "f")


def to_g_lat_lng(point: BaseGeometry) -> str:
    """Point in Google Maps LatLng.toString() form, e.g. '(10.01, 10)'."""
    return f"({_number(lat(point))}, {_number(lng(point))})"


def to_g_lat_lng_url_value(point: BaseGeometry) -> str:
    """Point as a lat,lng URL parameter, e.g. '10.01,10'."""
    return f"{_number(lat(point))},{_number(lng(point))}"


def _corners(geom: BaseGeometry) -> tuple[float, float, float, float]:
    min_x, min_y, max_x, max_y = geom.bounds
    return min_y, min_x, max_y, max_x


def to_g_lat_lng_bounds(geom: BaseGeometry) -> str:
    """Envelope in LatLngBounds.toString() form: '((sw_lat, sw_lng), (ne_lat, ne_lng))'."""
    sw_lat, sw_lng, ne_lat, ne_lng = _corners(geom)
    return f"(({_number(sw_lat)}, {_number(sw_lng)}), ({_number(ne_lat)}, {_number(ne_lng)}))"


def to_g_lat_lng_bounds_url_value(geom: BaseGeometry) -> str:
    return ",".join(_number(v) for v in _corners(geom))
