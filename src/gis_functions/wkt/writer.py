"""Canonical geometry text writer."""

from __future__ import annotations

import math
from decimal import Decimal

from gis_functions.geometry import (
    BaseCollection,
    Coordinate,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    dimension_tag,
)


def format_ordinate(value: float) -> str:
    """Shortest round-trip decimal text, never in exponent form.

    ``10.0`` -> ``10``, ``0.25`` -> ``0.25``, ``1e20`` -> ``100000000000000000000``.
    NaN and infinities have no geometry text and raise ValueError.
    """
    if not math.isfinite(value):
        raise ValueError(f"cannot write non-finite ordinate {value!r}")
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _coordinate(coord: Coordinate) -> str:
    return " ".join(format_ordinate(v) for v in coord if v is not None)


def _coordinates(coords) -> str:
    return "(" + ", ".join(_coordinate(c) for c in coords) + ")"


def _tagged(kind: str, tag: str, body: str) -> str:
    return f"{kind} {tag} {body}" if tag else f"{kind} {body}"


def _first_tag(geometry: Geometry) -> str:
    for coord in geometry.coordinates():
        return dimension_tag(coord)
    return ""


def _polygon_body(polygon: Polygon) -> str:
    return _items(_coordinates(ring) for ring in polygon.rings)


def _point_body(point: Point) -> str:
    return "(" + _coordinate(point.coordinate) + ")"


def _items(parts) -> str:
    return "(" + ", ".join(parts) + ")"


def write_wkt(geometry: Geometry) -> str:
    """Render ``geometry`` as canonical text.

    Upper-case keyword, one space between keyword, dimension tag and body,
    ``", "`` between list items. Collections carry no dimension tag of their
    own; each member is written with its own.
    """
    kind = geometry.kind
    # EMPTY only when there are no members; empty members are written one by one
    vacant = not geometry.members if isinstance(geometry, BaseCollection) else geometry.is_empty
    if vacant:
        return f"{kind} EMPTY"

    if isinstance(geometry, GeometryCollection):
        return f"{kind} " + _items(write_wkt(g) for g in geometry.geometries)

    tag = _first_tag(geometry)
    if isinstance(geometry, Point):
        body = _point_body(geometry)
    elif isinstance(geometry, LineString):
        body = _coordinates(geometry.coords)
    elif isinstance(geometry, Polygon):
        body = _polygon_body(geometry)
    elif isinstance(geometry, MultiPoint):
        body = _items("EMPTY" if p.is_empty else _point_body(p) for p in geometry.points)
    elif isinstance(geometry, MultiLineString):
        body = _items("EMPTY" if line.is_empty else _coordinates(line.coords) for line in geometry.lines)
    elif isinstance(geometry, MultiPolygon):
        body = _items("EMPTY" if p.is_empty else _polygon_body(p) for p in geometry.polygons)
    else:
        raise TypeError(f"cannot write {type(geometry).__name__} as geometry text")
    return _tagged(kind, tag, body)
