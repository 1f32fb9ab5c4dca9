"""Geometric operations: planar distance and point construction."""

from __future__ import annotations

import math

from shapely import geometry as shapely_geometry

from gis_functions.geometry import (
    BaseCollection,
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

LONGITUDE_RANGE = (-180.0, 180.0)
LATITUDE_RANGE = (-90.0, 90.0)


def check_longitude(lon: float) -> bool:
    """True when ``lon`` lies in [-180, 180] (inclusive)."""
    return LONGITUDE_RANGE[0] <= lon <= LONGITUDE_RANGE[1]


def check_latitude(lat: float) -> bool:
    """True when ``lat`` lies in [-90, 90] (inclusive)."""
    return LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1]


def make_point(lon: float, lat: float) -> Point:
    """Point with ``x`` = longitude and ``y`` = latitude. No range check here."""
    return Point(float(lon), float(lat))


def _xy(coords) -> list[tuple[float, float]]:
    return [(c.x, c.y) for c in coords]


def to_shapely(geometry: Geometry):
    """Convert a geometry value to its Shapely equivalent (X/Y only).

    Empty members of collections are dropped; they never affect distance.
    """
    if isinstance(geometry, Point):
        if geometry.is_empty:
            return shapely_geometry.Point()
        return shapely_geometry.Point(geometry.x, geometry.y)
    if isinstance(geometry, LineString):
        return shapely_geometry.LineString(_xy(geometry.coords))
    if isinstance(geometry, Polygon):
        if geometry.is_empty:
            return shapely_geometry.Polygon()
        return shapely_geometry.Polygon(_xy(geometry.shell), [_xy(h) for h in geometry.holes])

    if not isinstance(geometry, BaseCollection):
        raise TypeError(f"unsupported geometry {type(geometry).__name__}")

    members = [to_shapely(m) for m in geometry.members if not m.is_empty]
    if isinstance(geometry, MultiPoint):
        return shapely_geometry.MultiPoint(members)
    if isinstance(geometry, MultiLineString):
        return shapely_geometry.MultiLineString(members)
    if isinstance(geometry, MultiPolygon):
        return shapely_geometry.MultiPolygon(members)
    return shapely_geometry.GeometryCollection(members)


def distance(a: Geometry, b: Geometry) -> float:
    """Minimum planar Euclidean distance between two geometries.

    Units are those of the input coordinates; no reference system is
    applied. Returns 0.0 when either geometry is empty. The result is
    exactly symmetric in its arguments.
    """
    if a.is_empty or b.is_empty:
        return 0.0

    if isinstance(a, Point) and isinstance(b, Point):
        return math.hypot(a.x - b.x, a.y - b.y)

    sa, sb = to_shapely(a), to_shapely(b)
    return min(sa.distance(sb), sb.distance(sa))
