"""In-memory geometry values produced by the WKT reader."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Union


class Coordinate(NamedTuple):
    """A single position. ``z`` and ``m`` are present only when tagged."""

    x: float
    y: float
    z: Optional[float] = None
    m: Optional[float] = None


def dimension_tag(coord: Coordinate) -> str:
    """Return the WKT dimension tag for a coordinate: "", "Z", "M" or "ZM"."""
    return ("Z" if coord.z is not None else "") + ("M" if coord.m is not None else "")


@dataclass(frozen=True)
class Point:
    """A point. ``Point()`` is the empty point."""

    kind = "POINT"

    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    m: Optional[float] = None

    @classmethod
    def from_coordinate(cls, coord: Coordinate) -> Point:
        return cls(coord.x, coord.y, coord.z, coord.m)

    @property
    def is_empty(self) -> bool:
        return self.x is None

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if self.is_empty:
            return None
        return Coordinate(self.x, self.y, self.z, self.m)

    def coordinates(self) -> Iterator[Coordinate]:
        if not self.is_empty:
            yield self.coordinate


@dataclass(frozen=True)
class LineString:
    kind = "LINESTRING"

    coords: tuple[Coordinate, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.coords

    def coordinates(self) -> Iterator[Coordinate]:
        yield from self.coords


@dataclass(frozen=True)
class Polygon:
    """Shell first, holes after. Every ring is closed."""

    kind = "POLYGON"

    rings: tuple[tuple[Coordinate, ...], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rings

    @property
    def shell(self) -> tuple[Coordinate, ...]:
        return self.rings[0] if self.rings else ()

    @property
    def holes(self) -> tuple[tuple[Coordinate, ...], ...]:
        return self.rings[1:]

    def coordinates(self) -> Iterator[Coordinate]:
        for ring in self.rings:
            yield from ring


class BaseCollection(abc.ABC):
    """Shared behaviour of the multi-geometries and GEOMETRYCOLLECTION."""

    @property
    @abc.abstractmethod
    def members(self) -> tuple:
        """Member geometries, in order."""

    @property
    def is_empty(self) -> bool:
        return all(member.is_empty for member in self.members)

    def coordinates(self) -> Iterator[Coordinate]:
        for member in self.members:
            yield from member.coordinates()


@dataclass(frozen=True)
class MultiPoint(BaseCollection):
    kind = "MULTIPOINT"

    points: tuple[Point, ...] = ()

    @property
    def members(self) -> tuple[Point, ...]:
        return self.points


@dataclass(frozen=True)
class MultiLineString(BaseCollection):
    kind = "MULTILINESTRING"

    lines: tuple[LineString, ...] = ()

    @property
    def members(self) -> tuple[LineString, ...]:
        return self.lines


@dataclass(frozen=True)
class MultiPolygon(BaseCollection):
    kind = "MULTIPOLYGON"

    polygons: tuple[Polygon, ...] = ()

    @property
    def members(self) -> tuple[Polygon, ...]:
        return self.polygons


@dataclass(frozen=True)
class GeometryCollection(BaseCollection):
    kind = "GEOMETRYCOLLECTION"

    geometries: tuple[Geometry, ...] = ()

    @property
    def members(self) -> tuple[Geometry, ...]:
        return self.geometries


Geometry = Union[
    Point,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
]
