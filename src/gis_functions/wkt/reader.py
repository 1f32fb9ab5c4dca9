"""Strict reader for geometry text (a restricted Well-Known Text grammar)."""

from __future__ import annotations

import math
import re
from typing import Callable, NamedTuple, NoReturn, Optional

from gis_functions.errors import MalformedGeometryText
from gis_functions.geometry import (
    Coordinate,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<number>[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?(?=[\s(),]|$))"
    r"|(?P<word>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<punct>[(),])"
    r"|(?P<bad>[^\s(),]+)"
    r")"
)

# Ordinates per coordinate for each dimension tag
_ORDINATES = {"": 2, "Z": 3, "M": 3, "ZM": 4}


class _Token(NamedTuple):
    kind: str       # "number", "word" or "punct"
    value: str
    offset: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while True:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            break
        pos = match.end()
        kind = match.lastgroup
        if kind == "bad":
            raise MalformedGeometryText(text, match.start(kind), f"invalid token {match.group(kind)!r}")
        tokens.append(_Token(kind, match.group(kind), match.start(kind)))
    return tokens


class WKTReader:
    """Parse geometry text into a :mod:`gis_functions.geometry` value.

    Every coordinate must carry exactly the ordinates its dimension tag
    announces; the relaxed syntax that guesses the dimension from the
    ordinate count (``POINT (1 2 3)``) is rejected. Empty members,
    ``EMPTY`` geometries and the bare ``MULTIPOINT (1 2, 3 4)`` form are
    accepted.
    """

    def parse(self, text: str) -> Geometry:
        text = str(text)
        self._text = text
        self._tokens = _tokenize(text)
        self._pos = 0

        geometry = self._geometry("")
        token = self._peek()
        if token is not None:
            self._fail(f"unexpected trailing input {token.value!r}", token)
        return geometry

    # ── token helpers ───────────────────────────────────────────────────

    def _peek(self) -> Optional[_Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self, expected: str) -> _Token:
        token = self._peek()
        if token is None:
            self._fail(f"expected {expected} but reached end of input")
        self._pos += 1
        return token

    def _fail(self, reason: str, token: Optional[_Token] = None) -> NoReturn:
        offset = token.offset if token is not None else len(self._text)
        raise MalformedGeometryText(self._text, offset, reason)

    def _punct(self, value: str) -> None:
        token = self._next(f"'{value}'")
        if token.kind != "punct" or token.value != value:
            self._fail(f"expected '{value}' but found {token.value!r}", token)

    def _at_punct(self, value: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "punct" and token.value == value

    def _at_word(self, *values: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "word" and token.value.upper() in values

    def _empty(self) -> bool:
        if self._at_word("EMPTY"):
            self._pos += 1
            return True
        return False

    # ── grammar ─────────────────────────────────────────────────────────

    def _geometry(self, default_dim: str) -> Geometry:
        token = self._next("geometry keyword")
        if token.kind != "word":
            self._fail(f"expected geometry keyword but found {token.value!r}", token)
        keyword = token.value.upper()
        read = self._READERS.get(keyword)
        if read is None:
            self._fail(f"unknown geometry type {token.value!r}", token)

        dim = default_dim
        if self._at_word("Z", "M", "ZM"):
            dim = self._next("dimension").value.upper()
        return read(self, dim)

    def _number(self) -> float:
        token = self._next("number")
        if token.kind != "number":
            self._fail(f"expected number but found {token.value!r}", token)
        value = float(token.value)
        if not math.isfinite(value):
            self._fail(f"number {token.value!r} is out of range", token)
        return value

    def _coordinate(self, dim: str) -> Coordinate:
        ordinates = [self._number() for _ in range(_ORDINATES[dim])]
        token = self._peek()
        if token is not None and token.kind == "number":
            self._fail(f"too many ordinates for dimension {dim or 'XY'}", token)
        if dim == "Z":
            return Coordinate(ordinates[0], ordinates[1], z=ordinates[2])
        if dim == "M":
            return Coordinate(ordinates[0], ordinates[1], m=ordinates[2])
        if dim == "ZM":
            return Coordinate(*ordinates)
        return Coordinate(ordinates[0], ordinates[1])

    def _list(self, item: Callable[[], object]) -> tuple:
        """``( item {, item} )``."""
        self._punct("(")
        items = [item()]
        while self._at_punct(","):
            self._pos += 1
            items.append(item())
        self._punct(")")
        return tuple(items)

    def _coordinates(self, dim: str) -> tuple[Coordinate, ...]:
        return self._list(lambda: self._coordinate(dim))

    def _line_body(self, dim: str) -> LineString:
        start = self._peek()
        coords = self._coordinates(dim)
        if len(coords) == 1:
            self._fail("a line needs at least 2 coordinates", start)
        return LineString(coords)

    def _ring(self, dim: str) -> tuple[Coordinate, ...]:
        start = self._peek()
        coords = self._coordinates(dim)
        if len(coords) < 4:
            self._fail(f"a ring needs at least 4 coordinates, found {len(coords)}", start)
        if coords[0][:2] != coords[-1][:2]:
            self._fail("ring is not closed", start)
        return coords

    def _polygon_body(self, dim: str) -> Polygon:
        return Polygon(self._list(lambda: self._ring(dim)))

    def _read_point(self, dim: str) -> Point:
        if self._empty():
            return Point()
        self._punct("(")
        coord = self._coordinate(dim)
        self._punct(")")
        return Point.from_coordinate(coord)

    def _read_linestring(self, dim: str) -> LineString:
        if self._empty():
            return LineString()
        return self._line_body(dim)

    def _read_polygon(self, dim: str) -> Polygon:
        if self._empty():
            return Polygon()
        return self._polygon_body(dim)

    def _read_multipoint(self, dim: str) -> MultiPoint:
        if self._empty():
            return MultiPoint()

        def member() -> Point:
            if self._empty():
                return Point()
            if self._at_punct("("):
                self._pos += 1
                coord = self._coordinate(dim)
                self._punct(")")
                return Point.from_coordinate(coord)
            # Bare "MULTIPOINT (1 2, 3 4)"
            return Point.from_coordinate(self._coordinate(dim))

        return MultiPoint(self._list(member))

    def _read_multilinestring(self, dim: str) -> MultiLineString:
        if self._empty():
            return MultiLineString()
        return MultiLineString(self._list(
            lambda: LineString() if self._empty() else self._line_body(dim)
        ))

    def _read_multipolygon(self, dim: str) -> MultiPolygon:
        if self._empty():
            return MultiPolygon()
        return MultiPolygon(self._list(
            lambda: Polygon() if self._empty() else self._polygon_body(dim)
        ))

    def _read_collection(self, dim: str) -> GeometryCollection:
        if self._empty():
            return GeometryCollection()
        return GeometryCollection(self._list(lambda: self._geometry(dim)))

    _READERS = {
        "POINT": _read_point,
        "LINESTRING": _read_linestring,
        "POLYGON": _read_polygon,
        "MULTIPOINT": _read_multipoint,
        "MULTILINESTRING": _read_multilinestring,
        "MULTIPOLYGON": _read_multipolygon,
        "GEOMETRYCOLLECTION": _read_collection,
    }


def parse_wkt(text: str) -> Geometry:
    """Parse geometry text. Raises :class:`MalformedGeometryText`."""
    return WKTReader().parse(text)
