"""Tests for the geometry text reader and writer."""

from __future__ import annotations

import math

import pytest

from gis_functions.errors import MalformedGeometryText
from gis_functions.geometry import (
    Coordinate,
    GeometryCollection,
    LineString,
    MultiPoint,
    Point,
    Polygon,
)
from gis_functions.wkt import format_ordinate, parse_wkt, write_wkt


# ── Reader tests ─────────────────────────────────────────────────────────


class TestParsePoint:
    def test_simple_point(self):
        assert parse_wkt("POINT (1 2)") == Point(1.0, 2.0)

    def test_keyword_is_case_insensitive(self):
        assert parse_wkt("point(1 2)") == Point(1.0, 2.0)
        assert parse_wkt("Point (1 2)") == Point(1.0, 2.0)

    def test_signed_and_exponent_numbers(self):
        assert parse_wkt("  POINT  ( -1.5   +2e1 ) ") == Point(-1.5, 20.0)

    def test_leading_and_trailing_dot(self):
        assert parse_wkt("POINT (.5 3.)") == Point(0.5, 3.0)

    def test_empty_point(self):
        point = parse_wkt("POINT EMPTY")
        assert point == Point()
        assert point.is_empty

    def test_z_point(self):
        assert parse_wkt("POINT Z (1 2 3)") == Point(1.0, 2.0, z=3.0)

    def test_m_point(self):
        assert parse_wkt("POINT M (1 2 3)") == Point(1.0, 2.0, m=3.0)

    def test_zm_point(self):
        assert parse_wkt("point zm (1 2 3 4)") == Point(1.0, 2.0, 3.0, 4.0)

    def test_no_lon_lat_range_at_parse_time(self):
        assert parse_wkt("POINT (500 -300)") == Point(500.0, -300.0)


class TestParseMalformed:
    @pytest.mark.parametrize("text", [
        "POINT 1 2",                # missing parentheses
        "POINT (1 2 3)",            # third ordinate without Z tag
        "POINT Z (1 2)",            # Z tag with only two ordinates
        "POINT (1)",
        "POINT (1 2",
        "POINT (1 2))",
        "POINT (1, 2)",
        "POINT (a b)",
        "POINT (NaN 1)",
        "POINT (1e400 0)",
        "POINT (1 2) POINT (3 4)",
        "CIRCLE (1 2)",
        "(1 2)",
        "",
        "   ",
        "POINT (1 2) #",
        "POINT (1-2)",              # ordinates not separated by whitespace
        "POINT (1+2)",
        "POINT (1.2.3)",
        "POINT (1e 2)",
        "POINT (\u0661 \u0662)",    # non-ASCII digits
        "POINT (1 2e5x)",
        "LINESTRING (1 2)",
        "POLYGON ((0 0, 1 1, 0 0))",
        "POLYGON ((0 0, 1 0, 1 1, 0 1))",
        "MULTIPOINT ((1 2), (3 4 5))",
    ])
    def test_rejected(self, text):
        with pytest.raises(MalformedGeometryText):
            parse_wkt(text)

    def test_error_carries_offset(self):
        with pytest.raises(MalformedGeometryText) as info:
            parse_wkt("POINT 1 2")
        assert info.value.offset == 6
        assert info.value.text == "POINT 1 2"
        assert "'('" in info.value.reason

    def test_error_at_end_of_input(self):
        with pytest.raises(MalformedGeometryText) as info:
            parse_wkt("POINT (1 2")
        assert info.value.offset == len("POINT (1 2")

    def test_legacy_third_ordinate_message(self):
        with pytest.raises(MalformedGeometryText) as info:
            parse_wkt("POINT (1 2 3)")
        assert "too many ordinates" in info.value.reason


class TestParseOtherKinds:
    def test_linestring(self):
        line = parse_wkt("LINESTRING (0 0, 1 1, 2 0)")
        assert line == LineString((Coordinate(0, 0), Coordinate(1, 1), Coordinate(2, 0)))

    def test_polygon_with_hole(self):
        polygon = parse_wkt("POLYGON ((0 0, 4 0, 4 4, 0 4, 0 0), (1 1, 2 1, 2 2, 1 1))")
        assert isinstance(polygon, Polygon)
        assert len(polygon.shell) == 5
        assert len(polygon.holes) == 1

    def test_multipoint_bare_form_matches_nested_form(self):
        assert parse_wkt("MULTIPOINT (1 2, 3 4)") == parse_wkt("MULTIPOINT ((1 2), (3 4))")

    def test_multipoint_with_empty_member(self):
        multi = parse_wkt("MULTIPOINT (EMPTY, (1 2))")
        assert multi == MultiPoint((Point(), Point(1.0, 2.0)))
        assert not multi.is_empty

    def test_collection(self):
        collection = parse_wkt("GEOMETRYCOLLECTION (POINT (1 2), LINESTRING (0 0, 1 1))")
        assert isinstance(collection, GeometryCollection)
        assert [g.kind for g in collection.geometries] == ["POINT", "LINESTRING"]

    def test_collection_tag_applies_to_untagged_members(self):
        collection = parse_wkt("GEOMETRYCOLLECTION Z (POINT (1 2 3))")
        assert collection.geometries[0] == Point(1.0, 2.0, z=3.0)

    def test_empty_collection(self):
        assert parse_wkt("GEOMETRYCOLLECTION EMPTY").is_empty


# ── Writer tests ─────────────────────────────────────────────────────────


class TestFormatOrdinate:
    @pytest.mark.parametrize("value, expected", [
        (10.0, "10"),
        (100.0, "100"),
        (0.5, "0.5"),
        (-1.25, "-1.25"),
        (0.1, "0.1"),
        (1e20, "100000000000000000000"),
        (1e-7, "0.0000001"),
        (-0.0, "0"),
    ])
    def test_format(self, value, expected):
        assert format_ordinate(value) == expected

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValueError):
            format_ordinate(value)


class TestWrite:
    def test_point(self):
        assert write_wkt(Point(10.0, 20.0)) == "POINT (10 20)"

    def test_canonicalises_input(self):
        assert write_wkt(parse_wkt("point(1.50   2)")) == "POINT (1.5 2)"

    def test_z_tag(self):
        assert write_wkt(parse_wkt("linestring z (0 0 1, 1 1 2)")) == "LINESTRING Z (0 0 1, 1 1 2)"

    def test_empty(self):
        assert write_wkt(Point()) == "POINT EMPTY"
        assert write_wkt(Polygon()) == "POLYGON EMPTY"

    def test_multipoint_written_nested(self):
        assert write_wkt(parse_wkt("MULTIPOINT (1 2, 3 4)")) == "MULTIPOINT ((1 2), (3 4))"

    def test_polygon(self):
        text = "POLYGON ((0 0, 4 0, 4 4, 0 4, 0 0), (1 1, 2 1, 2 2, 1 1))"
        assert write_wkt(parse_wkt(text)) == text

    def test_collection_of_empty_members_is_not_empty_text(self):
        assert write_wkt(parse_wkt("MULTIPOINT (EMPTY)")) == "MULTIPOINT (EMPTY)"

    def test_collection(self):
        text = "GEOMETRYCOLLECTION (POINT (1 2), MULTILINESTRING ((0 0, 1 1), EMPTY))"
        assert write_wkt(parse_wkt(text)) == text


# ── Round trip ───────────────────────────────────────────────────────────


ROUND_TRIP_TEXTS = [
    "POINT (1 2)",
    "point ( -0.000001 123456789.125 )",
    "POINT ZM (1 2 3 4)",
    "POINT EMPTY",
    "LINESTRING (0 0, 10 10, 20 0)",
    "POLYGON ((0 0, 4 0, 4 4, 0 0))",
    "MULTIPOINT (1 2, 3 4)",
    "MULTIPOLYGON (((0 0, 1 0, 1 1, 0 0)), EMPTY)",
    "GEOMETRYCOLLECTION Z (POINT (1 2 3), LINESTRING (0 0 0, 1 1 1))",
    "GEOMETRYCOLLECTION (POINT EMPTY)",
]


class TestRoundTrip:
    @pytest.mark.parametrize("text", ROUND_TRIP_TEXTS)
    def test_written_text_reads_back_equal(self, text):
        value = parse_wkt(text)
        assert parse_wkt(write_wkt(value)) == value
