"""Geometry text (WKT) codec."""

from gis_functions.wkt.reader import WKTReader, parse_wkt
from gis_functions.wkt.writer import format_ordinate, write_wkt

__all__ = ["WKTReader", "parse_wkt", "write_wkt", "format_ordinate"]
