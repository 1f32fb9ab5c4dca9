"""st_makepoint(lon, lat): geometry text of a point.

Constant arguments are range checked when the call is bound. Per-record
arguments are range checked on every evaluation unless
``FunctionConfig.validate_row_coordinates`` is off, in which case any
finite pair is accepted; infinite coordinates are always rejected.
"""

from __future__ import annotations

import logging
import math

from gis_functions.config import DEFAULT_CONFIG
from gis_functions.errors import CoordinateOutOfRange, OutOfRangeConstant
from gis_functions.functions.base import FunctionFactory, TextGeometryFunction
from gis_functions.geo import check_latitude, check_longitude, make_point
from gis_functions.wkt import write_wkt

logger = logging.getLogger(__name__)

SYMBOL = "st_makepoint"
SIGNATURE = SYMBOL + "(DD)"

LONGITUDE_MESSAGE = "longitude must be in [-180.0..180.0] range"
LATITUDE_MESSAGE = "latitude must be in [-90.0..90.0] range"


class MakePointFunction(TextGeometryFunction):
    symbol = SYMBOL

    def __init__(self, args, validate_coordinates: bool = True):
        self.validate_coordinates = validate_coordinates
        super().__init__(args)

    def _evaluate(self, record, operands):
        lon = operands[0].get_double(record)
        lat = operands[1].get_double(record)
        if math.isnan(lon) or math.isnan(lat):
            return None
        # Infinities are rejected even with range checks off
        if not math.isfinite(lon) or (self.validate_coordinates and not check_longitude(lon)):
            raise CoordinateOutOfRange(0, lon, LONGITUDE_MESSAGE)
        if not math.isfinite(lat) or (self.validate_coordinates and not check_latitude(lat)):
            raise CoordinateOutOfRange(1, lat, LATITUDE_MESSAGE)
        return write_wkt(make_point(lon, lat))


class MakePointFunctionFactory(FunctionFactory):
    signature = SIGNATURE

    def new_instance(self, position, args, arg_positions, configuration=None):
        config = configuration or DEFAULT_CONFIG
        lon_arg, lat_arg = args

        if lon_arg.is_constant and lat_arg.is_constant:
            lon = lon_arg.get_double(None)
            if not math.isnan(lon) and not check_longitude(lon):
                raise OutOfRangeConstant(arg_positions[0], LONGITUDE_MESSAGE, argument=0)
            lat = lat_arg.get_double(None)
            if not math.isnan(lat) and not check_latitude(lat):
                raise OutOfRangeConstant(arg_positions[1], LATITUDE_MESSAGE, argument=1)

        function = MakePointFunction(args, validate_coordinates=config.validate_row_coordinates)
        if function.is_constant:
            logger.debug("%s folded to constant %r", SYMBOL, function.get_str(None))
        return function
