"""st_distance(geom_a, geom_b): planar distance between two geometry texts."""

from __future__ import annotations

import logging
import math

from gis_functions.functions.base import DoubleGeometryFunction, FunctionFactory
from gis_functions.geo import distance
from gis_functions.wkt import parse_wkt

logger = logging.getLogger(__name__)

SYMBOL = "st_distance"
SIGNATURE = SYMBOL + "(SS)"


class DistanceFunction(DoubleGeometryFunction):
    symbol = SYMBOL

    def _evaluate(self, record, operands) -> float:
        a = operands[0].get_str(record)
        b = operands[1].get_str(record)
        if a is None or b is None:
            return math.nan
        return distance(parse_wkt(a), parse_wkt(b))


class DistanceFunctionFactory(FunctionFactory):
    signature = SIGNATURE

    def new_instance(self, position, args, arg_positions, configuration=None):
        function = DistanceFunction(args)
        if function.is_constant:
            logger.debug("%s folded to constant %r", SYMBOL, function.get_double(None))
        return function
