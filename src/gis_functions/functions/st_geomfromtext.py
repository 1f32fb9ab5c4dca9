"""st_geomfromtext(text): validate geometry text and return its canonical form."""

from __future__ import annotations

import logging

from gis_functions.functions.base import FunctionFactory, TextGeometryFunction
from gis_functions.wkt import parse_wkt, write_wkt

logger = logging.getLogger(__name__)

SYMBOL = "st_geomfromtext"
SIGNATURE = SYMBOL + "(S)"


class GeomFromTextFunction(TextGeometryFunction):
    symbol = SYMBOL

    def _evaluate(self, record, operands):
        text = operands[0].get_str(record)
        if text is None:
            return None
        return write_wkt(parse_wkt(text))


class GeomFromTextFunctionFactory(FunctionFactory):
    signature = SIGNATURE

    def new_instance(self, position, args, arg_positions, configuration=None):
        function = GeomFromTextFunction(args)
        if function.is_constant:
            logger.debug("%s folded to constant %r", SYMBOL, function.get_str(None))
        return function
