"""Geometry SQL functions and their registry."""

from __future__ import annotations

from typing import Optional, Sequence

from gis_functions.config import FunctionConfig
from gis_functions.errors import SqlError
from gis_functions.functions.base import TYPE_NAMES, Function, FunctionFactory
from gis_functions.functions.st_distance import DistanceFunctionFactory
from gis_functions.functions.st_geomfromtext import GeomFromTextFunctionFactory
from gis_functions.functions.st_makepoint import MakePointFunctionFactory

FUNCTION_MAP: dict[str, FunctionFactory] = {
    factory.name: factory
    for factory in (
        DistanceFunctionFactory(),
        GeomFromTextFunctionFactory(),
        MakePointFunctionFactory(),
    )
}


def create_function(
    name: str,
    args: Sequence[Function],
    arg_positions: Optional[Sequence[int]] = None,
    position: int = 0,
    configuration: Optional[FunctionConfig] = None,
) -> Function:
    """Look up ``name`` and bind it to ``args``.

    Raises :class:`SqlError` for unknown names, wrong argument counts and
    operand types that do not match the signature.
    """
    factory = FUNCTION_MAP.get(name.lower())
    if factory is None:
        raise SqlError(position, f"unknown function name: {name}")

    if arg_positions is None:
        arg_positions = [position] * len(args)

    expected = factory.arg_types
    if len(args) != len(expected):
        raise SqlError(
            position,
            f"wrong number of arguments for function `{factory.name}`; "
            f"expected: {len(expected)}, provided: {len(args)}",
        )
    for i, (arg, type_code) in enumerate(zip(args, expected)):
        if arg.type != type_code:
            raise SqlError(
                arg_positions[i],
                f"argument type mismatch for function `{factory.name}` at #{i + 1} "
                f"expected: {TYPE_NAMES[type_code]}, actual: {TYPE_NAMES.get(arg.type, arg.type)}",
            )

    return factory.new_instance(position, list(args), list(arg_positions), configuration)


__all__ = ["FUNCTION_MAP", "create_function"]
