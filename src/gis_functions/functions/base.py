"""Function evaluation protocol shared by all geometry functions.

A function invocation is built once per plan node from its operands. If
every operand is a compile-time constant the result is computed right
away and kept in a :class:`Constant` binding; otherwise the invocation is
:class:`RowBound` and evaluates its operands against each record.
"""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from gis_functions.config import FunctionConfig
from gis_functions.sink import PlanSink, StringSink

Record = Mapping[str, Any]

TYPE_NAMES = {"S": "STRING", "D": "DOUBLE"}


def _is_null(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


class Function(abc.ABC):
    """An operand or function call inside an expression."""

    type: str = ""              # "S" (text) or "D" (double)
    is_constant: bool = False

    def get_str(self, record: Optional[Record]):
        """Text value for ``record``, or None when null."""
        raise TypeError(f"{type(self).__name__} does not produce text")

    def get_double(self, record: Optional[Record]) -> float:
        """Numeric value for ``record``; NaN when null."""
        raise TypeError(f"{type(self).__name__} does not produce a number")

    @abc.abstractmethod
    def to_plan(self, sink: PlanSink) -> None:
        """Render this expression for EXPLAIN output without evaluating it."""

    def plan(self) -> str:
        sink = PlanSink()
        self.to_plan(sink)
        return sink.text


# ── Operands ─────────────────────────────────────────────────────────────


class StrConstant(Function):
    type = "S"
    is_constant = True

    def __init__(self, value: Optional[str]):
        self.value = value

    def get_str(self, record):
        return self.value

    def to_plan(self, sink: PlanSink) -> None:
        if self.value is None:
            sink.val(None)
        else:
            sink.val("'").val(self.value.replace("'", "''")).val("'")


class DoubleConstant(Function):
    type = "D"
    is_constant = True

    def __init__(self, value: Optional[float]):
        self.value = math.nan if value is None else float(value)

    def get_double(self, record) -> float:
        return self.value

    def to_plan(self, sink: PlanSink) -> None:
        sink.val(self.value)


class StrColumn(Function):
    """Reads ``record[name]`` as text."""

    type = "S"

    def __init__(self, name: str):
        self.name = name

    def get_str(self, record):
        value = record[self.name]
        if _is_null(value):
            return None
        return str(value)

    def to_plan(self, sink: PlanSink) -> None:
        sink.val(self.name)


class DoubleColumn(Function):
    """Reads ``record[name]`` as a double."""

    type = "D"

    def __init__(self, name: str):
        self.name = name

    def get_double(self, record) -> float:
        value = record[self.name]
        if value is None:
            return math.nan
        return float(value)

    def to_plan(self, sink: PlanSink) -> None:
        sink.val(self.name)


# ── Bindings ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Constant:
    """Result computed once at bind time, returned for every record."""

    value: Any


@dataclass(frozen=True)
class RowBound:
    """Operands re-read for every record."""

    operands: tuple[Function, ...]


Binding = Union[Constant, RowBound]


def fold(operands: Sequence[Function], evaluate: Callable[[Optional[Record], tuple], Any]) -> Binding:
    """Choose the binding for a call on ``operands``.

    When every operand is constant, ``evaluate`` runs once with no record
    and its result is kept; any error it raises surfaces at bind time.
    """
    operands = tuple(operands)
    if all(op.is_constant for op in operands):
        return Constant(evaluate(None, operands))
    return RowBound(operands)


class GeometryFunction(Function):
    """Base for geometry function calls.

    Subclasses set ``symbol`` and implement ``_evaluate(record, operands)``,
    which must return NaN / None for null operands before touching the
    codec.
    """

    symbol: str = ""

    def __init__(self, args: Sequence[Function]):
        self.args = tuple(args)
        self.binding: Binding = fold(self.args, self._evaluate)

    @property
    def is_constant(self) -> bool:
        return isinstance(self.binding, Constant)

    @abc.abstractmethod
    def _evaluate(self, record: Optional[Record], operands: tuple[Function, ...]):
        ...

    def to_plan(self, sink: PlanSink) -> None:
        sink.val(self.symbol).val("(")
        for i, arg in enumerate(self.args):
            if i:
                sink.val(",")
            sink.val(arg)
        sink.val(")")


class DoubleGeometryFunction(GeometryFunction):
    type = "D"

    def get_double(self, record: Optional[Record]) -> float:
        binding = self.binding
        if isinstance(binding, Constant):
            return binding.value
        return self._evaluate(record, binding.operands)


class TextGeometryFunction(GeometryFunction):
    """Geometry function with a text result.

    A row-bound instance owns one :class:`StringSink`. ``get_str`` returns
    that sink, refilled on every call, so the value is only valid until the
    next call on the same instance.
    """

    type = "S"

    def __init__(self, args: Sequence[Function]):
        super().__init__(args)
        self._sink = StringSink() if isinstance(self.binding, RowBound) else None

    def get_str(self, record: Optional[Record]):
        binding = self.binding
        if isinstance(binding, Constant):
            return binding.value
        text = self._evaluate(record, binding.operands)
        if text is None:
            return None
        self._sink.clear()
        self._sink.put(text)
        return self._sink


# ── Factories ────────────────────────────────────────────────────────────


class FunctionFactory(abc.ABC):
    """Builds function calls for one registered signature.

    A signature is ``name(TYPES)`` where each type code is ``S`` (text) or
    ``D`` (double), e.g. ``st_distance(SS)``.
    """

    signature: str = ""

    @property
    def name(self) -> str:
        return self.signature[: self.signature.index("(")]

    @property
    def arg_types(self) -> str:
        return self.signature[self.signature.index("(") + 1 : -1]

    @abc.abstractmethod
    def new_instance(
        self,
        position: int,
        args: Sequence[Function],
        arg_positions: Sequence[int],
        configuration: Optional[FunctionConfig] = None,
    ) -> Function:
        """Bind a call. Raises :class:`~gis_functions.errors.SqlError` on bad constants."""
