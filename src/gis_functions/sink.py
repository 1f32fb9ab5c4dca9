"""Reusable text sinks for function results and plan output."""

from __future__ import annotations

import math


class StringSink:
    """Mutable text buffer owned by a single function invocation.

    The invocation calls :meth:`clear` and then :meth:`put` before handing
    the sink out. A sink returned from ``get_str`` is borrowed: its content
    is only valid until the next evaluation of the same invocation, so
    callers that need to keep the value must copy it with ``str(sink)``.
    """

    def __init__(self):
        self._parts: list[str] = []

    def clear(self) -> None:
        self._parts.clear()

    def put(self, text) -> StringSink:
        self._parts.append(str(text))
        return self

    def __str__(self) -> str:
        return "".join(self._parts)

    def __len__(self) -> int:
        return sum(len(p) for p in self._parts)

    def __eq__(self, other) -> bool:
        if isinstance(other, (StringSink, str)):
            return str(self) == str(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"StringSink({str(self)!r})"


class PlanSink:
    """Collects the textual form of a function call for EXPLAIN output.

    ``val`` accepts literal text, numbers, ``None`` (rendered ``null``) and
    anything with a ``to_plan(sink)`` method, which renders itself.
    """

    def __init__(self):
        self._sink = StringSink()

    def val(self, item) -> PlanSink:
        if item is None:
            self._sink.put("null")
        elif hasattr(item, "to_plan"):
            item.to_plan(self)
        elif isinstance(item, float):
            self._sink.put("null" if math.isnan(item) else repr(item))
        else:
            self._sink.put(item)
        return self

    @property
    def text(self) -> str:
        return str(self._sink)

    def __str__(self) -> str:
        return self.text
