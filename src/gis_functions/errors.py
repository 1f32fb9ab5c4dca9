"""Exceptions raised by geometry functions."""

from __future__ import annotations


class GisError(Exception):
    """Base class for all geometry function errors."""


class SqlError(GisError):
    """Raised while binding a function call, before any record is read."""

    def __init__(self, position: int, message: str):
        self.position = position
        self.message = message
        super().__init__(f"[{position}] {message}")


class OutOfRangeConstant(SqlError):
    """A constant coordinate argument lies outside its valid range."""

    def __init__(self, position: int, message: str, argument: int):
        self.argument = argument
        super().__init__(position, message)


class EvaluationError(GisError):
    """Raised while evaluating a function against a record."""


class MalformedGeometryText(EvaluationError):
    """Geometry text does not match the accepted grammar."""

    def __init__(self, text: str, offset: int, reason: str):
        self.text = text
        self.offset = offset
        self.reason = reason
        super().__init__(f"malformed geometry text at offset {offset}: {reason}")


class CoordinateOutOfRange(EvaluationError):
    """A per-record coordinate lies outside its valid range."""

    def __init__(self, argument: int, value: float, message: str):
        self.argument = argument
        self.value = value
        super().__init__(f"{message} (argument {argument}, got {value})")
