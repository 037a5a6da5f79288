"""Exceptions raised by :mod:`exact_fractions`."""
from __future__ import annotations


class FractionError(ArithmeticError):
    """Base class for invalid fraction states and operations."""


class ZeroDenominatorError(FractionError, ZeroDivisionError):
    """A fraction was constructed with a zero denominator."""

    def __init__(self, message: str = "denominator cannot be zero") -> None:
        super().__init__(message)


class DivisionByZeroError(FractionError, ZeroDivisionError):
    """The divisor of a fraction division represents zero."""

    def __init__(self, message: str = "cannot divide by zero") -> None:
        super().__init__(message)


class FractionOverflowError(FractionError, OverflowError):
    """A component does not fit the fixed-width integer storage."""

    def __init__(self, value: int, *, name: str) -> None:
        super().__init__(f"{name} {value} does not fit in a signed 64-bit integer")
        self.value = value
        self.name = name


__all__ = [
    "FractionError",
    "ZeroDenominatorError",
    "DivisionByZeroError",
    "FractionOverflowError",
]
