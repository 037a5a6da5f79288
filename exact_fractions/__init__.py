"""Exact rational arithmetic on fixed-width fractions."""

from .errors import (
    DivisionByZeroError,
    FractionError,
    FractionOverflowError,
    ZeroDenominatorError,
)
from .fraction import (
    INT_MAX,
    INT_MIN,
    Fraction,
    as_fraction_array,
    to_float_array,
    zeros,
    zeros_like,
)

__all__ = [
    "Fraction",
    "FractionError",
    "ZeroDenominatorError",
    "DivisionByZeroError",
    "FractionOverflowError",
    "INT_MIN",
    "INT_MAX",
    "as_fraction_array",
    "to_float_array",
    "zeros",
    "zeros_like",
]
