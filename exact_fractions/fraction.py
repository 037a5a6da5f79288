"""Exact fractions in lowest terms with NumPy interoperability."""
from __future__ import annotations

import logging
import math
import numbers
import operator
from typing import Any, Callable, Iterable, Tuple, Union

import numpy as np

from .errors import DivisionByZeroError, FractionOverflowError, ZeroDenominatorError

logger = logging.getLogger(__name__)

IntegerLike = Union[int, numbers.Integral]
FractionLike = Union["Fraction", numbers.Integral]

# Components are stored as signed 64-bit integers.
_INT64 = np.iinfo(np.int64)
INT_MIN = int(_INT64.min)
INT_MAX = int(_INT64.max)


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def _check_range(value: int, *, name: str) -> int:
    if not INT_MIN <= value <= INT_MAX:
        logger.debug("%s %d is outside the int64 range", name, value)
        raise FractionOverflowError(value, name=name)
    return value


def _normalize(num: int, den: int) -> Tuple[int, int]:
    """Move the sign onto *num* and reduce to lowest terms; *den* is non-zero."""
    if den < 0:
        num, den = -num, -den
    if num == 0:
        return 0, 1
    gcd = math.gcd(num, den)
    return num // gcd, den // gcd


def _to_fraction(value: Any) -> "Fraction":
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Integral):
        return Fraction.from_integer(value)
    raise TypeError(f"Cannot interpret {type(value)!r} as Fraction")


class Fraction:
    """Rational number kept in lowest terms with the sign on the numerator.

    Instances are immutable. Both components fit in a signed 64-bit integer,
    the denominator is always positive and zero is stored as ``0/1``.
    Intermediate products of the arithmetic operators are exact, only the
    reduced result has to fit.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Fraction semantics in NumPy expressions.

    def __init__(self, numerator: IntegerLike = 0, denominator: IntegerLike = 1) -> None:
        num = _check_range(_ensure_int(numerator, name="numerator"), name="numerator")
        den = _check_range(_ensure_int(denominator, name="denominator"), name="denominator")
        if den == 0:
            logger.debug("rejecting %d/0", num)
            raise ZeroDenominatorError()
        self._numerator, self._denominator = self._reduce(num, den)

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_integer(cls, value: IntegerLike) -> "Fraction":
        """Return the fraction ``value/1``."""
        return cls._from_raw(_ensure_int(value, name="value"), 1)

    @classmethod
    def _from_raw(cls, num: int, den: int) -> "Fraction":
        # Arithmetic results: den is non-zero but may be negative or unreduced.
        instance = cls.__new__(cls)
        instance._numerator, instance._denominator = cls._reduce(num, den)
        return instance

    @staticmethod
    def _reduce(num: int, den: int) -> Tuple[int, int]:
        num, den = _normalize(num, den)
        return _check_range(num, name="numerator"), _check_range(den, name="denominator")

    # ------------------------------------------------------------------
    # Properties and predicates
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_positive(self) -> bool:
        return self._numerator > 0

    def is_negative(self) -> bool:
        return self._numerator < 0

    def reciprocal(self) -> "Fraction":
        """Return ``1/self``; zero has no reciprocal."""
        if self._numerator == 0:
            logger.debug("reciprocal of zero requested")
            raise DivisionByZeroError()
        return Fraction._from_raw(self._denominator, self._numerator)

    # ------------------------------------------------------------------
    # Conversions
    def to_float(self) -> float:
        """Return the nearest ``float``; this never fails."""
        return self._numerator / self._denominator

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        quotient = abs(self._numerator) // self._denominator
        return quotient if self._numerator >= 0 else -quotient

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Fraction({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        try:
            return format(self.to_float(), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Arithmetic
    @staticmethod
    def _add(a: "Fraction", b: "Fraction") -> "Fraction":
        return Fraction._from_raw(
            a._numerator * b._denominator + b._numerator * a._denominator,
            a._denominator * b._denominator,
        )

    @staticmethod
    def _sub(a: "Fraction", b: "Fraction") -> "Fraction":
        return Fraction._from_raw(
            a._numerator * b._denominator - b._numerator * a._denominator,
            a._denominator * b._denominator,
        )

    @staticmethod
    def _mul(a: "Fraction", b: "Fraction") -> "Fraction":
        return Fraction._from_raw(
            a._numerator * b._numerator,
            a._denominator * b._denominator,
        )

    @staticmethod
    def _truediv(a: "Fraction", b: "Fraction") -> "Fraction":
        if b._numerator == 0:
            logger.debug("division of %s by zero", a)
            raise DivisionByZeroError()
        return Fraction._from_raw(
            a._numerator * b._denominator,
            a._denominator * b._numerator,
        )

    def add(self, other: FractionLike) -> "Fraction":
        return self._add(self, _to_fraction(other))

    def subtract(self, other: FractionLike) -> "Fraction":
        return self._sub(self, _to_fraction(other))

    def multiply(self, other: FractionLike) -> "Fraction":
        return self._mul(self, _to_fraction(other))

    def divide(self, other: FractionLike) -> "Fraction":
        """Return ``self / other``.

        Raises :class:`DivisionByZeroError` when *other* is zero.
        """
        return self._truediv(self, _to_fraction(other))

    def _binary_operation(self, other: Any, op: Callable[["Fraction", "Fraction"], Any]) -> Any:
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, _to_fraction(x)),
                otypes=[object],
            )
            return vectorised(other)
        try:
            other_frac = _to_fraction(other)
        except TypeError:
            return NotImplemented
        return op(self, other_frac)

    def _reflected_operation(self, other: Any, op: Callable[["Fraction", "Fraction"], Any]) -> Any:
        try:
            other_frac = _to_fraction(other)
        except TypeError:
            return NotImplemented
        return op(other_frac, self)

    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, self._add)

    def __radd__(self, other: Any) -> Any:
        return self._reflected_operation(other, self._add)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, self._sub)

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, self._sub)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, self._mul)

    def __rmul__(self, other: Any) -> Any:
        return self._reflected_operation(other, self._mul)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, self._truediv)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, self._truediv)

    def __neg__(self) -> "Fraction":
        return Fraction._from_raw(-self._numerator, self._denominator)

    def __pos__(self) -> "Fraction":
        return self

    def __abs__(self) -> "Fraction":
        if self._numerator >= 0:
            return self
        return Fraction._from_raw(-self._numerator, self._denominator)

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op: Callable[[int, int], bool]) -> Any:
        try:
            other_frac = _to_fraction(other)
        except TypeError:
            return NotImplemented
        return op(
            self._numerator * other_frac._denominator,
            other_frac._numerator * self._denominator,
        )

    def __eq__(self, other: Any) -> Any:
        try:
            other_frac = _to_fraction(other)
        except TypeError:
            return NotImplemented
        # Both sides are normalized, so equal values have identical pairs.
        return (self._numerator, self._denominator) == (
            other_frac._numerator,
            other_frac._denominator,
        )

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> Any:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.equal: operator.eq,
        np.not_equal: operator.ne,
        np.less: operator.lt,
        np.less_equal: operator.le,
        np.greater: operator.gt,
        np.greater_equal: operator.ge,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Fraction ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, np.ndarray):
                coerced.append(as_fraction_array(value, copy=False))
                has_array = True
            else:
                coerced.append(_to_fraction(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def as_fraction_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Fraction` values.

    ``values`` can be an iterable of integers and fractions or an existing
    NumPy array. When ``copy`` is ``False`` and ``values`` is already an
    object array holding only fractions, it is returned as is.
    """
    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, Fraction) for item in array.flat):
            return array
        vectorised = np.vectorize(_to_fraction, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        coerced = np.empty(len(values), dtype=object)
        for index, item in enumerate(values):
            coerced[index] = _to_fraction(item)
        return coerced

    return as_fraction_array(list(values), copy=copy)


def zeros(length: int) -> np.ndarray:
    """Return a one-dimensional array of ``length`` canonical zeros."""
    if length < 0:
        raise ValueError("length must be non-negative")
    return as_fraction_array([Fraction(0, 1) for _ in range(length)], copy=False)


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""
    array = as_fraction_array(values, copy=False)
    return zeros(array.size).reshape(array.shape)


def to_float_array(values: Iterable[FractionLike]) -> np.ndarray:
    """Return the ``float64`` approximations of ``values``, keeping the shape."""
    array = as_fraction_array(values, copy=False)
    floats = np.fromiter(
        (item.to_float() for item in array.flat),
        dtype=np.float64,
        count=array.size,
    )
    return floats.reshape(array.shape)


__all__ = [
    "Fraction",
    "INT_MIN",
    "INT_MAX",
    "as_fraction_array",
    "zeros",
    "zeros_like",
    "to_float_array",
]
