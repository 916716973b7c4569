"""Exact rational numbers over Python integers with NumPy interoperability.

A :class:`Rational` keeps the numerator/denominator pair it was built from.
Arithmetic never reduces; the canonical form (positive denominator, coprime
terms) is computed only where it can be observed: equality, hashing, ordering
and rendering.
"""
from __future__ import annotations

import logging
import math
import numbers
import operator
import re
import sys
from fractions import Fraction
from typing import Any, Callable, Tuple, Union

import numpy as np

log = logging.getLogger(__name__)

Operand = Union["Rational", Fraction, numbers.Integral]
NumberLike = Union[Operand, str]

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")

# Below the smallest accepted sys.set_int_max_str_digits() limit (640).
_DIGIT_CHUNK = 600
_CHUNK_BASE = 10 ** _DIGIT_CHUNK

_HASH_MODULUS = sys.hash_info.modulus
_HASH_INF = sys.hash_info.inf


class InvalidArgument(ValueError):
    """Raised when a value cannot be turned into a :class:`Rational`."""


class ZeroDenominatorError(InvalidArgument, ZeroDivisionError):
    """Raised when a rational would end up with a zero denominator."""


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def _parse_integer(part: str, text: str) -> int:
    if _INTEGER_LITERAL.fullmatch(part) is None:
        log.debug("rejecting %r: %r is not an integer literal", text, part)
        raise InvalidArgument(f"invalid integer literal {part!r} in {text!r}")
    digits = part.lstrip("+-")
    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return -value if part.startswith("-") else value


def _format_integer(value: int) -> str:
    """Decimal text of *value*, independent of ``sys.get_int_max_str_digits()``."""
    sign = "-" if value < 0 else ""
    value = abs(value)
    chunks = []
    while value >= _CHUNK_BASE:
        value, low = divmod(value, _CHUNK_BASE)
        chunks.append(str(low).zfill(_DIGIT_CHUNK))
    chunks.append(str(value))
    return sign + "".join(reversed(chunks))


class Rational:
    """Immutable rational number stored as an unreduced integer pair."""

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    def __init__(
        self,
        numerator: Union[int, numbers.Integral] = 0,
        denominator: Union[int, numbers.Integral] = 1,
    ) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        if den == 0:
            raise ZeroDenominatorError("denominator must be non-zero")

        self._numerator = num
        self._denominator = den

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_ints(
        cls, numerator: Union[int, numbers.Integral], denominator: Union[int, numbers.Integral]
    ) -> "Rational":
        """Build ``numerator/denominator`` without reducing it."""
        return cls(numerator, denominator)

    @classmethod
    def from_fraction(cls, value: Fraction) -> "Rational":
        """Create a :class:`Rational` from :class:`fractions.Fraction`."""
        return cls(value.numerator, value.denominator)

    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Parse ``"N"`` or ``"N/D"`` where each part is a signed decimal integer.

        Raises :class:`InvalidArgument` for any other shape or a malformed
        integer, and :class:`ZeroDenominatorError` for ``"N/0"``.
        """
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text)!r}")
        parts = text.split("/")
        if len(parts) == 1:
            return cls(_parse_integer(parts[0], text), 1)
        if len(parts) == 2:
            return cls(_parse_integer(parts[0], text), _parse_integer(parts[1], text))
        log.debug("rejecting %r: %d '/'-separated parts", text, len(parts))
        raise InvalidArgument(f"expected 'N' or 'N/D', got {text!r}")

    @classmethod
    def rationalize(cls, value: NumberLike) -> "Rational":
        """Coerce an exact numeric-like value (or a string) into :class:`Rational`."""
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return cls.from_fraction(value)
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1)
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, np.generic):
            return cls.rationalize(value.item())
        raise TypeError(f"Cannot convert {type(value)!r} to Rational")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        """Stored numerator, not necessarily reduced."""
        return self._numerator

    @property
    def denominator(self) -> int:
        """Stored denominator, possibly negative."""
        return self._denominator

    def normalize(self) -> "Rational":
        """Return the canonical representative of this value.

        The result has a positive denominator coprime with the numerator, so
        zero becomes ``0/1``. A fresh instance is computed on every call.
        """
        num, den = self._canonical_pair()
        return Rational(num, den)

    def is_normalized(self) -> bool:
        return (self._numerator, self._denominator) == self._canonical_pair()

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    def _canonical_pair(self) -> Tuple[int, int]:
        num, den = self._numerator, self._denominator
        gcd = math.gcd(num, den)
        if den < 0:
            return -num // gcd, -den // gcd
        return num // gcd, den // gcd

    # ------------------------------------------------------------------
    # Named operations
    def add(self, other: Operand) -> "Rational":
        b = self._coerce_scalar(other)
        return Rational(
            self._numerator * b._denominator + b._numerator * self._denominator,
            self._denominator * b._denominator,
        )

    def subtract(self, other: Operand) -> "Rational":
        b = self._coerce_scalar(other)
        return Rational(
            self._numerator * b._denominator - b._numerator * self._denominator,
            self._denominator * b._denominator,
        )

    def multiply(self, other: Operand) -> "Rational":
        b = self._coerce_scalar(other)
        return Rational(
            self._numerator * b._numerator,
            self._denominator * b._denominator,
        )

    def divide(self, other: Operand) -> "Rational":
        """Divide by *other*; a zero divisor raises :class:`ZeroDenominatorError`."""
        b = self._coerce_scalar(other)
        if b._numerator == 0:
            raise ZeroDenominatorError("division by zero")
        return Rational(
            self._numerator * b._denominator,
            self._denominator * b._numerator,
        )

    def negate(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def equals(self, other: Operand) -> bool:
        """Exact value equality, independent of the stored pairs."""
        if self is other:
            return True
        b = self._coerce_scalar(other)
        return self._canonical_pair() == b._canonical_pair()

    def compare(self, other: Operand) -> int:
        """Return ``-1``, ``0`` or ``1`` as this value is below, equal to or above *other*."""
        b = self._coerce_scalar(other)
        a_num, a_den = self._canonical_pair()
        b_num, b_den = b._canonical_pair()
        # Both denominators are positive, so a_den * b_den is a common positive denominator.
        left = a_num * b_den
        right = b_num * a_den
        return (left > right) - (left < right)

    # ------------------------------------------------------------------
    # Numeric protocol
    def __int__(self) -> int:
        num, den = self._canonical_pair()
        if num < 0:
            return -(-num // den)
        return num // den

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Rational({_format_integer(self._numerator)}, {_format_integer(self._denominator)})"

    def __str__(self) -> str:
        if self._denominator == 1 or self._numerator % self._denominator == 0:
            return _format_integer(self._numerator // self._denominator)
        num, den = self._canonical_pair()
        return f"{_format_integer(num)}/{_format_integer(den)}"

    # ------------------------------------------------------------------
    # Internal helpers
    def _coerce_scalar(self, value: Any) -> "Rational":
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return Rational.from_fraction(value)
        if isinstance(value, numbers.Integral):
            return Rational(int(value), 1)
        if isinstance(value, np.generic):  # NumPy scalars
            return self._coerce_scalar(value.item())
        raise TypeError(f"Cannot interpret {type(value)!r} as Rational")

    def _binary_operation(self, other: Any, op: Callable[["Rational", "Rational"], "Rational"]):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, self._coerce_scalar(x)),
                otypes=[object],
            )
            return vectorised(other)
        return op(self, self._coerce_scalar(other))

    def _reflected_operation(self, other: Any, op: Callable[["Rational", "Rational"], "Rational"]):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self._coerce_scalar(x), self),
                otypes=[object],
            )
            return vectorised(other)
        return op(self._coerce_scalar(other), self)

    def _coerce_power(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Rational):
            num, den = value._canonical_pair()
            if den != 1:
                raise InvalidArgument("Exponent must be an integer")
            return num
        if isinstance(value, np.generic):
            return self._coerce_power(value.item())
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.add)

    def __radd__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.add)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.subtract)

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.subtract)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.multiply)

    def __rmul__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.multiply)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.divide)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.divide)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        power = self._coerce_power(exponent)
        if power >= 0:
            return Rational(self._numerator ** power, self._denominator ** power)
        if self._numerator == 0:
            raise ZeroDenominatorError("0 cannot be raised to a negative power")
        positive = -power
        return Rational(self._denominator ** positive, self._numerator ** positive)

    def __neg__(self) -> "Rational":
        return self.negate()

    def __pos__(self) -> "Rational":  # pragma: no cover - trivial
        return self

    def __abs__(self) -> "Rational":
        return Rational(abs(self._numerator), abs(self._denominator))

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op) -> bool:
        try:
            return op(self.compare(other), 0)
        except TypeError:
            return NotImplemented

    def __eq__(self, other: Any) -> bool:
        try:
            return self.equals(other)
        except TypeError:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Same scheme as int and Fraction hashes, so equal values hash alike across types.
        num, den = self._canonical_pair()
        try:
            inverse = pow(den, -1, _HASH_MODULUS)
        except ValueError:
            hash_ = _HASH_INF
        else:
            hash_ = hash(hash(abs(num)) * inverse)
        result = hash_ if num >= 0 else -hash_
        return -2 if result == -1 else result

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
        np.power: operator.pow,
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
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Rational):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(lambda x: self._coerce_scalar(x), otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(self._coerce_scalar(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def from_ints(
    numerator: Union[int, numbers.Integral], denominator: Union[int, numbers.Integral]
) -> Rational:
    """Build ``numerator/denominator`` without reducing it."""

    return Rational.from_ints(numerator, denominator)


def parse(text: str) -> Rational:
    """Parse ``"N"`` or ``"N/D"`` into a :class:`Rational`."""

    return Rational.parse(text)


def rationalize(value: NumberLike) -> Rational:
    """Public helper to convert *value* into :class:`Rational`."""

    return Rational.rationalize(value)


def as_rational_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Rational` values.

    ``values`` can be any iterable of integers, fractions, strings or
    :class:`Rational` entries, or an existing NumPy array. When ``copy`` is
    ``False`` and ``values`` is already an object array holding only
    :class:`Rational` entries, the original array is returned.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype != object:
            array = array.astype(object, copy=False)
        if all(isinstance(item, Rational) for item in array.flat):
            return array
        vectorised = np.vectorize(Rational.rationalize, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        coerced = [Rational.rationalize(item) for item in values]
        array = np.empty(len(coerced), dtype=object)
        array[:] = coerced
        return array

    return as_rational_array(list(values), copy=copy)


def zeros(length: int) -> np.ndarray:
    """Return a one-dimensional array of length ``length`` filled with zeros."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return as_rational_array([Rational(0, 1) for _ in range(length)])


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""

    array = as_rational_array(values, copy=False)
    zeros_flat = np.empty(array.size, dtype=object)
    zeros_flat[:] = [Rational(0, 1) for _ in range(array.size)]
    return zeros_flat.reshape(array.shape)


__all__ = [
    "InvalidArgument",
    "Rational",
    "ZeroDenominatorError",
    "as_rational_array",
    "from_ints",
    "parse",
    "rationalize",
    "zeros",
    "zeros_like",
]
