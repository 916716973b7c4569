"""Exact rational arithmetic package."""

from .rational import (
    InvalidArgument,
    Rational,
    ZeroDenominatorError,
    as_rational_array,
    from_ints,
    parse,
    rationalize,
    zeros,
    zeros_like,
)

__all__ = [
    "Rational",
    "InvalidArgument",
    "ZeroDenominatorError",
    "from_ints",
    "parse",
    "rationalize",
    "as_rational_array",
    "zeros",
    "zeros_like",
]
