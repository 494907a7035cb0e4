"""
Checked unsigned fixed-width arithmetic.

Python ints never wrap, so this module re-imposes the bounds of the fixed-width
domain each value lives in. Every helper raises the matching ``CurveError``
instead of silently widening:

- results above the domain maximum raise ``Overflow``,
- results below zero raise ``Underflow``,
- division by zero raises ``DivisionByZero``.

Domains:
- ``U64``  every stored reserve / supply / amount,
- ``U128`` products of two u64 values (``widen_mul``),
- ``U256`` the cubic terms of the polynomial integral.

Rounding is explicit: ``checked_div`` floors, ``checked_ceil_div`` ceils.
"""

from __future__ import annotations

from ...errors import DivisionByZero, Overflow, Underflow

U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1
U256_MAX: int = (1 << 256) - 1


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_uint(name: str, value: int, bound: int = U64_MAX) -> int:
    """Check that *value* is an int in ``[0, bound]`` and return it."""
    require_int(name, value)
    if value < 0:
        raise Underflow(f"{name} must be non-negative: {value}")
    if value > bound:
        raise Overflow(f"{name} exceeds {bound.bit_length()}-bit range: {value}")
    return value


def checked_add(a: int, b: int, *, bound: int = U64_MAX) -> int:
    result = a + b
    if result > bound:
        raise Overflow(f"{a} + {b} exceeds {bound.bit_length()}-bit range")
    return result


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise Underflow(f"{a} - {b} is negative")
    return a - b


def checked_mul(a: int, b: int, *, bound: int = U128_MAX) -> int:
    result = a * b
    if result > bound:
        raise Overflow(f"{a} * {b} exceeds {bound.bit_length()}-bit range")
    return result


def checked_div(numerator: int, denominator: int) -> int:
    """Floor division of non-negative ints."""
    if denominator == 0:
        raise DivisionByZero(f"{numerator} / 0")
    return numerator // denominator


def checked_ceil_div(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise DivisionByZero(f"ceil({numerator} / 0)")
    return (numerator + denominator - 1) // denominator


def widen_mul(a: int, b: int) -> int:
    """Multiply two u64 values in the u128 domain."""
    require_uint("lhs", a)
    require_uint("rhs", b)
    return checked_mul(a, b, bound=U128_MAX)


def narrow(value: int, *, name: str = "value", bound: int = U64_MAX) -> int:
    """Narrow a wide intermediate back into a stored domain (u64 by default)."""
    if value < 0:
        raise Underflow(f"{name} is negative: {value}")
    if value > bound:
        raise Overflow(f"{name} does not fit in {bound.bit_length()} bits: {value}")
    return value
