"""Exact integer helpers for fraction arithmetic.

Everything here works on plain ``int`` values.  No floating point is used for
any comparison or result; callers that need an approximate value for display
do that themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class Fraction:
    n: int
    d: int

    def terms(self) -> tuple[int, int]:
        return (self.n, self.d)

    def __str__(self) -> str:
        return f"{self.n}/{self.d}"


@dataclass(frozen=True, slots=True)
class ReducedFraction(Fraction):
    """A fraction in lowest terms plus the divisor ``g`` used to get there."""

    g: int = 1


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of ``|a|`` and ``|b|``.

    ``gcd(0, 0)`` is defined as ``1`` so that callers can always divide by
    the result.
    """

    x = abs(int(a))
    y = abs(int(b))
    while y != 0:
        x, y = y, x % y
    return x or 1


def lcm(a: int, b: int) -> int:
    return abs(int(a) * int(b)) // gcd(a, b)


def reduce(n: int, d: int) -> ReducedFraction:
    """Divide ``n`` and ``d`` by their gcd.

    ``d`` must be non-zero; that is the caller's contract.  A zero numerator
    is returned as-is with ``g == 1``.
    """

    if n == 0:
        return ReducedFraction(n=0, d=int(d), g=1)
    g = gcd(n, d)
    return ReducedFraction(n=int(n) // g, d=int(d) // g, g=g)


def compare_sign(a: int, b: int, c: int, d: int) -> str:
    """Return ``"<"``, ``"="`` or ``">"`` for ``a/b`` against ``c/d``.

    Uses cross multiplication; both denominators must be positive.
    """

    left = a * d
    right = c * b
    if left == right:
        return "="
    return ">" if left > right else "<"


def parse_int_safe(value: object) -> int | None:
    """Parse a non-negative decimal integer, or return ``None``.

    Signs, decimal points, exponents and embedded spaces are all rejected,
    and so is a digit string too long for ``int`` to convert.
    """

    s = "" if value is None else str(value).strip()
    if not _DIGITS_RE.fullmatch(s):
        return None
    try:
        return int(s, 10)
    except ValueError:
        return None
