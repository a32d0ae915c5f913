from __future__ import annotations

from fraction_trainer.rational import (
    Fraction,
    ReducedFraction,
    compare_sign,
    gcd,
    lcm,
    parse_int_safe,
    reduce,
)


def test_gcd_and_lcm_known_values() -> None:
    assert gcd(12, 18) == 6
    assert gcd(-12, 18) == 6
    assert gcd(7, 0) == 7
    assert gcd(0, 0) == 1
    assert lcm(4, 6) == 12
    assert lcm(3, 5) == 15
    assert lcm(6, 6) == 6


def test_reduce_reports_divisor() -> None:
    r = reduce(12, 18)
    assert r == ReducedFraction(n=2, d=3, g=6)
    assert r.terms() == (2, 3)
    assert reduce(3, 4) == ReducedFraction(3, 4, 1)


def test_reduce_zero_numerator_keeps_g_one() -> None:
    assert reduce(0, 5) == ReducedFraction(0, 5, 1)


def test_reduce_always_lowest_terms() -> None:
    for n in range(1, 30):
        for d in range(1, 30):
            r = reduce(n, d)
            assert gcd(r.n, r.d) == 1
            assert r.n * r.g == n and r.d * r.g == d


def test_compare_sign_uses_cross_products() -> None:
    assert compare_sign(1, 2, 1, 2) == "="
    assert compare_sign(2, 4, 1, 2) == "="
    assert compare_sign(2, 3, 3, 5) == ">"
    assert compare_sign(1, 3, 1, 2) == "<"


def test_parse_int_safe_accepts_only_plain_digits() -> None:
    assert parse_int_safe("12") == 12
    assert parse_int_safe("  7 ") == 7
    assert parse_int_safe("0") == 0
    for bad in ("", "   ", "-3", "+3", "1.5", "1e2", "1 2", "abc", None):
        assert parse_int_safe(bad) is None


def test_fraction_str() -> None:
    assert str(Fraction(3, 5)) == "3/5"
    assert str(ReducedFraction(4, 5, 4)) == "4/5"


def test_parse_int_safe_rejects_digit_strings_too_long_to_convert() -> None:
    assert parse_int_safe("9" * 5000) is None
    assert parse_int_safe("9" * 300) == int("9" * 300)
