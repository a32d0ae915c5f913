"""Problem records for the five fraction drills.

A :class:`Problem` is a tagged record: ``kind`` is the discriminant and
``payload`` carries the variant-specific data (one frozen dataclass per
kind).  The payload never changes after generation; only the session fields
``answered``, ``correct`` and ``picked`` are written afterwards, by the
verifier and the quiz session.

The ``make_*`` builders compute the expected answer from the given terms and
are what the generator uses once it has drawn its numbers.  Tests use them
directly to pin exact scenarios.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .rational import Fraction, ReducedFraction, compare_sign, lcm, reduce

COMPARE_CHOICES: tuple[str, ...] = ("<", "=", ">")
POINT_LABELS: tuple[str, ...] = ("A", "B", "C")


class ProblemKind(StrEnum):
    EQUIVALENCE = "eq"
    SIMPLIFY = "simp"
    COMPARE = "cmp"
    ADD_SUB = "addsub"
    POINT_ON_LINE = "point"


class EquivalenceOp(StrEnum):
    MULTIPLY = "mul"
    DIVIDE = "div"


class AddSubOp(StrEnum):
    ADD = "+"
    SUBTRACT = "-"


@dataclass(frozen=True, slots=True)
class EquivalencePayload:
    given: Fraction
    op: EquivalenceOp
    k: int
    expected: Fraction


@dataclass(frozen=True, slots=True)
class SimplifyPayload:
    given: Fraction
    expected: ReducedFraction


@dataclass(frozen=True, slots=True)
class ComparePayload:
    left: Fraction
    right: Fraction
    expected: str  # one of COMPARE_CHOICES


@dataclass(frozen=True, slots=True)
class AddSubPayload:
    left: Fraction
    right: Fraction
    op: AddSubOp
    level: int  # 1..4
    expected: ReducedFraction

    @property
    def common(self) -> int:
        return lcm(self.left.d, self.right.d)

    @property
    def renamed(self) -> tuple[int, int]:
        """Numerators of both operands over the common denominator."""

        common = self.common
        return (
            self.left.n * (common // self.left.d),
            self.right.n * (common // self.right.d),
        )

    @property
    def raw_numerator(self) -> int:
        a2, c2 = self.renamed
        return a2 + c2 if self.op is AddSubOp.ADD else a2 - c2


@dataclass(frozen=True, slots=True)
class NumberLinePoint:
    label: str
    n: int
    d: int

    def as_fraction(self) -> Fraction:
        return Fraction(self.n, self.d)


@dataclass(frozen=True, slots=True)
class PointOnLinePayload:
    denominator: int
    points: tuple[NumberLinePoint, ...]  # ascending by n
    target: NumberLinePoint
    expected: str  # label of the target point


Payload = EquivalencePayload | SimplifyPayload | ComparePayload | AddSubPayload | PointOnLinePayload

_PAYLOAD_TYPES: dict[ProblemKind, type] = {
    ProblemKind.EQUIVALENCE: EquivalencePayload,
    ProblemKind.SIMPLIFY: SimplifyPayload,
    ProblemKind.COMPARE: ComparePayload,
    ProblemKind.ADD_SUB: AddSubPayload,
    ProblemKind.POINT_ON_LINE: PointOnLinePayload,
}

CHOICE_KINDS = frozenset({ProblemKind.COMPARE, ProblemKind.POINT_ON_LINE})


@dataclass(slots=True)
class Problem:
    kind: ProblemKind
    payload: Payload
    answered: bool = False
    correct: bool | None = None
    picked: str | None = None

    def __post_init__(self) -> None:
        expected_type = _PAYLOAD_TYPES[self.kind]
        if not isinstance(self.payload, expected_type):
            raise ValueError(f"{self.kind.value} problem needs a {expected_type.__name__}")

    @property
    def expected(self) -> Fraction | str:
        return self.payload.expected

    @property
    def is_choice(self) -> bool:
        return self.kind in CHOICE_KINDS

    def choices(self) -> tuple[str, ...]:
        """Valid picks for choice problems; empty for typed-answer problems."""

        if self.kind is ProblemKind.COMPARE:
            return COMPARE_CHOICES
        if self.kind is ProblemKind.POINT_ON_LINE:
            assert isinstance(self.payload, PointOnLinePayload)
            return tuple(p.label for p in self.payload.points)
        return ()

    def expected_display(self) -> str:
        return str(self.payload.expected)


def make_equivalence(n: int, d: int, op: EquivalenceOp | str, k: int) -> Problem:
    """Given ``n/d`` and ``op`` by ``k``; divide needs ``k`` to divide both terms."""

    op = EquivalenceOp(op)
    if op is EquivalenceOp.MULTIPLY:
        expected = Fraction(n * k, d * k)
    else:
        if n % k or d % k:
            raise ValueError(f"{n}/{d} is not divisible by {k}")
        expected = Fraction(n // k, d // k)
    return Problem(
        kind=ProblemKind.EQUIVALENCE,
        payload=EquivalencePayload(given=Fraction(n, d), op=op, k=k, expected=expected),
    )


def make_simplify(n: int, d: int) -> Problem:
    return Problem(
        kind=ProblemKind.SIMPLIFY,
        payload=SimplifyPayload(given=Fraction(n, d), expected=reduce(n, d)),
    )


def make_compare(a: int, b: int, c: int, d: int) -> Problem:
    return Problem(
        kind=ProblemKind.COMPARE,
        payload=ComparePayload(left=Fraction(a, b), right=Fraction(c, d), expected=compare_sign(a, b, c, d)),
    )


def make_add_sub(a: int, b: int, c: int, d: int, op: AddSubOp | str, level: int) -> Problem:
    op = AddSubOp(op)
    common = lcm(b, d)
    a2 = a * (common // b)
    c2 = c * (common // d)
    result_n = a2 + c2 if op is AddSubOp.ADD else a2 - c2
    return Problem(
        kind=ProblemKind.ADD_SUB,
        payload=AddSubPayload(
            left=Fraction(a, b),
            right=Fraction(c, d),
            op=op,
            level=level,
            expected=reduce(result_n, common),
        ),
    )


def make_point_on_line(denominator: int, numerators: list[int] | tuple[int, ...], target_index: int) -> Problem:
    """Label the (sorted) numerators A, B, C... and target one of them."""

    nums = sorted(numerators)
    if len(set(nums)) != len(nums) or len(nums) > len(POINT_LABELS):
        raise ValueError("numerators must be distinct and at most three")
    points = tuple(NumberLinePoint(label=POINT_LABELS[i], n=n, d=denominator) for i, n in enumerate(nums))
    target = points[target_index]
    return Problem(
        kind=ProblemKind.POINT_ON_LINE,
        payload=PointOnLinePayload(denominator=denominator, points=points, target=target, expected=target.label),
    )
