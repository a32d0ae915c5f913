"""Randomised, constrained generation of fraction problems.

Every rule draws from one :class:`SeededRng` so a given seed replays the same
sequence of problems.  Retry loops go through :func:`try_n` and always end in
a fixed valid problem, so generation never fails and never loops forever.
"""

from __future__ import annotations

import logging

from .config import MAX_DENOMINATOR, QUIZ_COUNT_RANGE, WORKSHEET_COUNT_RANGE, MixPolicy, WorksheetMix
from .problems import (
    AddSubOp,
    EquivalenceOp,
    Problem,
    ProblemKind,
    make_add_sub,
    make_compare,
    make_equivalence,
    make_point_on_line,
    make_simplify,
)
from .rational import lcm
from .rng import SeededRng, clamp, try_n

logger = logging.getLogger(__name__)

_EQ, _SIMP, _CMP, _POINT, _ADDSUB = (
    ProblemKind.EQUIVALENCE,
    ProblemKind.SIMPLIFY,
    ProblemKind.COMPARE,
    ProblemKind.POINT_ON_LINE,
    ProblemKind.ADD_SUB,
)

# (mix, include_point_line) -> bank; repeats weight the draw.
_QUIZ_BANKS: dict[tuple[MixPolicy, bool], tuple[ProblemKind, ...]] = {
    (MixPolicy.TOPIC_B, True): (_EQ, _SIMP, _EQ, _SIMP, _EQ),
    (MixPolicy.TOPIC_B, False): (_EQ, _SIMP, _EQ, _SIMP, _EQ),
    (MixPolicy.TOPIC_C, True): (_CMP, _CMP, _POINT, _CMP, _POINT),
    (MixPolicy.TOPIC_C, False): (_CMP, _CMP, _CMP, _CMP),
    (MixPolicy.TOPIC_D, True): (_ADDSUB, _ADDSUB, _ADDSUB, _ADDSUB),
    (MixPolicy.TOPIC_D, False): (_ADDSUB, _ADDSUB, _ADDSUB, _ADDSUB),
    (MixPolicy.COMBINED, True): (_EQ, _SIMP, _CMP, _POINT, _ADDSUB, _ADDSUB),
    (MixPolicy.COMBINED, False): (_EQ, _SIMP, _CMP, _CMP, _ADDSUB, _ADDSUB),
    (MixPolicy.MIXED, True): (_EQ, _SIMP, _CMP, _CMP, _POINT),
    (MixPolicy.MIXED, False): (_EQ, _SIMP, _CMP, _CMP),
}

# Worksheet entries are (kind, AddSub levels to draw from).
_WorksheetEntry = tuple[ProblemKind, tuple[int, ...]]
_WORKSHEET_KINDS: dict[WorksheetMix, tuple[_WorksheetEntry, ...]] = {
    WorksheetMix.MIXED: ((_EQ, ()), (_SIMP, ()), (_CMP, ()), (_ADDSUB, (1, 2, 3, 4))),
    WorksheetMix.EQUIVALENT: ((_EQ, ()),),
    WorksheetMix.SIMPLIFY: ((_SIMP, ()),),
    WorksheetMix.COMPARE: ((_CMP, ()),),
    WorksheetMix.ADD_SUB: ((_ADDSUB, (1, 2, 3, 4)),),
    WorksheetMix.ADD_SUB_LIKE: ((_ADDSUB, (1, 2)),),
    WorksheetMix.ADD_SUB_UNLIKE: ((_ADDSUB, (3, 4)),),
}

COMPARE_RETRIES = 3
DISTINCT_DENOMINATOR_RETRIES = 5
RANDOM_LEVEL = 5


def quiz_bank(mix: MixPolicy | str, include_point_line: bool) -> tuple[ProblemKind, ...]:
    return _QUIZ_BANKS[(MixPolicy(mix), bool(include_point_line))]


class ProblemGenerator:
    """Produces single problems of a requested kind, or whole batches.

    All given fractions are proper and no denominator (given or expected)
    exceeds ``MAX_DENOMINATOR``.
    """

    def __init__(self, *, seed: int | None = None, rng: SeededRng | None = None) -> None:
        self._rng = rng if rng is not None else SeededRng(seed)

    @property
    def rng(self) -> SeededRng:
        return self._rng

    def generate(self, kind: ProblemKind | str, *, level: int | None = None) -> Problem:
        kind = ProblemKind(kind)
        if kind is ProblemKind.EQUIVALENCE:
            return self.equivalence()
        if kind is ProblemKind.SIMPLIFY:
            return self.simplify()
        if kind is ProblemKind.COMPARE:
            return self.compare()
        if kind is ProblemKind.ADD_SUB:
            return self.add_sub(level)
        return self.point_on_line()

    def generate_batch(
        self,
        count: int,
        mix: MixPolicy | str = MixPolicy.MIXED,
        include_point_line: bool = True,
    ) -> list[Problem]:
        """Quiz batch: ``count`` is clamped to 6..20, kinds drawn from the mix's bank."""

        lo, hi = QUIZ_COUNT_RANGE
        bank = quiz_bank(mix, include_point_line)
        return [self.generate(self._rng.choice(bank)) for _ in range(clamp(int(count), lo, hi))]

    def worksheet_batch(self, count: int, mix: WorksheetMix | str = WorksheetMix.MIXED) -> list[Problem]:
        """Worksheet batch: ``count`` is clamped to 6..30."""

        lo, hi = WORKSHEET_COUNT_RANGE
        entries = _WORKSHEET_KINDS[WorksheetMix(mix)]
        problems: list[Problem] = []
        for _ in range(clamp(int(count), lo, hi)):
            kind, levels = self._rng.choice(entries)
            level = self._rng.choice(levels) if levels else None
            problems.append(self.generate(kind, level=level))
        return problems

    # Variants ------------------------------------------------------------

    def equivalence(self) -> Problem:
        op = self._rng.choice([EquivalenceOp.MULTIPLY, EquivalenceOp.DIVIDE, EquivalenceOp.MULTIPLY])
        k = self._rng.randint(2, 5)
        max_d = max(2, MAX_DENOMINATOR // k)
        d = self._rng.randint(2, max_d)
        n = self._rng.randint(1, d - 1)
        if op is EquivalenceOp.MULTIPLY:
            return make_equivalence(n, d, op, k)
        # Divide is built backwards from a base fraction so it always divides evenly.
        return make_equivalence(n * k, d * k, op, k)

    def simplify(self) -> Problem:
        base_d = self._rng.randint(2, 12)
        base_n = self._rng.randint(1, base_d - 1)
        max_k = clamp(MAX_DENOMINATOR // base_d, 2, 6)
        k = self._rng.randint(2, max_k)
        return make_simplify(base_n * k, base_d * k)

    def compare(self) -> Problem:
        b = self._rng.randint(2, 12)
        a = self._rng.randint(1, b - 1)

        def draw_right() -> tuple[int, int]:
            d = self._rng.randint(2, 12)
            return self._rng.randint(1, d - 1), d

        def keep_tie(right: tuple[int, int]) -> tuple[int, int]:
            logger.debug("compare tie %d/%d = %d/%d kept after %d retries", a, b, *right, COMPARE_RETRIES)
            return right

        c, d = try_n(COMPARE_RETRIES, draw_right, lambda r: a * r[1] != r[0] * b, keep_tie)
        return make_compare(a, b, c, d)

    def add_sub(self, level: int | None = None) -> Problem:
        if level is None or level == RANDOM_LEVEL:
            level = self._rng.choice([1, 2, 3, 4])
        if level == 1:
            return self._add_like()
        if level == 2:
            return self._subtract_like()
        if level == 3:
            return self._add_unlike()
        if level == 4:
            return self._subtract_unlike()
        raise ValueError(f"add/subtract level must be 1..5, got {level}")

    def point_on_line(self) -> Problem:
        den = self._rng.choice([4, 8])
        nums = self._rng.sample(range(1, den), 3)
        return make_point_on_line(den, nums, self._rng.randint(0, 2))

    # Add/subtract levels ---------------------------------------------------

    def _add_like(self) -> Problem:
        b = self._rng.randint(3, 12)
        a = self._rng.randint(1, b - 2)
        c = self._rng.randint(1, b - a - 1)
        return make_add_sub(a, b, c, b, AddSubOp.ADD, 1)

    def _subtract_like(self) -> Problem:
        b = self._rng.randint(3, 12)
        a = self._rng.randint(2, b - 1)
        c = self._rng.randint(1, a - 1)
        return make_add_sub(a, b, c, b, AddSubOp.SUBTRACT, 2)

    def _add_unlike(self) -> Problem:
        b, d = self._unlike_denominators()
        common = lcm(b, d)
        a = self._rng.randint(1, b - 1)
        used = a * (common // b)
        max_c = (common - used - 1) // (common // d)
        c = self._rng.randint(1, clamp(max_c, 1, d - 1))
        if a * (common // b) + c * (common // d) >= common:
            logger.debug("add level 3 fell back to 1/%d + 1/%d", b, d)
            a, c = 1, 1
        return make_add_sub(a, b, c, d, AddSubOp.ADD, 3)

    def _subtract_unlike(self) -> Problem:
        b, d = self._unlike_denominators()
        # [2, b-1] is empty for halves; 1/2 is the only proper choice there.
        a = self._rng.randint(2, b - 1) if b > 2 else 1
        # ceil(a/b * d) - 1, in integers; only bounds the draw for c.
        max_c = max(1, -(-a * d // b) - 1)
        c = self._rng.randint(1, clamp(max_c, 1, d - 1))
        if a * d <= c * b:
            a, b, c, d = c, d, a, b
        common = lcm(b, d)
        if a * (common // b) - c * (common // d) <= 0:
            logger.debug("subtract level 4 fell back to 2/3 - 1/4")
            a, b, c, d = 2, 3, 1, 4
        return make_add_sub(a, b, c, d, AddSubOp.SUBTRACT, 4)

    def _unlike_denominators(self) -> tuple[int, int]:
        b = self._rng.randint(2, 8)
        d = try_n(
            DISTINCT_DENOMINATOR_RETRIES,
            lambda: self._rng.randint(2, 8),
            lambda x: x != b,
            lambda x: x,
        )
        return b, d
