from __future__ import annotations

import random
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


class SeededRng:
    """Seeded RNG wrapper so one explicit random stream feeds every generator.

    ``seed=None`` seeds from the OS, which is what an interactive app wants;
    tests pass an integer for a reproducible stream.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in ``[a, b]`` inclusive."""
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        return self._rng.sample(population, k)


def try_n(
    k: int,
    generate: Callable[[], T],
    is_valid: Callable[[T], bool],
    fallback: Callable[[T], T],
) -> T:
    """Call ``generate`` up to ``k + 1`` times until ``is_valid`` accepts a value.

    The first draw is always made; ``k`` is the number of re-draws allowed
    after it.  If every draw is rejected, ``fallback`` receives the last draw
    and its return value is used as-is, so the call always terminates.
    """

    if k < 0:
        raise ValueError("k must be >= 0")
    value = generate()
    for _ in range(k):
        if is_valid(value):
            return value
        value = generate()
    if is_valid(value):
        return value
    return fallback(value)


def clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))
