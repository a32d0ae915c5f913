"""Checks a submitted answer against a problem's expected value.

``verify`` is pure: it never touches the problem, so calling it twice with
the same inputs gives the same result.  ``check`` is ``verify`` plus the
bookkeeping for a scored attempt (``answered``/``correct`` on the problem).

Typed answers (equivalence, simplify, add/subtract) arrive either as one
``"n/d"`` string or as a ``(numerator_text, denominator_text)`` pair, the
way two input boxes would hand them over.  Choice answers (compare, number
line) are the picked symbol or label; when no answer is passed the
problem's own ``picked`` value is used.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .problems import (
    AddSubPayload,
    EquivalencePayload,
    Problem,
    SimplifyPayload,
)
from .rational import Fraction, parse_int_safe, reduce

RawAnswer = str | tuple[object, object] | list[object] | None


class Outcome(StrEnum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    REJECTED = "rejected"


class Reason(StrEnum):
    # Rejections: not scored, caller re-prompts.
    MISSING_NUMBERS = "missing_numbers"
    ZERO_DENOMINATOR = "zero_denominator"
    NOT_PROPER = "not_proper"
    NO_SELECTION = "no_selection"
    # Scored misses.
    PLAIN_MISMATCH = "plain_mismatch"
    EQUIVALENT_NOT_REDUCED = "equivalent_not_reduced"


@dataclass(frozen=True, slots=True)
class VerificationResult:
    outcome: Outcome
    reason: Reason | None
    expected: str
    submitted: Fraction | str | None = None

    @property
    def scored(self) -> bool:
        return self.outcome is not Outcome.REJECTED

    @property
    def correct(self) -> bool:
        return self.outcome is Outcome.CORRECT


def _rejected(reason: Reason, problem: Problem, submitted: Fraction | str | None = None) -> VerificationResult:
    return VerificationResult(Outcome.REJECTED, reason, problem.expected_display(), submitted)


def _scored(ok: bool, problem: Problem, submitted: Fraction | str, miss: Reason = Reason.PLAIN_MISMATCH) -> VerificationResult:
    if ok:
        return VerificationResult(Outcome.CORRECT, None, problem.expected_display(), submitted)
    return VerificationResult(Outcome.INCORRECT, miss, problem.expected_display(), submitted)


def split_fraction_text(raw: RawAnswer) -> tuple[object, object]:
    """Split raw input into numerator and denominator text (either may be None)."""

    if raw is None:
        return None, None
    if isinstance(raw, (tuple, list)):
        if len(raw) != 2:
            return None, None
        return raw[0], raw[1]
    top, sep, bottom = str(raw).partition("/")
    if not sep:
        return top, None
    return top, bottom


def parse_fraction(raw: RawAnswer) -> Fraction | None:
    top, bottom = split_fraction_text(raw)
    n = parse_int_safe(top)
    d = parse_int_safe(bottom)
    if n is None or d is None:
        return None
    return Fraction(n, d)


def verify(problem: Problem, raw: RawAnswer = None) -> VerificationResult:
    if problem.is_choice:
        return _verify_choice(problem, raw)

    answer = parse_fraction(raw)
    if answer is None:
        return _rejected(Reason.MISSING_NUMBERS, problem)
    if answer.d == 0:
        return _rejected(Reason.ZERO_DENOMINATOR, problem, answer)

    payload = problem.payload
    if isinstance(payload, AddSubPayload):
        # Unreduced but equal answers count here, unlike simplify.
        mine = reduce(answer.n, answer.d)
        return _scored(mine.terms() == payload.expected.terms(), problem, answer)

    if answer.n >= answer.d:
        return _rejected(Reason.NOT_PROPER, problem, answer)

    if isinstance(payload, EquivalencePayload):
        return _scored(answer.terms() == payload.expected.terms(), problem, answer)

    assert isinstance(payload, SimplifyPayload)
    expected = payload.expected
    if answer.terms() == expected.terms():
        return _scored(True, problem, answer)
    if reduce(answer.n, answer.d).terms() == expected.terms():
        return _scored(False, problem, answer, Reason.EQUIVALENT_NOT_REDUCED)
    return _scored(False, problem, answer)


def _verify_choice(problem: Problem, raw: RawAnswer) -> VerificationResult:
    picked = problem.picked if raw is None else str(raw).strip()
    if not picked or picked not in problem.choices():
        return _rejected(Reason.NO_SELECTION, problem)
    return _scored(picked == problem.expected, problem, picked)


def check(problem: Problem, raw: RawAnswer = None) -> VerificationResult:
    """Verify and, for a scored attempt, fix ``answered``/``correct`` on the problem.

    Once a problem is answered its outcome is fixed: ``check`` leaves it
    alone and only reports.  A choice problem reports its locked pick, so a
    second pick cannot turn a miss into a hit.
    """

    if problem.answered:
        return verify(problem, None if problem.is_choice else raw)

    result = verify(problem, raw)
    if result.scored:
        problem.answered = True
        problem.correct = result.correct
        if problem.is_choice:
            problem.picked = str(result.submitted)
    return result


def pick(problem: Problem, choice: str) -> None:
    """Record a selection on an unanswered choice problem."""

    if not problem.is_choice:
        raise ValueError(f"{problem.kind.value} problems take a typed answer, not a pick")
    choice = str(choice).strip()
    if choice not in problem.choices():
        raise ValueError(f"{choice!r} is not one of {problem.choices()}")
    if problem.answered:
        return
    problem.picked = choice
