"""Worked solution steps and one-line hints for each drill.

Steps are short arithmetic lines (``"16 ÷ 4 = 4"``), not markup; the UI
decides how to lay them out and whether to show them at all (see
``ProgressState.show_steps``).
"""

from __future__ import annotations

from dataclasses import dataclass

from .problems import (
    AddSubOp,
    AddSubPayload,
    ComparePayload,
    EquivalenceOp,
    EquivalencePayload,
    PointOnLinePayload,
    Problem,
    SimplifyPayload,
)
from .rational import lcm

TIMES = "×"
DIVIDE = "÷"
MINUS = "−"


@dataclass(frozen=True, slots=True)
class Step:
    label: str
    text: str


def op_symbol(op: EquivalenceOp | AddSubOp) -> str:
    if op is EquivalenceOp.MULTIPLY:
        return TIMES
    if op is EquivalenceOp.DIVIDE:
        return DIVIDE
    return "+" if op is AddSubOp.ADD else MINUS


def solution_steps(problem: Problem) -> tuple[Step, ...]:
    payload = problem.payload
    if isinstance(payload, EquivalencePayload):
        return _equivalence_steps(payload)
    if isinstance(payload, SimplifyPayload):
        return _simplify_steps(payload)
    if isinstance(payload, ComparePayload):
        return _compare_steps(payload)
    if isinstance(payload, AddSubPayload):
        return _add_sub_steps(payload)
    assert isinstance(payload, PointOnLinePayload)
    return _point_steps(payload)


def _equivalence_steps(p: EquivalencePayload) -> tuple[Step, ...]:
    sym = op_symbol(p.op)
    return (
        Step("numerator", f"{p.given.n} {sym} {p.k} = {p.expected.n}"),
        Step("denominator", f"{p.given.d} {sym} {p.k} = {p.expected.d}"),
    )


def _simplify_steps(p: SimplifyPayload) -> tuple[Step, ...]:
    g = p.expected.g
    return (
        Step("greatest common factor", str(g)),
        Step("numerator", f"{p.given.n} {DIVIDE} {g} = {p.expected.n}"),
        Step("denominator", f"{p.given.d} {DIVIDE} {g} = {p.expected.d}"),
    )


def _rename(n: int, d: int, common: int) -> Step:
    m = common // d
    return Step("rename", f"{n}/{d} = {n}{TIMES}{m}/{d}{TIMES}{m} = {n * m}/{common}")


def _compare_steps(p: ComparePayload) -> tuple[Step, ...]:
    common = lcm(p.left.d, p.right.d)
    a2 = p.left.n * (common // p.left.d)
    c2 = p.right.n * (common // p.right.d)
    return (
        Step("common denominator", str(common)),
        _rename(p.left.n, p.left.d, common),
        _rename(p.right.n, p.right.d, common),
        Step("compare numerators", f"{a2} {p.expected} {c2}"),
    )


def _add_sub_steps(p: AddSubPayload) -> tuple[Step, ...]:
    common = p.common
    a2, c2 = p.renamed
    result_n = p.raw_numerator
    steps: list[Step] = []
    if p.left.d != p.right.d:
        steps.append(Step("common denominator", str(common)))
        steps.append(_rename(p.left.n, p.left.d, common))
        steps.append(_rename(p.right.n, p.right.d, common))
    steps.append(Step("combine", f"{a2}/{common} {op_symbol(p.op)} {c2}/{common} = {result_n}/{common}"))
    if p.expected.g > 1:
        steps.append(
            Step("simplify", f"{result_n}/{common} {DIVIDE} {p.expected.g} = {p.expected.n}/{p.expected.d}")
        )
    return tuple(steps)


def _point_steps(p: PointOnLinePayload) -> tuple[Step, ...]:
    t = p.target
    return (
        Step("tick size", f"1/{p.denominator}"),
        Step("count", f"{t.n} ticks from 0 is {t.n}/{t.d}, at point {t.label}"),
    )


def hint(problem: Problem) -> str:
    payload = problem.payload
    if isinstance(payload, EquivalencePayload):
        verb = "multiply" if payload.op is EquivalenceOp.MULTIPLY else "divide"
        return f"Hint: {verb} both numbers by {payload.k}."
    if isinstance(payload, SimplifyPayload):
        return "Hint: try 2 first. If both are even, divide by 2. Then try again."
    if isinstance(payload, ComparePayload):
        common = lcm(payload.left.d, payload.right.d)
        return f"Hint: rename both fractions to a denominator of {common}, then compare the tops."
    if isinstance(payload, AddSubPayload):
        verb = "add" if payload.op is AddSubOp.ADD else "subtract"
        if payload.left.d == payload.right.d:
            return f"Hint: same denominator. {verb.capitalize()} the numerators, keep the denominator."
        return f"Hint: find a common denominator. Try {payload.common}. Rename both fractions, then {verb}."
    assert isinstance(payload, PointOnLinePayload)
    return f"Hint: the line from 0 to 1 is cut into {payload.denominator} equal parts. Count the jumps."
