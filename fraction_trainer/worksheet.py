from __future__ import annotations

from dataclasses import dataclass

from .config import WorksheetConfig, WorksheetMix
from .generator import ProblemGenerator
from .problems import (
    AddSubPayload,
    ComparePayload,
    EquivalencePayload,
    PointOnLinePayload,
    Problem,
    SimplifyPayload,
)
from .steps import op_symbol

BLANK = "___/___"


@dataclass(frozen=True, slots=True)
class WorksheetItem:
    number: int
    problem: Problem
    prompt: str
    answer: str


def worksheet_prompt(problem: Problem) -> str:
    """One printable line for the problem, answers left blank."""

    p = problem.payload
    if isinstance(p, EquivalencePayload):
        return f"{p.given} {op_symbol(p.op)} {p.k} = {BLANK}"
    if isinstance(p, SimplifyPayload):
        return f"Simplify {p.given}"
    if isinstance(p, ComparePayload):
        return f"{p.left} ___ {p.right}"
    if isinstance(p, AddSubPayload):
        return f"{p.left} {op_symbol(p.op)} {p.right} = {BLANK}"
    assert isinstance(p, PointOnLinePayload)
    labels = ", ".join(pt.label for pt in p.points)
    return f"Which point ({labels}) is at {p.target.as_fraction()}?"


def build_worksheet(
    generator: ProblemGenerator,
    config: WorksheetConfig | None = None,
    *,
    count: int | None = None,
    mix: WorksheetMix | str | None = None,
) -> list[WorksheetItem]:
    """Numbered problems with answer-key text; count is clamped to 6..30."""

    cfg = config or WorksheetConfig()
    problems = generator.worksheet_batch(
        cfg.count if count is None else count,
        cfg.mix if mix is None else mix,
    )
    return [
        WorksheetItem(number=i, problem=p, prompt=worksheet_prompt(p), answer=p.expected_display())
        for i, p in enumerate(problems, start=1)
    ]
