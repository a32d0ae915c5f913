from __future__ import annotations

from fraction_trainer.config import WorksheetConfig, WorksheetMix
from fraction_trainer.generator import ProblemGenerator
from fraction_trainer.problems import (
    EquivalenceOp,
    ProblemKind,
    make_add_sub,
    make_compare,
    make_equivalence,
    make_point_on_line,
    make_simplify,
)
from fraction_trainer.steps import hint, solution_steps
from fraction_trainer.worksheet import build_worksheet, worksheet_prompt


def _texts(problem) -> list[str]:
    return [s.text for s in solution_steps(problem)]


def test_equivalence_steps_apply_factor_to_both_terms() -> None:
    assert _texts(make_equivalence(3, 5, EquivalenceOp.MULTIPLY, 2)) == ["3 × 2 = 6", "5 × 2 = 10"]
    assert _texts(make_equivalence(6, 8, EquivalenceOp.DIVIDE, 2)) == ["6 ÷ 2 = 3", "8 ÷ 2 = 4"]


def test_simplify_steps_show_greatest_common_factor() -> None:
    assert _texts(make_simplify(16, 20)) == ["4", "16 ÷ 4 = 4", "20 ÷ 4 = 5"]


def test_compare_steps_rename_to_common_denominator() -> None:
    steps = solution_steps(make_compare(2, 3, 3, 5))
    assert steps[0].label == "common denominator"
    assert steps[0].text == "15"
    assert steps[1].text == "2/3 = 2×5/3×5 = 10/15"
    assert steps[2].text == "3/5 = 3×3/5×3 = 9/15"
    assert steps[3].text == "10 > 9"


def test_add_sub_steps_skip_renaming_for_like_denominators() -> None:
    like = _texts(make_add_sub(1, 4, 2, 4, "+", 1))
    assert like == ["1/4 + 2/4 = 3/4"]

    unlike = solution_steps(make_add_sub(2, 3, 1, 4, "-", 4))
    assert [s.label for s in unlike] == ["common denominator", "rename", "rename", "combine"]
    assert unlike[-1].text == "8/12 − 3/12 = 5/12"

    reduced = _texts(make_add_sub(1, 6, 1, 3, "+", 3))
    assert reduced[-1] == "3/6 ÷ 3 = 1/2"


def test_point_steps_name_the_target() -> None:
    steps = solution_steps(make_point_on_line(4, [1, 2, 3], 2))
    assert steps[0].text == "1/4"
    assert "point C" in steps[1].text


def test_every_generated_problem_has_steps_and_hint() -> None:
    gen = ProblemGenerator(seed=21)
    for p in gen.generate_batch(20, "bcd", True):
        assert solution_steps(p)
        assert hint(p).startswith("Hint:")


def test_hints_mention_the_useful_number() -> None:
    assert "3" in hint(make_equivalence(1, 2, "mul", 3))
    assert "12" in hint(make_add_sub(1, 4, 1, 6, "+", 3))
    assert "same denominator" in hint(make_add_sub(1, 5, 2, 5, "+", 1))


def test_worksheet_prompts_and_answer_key() -> None:
    assert worksheet_prompt(make_equivalence(3, 5, "mul", 2)) == "3/5 × 2 = ___/___"
    assert worksheet_prompt(make_simplify(16, 20)) == "Simplify 16/20"
    assert worksheet_prompt(make_compare(1, 2, 3, 4)) == "1/2 ___ 3/4"
    assert worksheet_prompt(make_add_sub(2, 3, 1, 4, "-", 4)) == "2/3 − 1/4 = ___/___"


def test_build_worksheet_numbers_items() -> None:
    gen = ProblemGenerator(seed=22)
    items = build_worksheet(gen, WorksheetConfig(count=8, mix=WorksheetMix.COMPARE))
    assert [i.number for i in items] == list(range(1, 9))
    assert all(i.problem.kind is ProblemKind.COMPARE for i in items)
    assert all(i.answer in ("<", "=", ">") for i in items)

    clamped = build_worksheet(gen, count=100, mix="simplify")
    assert len(clamped) == 30
    assert all("/" in i.answer for i in clamped)
