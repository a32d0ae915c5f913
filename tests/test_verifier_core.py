from __future__ import annotations

import pytest

from fraction_trainer.problems import (
    EquivalenceOp,
    ProblemKind,
    make_add_sub,
    make_compare,
    make_equivalence,
    make_point_on_line,
    make_simplify,
)
from fraction_trainer.rational import Fraction, ReducedFraction
from fraction_trainer.verifier import Outcome, Reason, check, parse_fraction, pick, verify


def test_equivalence_exact_match_only() -> None:
    p = make_equivalence(3, 5, EquivalenceOp.MULTIPLY, 2)
    assert p.expected == Fraction(6, 10)

    ok = verify(p, "6/10")
    assert ok.outcome is Outcome.CORRECT
    assert ok.reason is None
    assert ok.expected == "6/10"

    miss = verify(p, "3/5")
    assert miss.outcome is Outcome.INCORRECT
    assert miss.reason is Reason.PLAIN_MISMATCH

    # Equal value, different terms: still a miss for this drill.
    assert verify(p, "9/15").reason is Reason.PLAIN_MISMATCH


def test_equivalence_divide_builds_expected_from_given() -> None:
    p = make_equivalence(6, 8, "div", 2)
    assert p.expected == Fraction(3, 4)
    assert verify(p, ("3", "4")).outcome is Outcome.CORRECT
    with pytest.raises(ValueError):
        make_equivalence(5, 8, "div", 2)


@pytest.mark.parametrize(
    "raw, reason",
    [
        ("", Reason.MISSING_NUMBERS),
        ("6", Reason.MISSING_NUMBERS),
        ("6/", Reason.MISSING_NUMBERS),
        ("a/b", Reason.MISSING_NUMBERS),
        ("-6/10", Reason.MISSING_NUMBERS),
        (None, Reason.MISSING_NUMBERS),
        (("6", ""), Reason.MISSING_NUMBERS),
        ("6/0", Reason.ZERO_DENOMINATOR),
        ("10/6", Reason.NOT_PROPER),
        ("6/6", Reason.NOT_PROPER),
    ],
)
def test_typed_answers_rejected_before_scoring(raw: object, reason: Reason) -> None:
    p = make_equivalence(3, 5, EquivalenceOp.MULTIPLY, 2)
    result = verify(p, raw)
    assert result.outcome is Outcome.REJECTED
    assert result.reason is reason
    assert result.scored is False


def test_simplify_distinguishes_unreduced_equivalent() -> None:
    p = make_simplify(16, 20)
    assert p.expected == ReducedFraction(4, 5, 4)

    assert verify(p, "4/5").outcome is Outcome.CORRECT

    close = verify(p, "8/10")
    assert close.outcome is Outcome.INCORRECT
    assert close.reason is Reason.EQUIVALENT_NOT_REDUCED

    wrong = verify(p, "3/5")
    assert wrong.reason is Reason.PLAIN_MISMATCH

    assert verify(p, "5/4").reason is Reason.NOT_PROPER


def test_add_sub_accepts_unreduced_equivalent() -> None:
    p = make_add_sub(1, 4, 2, 4, "+", 1)
    assert p.expected == ReducedFraction(3, 4, 1)

    assert verify(p, "3/4").outcome is Outcome.CORRECT
    assert verify(p, "6/8").outcome is Outcome.CORRECT
    assert verify(p, "2/4").reason is Reason.PLAIN_MISMATCH
    assert verify(p, "3/0").reason is Reason.ZERO_DENOMINATOR


def test_add_sub_does_not_require_proper_answers() -> None:
    p = make_add_sub(2, 3, 1, 2, "+", 3)
    assert p.expected == ReducedFraction(7, 6, 1)
    assert verify(p, "7/6").outcome is Outcome.CORRECT
    assert verify(p, "14/12").outcome is Outcome.CORRECT


def test_compare_needs_a_pick() -> None:
    p = make_compare(1, 2, 1, 2)
    assert p.expected == "="

    missing = verify(p)
    assert missing.outcome is Outcome.REJECTED
    assert missing.reason is Reason.NO_SELECTION

    pick(p, "=")
    assert verify(p).outcome is Outcome.CORRECT
    assert verify(p, ">").reason is Reason.PLAIN_MISMATCH
    assert verify(p, "?").reason is Reason.NO_SELECTION


def test_point_on_line_matches_label() -> None:
    p = make_point_on_line(8, [5, 1, 3], target_index=1)
    assert [pt.n for pt in p.payload.points] == [1, 3, 5]
    assert p.expected == "B"
    assert p.payload.target.as_fraction() == Fraction(3, 8)

    assert verify(p).reason is Reason.NO_SELECTION
    assert verify(p, "B").outcome is Outcome.CORRECT
    assert verify(p, "A").outcome is Outcome.INCORRECT


def test_pick_validates_choice_and_kind() -> None:
    with pytest.raises(ValueError):
        pick(make_compare(1, 2, 1, 3), "A")
    with pytest.raises(ValueError):
        pick(make_simplify(2, 4), "<")


def test_verify_is_idempotent_and_pure() -> None:
    p = make_simplify(16, 20)
    first = verify(p, "8/10")
    second = verify(p, "8/10")
    assert first == second
    assert p.answered is False
    assert p.correct is None


def test_check_marks_only_scored_attempts() -> None:
    p = make_compare(2, 3, 3, 5)

    rejected = check(p)
    assert rejected.scored is False
    assert p.answered is False

    result = check(p, "<")
    assert result.outcome is Outcome.INCORRECT
    assert p.answered is True
    assert p.correct is False
    assert p.picked == "<"


def test_parse_fraction_forms() -> None:
    assert parse_fraction("6/10") == Fraction(6, 10)
    assert parse_fraction(" 6 / 10 ") == Fraction(6, 10)
    assert parse_fraction(("6", "10")) == Fraction(6, 10)
    assert parse_fraction(["6", "10", "1"]) is None
    assert parse_fraction("6/10/2") is None


def test_problem_rejects_mismatched_payload() -> None:
    p = make_simplify(2, 4)
    with pytest.raises(ValueError):
        type(p)(kind=ProblemKind.COMPARE, payload=p.payload)


def test_oversized_numbers_are_rejected_not_raised() -> None:
    p = make_equivalence(3, 5, EquivalenceOp.MULTIPLY, 2)
    huge = "1" * 5000

    for raw in (f"{huge}/10", f"3/{huge}", (huge, "10")):
        result = verify(p, raw)
        assert result.outcome is Outcome.REJECTED
        assert result.reason is Reason.MISSING_NUMBERS
    assert p.answered is False


def test_check_leaves_an_answered_problem_alone() -> None:
    cmp = make_compare(2, 3, 3, 5)
    assert check(cmp, "<").outcome is Outcome.INCORRECT

    again = check(cmp, ">")
    assert again.outcome is Outcome.INCORRECT
    assert again.submitted == "<"
    assert (cmp.picked, cmp.correct) == ("<", False)

    simp = make_simplify(16, 20)
    assert check(simp, "8/10").reason is Reason.EQUIVALENT_NOT_REDUCED
    assert check(simp, "4/5").outcome is Outcome.CORRECT
    assert simp.correct is False
