from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from .problems import Problem, ProblemKind
from .progress import ProgressTracker, round_half_up_percent
from .verifier import RawAnswer, VerificationResult, check
from .verifier import pick as pick_choice

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class QuizSummary:
    score: int
    total: int
    answered: int
    misses_by_type: dict[ProblemKind, int]
    percent: int


@dataclass(frozen=True, slots=True)
class QuizSnapshot:
    """View model for the UI (pure data)."""

    phase: Phase
    index: int
    total: int
    score: int
    current: Problem | None
    last_result: VerificationResult | None = None


class QuizSession:
    """Finite quiz over a fixed list of problems.

    IDLE -> ACTIVE -> COMPLETE, with ``reset`` back to IDLE from anywhere.

    - One problem at a time; ``advance`` is gated on the current problem
      being answered.
    - A rejected submission (bad input, nothing picked) changes nothing and
      can be retried.
    - Resubmitting after an answer is scored returns the stored result.
    - ``score`` never exceeds the number of answered problems, and
      ``index <= len(problems)``.  ``score`` moves on submit and ``index``
      on ``advance``, so ``index`` lags ``score`` by at most one until the
      answered problem is advanced past.
    """

    def __init__(self, *, progress: ProgressTracker | None = None) -> None:
        self._progress = progress
        self._phase: Phase = Phase.IDLE
        self._problems: list[Problem] = []
        self._index = 0
        self._score = 0
        self._misses: dict[ProblemKind, int] = {}
        self._results: dict[int, VerificationResult] = {}
        self._last_result: VerificationResult | None = None

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def active(self) -> bool:
        return self._phase is Phase.ACTIVE

    @property
    def problems(self) -> list[Problem]:
        return list(self._problems)

    @property
    def index(self) -> int:
        return self._index

    @property
    def score(self) -> int:
        return self._score

    @property
    def misses_by_type(self) -> dict[ProblemKind, int]:
        return dict(self._misses)

    def current(self) -> Problem | None:
        if self._phase is not Phase.ACTIVE:
            return None
        return self._problems[self._index]

    def start(self, problems: list[Problem]) -> None:
        if not problems:
            raise ValueError("a quiz needs at least one problem")
        if any(p.answered for p in problems):
            raise ValueError("problems from a finished quiz cannot be reused")
        self._problems = list(problems)
        self._index = 0
        self._score = 0
        self._misses = {}
        self._results = {}
        self._last_result = None
        self._phase = Phase.ACTIVE
        logger.debug("quiz started with %d problems", len(self._problems))

    def reset(self) -> None:
        self._phase = Phase.IDLE
        self._problems = []
        self._index = 0
        self._score = 0
        self._misses = {}
        self._results = {}
        self._last_result = None
        logger.debug("quiz reset")

    def pick(self, choice: str) -> bool:
        """Select an option on the current choice problem. Returns True if recorded."""

        problem = self.current()
        if problem is None or problem.answered:
            return False
        pick_choice(problem, choice)
        return True

    def submit_answer(self, raw: RawAnswer = None) -> VerificationResult | None:
        """Check an answer for the current problem; ``None`` if no quiz is running."""

        problem = self.current()
        if problem is None:
            return None
        if problem.answered:
            return self._results[self._index]

        result = check(problem, raw)
        self._last_result = result
        if not result.scored:
            return result

        self._results[self._index] = result
        if result.correct:
            self._score += 1
        else:
            self._misses[problem.kind] = self._misses.get(problem.kind, 0) + 1
        if self._progress is not None:
            self._progress.record(result.correct)
        return result

    def advance(self) -> bool:
        """Move past the current problem. Returns False if it is not answered yet."""

        problem = self.current()
        if problem is None:
            return False
        if not problem.answered:
            logger.debug("advance refused: question %d not answered", self._index + 1)
            return False
        self._index += 1
        self._last_result = None
        if self._index >= len(self._problems):
            self._phase = Phase.COMPLETE
            logger.debug("quiz complete: %d/%d", self._score, len(self._problems))
        return True

    def summary(self) -> QuizSummary:
        total = len(self._problems)
        return QuizSummary(
            score=self._score,
            total=total,
            answered=sum(1 for p in self._problems if p.answered),
            misses_by_type=dict(self._misses),
            percent=0 if total == 0 else round_half_up_percent(self._score, total),
        )

    def snapshot(self) -> QuizSnapshot:
        return QuizSnapshot(
            phase=self._phase,
            index=self._index,
            total=len(self._problems),
            score=self._score,
            current=self.current(),
            last_result=self._last_result,
        )
