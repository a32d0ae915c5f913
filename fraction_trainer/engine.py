"""One object that owns the generator, the progress tracker and the quiz.

Construct a :class:`FractionTrainer` once at startup and hand it to whatever
drives the UI.  It holds no global state of its own; two trainers built
with separate storage do not see each other.
"""

from __future__ import annotations

from .config import MixPolicy, QuizConfig, WorksheetConfig, WorksheetMix
from .generator import ProblemGenerator
from .problems import Problem, ProblemKind
from .progress import ProgressState, ProgressTracker
from .rng import SeededRng
from .session import QuizSession
from .steps import Step, hint, solution_steps
from .storage import JsonFileStorage, KeyValueStorage
from .verifier import RawAnswer, VerificationResult, check, verify
from .worksheet import WorksheetItem, build_worksheet


class FractionTrainer:
    def __init__(
        self,
        *,
        seed: int | None = None,
        storage: KeyValueStorage | None = None,
        quiz_config: QuizConfig | None = None,
    ) -> None:
        self._rng = SeededRng(seed)
        self._generator = ProblemGenerator(rng=self._rng)
        self._progress = ProgressTracker(storage)
        self._quiz_config = quiz_config or QuizConfig()

    @classmethod
    def with_file_storage(cls, *, seed: int | None = None) -> FractionTrainer:
        """Trainer persisting to ``JsonFileStorage.default_path()``."""
        return cls(seed=seed, storage=JsonFileStorage(JsonFileStorage.default_path()))

    @property
    def generator(self) -> ProblemGenerator:
        return self._generator

    @property
    def progress(self) -> ProgressTracker:
        return self._progress

    # Generation ------------------------------------------------------------

    def generate_problem(self, kind: ProblemKind | str, *, level: int | None = None) -> Problem:
        return self._generator.generate(kind, level=level)

    def generate_batch(
        self,
        count: int | None = None,
        mix: MixPolicy | str | None = None,
        include_point_line: bool | None = None,
    ) -> list[Problem]:
        cfg = self._quiz_config
        return self._generator.generate_batch(
            cfg.count if count is None else count,
            cfg.mix if mix is None else mix,
            cfg.include_point_line if include_point_line is None else include_point_line,
        )

    def worksheet(self, count: int | None = None, mix: WorksheetMix | str | None = None) -> list[WorksheetItem]:
        return build_worksheet(self._generator, WorksheetConfig(), count=count, mix=mix)

    # Checking --------------------------------------------------------------

    def verify(self, problem: Problem, raw: RawAnswer = None) -> VerificationResult:
        """Pure check; nothing is recorded."""
        return verify(problem, raw)

    def check_drill(self, problem: Problem, raw: RawAnswer = None) -> VerificationResult:
        """Untimed drill attempt: the first scored attempt counts towards progress.

        Rejected input can be retried.  Checking an answered problem again
        records nothing; the drill moves on with a fresh problem.
        """

        already_answered = problem.answered
        result = check(problem, raw)
        if result.scored and not already_answered:
            self._progress.record(result.correct)
        return result

    def steps(self, problem: Problem) -> tuple[Step, ...]:
        return solution_steps(problem)

    def hint(self, problem: Problem) -> str:
        return hint(problem)

    # Quiz ------------------------------------------------------------------

    def start_session(self, problems: list[Problem] | None = None) -> QuizSession:
        """A new quiz wired to this trainer's progress; generates a batch if none given."""

        session = QuizSession(progress=self._progress)
        session.start(self.generate_batch() if problems is None else problems)
        return session

    def submit_answer(self, session: QuizSession, raw: RawAnswer = None) -> VerificationResult | None:
        return session.submit_answer(raw)

    def advance(self, session: QuizSession) -> bool:
        return session.advance()

    # Progress --------------------------------------------------------------

    def record_progress(self, correct: bool) -> ProgressState:
        return self._progress.record(correct)

    def progress_snapshot(self) -> ProgressState:
        return self._progress.snapshot()

    def reset_progress(self) -> ProgressState:
        return self._progress.reset()
