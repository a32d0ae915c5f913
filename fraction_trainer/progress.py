from __future__ import annotations

from dataclasses import dataclass, replace
import json
import logging
import math

from .config import STORAGE_KEY
from .storage import KeyValueStorage, LatchedStorage

logger = logging.getLogger(__name__)


def _int_or_zero(value: object) -> int:
    # bool is an int subclass; a stored flag is not a count.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(0, int(value))


def round_half_up_percent(part: int, whole: int) -> int:
    """``round(part / whole * 100)`` with halves rounded up, in integers."""
    return (200 * part + whole) // (2 * whole)


@dataclass(frozen=True, slots=True)
class ProgressState:
    total: int = 0
    correct: int = 0
    streak: int = 0
    show_steps: bool = False
    focus: bool = False

    @property
    def accuracy(self) -> int:
        """Whole-number percentage, halves rounded up; 0 before any attempt."""
        if self.total == 0:
            return 0
        return round_half_up_percent(self.correct, self.total)

    def to_dict(self) -> dict[str, object]:
        return {
            "showSteps": self.show_steps,
            "focus": self.focus,
            "total": self.total,
            "correct": self.correct,
            "streak": self.streak,
        }

    @classmethod
    def from_dict(cls, raw: object) -> ProgressState:
        if not isinstance(raw, dict):
            return cls()
        return cls(
            total=_int_or_zero(raw.get("total")),
            correct=_int_or_zero(raw.get("correct")),
            streak=_int_or_zero(raw.get("streak")),
            show_steps=bool(raw.get("showSteps")),
            focus=bool(raw.get("focus")),
        )


class ProgressTracker:
    """Cross-session counters shared by the quiz and the untimed drills.

    The tracker owns the in-memory state; the storage collaborator owns
    durability.  Every change is saved immediately.  A failed save disables
    storage for the rest of the process and the tracker carries on in memory.
    """

    def __init__(self, storage: KeyValueStorage | None = None, *, key: str = STORAGE_KEY) -> None:
        self._storage = storage if isinstance(storage, LatchedStorage) else LatchedStorage(storage)
        self._key = key
        self._state = self._load()

    @property
    def storage_enabled(self) -> bool:
        return self._storage.enabled

    def snapshot(self) -> ProgressState:
        return self._state

    def record(self, correct: bool) -> ProgressState:
        s = self._state
        if correct:
            s = replace(s, total=s.total + 1, correct=s.correct + 1, streak=s.streak + 1)
        else:
            s = replace(s, total=s.total + 1, streak=0)
        return self._commit(s)

    def reset(self) -> ProgressState:
        return self._commit(replace(self._state, total=0, correct=0, streak=0))

    def set_show_steps(self, enabled: bool) -> ProgressState:
        return self._commit(replace(self._state, show_steps=bool(enabled)))

    def set_focus(self, enabled: bool) -> ProgressState:
        return self._commit(replace(self._state, focus=bool(enabled)))

    def _commit(self, state: ProgressState) -> ProgressState:
        self._state = state
        self._storage.save(self._key, json.dumps(state.to_dict()))
        return state

    def _load(self) -> ProgressState:
        raw = self._storage.load(self._key)
        if not raw:
            return ProgressState()
        try:
            return ProgressState.from_dict(json.loads(raw))
        except ValueError:
            logger.debug("ignoring unreadable progress record under %r", self._key)
            return ProgressState()
