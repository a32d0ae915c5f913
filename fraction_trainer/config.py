from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# Keeps diagrams and mental math tractable.
MAX_DENOMINATOR = 24

QUIZ_COUNT_RANGE = (6, 20)
WORKSHEET_COUNT_RANGE = (6, 30)

STORAGE_KEY = "mathlab.fractions.v1"
PROGRESS_STORE_ENV = "FRACTION_TRAINER_STORE"
DEFAULT_STORE_FILENAME = ".fraction_trainer_progress.json"


class MixPolicy(StrEnum):
    TOPIC_B = "topicb"  # equivalence + simplify
    TOPIC_C = "topicc"  # compare (+ number line)
    TOPIC_D = "topicd"  # add/subtract
    COMBINED = "bcd"
    MIXED = "mixed"

    @classmethod
    def _missing_(cls, value: object) -> MixPolicy | None:
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        if key == "combined":
            return cls.COMBINED
        for member in cls:
            if member.value == key:
                return member
        return None


class WorksheetMix(StrEnum):
    MIXED = "mixed"
    EQUIVALENT = "equivalent"
    SIMPLIFY = "simplify"
    COMPARE = "compare"
    ADD_SUB = "addsub"
    ADD_SUB_LIKE = "addsub-like"
    ADD_SUB_UNLIKE = "addsub-unlike"


@dataclass(frozen=True, slots=True)
class QuizConfig:
    count: int = 10
    mix: MixPolicy = MixPolicy.MIXED
    include_point_line: bool = True


@dataclass(frozen=True, slots=True)
class WorksheetConfig:
    count: int = 12
    mix: WorksheetMix = WorksheetMix.MIXED
