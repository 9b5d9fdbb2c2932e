from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minigames.units.base import UnitRuntime


POINTS_PER_CORRECT = 10

MATCHING_BASE = 100
MATCHING_MISTAKE_PENALTY = 5

# Units that are pass/fail (sequence, cloze, scramble) and flashcard exposure.
FULL_MARKS = 100

# Every Mixed stage counts for the same nominal total, whatever the unit's own total.
MIXED_STAGE_WEIGHT = 100

CELEBRATION_RATIO = 0.7


@dataclass(frozen=True, slots=True)
class UnitResult:
    score: int
    total: int


NO_SCORE = UnitResult(score=0, total=0)
EXPOSURE_RESULT = UnitResult(score=FULL_MARKS, total=FULL_MARKS)


def per_item_total(item_count: int) -> int:
    return POINTS_PER_CORRECT * item_count


def matching_score(mistakes: int) -> int:
    return max(0, MATCHING_BASE - MATCHING_MISTAKE_PENALTY * mistakes)


def stage_result(runtime: "UnitRuntime") -> UnitResult:
    """Score a finished stage.

    Unscored units (flashcards) measure exposure, so finishing one earns full marks.
    """

    if not runtime.scored:
        return EXPOSURE_RESULT
    return runtime.result()


def should_celebrate(score: int, total: int) -> bool:
    return total > 0 and score / total > CELEBRATION_RATIO
