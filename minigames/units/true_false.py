from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from minigames.models import TrueFalseData, TrueFalseItem, UnitKind
from minigames.scoring import POINTS_PER_CORRECT, UnitResult, per_item_total
from minigames.shuffle import shuffle
from minigames.units.base import IGNORED, Capability, SubmitResult, UnitRuntime
from minigames.units.fsm import UnitPhase

FEEDBACK_SECONDS = 1.5


@dataclass(frozen=True, slots=True)
class TrueFalseView:
    index: int
    count: int
    statement: str
    score: int
    last_guess_correct: bool | None = None
    correction: str | None = None


class TrueFalseRuntime(UnitRuntime):
    kind = UnitKind.true_false
    capabilities = frozenset({Capability.randomize_on_start, Capability.incremental_feedback})

    def _load(self, data: Any) -> None:
        parsed = TrueFalseData.model_validate(data)
        self.items: list[TrueFalseItem] = shuffle(parsed.items, self.rng)
        self.index = 0
        self.score = 0
        self.last_guess_correct: bool | None = None

    def _on_guess(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.awaiting_input:
            return IGNORED
        guess = payload.get("value")
        if not isinstance(guess, bool):
            return IGNORED

        correct = guess == self.items[self.index].is_true
        if correct:
            self.score += POINTS_PER_CORRECT
        self.last_guess_correct = correct
        self.fsm.respond()
        # Pacing only: the owner sends `advance` once the feedback has been on screen.
        return SubmitResult(accepted=True, advance_after=FEEDBACK_SECONDS)

    def _on_advance(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.feedback:
            return IGNORED
        if self.index == len(self.items) - 1:
            return self._finish()
        self.index += 1
        self.last_guess_correct = None
        self.fsm.resume()
        return SubmitResult(accepted=True)

    def view(self) -> TrueFalseView:
        item = self.items[self.index]
        return TrueFalseView(
            index=self.index,
            count=len(self.items),
            statement=item.statement,
            score=self.score,
            last_guess_correct=self.last_guess_correct,
            correction=item.correction if self.last_guess_correct is False else None,
        )

    def result(self) -> UnitResult:
        return UnitResult(score=self.score, total=per_item_total(len(self.items)))
