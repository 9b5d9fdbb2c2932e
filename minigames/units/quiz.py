from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from minigames.models import QuizData, QuizItem, UnitKind
from minigames.scoring import POINTS_PER_CORRECT, UnitResult, per_item_total
from minigames.shuffle import shuffle
from minigames.units.base import IGNORED, Capability, SubmitResult, UnitRuntime
from minigames.units.fsm import UnitPhase

FINAL_FEEDBACK_SECONDS = 1.5


@dataclass(frozen=True, slots=True)
class QuizView:
    index: int
    count: int
    question: str
    options: tuple[str, ...]
    score: int
    selected: str | None = None
    # Only revealed once the question is answered.
    correct_answer: str | None = None
    explanation: str | None = None


class QuizRuntime(UnitRuntime):
    kind = UnitKind.quiz
    capabilities = frozenset({Capability.randomize_on_start, Capability.incremental_feedback})

    def _load(self, data: Any) -> None:
        parsed = QuizData.model_validate(data)
        items = list(parsed.items)
        self.items: list[QuizItem] = shuffle(items, self.rng) if self.settings.randomize_order else items
        self.index = 0
        self.score = 0
        self.selected: str | None = None
        self.options = self._shuffled_options()

    def _shuffled_options(self) -> tuple[str, ...]:
        return tuple(shuffle(self.items[self.index].options, self.rng))

    @property
    def current(self) -> QuizItem:
        return self.items[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.items) - 1

    def _on_answer(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.awaiting_input:
            return IGNORED
        option = payload.get("option")
        if option not in self.options:
            return IGNORED

        self.selected = option
        if option == self.current.correct_answer:
            self.score += POINTS_PER_CORRECT

        self.fsm.respond()
        if self.is_last:
            # The last answer stays on screen briefly, then the quiz ends on its own.
            return SubmitResult(accepted=True, advance_after=FINAL_FEEDBACK_SECONDS)
        return SubmitResult(accepted=True)

    def _on_next(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.feedback:
            return IGNORED
        if self.is_last:
            return self._finish()
        self.index += 1
        self.selected = None
        self.options = self._shuffled_options()
        self.fsm.resume()
        return SubmitResult(accepted=True)

    def _on_advance(self, payload: dict[str, Any]) -> SubmitResult:
        # Only the last question is paced; earlier ones wait for `next`.
        if self.phase != UnitPhase.feedback or not self.is_last:
            return IGNORED
        return self._finish()

    def view(self) -> QuizView:
        answered = self.selected is not None
        return QuizView(
            index=self.index,
            count=len(self.items),
            question=self.current.question,
            options=self.options,
            score=self.score,
            selected=self.selected,
            correct_answer=self.current.correct_answer if answered else None,
            explanation=self.current.explanation if answered else None,
        )

    def result(self) -> UnitResult:
        return UnitResult(score=self.score, total=per_item_total(len(self.items)))
