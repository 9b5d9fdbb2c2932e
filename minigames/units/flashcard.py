from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from minigames.models import FlashcardData, FlashcardItem, UnitKind
from minigames.scoring import NO_SCORE, UnitResult
from minigames.shuffle import shuffle
from minigames.units.base import IGNORED, Capability, SubmitResult, UnitRuntime


@dataclass(frozen=True, slots=True)
class FlashcardView:
    index: int
    count: int
    text: str
    flipped: bool


class FlashcardRuntime(UnitRuntime):
    """Flip-and-browse deck. Nothing is graded; finishing is the only outcome."""

    kind = UnitKind.flashcard
    capabilities = frozenset({Capability.randomize_on_start})
    scored = False

    def _load(self, data: Any) -> None:
        parsed = FlashcardData.model_validate(data)
        self.cards: list[FlashcardItem] = shuffle(parsed.items, self.rng)
        self.index = 0
        self.flipped = False

    def _on_flip(self, payload: dict[str, Any]) -> SubmitResult:
        self.flipped = not self.flipped
        return SubmitResult(accepted=True)

    def _on_next(self, payload: dict[str, Any]) -> SubmitResult:
        self.flipped = False
        if self.index == len(self.cards) - 1:
            return self._finish()
        self.index += 1
        return SubmitResult(accepted=True)

    def _on_prev(self, payload: dict[str, Any]) -> SubmitResult:
        if self.index == 0:
            return IGNORED
        self.flipped = False
        self.index -= 1
        return SubmitResult(accepted=True)

    def view(self) -> FlashcardView:
        card = self.cards[self.index]
        return FlashcardView(
            index=self.index,
            count=len(self.cards),
            text=card.back if self.flipped else card.front,
            flipped=self.flipped,
        )

    def result(self) -> UnitResult:
        return NO_SCORE
