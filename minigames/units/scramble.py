from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from minigames.models import ScrambleData, ScrambleItem, UnitKind
from minigames.scoring import FULL_MARKS, UnitResult
from minigames.shuffle import scramble_word, shuffle
from minigames.units.base import IGNORED, Capability, SubmitResult, UnitRuntime
from minigames.units.fsm import UnitPhase

FEEDBACK_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class ScrambleView:
    index: int
    count: int
    scrambled: str
    hint: str | None
    feedback: Literal["correct", "wrong"] | None = None


class ScrambleRuntime(UnitRuntime):
    """Unscramble one word at a time; a wrong answer keeps the same word."""

    kind = UnitKind.scramble
    capabilities = frozenset(
        {Capability.randomize_on_start, Capability.incremental_feedback, Capability.retry_without_penalty}
    )

    def _load(self, data: Any) -> None:
        parsed = ScrambleData.model_validate(data)
        self.items: list[ScrambleItem] = shuffle(parsed.items, self.rng)
        self.index = 0
        self.feedback: Literal["correct", "wrong"] | None = None
        self.scrambled = scramble_word(self.items[0].word, self.rng)

    def _on_answer(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.awaiting_input:
            return IGNORED
        text = payload.get("text")
        if not isinstance(text, str):
            return IGNORED

        if text.strip().casefold() != self.items[self.index].word.strip().casefold():
            self.feedback = "wrong"
            return SubmitResult(accepted=True)

        self.feedback = "correct"
        self.fsm.respond()
        return SubmitResult(accepted=True, advance_after=FEEDBACK_SECONDS)

    def _on_advance(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.feedback:
            return IGNORED
        if self.index == len(self.items) - 1:
            return self._finish()
        self.index += 1
        self.feedback = None
        self.scrambled = scramble_word(self.items[self.index].word, self.rng)
        self.fsm.resume()
        return SubmitResult(accepted=True)

    def view(self) -> ScrambleView:
        item = self.items[self.index]
        return ScrambleView(
            index=self.index,
            count=len(self.items),
            scrambled=self.scrambled,
            hint=item.hint,
            feedback=self.feedback,
        )

    def result(self) -> UnitResult:
        # Advancing requires a correct answer, so finishing is a full pass.
        return UnitResult(score=FULL_MARKS if self.terminal else 0, total=FULL_MARKS)
