from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from minigames.cloze import PromptSegment, prompt_segments
from minigames.models import ClozeContent, ClozeData, UnitKind
from minigames.scoring import FULL_MARKS, UnitResult
from minigames.units.base import IGNORED, Capability, SubmitResult, UnitRuntime
from minigames.units.fsm import UnitPhase


@dataclass(frozen=True, slots=True)
class ClozeView:
    segments: tuple[PromptSegment, ...]
    inputs: tuple[str, ...]
    checked: bool
    correct: tuple[bool, ...] = ()


class ClozeRuntime(UnitRuntime):
    """Fill every blank, then check as often as needed.

    Blanks that were right at the last check stay locked until another blank is edited.
    """

    kind = UnitKind.cloze
    capabilities = frozenset({Capability.incremental_feedback, Capability.retry_without_penalty})

    def _load(self, data: Any) -> None:
        self.content: ClozeContent = ClozeData.model_validate(data).data
        self.inputs = [""] * len(self.content.answers)
        self.correct: tuple[bool, ...] = ()

    def _normalize(self, text: str) -> str:
        text = text.strip()
        return text if self.settings.case_sensitive else text.casefold()

    def blank_matches(self, index: int) -> bool:
        return self._normalize(self.inputs[index]) == self._normalize(self.content.answers[index])

    def _on_fill(self, payload: dict[str, Any]) -> SubmitResult:
        index = payload.get("index")
        text = payload.get("text")
        if not isinstance(index, int) or isinstance(index, bool) or not isinstance(text, str):
            return IGNORED
        if not 0 <= index < len(self.inputs):
            return IGNORED
        if self.phase == UnitPhase.feedback:
            if self.correct[index]:
                return IGNORED
            # Editing after a check starts a fresh attempt.
            self.correct = ()
            self.fsm.resume()
        self.inputs[index] = text
        return SubmitResult(accepted=True)

    def _on_check(self, payload: dict[str, Any]) -> SubmitResult:
        self.correct = tuple(self.blank_matches(i) for i in range(len(self.inputs)))
        if all(self.correct):
            return self._finish()
        if self.phase == UnitPhase.awaiting_input:
            self.fsm.respond()
        return SubmitResult(accepted=True)

    def view(self) -> ClozeView:
        return ClozeView(
            segments=tuple(prompt_segments(self.content)),
            inputs=tuple(self.inputs),
            checked=bool(self.correct),
            correct=self.correct,
        )

    def result(self) -> UnitResult:
        return UnitResult(score=FULL_MARKS if self.terminal else 0, total=FULL_MARKS)
