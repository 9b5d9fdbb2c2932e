from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from minigames.models import SequenceData, SequenceItem, UnitKind
from minigames.scoring import FULL_MARKS, UnitResult
from minigames.shuffle import shuffle
from minigames.units.base import IGNORED, Capability, SubmitResult, UnitRuntime
from minigames.units.fsm import UnitPhase

DEFAULT_INSTRUCTION = "Put the items in the correct order"

_STEPS = {"up": -1, "down": 1}


@dataclass(frozen=True, slots=True)
class SequenceView:
    instruction: str
    items: tuple[SequenceItem, ...]
    checked: bool
    # Per-position correctness from the last check; empty while editing.
    correct: tuple[bool, ...] = ()


class SequenceRuntime(UnitRuntime):
    """Reorder items with adjacent swaps, then check.

    A failed check freezes the list until `retry`; only a fully correct check
    finishes the unit, so a player who never gets it right stays here.
    """

    kind = UnitKind.sequence
    capabilities = frozenset({Capability.randomize_on_start, Capability.retry_without_penalty})

    def _load(self, data: Any) -> None:
        parsed = SequenceData.model_validate(data)
        self.instruction = parsed.question or DEFAULT_INSTRUCTION
        self.items: list[SequenceItem] = shuffle(parsed.items, self.rng)
        self.correct: tuple[bool, ...] = ()

    def _on_move(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.awaiting_input:
            return IGNORED
        index = payload.get("index")
        step = _STEPS.get(str(payload.get("direction")))
        if not isinstance(index, int) or isinstance(index, bool) or step is None:
            return IGNORED
        other = index + step
        if not (0 <= index < len(self.items) and 0 <= other < len(self.items)):
            return IGNORED
        self.items[index], self.items[other] = self.items[other], self.items[index]
        return SubmitResult(accepted=True)

    def _on_check(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.awaiting_input:
            return IGNORED
        self.correct = tuple(item.order == pos for pos, item in enumerate(self.items))
        if all(self.correct):
            return self._finish()
        self.fsm.respond()
        return SubmitResult(accepted=True)

    def _on_retry(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.feedback:
            return IGNORED
        # Same arrangement, editable again.
        self.correct = ()
        self.fsm.resume()
        return SubmitResult(accepted=True)

    def view(self) -> SequenceView:
        return SequenceView(
            instruction=self.instruction,
            items=tuple(self.items),
            checked=bool(self.correct),
            correct=self.correct,
        )

    def result(self) -> UnitResult:
        return UnitResult(score=FULL_MARKS if self.terminal else 0, total=FULL_MARKS)
