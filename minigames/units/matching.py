from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from minigames.models import MatchingData, UnitKind
from minigames.scoring import MATCHING_BASE, UnitResult, matching_score
from minigames.shuffle import shuffle
from minigames.units.base import IGNORED, Capability, SubmitResult, UnitRuntime
from minigames.units.fsm import UnitPhase


@dataclass(frozen=True, slots=True)
class MatchCard:
    card_id: str
    text: str
    pair_id: str


@dataclass(frozen=True, slots=True)
class MatchingView:
    left: tuple[MatchCard, ...]
    right: tuple[MatchCard, ...]
    matched: frozenset[str]
    selected_left: str | None
    mistakes: int


class MatchingRuntime(UnitRuntime):
    """Pick a left card, then its partner on the right.

    A wrong pick costs a mistake and clears the selection; the next attempt is
    allowed immediately.
    """

    kind = UnitKind.matching
    capabilities = frozenset({Capability.randomize_on_start, Capability.incremental_feedback})

    def _load(self, data: Any) -> None:
        parsed = MatchingData.model_validate(data)
        self.pair_count = len(parsed.pairs)
        left = [MatchCard(card_id=f"L-{p.id}", text=p.item_a, pair_id=p.id) for p in parsed.pairs]
        right = [MatchCard(card_id=f"R-{p.id}", text=p.item_b, pair_id=p.id) for p in parsed.pairs]
        # Decks are shuffled independently of each other.
        self.left = tuple(shuffle(left, self.rng))
        self.right = tuple(shuffle(right, self.rng))
        self._pair_ids = {p.id for p in parsed.pairs}
        self.matched: set[str] = set()
        self.selected_left: str | None = None
        self.mistakes = 0

    def _on_select_left(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.awaiting_input:
            return IGNORED
        pair_id = payload.get("pair_id")
        if not isinstance(pair_id, str):
            return IGNORED
        if pair_id not in self._pair_ids or pair_id in self.matched:
            return IGNORED
        self.selected_left = pair_id
        return SubmitResult(accepted=True)

    def _on_select_right(self, payload: dict[str, Any]) -> SubmitResult:
        if self.phase != UnitPhase.awaiting_input or self.selected_left is None:
            return IGNORED
        pair_id = payload.get("pair_id")
        if not isinstance(pair_id, str):
            return IGNORED
        if pair_id not in self._pair_ids or pair_id in self.matched:
            return IGNORED

        if pair_id == self.selected_left:
            self.matched.add(pair_id)
            self.selected_left = None
            if len(self.matched) == self.pair_count:
                return self._finish()
            return SubmitResult(accepted=True)

        self.mistakes += 1
        self.selected_left = None
        return SubmitResult(accepted=True)

    def view(self) -> MatchingView:
        return MatchingView(
            left=self.left,
            right=self.right,
            matched=frozenset(self.matched),
            selected_left=self.selected_left,
            mistakes=self.mistakes,
        )

    def result(self) -> UnitResult:
        return UnitResult(score=matching_score(self.mistakes), total=MATCHING_BASE)
