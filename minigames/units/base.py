from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar

from minigames.models import Settings, UnitKind
from minigames.scoring import NO_SCORE, UnitResult
from minigames.units.fsm import UnitFSM, UnitPhase


class Capability(StrEnum):
    randomize_on_start = "randomize_on_start"
    incremental_feedback = "incremental_feedback"
    retry_without_penalty = "retry_without_penalty"


@dataclass(frozen=True, slots=True)
class SubmitResult:
    """Outcome of one player move.

    - `accepted`: False means the move was ignored (invalid, duplicate, or out of phase).
    - `terminal`: the unit finished with this move.
    - `advance_after`: seconds of feedback to show before the owner sends `advance`.
    """

    accepted: bool
    terminal: bool = False
    advance_after: float | None = None


IGNORED = SubmitResult(accepted=False)


class UnitRuntime(ABC):
    """Interaction state machine for one game unit.

    Lifecycle: `start(data, settings)` once, then `submit(action, payload)` until
    `terminal`. `result()` may be read at any time and reports the running tally.
    """

    kind: ClassVar[UnitKind | None] = None
    capabilities: ClassVar[frozenset[Capability]] = frozenset()
    scored: ClassVar[bool] = True

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.fsm = UnitFSM()
        self.settings = Settings()

    @property
    def phase(self) -> UnitPhase:
        return self.fsm.phase

    @property
    def terminal(self) -> bool:
        return self.phase == UnitPhase.completed

    def start(self, data: Any, settings: Settings) -> Any:
        """Validate `data` and build the initial presentation state.

        Raises ValueError on malformed data; callers degrade to `UnsupportedRuntime`.
        """

        self.settings = settings
        self._load(data)
        return self.view()

    def submit(self, action: str, payload: Mapping[str, Any] | None = None) -> SubmitResult:
        if self.terminal:
            return IGNORED
        handler = getattr(self, f"_on_{action}", None)
        if handler is None:
            return IGNORED
        return handler(dict(payload or {}))

    @abstractmethod
    def _load(self, data: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def view(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def result(self) -> UnitResult:
        raise NotImplementedError

    def _finish(self) -> SubmitResult:
        self.fsm.complete()
        return SubmitResult(accepted=True, terminal=True)


@dataclass(frozen=True, slots=True)
class UnsupportedView:
    reason: str


class UnsupportedRuntime(UnitRuntime):
    """Stand-in for a stage that cannot be played; finished as soon as it starts."""

    def __init__(self, *, reason: str, rng: random.Random | None = None) -> None:
        super().__init__(rng=rng)
        self.reason = reason

    def _load(self, data: Any) -> None:
        self.fsm.complete()

    def view(self) -> UnsupportedView:
        return UnsupportedView(reason=self.reason)

    def result(self) -> UnitResult:
        return NO_SCORE
