from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from minigames.models import GameDefinition, Settings, UnitKind
from minigames.scheduler import Cancellable, Scheduler
from minigames.scoring import MIXED_STAGE_WEIGHT, UnitResult, should_celebrate, stage_result
from minigames.session.events import EventType, SessionEvent
from minigames.session.fsm import SessionFSM, SessionStatus
from minigames.session.stages import ResolvedStage, StagePlan, resolve_stages
from minigames.session.timer import TimerController
from minigames.units.base import IGNORED, SubmitResult, UnitRuntime
from minigames.units.registry import start_unit, unsupported

logger = logging.getLogger(__name__)

FinishCallback = Callable[[int, int], None]


@dataclass(frozen=True, slots=True)
class SessionOutcome:
    score: int
    total: int
    timed_out: bool = False

    @property
    def celebrate(self) -> bool:
        return should_celebrate(self.score, self.total)


@dataclass(frozen=True, slots=True)
class SessionView:
    status: SessionStatus
    stage_index: int
    stage_count: int
    stage_title: str
    stage_kind: UnitKind | None
    unit: Any
    cumulative_score: int
    time_remaining: int | None


class GameSession:
    """One play-through of a game definition.

    Owns the stage index, the cumulative score and the timer. Units are created
    fresh for every stage; a restart builds a new session instead of rewinding
    this one, so every shuffle is re-derived.

    Callers drive it with `start()`, `submit(action, payload)` and, when the
    player leaves, `close()`. `on_finish(score, total)` fires exactly once.
    """

    def __init__(
        self,
        definition: GameDefinition,
        settings: Settings | None = None,
        *,
        scheduler: Scheduler,
        on_finish: FinishCallback | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.definition = definition
        self.settings = settings or Settings()
        self.plan: StagePlan = resolve_stages(definition)
        self.fsm = SessionFSM()
        self.history: list[SessionEvent] = []
        self.stage_index = 0
        self.cumulative_score = 0
        self.stage_results: list[UnitResult] = []
        self.runtime: UnitRuntime | None = None
        self.outcome: SessionOutcome | None = None

        self._scheduler = scheduler
        self._on_finish = on_finish
        self._rng = rng
        self._pending_advance: Cancellable | None = None
        self._closed = False
        self.timer = TimerController(
            seconds=self.settings.time_limit_seconds,
            scheduler=scheduler,
            on_expire=self._on_timeout,
            on_tick=self._on_tick,
        )

    # --- read side ---

    @property
    def status(self) -> SessionStatus:
        return self.fsm.status

    @property
    def stage_count(self) -> int:
        return len(self.plan.stages)

    @property
    def current_stage(self) -> ResolvedStage | None:
        if not self.plan.stages:
            return None
        return self.plan.stages[self.stage_index]

    @property
    def time_remaining(self) -> int | None:
        return self.timer.remaining

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def can_restart(self) -> bool:
        return self.settings.allow_retry

    def view(self) -> SessionView:
        stage = self.current_stage
        return SessionView(
            status=self.status,
            stage_index=self.stage_index,
            stage_count=self.stage_count,
            stage_title=stage.title if stage is not None else "",
            stage_kind=stage.kind if stage is not None else None,
            unit=self.runtime.view() if self.runtime is not None else None,
            cumulative_score=self.cumulative_score,
            time_remaining=self.time_remaining,
        )

    # --- lifecycle ---

    def start(self) -> SessionView:
        if self._closed or self.status != SessionStatus.idle:
            return self.view()

        if not self.plan.stages:
            logger.warning("Game has no stages; finishing immediately")
            self._finish(timed_out=False)
            return self.view()

        self.fsm.begin()
        self._record("SESSION_STARTED", {"stages": self.stage_count, "mixed": self.plan.mixed})
        self.timer.start()
        runtime = self._enter_stage(0)
        if runtime.terminal:
            self._complete_stage(runtime)
        return self.view()

    def submit(self, action: str, payload: Mapping[str, Any] | None = None) -> SubmitResult:
        """Forward a player move to the current unit.

        Moves outside a running session, or ones the unit rejects, are no-ops.
        """

        if self._closed or self.status != SessionStatus.running or self.runtime is None:
            return IGNORED

        runtime = self.runtime
        result = runtime.submit(action, payload)
        if not result.accepted:
            return result

        # Any accepted move supersedes a queued auto-advance (e.g. the player skipped the pause).
        self._cancel_pending_advance()
        if result.terminal:
            self._complete_stage(runtime)
        elif result.advance_after is not None:
            self._schedule_advance(runtime, result.advance_after)
        return result

    def close(self) -> None:
        """Tear down: stop the timer and drop pending callbacks. The session is discarded."""

        self._closed = True
        self.timer.cancel()
        self._cancel_pending_advance()

    def restart(self) -> "GameSession":
        if not self.can_restart:
            raise ValueError("Retries are disabled for this game")
        self.close()
        fresh = GameSession(
            self.definition,
            self.settings,
            scheduler=self._scheduler,
            on_finish=self._on_finish,
            rng=self._rng,
        )
        fresh.start()
        return fresh

    # --- stage sequencing ---

    def _start_runtime(self, stage: ResolvedStage) -> UnitRuntime:
        if stage.kind is None:
            logger.warning("Stage %r cannot be played: %s", stage.id, stage.reason)
            return unsupported(stage.reason or "Unsupported stage", settings=self.settings, rng=self._rng)
        return start_unit(stage.kind, stage.data, self.settings, rng=self._rng)

    def _enter_stage(self, index: int) -> UnitRuntime:
        self.stage_index = index
        stage = self.plan.stages[index]
        runtime = self._start_runtime(stage)
        self.runtime = runtime
        self._record("STAGE_STARTED", {"stage_id": stage.id, "kind": stage.kind.value if stage.kind else None})
        logger.debug("Stage %s/%s started (%s)", index + 1, self.stage_count, stage.kind)
        return runtime

    def _complete_stage(self, runtime: UnitRuntime) -> None:
        """Score `runtime`'s stage and move on.

        Unplayable stages are terminal as soon as they start, so this keeps
        scoring and advancing until a stage needs input or the game is over.
        """

        while runtime.terminal:
            result = stage_result(runtime)
            self.stage_results.append(result)
            self.cumulative_score += result.score
            self._record("STAGE_COMPLETED", {"score": result.score, "total": result.total})

            if self.stage_index >= self.stage_count - 1:
                self._finish(timed_out=False)
                return
            self.fsm.advance()
            runtime = self._enter_stage(self.stage_index + 1)

    def _total_possible(self) -> int:
        if self.plan.mixed:
            return MIXED_STAGE_WEIGHT * self.stage_count
        if self.runtime is None:
            return 0
        return stage_result(self.runtime).total

    def _finish(self, *, timed_out: bool) -> None:
        self.timer.cancel()
        self._cancel_pending_advance()
        self.fsm.finish()

        self.outcome = SessionOutcome(score=self.cumulative_score, total=self._total_possible(), timed_out=timed_out)
        self._record(
            "SESSION_FINISHED",
            {"score": self.outcome.score, "total": self.outcome.total, "timed_out": timed_out},
        )
        logger.info("Session finished: %s/%s (timed_out=%s)", self.outcome.score, self.outcome.total, timed_out)

        if self._on_finish is None:
            return
        try:
            self._on_finish(self.outcome.score, self.outcome.total)
        except Exception:
            # Recording the result is the caller's side effect; the player still sees it.
            logger.exception("on_finish callback failed")

    # --- timer + auto-advance ---

    def _on_tick(self, remaining: int) -> None:
        self._record("TIMER_TICK", {"remaining": remaining})

    def _on_timeout(self) -> None:
        if self._closed or self.status != SessionStatus.running:
            return
        self._record("TIMER_EXPIRED", {"score": self.cumulative_score})
        self._finish(timed_out=True)

    def _schedule_advance(self, runtime: UnitRuntime, delay: float) -> None:
        self._pending_advance = self._scheduler.call_later(delay, lambda: self._auto_advance(runtime))

    def _auto_advance(self, runtime: UnitRuntime) -> None:
        self._pending_advance = None
        if self._closed or self.status != SessionStatus.running or runtime is not self.runtime:
            return
        result = runtime.submit("advance")
        if result.terminal:
            self._complete_stage(runtime)

    def _cancel_pending_advance(self) -> None:
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None

    def _record(self, type: EventType, payload: dict[str, Any]) -> None:
        self.history.append(SessionEvent.now(type=type, stage_index=self.stage_index, payload=payload))

    def events_of(self, type: EventType) -> list[SessionEvent]:
        return [e for e in self.history if e.type == type]
