from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

EventType = Literal[
    "SESSION_STARTED",
    "STAGE_STARTED",
    "STAGE_COMPLETED",
    "TIMER_TICK",
    "TIMER_EXPIRED",
    "SESSION_FINISHED",
]


@dataclass(frozen=True, slots=True)
class SessionEvent:
    type: EventType
    stage_index: int
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, stage_index: int, payload: dict[str, Any]) -> "SessionEvent":
        return SessionEvent(type=type, stage_index=stage_index, payload=payload, ts=datetime.now(timezone.utc))
