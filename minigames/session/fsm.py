from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine


class SessionStatus(StrEnum):
    idle = "idle"
    running = "running"
    finished = "finished"


class SessionFSM(StateMachine):
    """Lifecycle guard for one play-through.

    idle -> running (one `advance` per completed stage) -> finished. An empty
    stage list finishes straight from idle.
    """

    idle = State(SessionStatus.idle.value, value=SessionStatus.idle.value, initial=True)
    running = State(SessionStatus.running.value, value=SessionStatus.running.value)
    finished = State(SessionStatus.finished.value, value=SessionStatus.finished.value, final=True)

    begin = idle.to(running)
    advance = running.to.itself()
    finish = running.to(finished) | idle.to(finished)

    @property
    def status(self) -> SessionStatus:
        return SessionStatus(str(self.current_state.value))
