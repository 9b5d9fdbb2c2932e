from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine


class UnitPhase(StrEnum):
    awaiting_input = "awaiting_input"
    feedback = "feedback"
    completed = "completed"


class UnitFSM(StateMachine):
    """Phase guard shared by every unit runtime.

    - awaiting_input: the unit accepts the player's next move
    - feedback: a move was judged and is being shown (locked answer, checked order, ...)
    - completed: terminal, no further input

    Runtimes keep their own domain state; the FSM only decides which moves are legal.
    """

    awaiting_input = State(UnitPhase.awaiting_input.value, value=UnitPhase.awaiting_input.value, initial=True)
    feedback = State(UnitPhase.feedback.value, value=UnitPhase.feedback.value)
    completed = State(UnitPhase.completed.value, value=UnitPhase.completed.value, final=True)

    respond = awaiting_input.to(feedback)
    resume = feedback.to(awaiting_input)
    complete = awaiting_input.to(completed) | feedback.to(completed)

    @property
    def phase(self) -> UnitPhase:
        return UnitPhase(str(self.current_state.value))
