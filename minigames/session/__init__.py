"""Stage sequencing, session lifecycle and the session countdown.

Kept free of presentation concerns so it can be driven by a UI loop, the
terminal player or tests.
"""

from minigames.session.controller import GameSession, SessionOutcome, SessionView
from minigames.session.fsm import SessionStatus

__all__ = ["GameSession", "SessionOutcome", "SessionStatus", "SessionView"]
