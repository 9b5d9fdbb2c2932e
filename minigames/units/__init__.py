"""Per-unit interaction state machines (quiz, matching, true/false, ...).

Each runtime is independent of the session: it takes unit data plus Settings and
reports its own (score, total).
"""

from minigames.units.base import Capability, SubmitResult, UnitRuntime, UnsupportedRuntime
from minigames.units.registry import UNIT_SPECS, start_unit

__all__ = [
    "Capability",
    "SubmitResult",
    "UnitRuntime",
    "UnsupportedRuntime",
    "UNIT_SPECS",
    "start_unit",
]
