from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from minigames.models import Settings, UnitKind, parse_unit_kind
from minigames.units.base import UnitRuntime, UnsupportedRuntime
from minigames.units.cloze import ClozeRuntime
from minigames.units.flashcard import FlashcardRuntime
from minigames.units.matching import MatchingRuntime
from minigames.units.quiz import QuizRuntime
from minigames.units.scramble import ScrambleRuntime
from minigames.units.sequence import SequenceRuntime
from minigames.units.true_false import TrueFalseRuntime

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UnitSpec:
    kind: UnitKind
    label: str
    factory: Callable[[random.Random | None], UnitRuntime]


UNIT_SPECS: dict[UnitKind, UnitSpec] = {
    UnitKind.quiz: UnitSpec(UnitKind.quiz, "Quiz", lambda rng: QuizRuntime(rng=rng)),
    UnitKind.matching: UnitSpec(UnitKind.matching, "Matching", lambda rng: MatchingRuntime(rng=rng)),
    UnitKind.true_false: UnitSpec(UnitKind.true_false, "True / False", lambda rng: TrueFalseRuntime(rng=rng)),
    UnitKind.flashcard: UnitSpec(UnitKind.flashcard, "Flashcards", lambda rng: FlashcardRuntime(rng=rng)),
    UnitKind.sequence: UnitSpec(UnitKind.sequence, "Sequence", lambda rng: SequenceRuntime(rng=rng)),
    UnitKind.cloze: UnitSpec(UnitKind.cloze, "Fill in the blanks", lambda rng: ClozeRuntime(rng=rng)),
    UnitKind.scramble: UnitSpec(UnitKind.scramble, "Word scramble", lambda rng: ScrambleRuntime(rng=rng)),
}


def unsupported(reason: str, *, settings: Settings, rng: random.Random | None = None) -> UnitRuntime:
    runtime = UnsupportedRuntime(reason=reason, rng=rng)
    runtime.start(None, settings)
    return runtime


def start_unit(
    kind: UnitKind | str | None,
    data: Any,
    settings: Settings,
    *,
    rng: random.Random | None = None,
) -> UnitRuntime:
    """Create and start the runtime for one unit.

    Never raises for bad definitions: unknown kinds and malformed data produce a
    started `UnsupportedRuntime`, which is already terminal with a (0, 0) result.
    """

    resolved = kind if isinstance(kind, UnitKind) else parse_unit_kind(kind)
    spec = UNIT_SPECS.get(resolved) if resolved is not None else None
    if spec is None:
        logger.warning("Unsupported unit kind %r; stage will be skipped", kind)
        return unsupported(f"Unsupported unit kind: {kind}", settings=settings, rng=rng)

    runtime = spec.factory(rng)
    try:
        runtime.start(data, settings)
    except ValueError as e:
        logger.warning("Malformed %s data; stage will be skipped: %s", spec.kind.value, e)
        return unsupported(f"Malformed {spec.label} data", settings=settings, rng=rng)
    return runtime
