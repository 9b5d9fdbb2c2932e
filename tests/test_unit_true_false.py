from __future__ import annotations

import random

from minigames.models import Settings
from minigames.scoring import UnitResult
from minigames.units.fsm import UnitPhase
from minigames.units.true_false import FEEDBACK_SECONDS, TrueFalseRuntime

from factories import true_false_data


def _start(rng: random.Random) -> TrueFalseRuntime:
    runtime = TrueFalseRuntime(rng=rng)
    runtime.start(true_false_data(), Settings())
    return runtime


def _truth(runtime: TrueFalseRuntime) -> bool:
    return runtime.items[runtime.index].is_true


def test_guess_asks_for_paced_advance(rng: random.Random) -> None:
    runtime = _start(rng)
    result = runtime.submit("guess", {"value": _truth(runtime)})
    assert result.accepted
    assert not result.terminal
    assert result.advance_after == FEEDBACK_SECONDS
    assert runtime.phase == UnitPhase.feedback
    assert runtime.view().last_guess_correct is True


def test_all_correct_scores_full(rng: random.Random) -> None:
    runtime = _start(rng)
    for _ in range(2):
        runtime.submit("guess", {"value": _truth(runtime)})
        runtime.submit("advance")
    assert runtime.terminal
    assert runtime.result() == UnitResult(20, 20)


def test_wrong_guess_shows_correction(rng: random.Random) -> None:
    runtime = _start(rng)
    # Get to the false statement, which carries a correction.
    if _truth(runtime):
        runtime.submit("guess", {"value": True})
        runtime.submit("advance")

    runtime.submit("guess", {"value": True})
    view = runtime.view()
    assert view.last_guess_correct is False
    assert view.correction == "Fire is hot."


def test_guess_during_feedback_is_ignored(rng: random.Random) -> None:
    runtime = _start(rng)
    runtime.submit("guess", {"value": _truth(runtime)})
    assert not runtime.submit("guess", {"value": True}).accepted
    assert runtime.view().score == 10


def test_non_boolean_guess_is_ignored(rng: random.Random) -> None:
    runtime = _start(rng)
    assert not runtime.submit("guess", {"value": "true"}).accepted
    assert not runtime.submit("guess", {"value": 1}).accepted
    assert runtime.phase == UnitPhase.awaiting_input


def test_advance_without_guess_is_ignored(rng: random.Random) -> None:
    runtime = _start(rng)
    assert not runtime.submit("advance").accepted
    assert runtime.view().index == 0
