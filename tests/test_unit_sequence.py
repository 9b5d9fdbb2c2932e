from __future__ import annotations

import random

from minigames.models import Settings
from minigames.scoring import UnitResult
from minigames.units.fsm import UnitPhase
from minigames.units.sequence import DEFAULT_INSTRUCTION, SequenceRuntime

from factories import sequence_data


def _start(rng: random.Random, data: dict | None = None) -> SequenceRuntime:
    runtime = SequenceRuntime(rng=rng)
    runtime.start(data or sequence_data(), Settings())
    return runtime


def _sort_by_moves(runtime: SequenceRuntime) -> None:
    # Bubble sort using only adjacent "down" moves.
    n = len(runtime.items)
    for _ in range(n):
        for i in range(n - 1):
            if runtime.items[i].order > runtime.items[i + 1].order:
                assert runtime.submit("move", {"index": i, "direction": "down"}).accepted


def _make_wrong(runtime: SequenceRuntime) -> None:
    if all(item.order == pos for pos, item in enumerate(runtime.items)):
        runtime.submit("move", {"index": 0, "direction": "down"})


def test_instruction_defaults_when_question_missing(rng: random.Random) -> None:
    data = sequence_data()
    del data["question"]
    assert _start(rng, data).view().instruction == DEFAULT_INSTRUCTION
    assert _start(rng).view().instruction == "Order them"


def test_correct_order_finishes_on_check(rng: random.Random) -> None:
    runtime = _start(rng)
    _sort_by_moves(runtime)
    result = runtime.submit("check")
    assert result.terminal
    assert [item.id for item in runtime.view().items] == ["a", "b", "c"]
    assert runtime.result() == UnitResult(100, 100)


def test_failed_check_freezes_until_retry(rng: random.Random) -> None:
    runtime = _start(rng)
    _make_wrong(runtime)

    result = runtime.submit("check")
    assert result.accepted and not result.terminal
    assert runtime.phase == UnitPhase.feedback
    view = runtime.view()
    assert view.checked
    assert not all(view.correct)
    assert runtime.result() == UnitResult(0, 100)

    assert not runtime.submit("move", {"index": 0, "direction": "down"}).accepted
    assert not runtime.submit("check").accepted

    before = [item.id for item in runtime.items]
    assert runtime.submit("retry").accepted
    assert [item.id for item in runtime.items] == before
    assert not runtime.view().checked

    _sort_by_moves(runtime)
    assert runtime.submit("check").terminal


def test_moves_out_of_range_are_ignored(rng: random.Random) -> None:
    runtime = _start(rng)
    before = list(runtime.items)
    assert not runtime.submit("move", {"index": 0, "direction": "up"}).accepted
    assert not runtime.submit("move", {"index": 2, "direction": "down"}).accepted
    assert not runtime.submit("move", {"index": 7, "direction": "up"}).accepted
    assert not runtime.submit("move", {"index": 1, "direction": "sideways"}).accepted
    assert not runtime.submit("move", {"index": True, "direction": "down"}).accepted
    assert not runtime.submit("move", {"index": "1", "direction": "down"}).accepted
    assert runtime.items == before


def test_move_swaps_neighbours(rng: random.Random) -> None:
    runtime = _start(rng)
    first, second = runtime.items[0], runtime.items[1]
    runtime.submit("move", {"index": 1, "direction": "up"})
    assert runtime.items[:2] == [second, first]


def test_retry_outside_feedback_is_ignored(rng: random.Random) -> None:
    assert not _start(rng).submit("retry").accepted
