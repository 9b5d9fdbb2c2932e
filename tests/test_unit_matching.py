from __future__ import annotations

import random

from minigames.models import Settings
from minigames.scoring import UnitResult
from minigames.units.matching import MatchingRuntime

from factories import matching_data


def _start(rng: random.Random, n: int = 3) -> MatchingRuntime:
    runtime = MatchingRuntime(rng=rng)
    runtime.start(matching_data(n), Settings())
    return runtime


def _match(runtime: MatchingRuntime, left: str, right: str) -> None:
    assert runtime.submit("select_left", {"pair_id": left}).accepted
    assert runtime.submit("select_right", {"pair_id": right}).accepted


def test_decks_hold_every_pair(rng: random.Random) -> None:
    view = _start(rng).view()
    assert sorted(c.pair_id for c in view.left) == ["p0", "p1", "p2"]
    assert sorted(c.pair_id for c in view.right) == ["p0", "p1", "p2"]
    assert {c.card_id for c in view.left} == {"L-p0", "L-p1", "L-p2"}
    assert {c.text for c in view.right} == {"meaning 0", "meaning 1", "meaning 2"}


def test_perfect_run_scores_full_marks(rng: random.Random) -> None:
    runtime = _start(rng)
    for pid in ("p0", "p1", "p2"):
        _match(runtime, pid, pid)
    assert runtime.terminal
    assert runtime.result() == UnitResult(100, 100)


def test_each_mistake_costs_five(rng: random.Random) -> None:
    runtime = _start(rng)
    _match(runtime, "p0", "p1")
    _match(runtime, "p0", "p2")
    view = runtime.view()
    assert view.mistakes == 2
    assert view.selected_left is None
    assert view.matched == frozenset()

    for pid in ("p0", "p1", "p2"):
        _match(runtime, pid, pid)
    assert runtime.result() == UnitResult(90, 100)


def test_score_never_goes_negative(rng: random.Random) -> None:
    runtime = _start(rng, n=2)
    for _ in range(25):
        _match(runtime, "p0", "p1")
    assert runtime.result() == UnitResult(0, 100)

    _match(runtime, "p0", "p0")
    _match(runtime, "p1", "p1")
    assert runtime.terminal
    assert runtime.result() == UnitResult(0, 100)


def test_right_pick_without_left_is_ignored(rng: random.Random) -> None:
    runtime = _start(rng)
    assert not runtime.submit("select_right", {"pair_id": "p0"}).accepted
    assert runtime.view().mistakes == 0


def test_matched_cards_cannot_be_picked_again(rng: random.Random) -> None:
    runtime = _start(rng)
    _match(runtime, "p0", "p0")
    assert not runtime.submit("select_left", {"pair_id": "p0"}).accepted

    runtime.submit("select_left", {"pair_id": "p1"})
    assert not runtime.submit("select_right", {"pair_id": "p0"}).accepted
    assert runtime.view().mistakes == 0
    assert runtime.view().selected_left == "p1"


def test_unknown_or_malformed_ids_are_ignored(rng: random.Random) -> None:
    runtime = _start(rng)
    assert not runtime.submit("select_left", {"pair_id": "nope"}).accepted
    assert not runtime.submit("select_left", {"pair_id": 3}).accepted
    assert not runtime.submit("select_left", {}).accepted
    assert runtime.view().selected_left is None


def test_reselecting_left_replaces_selection(rng: random.Random) -> None:
    runtime = _start(rng)
    runtime.submit("select_left", {"pair_id": "p0"})
    runtime.submit("select_left", {"pair_id": "p2"})
    assert runtime.view().selected_left == "p2"
    runtime.submit("select_right", {"pair_id": "p2"})
    assert runtime.view().matched == frozenset({"p2"})
