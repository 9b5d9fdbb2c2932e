from __future__ import annotations

import random

from minigames.models import Settings
from minigames.scoring import EXPOSURE_RESULT, NO_SCORE, stage_result
from minigames.units.flashcard import FlashcardRuntime

from factories import flashcard_data


def _start(rng: random.Random, n: int = 2) -> FlashcardRuntime:
    runtime = FlashcardRuntime(rng=rng)
    runtime.start(flashcard_data(n), Settings())
    return runtime


def test_flip_shows_the_back(rng: random.Random) -> None:
    runtime = _start(rng)
    front = runtime.view().text
    assert front.startswith("front ")

    runtime.submit("flip")
    view = runtime.view()
    assert view.flipped
    assert view.text == front.replace("front", "back")

    runtime.submit("flip")
    assert runtime.view().text == front


def test_next_resets_flip_and_finishes_after_last_card(rng: random.Random) -> None:
    runtime = _start(rng)
    runtime.submit("flip")
    first = runtime.submit("next")
    assert first.accepted and not first.terminal
    assert runtime.view().index == 1
    assert not runtime.view().flipped

    last = runtime.submit("next")
    assert last.terminal
    assert runtime.terminal


def test_prev_on_first_card_is_ignored(rng: random.Random) -> None:
    runtime = _start(rng, n=3)
    assert not runtime.submit("prev").accepted

    runtime.submit("next")
    runtime.submit("flip")
    assert runtime.submit("prev").accepted
    assert runtime.view().index == 0
    assert not runtime.view().flipped


def test_deck_is_unscored_but_counts_as_exposure(rng: random.Random) -> None:
    runtime = _start(rng, n=1)
    runtime.submit("next")
    assert runtime.result() == NO_SCORE
    assert stage_result(runtime) == EXPOSURE_RESULT
