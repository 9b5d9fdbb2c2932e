from __future__ import annotations

import random
from collections import Counter

import pytest

from minigames.shuffle import scramble_word, shuffle


@pytest.mark.parametrize(
    "items",
    [
        [],
        [1],
        [1, 2],
        list(range(20)),
        ["a", "a", "b", "c", "c", "c"],
        "mississippi",
        (None, 0, "", False),
    ],
)
def test_shuffle_is_a_permutation(items) -> None:  # type: ignore[no-untyped-def]
    rng = random.Random(7)
    for _ in range(25):
        out = shuffle(items, rng)
        assert len(out) == len(items)
        assert Counter(map(repr, out)) == Counter(map(repr, items))


def test_shuffle_does_not_mutate_input() -> None:
    items = [1, 2, 3, 4, 5]
    shuffle(items, random.Random(3))
    assert items == [1, 2, 3, 4, 5]


def test_shuffle_reaches_every_arrangement_of_three() -> None:
    rng = random.Random(11)
    seen = {tuple(shuffle([1, 2, 3], rng)) for _ in range(300)}
    assert len(seen) == 6


def test_shuffle_without_rng_uses_fresh_randomness() -> None:
    out = shuffle(list(range(10)))
    assert sorted(out) == list(range(10))


def test_scramble_word_keeps_letters_and_changes_order() -> None:
    rng = random.Random(5)
    for word in ["tiger", "zebra", "ab", "banana"]:
        for _ in range(20):
            scrambled = scramble_word(word, rng)
            assert sorted(scrambled) == sorted(word)
            assert scrambled != word


def test_scramble_word_with_one_distinct_letter_is_unchanged() -> None:
    assert scramble_word("aaa", random.Random(1)) == "aaa"
    assert scramble_word("x", random.Random(1)) == "x"
