from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

# Upper bound on re-draws when looking for a scramble that differs from the word.
_SCRAMBLE_ATTEMPTS = 10


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of `items` (Fisher-Yates).

    The input is never mutated; the result holds exactly the same elements.
    """

    rng = rng or random.Random()
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def scramble_word(word: str, rng: random.Random | None = None) -> str:
    """Permute the letters of `word`.

    The result always differs from `word` when it has
    at least two distinct letters.
    """

    rng = rng or random.Random()
    scrambled = "".join(shuffle(word, rng))
    if len(set(word)) < 2:
        return scrambled

    attempts = 1
    while scrambled == word and attempts < _SCRAMBLE_ATTEMPTS:
        scrambled = "".join(shuffle(word, rng))
        attempts += 1
    if scrambled == word:
        # A one-letter rotation only reproduces words made of a single repeated letter.
        scrambled = word[1:] + word[:1]
    return scrambled
