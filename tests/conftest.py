from __future__ import annotations

import random
from collections.abc import Generator
from pathlib import Path

import fakeredis
import pytest

from minigames.scheduler import ManualScheduler


@pytest.fixture()
def scheduler() -> ManualScheduler:
    """Virtual clock: nothing runs until the test calls `scheduler.advance(...)`."""

    return ManualScheduler()


@pytest.fixture()
def rng() -> random.Random:
    # Fixed seed keeps shuffles stable within a test; assertions never depend on the order itself.
    return random.Random(1234)


@pytest.fixture()
def redis_client() -> Generator[fakeredis.FakeRedis, None, None]:
    r = fakeredis.FakeRedis(decode_responses=True)
    yield r
    r.flushall()


@pytest.fixture()
def games_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "games"
