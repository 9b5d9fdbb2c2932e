"""Record finished play-throughs in Redis.

- `minigames:plays:{game_id}` is a plain counter (INCR).
- `minigames:completions` is a stream with one entry per finished session.

Recording is fire-and-forget from the player's point of view: `make_play_recorder`
returns an `on_finish` callback that logs failures instead of raising them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import cast

import redis

from minigames.session.controller import FinishCallback

logger = logging.getLogger(__name__)

PLAYS_KEY_PREFIX = "minigames:plays:"  # + {game_id}
COMPLETIONS_STREAM = "minigames:completions"


def _plays_key(game_id: str) -> str:
    return f"{PLAYS_KEY_PREFIX}{game_id}"


@dataclass(frozen=True, slots=True)
class PlayRecord:
    game_id: str
    score: int
    total: int
    plays: int
    stream_id: str


class PlayCounter:
    def __init__(self, *, r: redis.Redis) -> None:
        self.r = r

    def record(self, *, game_id: str, score: int, total: int) -> PlayRecord:
        plays = int(self.r.incr(_plays_key(game_id)))
        stream_id = self.r.xadd(
            COMPLETIONS_STREAM,
            {
                "game_id": game_id,
                "score": str(score),
                "total": str(total),
                "ts": datetime.now(tz=UTC).isoformat(),
            },
        )
        return PlayRecord(game_id=game_id, score=score, total=total, plays=plays, stream_id=cast(str, stream_id))

    def plays(self, *, game_id: str) -> int:
        raw = self.r.get(_plays_key(game_id))
        return int(raw) if raw else 0

    def recent_completions(self, *, count: int = 20) -> list[dict[str, str]]:
        entries = self.r.xrevrange(COMPLETIONS_STREAM, count=count)
        return [dict(fields) for _, fields in entries]


def make_play_recorder(*, counter: PlayCounter, game_id: str) -> FinishCallback:
    """Build a session `on_finish` callback that records the play for `game_id`."""

    def _on_finish(score: int, total: int) -> None:
        try:
            record = counter.record(game_id=game_id, score=score, total=total)
        except Exception:
            logger.warning("Failed to record play for game %s", game_id, exc_info=True)
            return
        logger.debug("Recorded play #%s for game %s", record.plays, game_id)

    return _on_finish
