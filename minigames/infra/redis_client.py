from __future__ import annotations

import os

import redis

CLIENT_NAME = "minigames"


def get_redis_url() -> str:
    return os.environ.get("MINIGAMES_REDIS_URL", "redis://localhost:6379/0")


def get_redis_timeout() -> float:
    # Play recording happens after the session ends; a dead server must not stall the player.
    return float(os.environ.get("MINIGAMES_REDIS_TIMEOUT", "2.0"))


def create_redis(url: str | None = None) -> redis.Redis:
    """Client for the play counter. Strings in/out (`decode_responses=True`)."""

    timeout = get_redis_timeout()
    return redis.Redis.from_url(
        url or get_redis_url(),
        decode_responses=True,
        client_name=CLIENT_NAME,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
    )
