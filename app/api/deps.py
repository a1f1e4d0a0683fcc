from __future__ import annotations

from collections.abc import Generator

import redis
from fastapi import Depends

from app.game_store import GameStore
from app.infra.redis_client import create_redis


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def get_store(r: redis.Redis = Depends(get_redis)) -> GameStore:
    return GameStore(r=r)
