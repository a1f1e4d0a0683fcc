from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.game_store import GameStore

SAMPLE_GAMES: tuple[dict[str, str], ...] = (
    {"title": "California Games", "genre": "Sports", "releaseDate": "June 1987"},
    {"title": "Washington Games", "genre": "Recreational"},
    {"title": "Vancouver Games", "genre": "Chill", "releaseDate": "March 2018"},
    {"title": "Oregon Games", "genre": "Recreational", "releaseDate": "July 2017"},
    {"title": "Texas Games", "genre": "Cattle", "releaseDate": "December 2016"},
)


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    In CI, we *don't* auto-load `.env` by default so a developer's REDIS_URL or
    namespace can't leak into the run. Opt-in with GAME_RECORDS_LOAD_DOTENV_FOR_TESTS=1.
    """

    if os.environ.get("CI") and os.environ.get("GAME_RECORDS_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def redis_client() -> fakeredis.FakeRedis:
    # Fresh in-memory server per test; nothing is shared between tests.
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture()
def store(redis_client: fakeredis.FakeRedis) -> GameStore:
    return GameStore(r=redis_client, namespace="test")


@pytest.fixture()
def client(
    redis_client: fakeredis.FakeRedis, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """FastAPI TestClient whose Redis dependency is the per-test fakeredis instance."""

    from app.api.deps import get_redis
    from app.main import app

    monkeypatch.setenv("GAME_RECORDS_NAMESPACE", "test")

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield redis_client

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def games(store: GameStore) -> list[dict]:
    """Seed the store with the sample games and return them as the API renders them."""

    saved = [store.create(g) for g in SAMPLE_GAMES]
    return [g.model_dump(mode="json", by_alias=True, exclude_none=True) for g in saved]
