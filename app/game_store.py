from __future__ import annotations

import logging
import os
import time
from collections.abc import Mapping
from typing import Any

import redis
from redis.client import Pipeline

from app.api.models import Game
from app.errors import GameNotFoundError
from app.infra.redis_client import get_namespace
from app.validation import check_required_fields, check_update_fields, validate_identifier

logger = logging.getLogger(__name__)

_COUNTER_MODULUS = 1 << 24

# Random middle part of every id minted by this process, like a document database's process bytes.
_PROCESS_TOKEN = os.urandom(5).hex()


class GameStore:
    """The game collection, kept in Redis as one JSON document per key.

    Keys (under `namespace`):
      - `{ns}:game:{id}`  JSON document
      - `{ns}:games`      set of ids, used for listing
      - `{ns}:id_counter` monotonically increasing; never reset, so ids are not reused
    """

    def __init__(self, *, r: redis.Redis, namespace: str | None = None) -> None:
        self._r = r
        self._ns = namespace or get_namespace()

    @property
    def games_key(self) -> str:
        return f"{self._ns}:games"

    @property
    def counter_key(self) -> str:
        return f"{self._ns}:id_counter"

    def game_key(self, game_id: str) -> str:
        return f"{self._ns}:game:{game_id}"

    def _new_id(self) -> str:
        seq = int(self._r.incr(self.counter_key)) % _COUNTER_MODULUS
        return f"{int(time.time()) & 0xFFFFFFFF:08x}{_PROCESS_TOKEN}{seq:06x}"

    def _load(self, game_id: str) -> Game | None:
        raw = self._r.get(self.game_key(game_id))
        if not raw:
            return None
        return Game.model_validate_json(raw)

    def create(self, fields: Mapping[str, Any]) -> Game:
        """Persist a new game from client fields; `id` and `version` are always assigned here."""

        check_required_fields(fields)
        release_date = fields.get("releaseDate", fields.get("release_date"))
        game = Game(
            id=self._new_id(),
            title=fields["title"],
            genre=fields["genre"],
            release_date=None if release_date is None else str(release_date),
            version=0,
        )

        pipe = self._r.pipeline(transaction=True)
        pipe.set(self.game_key(game.id), game.model_dump_json(by_alias=True))
        pipe.sadd(self.games_key, game.id)
        pipe.execute()

        logger.info("created game %s (%s)", game.id, game.title)
        return game

    def list_all(self) -> list[Game]:
        # Within one process ids sort in creation order: timestamp, fixed token, then the Redis counter.
        ids = sorted(self._r.smembers(self.games_key))
        if not ids:
            return []
        out: list[Game] = []
        for raw in self._r.mget([self.game_key(gid) for gid in ids]):
            if raw:
                out.append(Game.model_validate_json(raw))
        return out

    def find_by_id(self, game_id: object) -> Game:
        gid = validate_identifier(game_id)
        game = self._load(gid)
        if game is None:
            raise GameNotFoundError(gid)
        return game

    def update_by_id(self, game_id: object, fields: Mapping[str, Any]) -> Game:
        """Apply `fields` to an existing game and bump its version.

        The read and the write run in one WATCH/MULTI transaction; a record removed in
        between is reported as not found rather than resurrected.
        """

        gid = validate_identifier(game_id)
        check_update_fields(fields)
        changes = _mutable_changes(fields)

        key = self.game_key(gid)

        def _apply(pipe: Pipeline) -> Game:
            raw = pipe.get(key)
            if not raw:
                raise GameNotFoundError(gid)
            current = Game.model_validate_json(raw)
            updated = current.model_copy(update={**changes, "version": current.version + 1})
            pipe.multi()
            pipe.set(key, updated.model_dump_json(by_alias=True))
            return updated

        updated = self._r.transaction(_apply, key, value_from_callable=True)
        logger.info("updated game %s to version %d", gid, updated.version)
        return updated

    def delete_by_id(self, game_id: object) -> str:
        """Remove a game and return the title it had."""

        gid = validate_identifier(game_id)
        key = self.game_key(gid)

        pipe = self._r.pipeline(transaction=True)
        pipe.get(key)
        pipe.delete(key)
        pipe.srem(self.games_key, gid)
        raw, _, _ = pipe.execute()
        if not raw:
            raise GameNotFoundError(gid)

        game = Game.model_validate_json(raw)
        logger.info("deleted game %s (%s)", gid, game.title)
        return game.title

    def clear(self) -> int:
        """Remove every game document in this namespace. The id counter is kept."""

        ids = list(self._r.smembers(self.games_key))
        if not ids:
            return 0
        pipe = self._r.pipeline(transaction=True)
        pipe.delete(*[self.game_key(gid) for gid in ids])
        pipe.delete(self.games_key)
        removed, _ = pipe.execute()
        return int(removed)


def _mutable_changes(fields: Mapping[str, Any]) -> dict[str, Any]:
    # Only these document fields may change after creation; `id` and `version` never come from input.
    changes: dict[str, Any] = {}
    if fields.get("title") is not None:
        changes["title"] = fields["title"]
    if fields.get("genre") is not None:
        changes["genre"] = fields["genre"]
    release_date = fields.get("releaseDate", fields.get("release_date"))
    if release_date is not None:
        changes["release_date"] = str(release_date)
    return changes
