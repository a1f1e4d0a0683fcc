from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_store
from app.api.models import DeleteResponse, ErrorResponse, Game
from app.game_store import GameStore
from app.validation import validate_create, validate_delete, validate_update

# Failures are raised as GameRecordError subclasses and rendered by app.api.error_handlers.
router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {422: {"model": ErrorResponse}}


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/api/game/create", response_model=Game, response_model_exclude_none=True)
def create_game_route(payload: Any = Body(default=None), store: GameStore = Depends(get_store)) -> Game:
    req = validate_create(payload)
    return store.create(req.model_dump(by_alias=True))


@router.get("/api/game/get", response_model=list[Game], response_model_exclude_none=True)
def list_games_route(store: GameStore = Depends(get_store)) -> list[Game]:
    return store.list_all()


@router.get(
    "/api/game/get/{game_id}",
    response_model=Game,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
def get_game_route(game_id: str, store: GameStore = Depends(get_store)) -> Game:
    return store.find_by_id(game_id)


@router.put(
    "/api/game/update",
    response_model=Game,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
def update_game_route(payload: Any = Body(default=None), store: GameStore = Depends(get_store)) -> Game:
    req = validate_update(payload)
    return store.update_by_id(req.id, req.changes())


def _destroy(store: GameStore, game_id: str) -> DeleteResponse:
    title = store.delete_by_id(game_id)
    return DeleteResponse(success=f"{title} was deleted")


@router.delete("/api/game/destroy", response_model=DeleteResponse, responses=_ERROR_RESPONSES)
def destroy_game_route(
    payload: Any = Body(default=None),
    store: GameStore = Depends(get_store),
) -> DeleteResponse:
    req = validate_delete(payload)
    return _destroy(store, req.id)


@router.delete("/api/game/destroy/{game_id}", response_model=DeleteResponse, responses=_ERROR_RESPONSES)
def destroy_game_by_path_route(game_id: str, store: GameStore = Depends(get_store)) -> DeleteResponse:
    return _destroy(store, game_id)
