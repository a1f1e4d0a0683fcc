from __future__ import annotations

from typing import Any


class GameRecordError(Exception):
    """Base class for client-facing failures of a game record operation.

    Every subclass is terminal for the request and maps to a JSON body via `to_response()`.
    """

    http_status: int = 422

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, Any]:
        return {"error": self.message}


class GameValidationError(GameRecordError):
    """Required document fields missing or empty on create.

    `errors` maps field name -> {"kind", "path", "message"}.
    """

    name = "ValidationError"

    def __init__(self, errors: dict[str, dict[str, str]]) -> None:
        self.errors = errors
        details = ", ".join(f"{path}: {e['message']}" for path, e in errors.items())
        super().__init__(f"Game validation failed: {details}")

    @property
    def fields(self) -> list[str]:
        return list(self.errors)

    def to_response(self) -> dict[str, Any]:
        return {"message": {"name": self.name, "message": self.message, "errors": self.errors}}


class MissingFieldError(GameRecordError):
    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


class InvalidIdentifierError(GameRecordError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"'{value}' is not a valid game id")


class GameNotFoundError(GameRecordError):
    def __init__(self, game_id: str) -> None:
        self.game_id = game_id
        super().__init__(f"Game with id {game_id} not found")
