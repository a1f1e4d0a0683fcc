from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.api.models import GameCreateRequest, GameDeleteRequest, GameUpdateRequest
from app.errors import GameValidationError, InvalidIdentifierError, MissingFieldError

# 12 bytes rendered as hex: 4-byte timestamp, 5 random bytes, 3-byte counter.
GAME_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


@dataclass(frozen=True, slots=True)
class FieldProblem:
    path: str
    kind: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "path": self.path, "message": self.message}


class FieldValidator(ABC):
    """A small, composable check of one field in an incoming payload."""

    @abstractmethod
    def check(self, *, payload: Mapping[str, Any]) -> FieldProblem | None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class RequiredText(FieldValidator):
    """Field must be present, a string, and not blank."""

    field: str

    def check(self, *, payload: Mapping[str, Any]) -> FieldProblem | None:
        value = payload.get(self.field)
        if value is None:
            return FieldProblem(self.field, "required", f"Path `{self.field}` is required.")
        if not isinstance(value, str):
            return FieldProblem(self.field, "string", f"Path `{self.field}` must be a string.")
        if not value.strip():
            return FieldProblem(self.field, "required", f"Path `{self.field}` is required.")
        return None


@dataclass(frozen=True, slots=True)
class OptionalText(FieldValidator):
    """Field may be absent or null; if given it must be a non-blank string."""

    field: str

    def check(self, *, payload: Mapping[str, Any]) -> FieldProblem | None:
        value = payload.get(self.field)
        if value is None:
            return None
        if not isinstance(value, str) or not value.strip():
            return FieldProblem(self.field, "string", f"Path `{self.field}` cannot be empty.")
        return None


@dataclass(frozen=True, slots=True)
class RequiredValue(FieldValidator):
    """Field must be present; its shape is checked elsewhere (e.g. identifiers)."""

    field: str

    def check(self, *, payload: Mapping[str, Any]) -> FieldProblem | None:
        value = payload.get(self.field)
        if value is None or value == "":
            return FieldProblem(self.field, "required", f"{self.field} is required")
        return None


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[FieldValidator, ...]

    def problems(self, payload: Mapping[str, Any]) -> list[FieldProblem]:
        out: list[FieldProblem] = []
        for v in self.validators:
            problem = v.check(payload=payload)
            if problem is not None:
                out.append(problem)
        return out


CREATE_PIPELINE = ValidatorPipeline(validators=(RequiredText("title"), RequiredText("genre")))

UPDATE_PIPELINE = ValidatorPipeline(
    validators=(
        RequiredText("title"),
        RequiredValue("id"),
        OptionalText("genre"),
    )
)

DELETE_PIPELINE = ValidatorPipeline(validators=(RequiredValue("id"),))

# Document-level rules for an update once the id is known: title replaced, genre kept non-empty.
STORE_UPDATE_PIPELINE = ValidatorPipeline(validators=(RequiredText("title"), OptionalText("genre")))


def _as_mapping(payload: object) -> Mapping[str, Any]:
    # Non-object JSON bodies (lists, scalars, no body at all) carry no fields.
    if isinstance(payload, Mapping):
        return payload
    return {}


def _release_date(payload: Mapping[str, Any]) -> str | None:
    value = payload.get("releaseDate")
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def check_required_fields(payload: object) -> None:
    """Raise GameValidationError naming every required document field that is missing or blank."""

    problems = CREATE_PIPELINE.problems(_as_mapping(payload))
    if problems:
        raise GameValidationError({p.path: p.as_dict() for p in problems})


def check_update_fields(payload: object) -> None:
    problems = STORE_UPDATE_PIPELINE.problems(_as_mapping(payload))
    if problems:
        raise GameValidationError({p.path: p.as_dict() for p in problems})


def validate_create(payload: object) -> GameCreateRequest:
    data = _as_mapping(payload)
    check_required_fields(data)
    return GameCreateRequest(title=data["title"], genre=data["genre"], release_date=_release_date(data))


def validate_update(payload: object) -> GameUpdateRequest:
    """Check field presence for an update. Whether the id exists is left to the store."""

    data = _as_mapping(payload)
    problems = UPDATE_PIPELINE.problems(data)
    if problems:
        first = problems[0]
        raise MissingFieldError(first.path, first.message)

    return GameUpdateRequest(
        id=str(data["id"]),
        title=data["title"],
        genre=data.get("genre"),
        release_date=_release_date(data),
    )


def validate_delete(payload: object) -> GameDeleteRequest:
    data = _as_mapping(payload)
    problems = DELETE_PIPELINE.problems(data)
    if problems:
        first = problems[0]
        raise MissingFieldError(first.path, first.message)
    return GameDeleteRequest(id=str(data["id"]))


def validate_identifier(game_id: object) -> str:
    """Return the normalized id, or raise InvalidIdentifierError if it can't be a game id.

    Distinguishes a malformed id from a well-formed one that has no record; the latter
    is only detectable by the store.
    """

    if not isinstance(game_id, str) or GAME_ID_PATTERN.fullmatch(game_id) is None:
        raise InvalidIdentifierError(game_id)
    return game_id.lower()
