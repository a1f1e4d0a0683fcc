from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    # Wire names are camelCase (`releaseDate`); python attributes stay snake_case.
    model_config = ConfigDict(populate_by_name=True)


class GameCreateRequest(_CamelModel):
    title: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    release_date: str | None = Field(default=None, alias="releaseDate")


class GameUpdateRequest(_CamelModel):
    id: str
    title: str = Field(..., min_length=1)
    genre: str | None = Field(default=None, min_length=1)
    release_date: str | None = Field(default=None, alias="releaseDate")

    def changes(self) -> dict[str, str]:
        """Mutable fields supplied by the client, keyed by attribute name."""

        return self.model_dump(exclude={"id"}, exclude_none=True)


class GameDeleteRequest(BaseModel):
    id: str


class Game(_CamelModel):
    id: str
    title: str
    genre: str
    release_date: str | None = Field(default=None, alias="releaseDate")

    # Bumped by the store on every write; never taken from client input.
    version: int = 0


class DeleteResponse(BaseModel):
    success: str


class ErrorResponse(BaseModel):
    error: str
