"""Election and candidate schemas."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Candidate(BaseModel):
    """A candidate standing in one or more elections."""

    key: str = Field(..., min_length=1)
    name: str | None = ""
    message: str | None = ""

    @field_validator("name", "message", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value


class Election(BaseModel):
    """Election record with its ordered candidate references.

    Nullable columns read as empty: no position, no candidates, closed,
    first in listing order.
    """

    key: str = Field(..., min_length=1)
    position: str | None = ""
    candidate_keys: list[str] | None = Field(default_factory=list)
    active: bool | None = False
    sort_order: int | None = 0
    candidates: list[Candidate] = Field(default_factory=list)

    @field_validator("position", mode="before")
    @classmethod
    def _null_position(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("candidate_keys", mode="before")
    @classmethod
    def _null_candidate_keys(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("active", mode="before")
    @classmethod
    def _null_active(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("sort_order", mode="before")
    @classmethod
    def _null_sort_order(cls, value: Any) -> Any:
        return 0 if value is None else value

    def record(self) -> dict:
        """Return the stored columns, without resolved candidates."""
        return self.model_dump(exclude={"candidates"})
