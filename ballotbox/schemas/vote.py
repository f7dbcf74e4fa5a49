"""Voter and vote schemas."""

from pydantic import BaseModel, Field


class Voter(BaseModel):
    """A registered voter."""

    voter_id: str = Field(..., min_length=1)
    vote_ids: list[str] | None = None


class Vote(BaseModel):
    """The current choice of one voter in one election."""

    id: int | str | None = None
    voter_id: str
    election_key: str
    candidate_key: str
