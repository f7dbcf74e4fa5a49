"""Election listing and ballot lookup."""

from __future__ import annotations

from ballotbox.config import settings
from ballotbox.schemas.election import Candidate, Election
from ballotbox.services.record_store import RecordStore
from ballotbox.utils.errors import CandidateNotFoundError, ElectionNotFoundError
from supabase import Client


class ElectionService:
    """Read-only access to elections and their candidates."""

    def __init__(self, client: Client) -> None:
        self.db = RecordStore(client)

    def list_elections(self) -> list[Election]:
        """Return every election ordered by ``sort_order`` ascending."""
        rows = self.db.select_many(settings.elections_table, order_by="sort_order")
        return [Election.model_validate(row) for row in rows]

    def get(self, key: str) -> Election | None:
        """Return one election by key, or None."""
        row = self.db.find_one(settings.elections_table, {"key": key})
        if row is None:
            return None
        return Election.model_validate(row)

    def ballot(self, key: str) -> Election:
        """Return an election with its candidates resolved and sorted by key."""
        if not key:
            raise ElectionNotFoundError("No election specified")

        election = self.get(key)
        if election is None:
            raise ElectionNotFoundError(detail=f"election {key!r} not found")
        if not election.candidate_keys:
            raise ElectionNotFoundError(detail=f"election {key!r} has no candidates")

        rows = self.db.select_by_keys(
            settings.candidates_table, "key", election.candidate_keys
        )
        found = {str(row["key"]): Candidate.model_validate(row) for row in rows}
        missing = [ref for ref in election.candidate_keys if ref not in found]
        if missing:
            raise CandidateNotFoundError(detail=f"missing candidates: {', '.join(missing)}")

        # One entry per reference, so a repeated key is listed repeatedly.
        candidates = [found[ref] for ref in election.candidate_keys]
        election.candidates = sorted(candidates, key=lambda candidate: candidate.key)
        return election
