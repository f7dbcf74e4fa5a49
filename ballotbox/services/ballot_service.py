"""Vote submission: voter, election and candidate checks, then one upsert."""

from __future__ import annotations

import logging
from typing import Any

from ballotbox.config import settings
from ballotbox.schemas.election import Election
from ballotbox.schemas.vote import Vote
from ballotbox.services.record_store import RecordStore
from ballotbox.utils.errors import (
    CandidateNotFoundError,
    ElectionClosedError,
    NoCandidateChosenError,
    StorageFailureError,
    UnknownVoterError,
)
from supabase import Client

logger = logging.getLogger(__name__)

VOTE_CONFLICT_KEY = "voter_id,election_key"


class BallotService:
    """Accept or reject ballots and keep one vote per voter and election."""

    def __init__(self, client: Client, enforce_candidate_membership: bool | None = None) -> None:
        self.db = RecordStore(client)
        if enforce_candidate_membership is None:
            enforce_candidate_membership = settings.enforce_candidate_membership
        self.enforce_candidate_membership = enforce_candidate_membership

    def _open_election(self, election_key: str) -> Election:
        row = self.db.find_one(settings.elections_table, {"key": election_key})
        if row is None:
            raise ElectionClosedError(
                election_key, detail=f"election {election_key!r} not found"
            )
        election = Election.model_validate(row)
        if not election.active:
            raise ElectionClosedError(election_key)
        return election

    def _write_vote(
        self,
        existing: dict[str, Any] | None,
        voter_id: str,
        election_key: str,
        candidate_key: str,
    ) -> dict[str, Any]:
        if existing is not None:
            rows = self.db.update(
                settings.votes_table,
                {"id": existing["id"]},
                {"candidate_key": candidate_key},
            )
            if not rows:
                raise StorageFailureError(detail=f"vote {existing['id']} was not updated")
            return rows[0]

        # A concurrent first vote for the same pair lands on the unique
        # (voter_id, election_key) constraint and is overwritten.
        return self.db.upsert_one(
            settings.votes_table,
            {
                "voter_id": voter_id,
                "election_key": election_key,
                "candidate_key": candidate_key,
            },
            on_conflict=VOTE_CONFLICT_KEY,
        )

    def submit(self, voter_id: str, election_key: str, candidate_key: str) -> Vote:
        """Record ``candidate_key`` as the voter's choice in the election.

        Checks run in order and the first failure wins:

        1. the voter must exist (:class:`UnknownVoterError`),
        2. the election must exist and be active (:class:`ElectionClosedError`),
        3. a candidate must be chosen (:class:`NoCandidateChosenError`),
           and, when enabled, must stand in the election
           (:class:`CandidateNotFoundError`).

        An existing vote for the same voter and election is overwritten in
        place; otherwise a new vote is created. Nothing is written when a
        check fails.
        """
        voter = self.db.find_one(settings.voters_table, {"voter_id": voter_id})
        if voter is None:
            raise UnknownVoterError(voter_id)

        election = self._open_election(election_key)

        if not candidate_key:
            raise NoCandidateChosenError()
        if self.enforce_candidate_membership and candidate_key not in election.candidate_keys:
            raise CandidateNotFoundError(
                detail=f"candidate {candidate_key!r} is not standing in {election_key!r}"
            )

        existing = self.db.find_one(
            settings.votes_table,
            {"voter_id": voter["voter_id"], "election_key": election_key},
        )
        try:
            stored = self._write_vote(existing, voter["voter_id"], election_key, candidate_key)
        except StorageFailureError as exc:
            raise StorageFailureError("Unable to save vote", detail=exc.detail) from exc

        logger.info(
            "Vote accepted voter=%s election=%s revote=%s",
            voter_id,
            election_key,
            existing is not None,
        )
        return Vote.model_validate(stored)
