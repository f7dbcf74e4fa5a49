"""Ballot submission endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import FileResponse, RedirectResponse

from ballotbox.dependencies import get_db_client
from ballotbox.services.ballot_service import BallotService
from ballotbox.utils.pages import THANK_YOU_PAGE
from supabase import Client

router = APIRouter()


@router.post("")
def submit_vote_redirect() -> RedirectResponse:
    """Resend ballots posted without the trailing slash, keeping the form body."""
    return RedirectResponse("/vote/", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.post("/")
def submit_vote(
    voter_id: str = Form(""),
    election_key: str = Form(""),
    candidate_key: str = Form(""),
    client: Client = Depends(get_db_client),
) -> FileResponse:
    """Accept a ballot and show the thank-you page."""
    service = BallotService(client)
    service.submit(
        voter_id=voter_id,
        election_key=election_key,
        candidate_key=candidate_key,
    )
    return FileResponse(THANK_YOU_PAGE, media_type="text/html")


@router.get("/{rest:path}")
def vote_redirect(rest: str) -> RedirectResponse:
    """Ballots are only accepted by POST."""
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)
