"""Election listing and ballot pages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from ballotbox.dependencies import get_db_client
from ballotbox.services.election_service import ElectionService
from ballotbox.utils.pages import render_page
from supabase import Client

router = APIRouter()


@router.get("/")
def list_elections(request: Request, client: Client = Depends(get_db_client)) -> Response:
    """Render every election in listing order."""
    service = ElectionService(client)
    elections = service.list_elections()
    return render_page(request, "index.html", {"elections": elections})


@router.get("/election/{path:path}")
def show_ballot(
    path: str,
    request: Request,
    client: Client = Depends(get_db_client),
) -> Response:
    """Render the ballot for the election named by the first path segment."""
    key = path.split("/")[0]
    service = ElectionService(client)
    election = service.ballot(key)
    return render_page(request, "vote.html", {"election": election})
