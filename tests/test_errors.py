"""Error kind mapping tests."""

from __future__ import annotations

import pytest

from ballotbox.utils.errors import (
    KIND_STATUS,
    CandidateNotFoundError,
    ElectionClosedError,
    ElectionNotFoundError,
    ErrorKind,
    InvalidInputError,
    NoCandidateChosenError,
    StorageFailureError,
    UnknownVoterError,
    status_title,
)


def test_every_kind_has_a_status() -> None:
    assert set(KIND_STATUS) == set(ErrorKind)


@pytest.mark.parametrize(
    ("error", "title"),
    [
        (UnknownVoterError("v9"), "400 BAD REQUEST"),
        (NoCandidateChosenError(), "400 BAD REQUEST"),
        (InvalidInputError("bad"), "400 BAD REQUEST"),
        (ElectionClosedError("pres"), "403 FORBIDDEN"),
        (ElectionNotFoundError(), "404 NOT FOUND"),
        (CandidateNotFoundError(), "404 NOT FOUND"),
        (StorageFailureError(), "500 INTERNAL SERVER ERROR"),
    ],
)
def test_error_page_titles(error, title: str) -> None:
    page = error.to_page()
    assert page["title"] == title
    assert page["type_message"] == f"The server returned a {error.status_code} code"
    assert page["message"] == error.message


def test_unknown_voter_detail_names_voter() -> None:
    assert "v9" in UnknownVoterError("v9").to_page()["detail"]


def test_unlisted_status_title() -> None:
    assert status_title(405) == "405 ERROR"
