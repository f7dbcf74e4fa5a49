"""Error kinds and exception hierarchy for the ballot box."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Tagged failure kinds surfaced to voters."""

    UNKNOWN_VOTER = "UNKNOWN_VOTER"
    NO_CANDIDATE_CHOSEN = "NO_CANDIDATE_CHOSEN"
    INVALID_INPUT = "INVALID_INPUT"
    ELECTION_CLOSED = "ELECTION_CLOSED"
    ELECTION_NOT_FOUND = "ELECTION_NOT_FOUND"
    CANDIDATE_NOT_FOUND = "CANDIDATE_NOT_FOUND"
    STORAGE_FAILURE = "STORAGE_FAILURE"


KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.UNKNOWN_VOTER: 400,
    ErrorKind.NO_CANDIDATE_CHOSEN: 400,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.ELECTION_CLOSED: 403,
    ErrorKind.ELECTION_NOT_FOUND: 404,
    ErrorKind.CANDIDATE_NOT_FOUND: 404,
    ErrorKind.STORAGE_FAILURE: 500,
}

STATUS_TITLES: dict[int, str] = {
    400: "400 BAD REQUEST",
    403: "403 FORBIDDEN",
    404: "404 NOT FOUND",
    500: "500 INTERNAL SERVER ERROR",
}


def status_title(status_code: int) -> str:
    """Return the error page title for an HTTP status."""
    return STATUS_TITLES.get(status_code, f"{status_code} ERROR")


def status_type_message(status_code: int) -> str:
    """Return the fixed error page type message for an HTTP status."""
    return f"The server returned a {status_code} code"


class AppError(Exception):
    """Base application error carrying its kind and an optional detail."""

    def __init__(self, message: str, kind: ErrorKind, detail: str = "") -> None:
        self.message = message
        self.kind = kind
        self.detail = detail
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return KIND_STATUS[self.kind]

    def to_page(self) -> dict[str, str]:
        """Serialize the error into error page parameters."""
        return {
            "title": status_title(self.status_code),
            "type_message": status_type_message(self.status_code),
            "message": self.message,
            "detail": self.detail,
        }


class UnknownVoterError(AppError):
    """Raised when no voter record matches the submitted voter id."""

    def __init__(self, voter_id: str) -> None:
        super().__init__(
            message=(
                "No voter found with this ID. "
                "Are you sure you entered your identity correctly?"
            ),
            kind=ErrorKind.UNKNOWN_VOTER,
            detail=f"voter {voter_id!r} not found",
        )


class NoCandidateChosenError(AppError):
    """Raised when a ballot is submitted without a candidate."""

    def __init__(self) -> None:
        super().__init__(
            message="You have to vote for someone!",
            kind=ErrorKind.NO_CANDIDATE_CHOSEN,
        )


class InvalidInputError(AppError):
    """Raised for request payload or parameter validation issues."""

    def __init__(self, reason: str) -> None:
        super().__init__(message=reason, kind=ErrorKind.INVALID_INPUT)


class ElectionClosedError(AppError):
    """Raised when the election is missing or not accepting votes."""

    def __init__(self, election_key: str, detail: str = "") -> None:
        super().__init__(
            message="This current Election is NOT open right now.",
            kind=ErrorKind.ELECTION_CLOSED,
            detail=detail or f"election {election_key!r} is not active",
        )


class ElectionNotFoundError(AppError):
    """Raised when a ballot cannot be shown for an election."""

    def __init__(self, reason: str = "Failed to get any candidates", detail: str = "") -> None:
        super().__init__(message=reason, kind=ErrorKind.ELECTION_NOT_FOUND, detail=detail)


class CandidateNotFoundError(AppError):
    """Raised when referenced candidate records are missing."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            message="No Candidates Found.",
            kind=ErrorKind.CANDIDATE_NOT_FOUND,
            detail=detail,
        )


class StorageFailureError(AppError):
    """Raised when the record store cannot be reached or rejects a request."""

    def __init__(self, reason: str = "Database request failed", detail: str = "") -> None:
        super().__init__(message=reason, kind=ErrorKind.STORAGE_FAILURE, detail=detail)
