"""HTTP router package."""

from ballotbox.routers import pages, votes

__all__ = [
    "pages",
    "votes",
]
