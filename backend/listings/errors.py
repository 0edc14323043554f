from __future__ import annotations


class ListingServiceError(Exception):
    """Base class for errors raised by the listing engine."""


class LoadError(ListingServiceError):
    """The listing source could not be read or parsed.

    Raised inside the store only; callers see an empty collection instead.
    """


class MissingQueryError(ListingServiceError):
    """A required search term was not supplied."""

    def __init__(self, message: str = "Search query is required") -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ListingServiceError):
    """No listing has the requested id."""

    def __init__(self, listing_id: str) -> None:
        super().__init__(f"Listing {listing_id!r} not found")
        self.listing_id = listing_id
