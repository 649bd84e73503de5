"""
Failure taxonomy shared by the services, the API layer and the client.

Malformed listing input (bad page numbers, unknown sort keys, "all"
sentinels) is never raised: the listing services normalise it away.
"""


class ListingError(Exception):
    """Base class for failures reported to the consumer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ListingError):
    """The targeted record no longer exists in the source."""

    status_code = 404


class TransitionRejected(ListingError):
    """The workflow refused a status change or a delete."""

    status_code = 409


class SourceUnavailable(ListingError):
    """The record source failed or returned something unusable."""

    status_code = 503
