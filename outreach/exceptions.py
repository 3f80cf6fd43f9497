class BriefError(Exception):
    """Base class for errors that end a brief request."""


class InvalidBriefRequest(BriefError):
    """Company name or user intent missing from the request."""

    def __init__(self, message: str = "Company name and user intent are required"):
        super().__init__(message)


class PersistenceError(BriefError):
    """The store rejected the insert or query."""
