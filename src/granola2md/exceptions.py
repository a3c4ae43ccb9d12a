"""Custom exceptions for granola2md."""


class Granola2mdError(Exception):
    """Base exception for granola2md operations."""


class CredentialsError(Granola2mdError):
    """Granola credentials are missing, unreadable, or rejected."""


class FetchError(Granola2mdError):
    """Error while fetching documents from the Granola API."""


class RateLimitError(FetchError):
    """Rate limited by the Granola API."""


class DocumentNotFoundError(Granola2mdError):
    """No document matches the requested identifier."""
