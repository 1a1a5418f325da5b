"""Errors raised while handling DIDs and DID URLs."""

from typing import Optional


class DIDUrlError(ValueError):
    """Base class for DID and DID URL errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        """Initializer."""
        super().__init__(message)
        self.message = message
        self.cause = cause


class IllegalArgumentError(DIDUrlError):
    """A required argument was missing or empty."""


class DIDUrlSyntaxError(DIDUrlError):
    """An unexpected character or token was found in the input."""

    def __init__(self, position: int, message: str = None):
        """Initializer."""
        super().__init__(message or f"Invalid char at: {position}")
        self.position = position


class InvalidHexError(DIDUrlSyntaxError):
    """A percent escape was not followed by two hex digits."""

    def __init__(self, position: int):
        """Initializer."""
        super().__init__(position, f"Invalid hex char at: {position}")


class UnsupportedMethodError(DIDUrlError):
    """The DID method is not supported."""

    def __init__(self, method: str):
        """Initializer."""
        super().__init__(f"Unsupported DID method: {method}")
        self.method = method


class MalformedDIDError(DIDUrlError):
    """A DID string could not be parsed."""


class MalformedDIDUrlError(DIDUrlError):
    """A DID URL could not be constructed from the given value."""
