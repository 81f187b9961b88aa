# central source for exceptions thrown by jsonrelay

from dataclasses import dataclass
from typing import Any


class RelayError(Exception):
    """Base exception for jsonrelay."""


@dataclass
class TransportError(RelayError):
    """Raised when a request could not be delivered (no response available)."""

    method: str
    url: str
    message: str | None = None

    def __str__(self) -> str:
        parts = [f"{self.method} {self.url}"]
        if self.message:
            parts.append(self.message)
        return " | ".join(parts)


@dataclass
class DecodeError(RelayError, ValueError):
    """
    Raised when a response body cannot be decoded into its target.

    The response envelope is kept on the exception so callers can still
    inspect status and headers.
    """

    message: str
    response: Any | None = None
    target: Any | None = None

    def __str__(self) -> str:
        if self.response is not None:
            return f"status={self.response.status_code} | {self.message}"
        return self.message


class SerializationError(RelayError, ValueError):
    """Raised when an outgoing payload cannot be encoded as JSON."""


class InvalidAddressError(RelayError, ValueError):
    """Raised when a provided base address cannot be normalized."""


class ValidationError(RelayError, ValueError):
    """Raised when user input is invalid (e.g. blank base URL)."""


class UnsupportedTargetError(RelayError, TypeError):
    """Raised when a decode target has a shape jsonrelay cannot populate."""
