"""
jsonrelay: send JSON requests and decode responses into success or failure targets.

Public API is intentionally small: `Dispatcher`, the `Transport` protocol with its
`requests`-based implementation, and the exception types.
"""

import importlib.metadata

try:
    # Installed package will find its version
    __version__ = importlib.metadata.version(__name__)
except importlib.metadata.PackageNotFoundError:
    # Repository clones will register an unknown version
    __version__ = "0.0.0+unknown"

from jsonrelay.decoding import decode_into
from jsonrelay.dispatcher import Dispatcher
from jsonrelay.exceptions import (
    DecodeError,
    InvalidAddressError,
    RelayError,
    SerializationError,
    TransportError,
    UnsupportedTargetError,
    ValidationError,
)
from jsonrelay.models import Request, Response
from jsonrelay.transport import RequestsTransport, Transport

__all__ = [
    "Dispatcher",
    "Transport",
    "RequestsTransport",
    "Request",
    "Response",
    "decode_into",
    "RelayError",
    "TransportError",
    "DecodeError",
    "SerializationError",
    "InvalidAddressError",
    "ValidationError",
    "UnsupportedTargetError",
]
