"""
Request and response types exchanged between the dispatcher and a transport.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


class BodyStream(Protocol):
    """Readable, closable source of a response body."""

    def read(self) -> bytes: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class Request:
    """
    Request descriptor handed to a transport.

    Parameters
    ----------
    method
        HTTP method, passed through to the transport unvalidated.
    url
        Full request URL (base address joined with the request path).
    body
        Encoded request body. Empty when no payload was given.
    headers
        Request headers.
    """

    method: str
    url: str
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)


class Response:
    """
    Response envelope returned by a transport.

    The body is either given directly as bytes or backed by a stream. A
    stream is read at most once and released by `close`, which may be
    called any number of times.

    Parameters
    ----------
    status_code
        HTTP status code.
    body
        Response body, if already read.
    headers
        Response headers. Not interpreted by jsonrelay.
    stream
        Optional body source with ``read()`` and ``close()``.
    """

    def __init__(
        self,
        status_code: int,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        stream: BodyStream | None = None,
    ) -> None:
        self.status_code = status_code
        self.headers = headers if headers is not None else {}
        self._body = body
        self._stream = stream
        self._closed = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def body(self) -> bytes:
        return self.read()

    def read(self) -> bytes:
        """Return the body, reading the backing stream on first use."""
        if self._body is None:
            if self._stream is None or self._closed:
                self._body = b""
            else:
                self._body = self._stream.read() or b""
        return self._body

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._stream is not None:
            self._stream.close()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
