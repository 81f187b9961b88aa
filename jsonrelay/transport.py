"""
Transports deliver a request and hand back the response envelope.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import requests

from jsonrelay.exceptions import TransportError
from jsonrelay.http.session import bearer_headers, create_session
from jsonrelay.models import Request, Response

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """
    Anything that can send a `Request` and return a `Response`.

    Connection-level failures are raised, typically as `TransportError`.
    Timeouts, retries and locking are the transport's business.
    """

    def send(self, request: Request) -> Response: ...


class _RequestsBody:
    """Body stream over a `requests.Response` fetched with ``stream=True``."""

    def __init__(self, resp: requests.Response) -> None:
        self._resp = resp

    def read(self) -> bytes:
        try:
            return self._resp.content
        except requests.RequestException as e:
            raise TransportError(
                method=self._resp.request.method if self._resp.request else "HTTP",
                url=self._resp.url,
                message=f"failed to read response body: {e}",
            ) from e

    def close(self) -> None:
        self._resp.close()


@dataclass
class RequestsTransport:
    """
    Transport backed by a `requests.Session`.

    Parameters
    ----------
    token
        Optional bearer token.
    verify
        TLS verification passed to `requests` (True/False or path to CA bundle).
    timeout
        Request timeout in seconds (float) or (connect, read) tuple.
    session
        Optional externally managed requests session.
    """

    token: str | None = None
    verify: bool | str = True
    timeout: float | tuple[float, float] = 30.0
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = create_session(token=self.token)
        else:
            # Apply auth header to an externally managed session as well.
            self.session.headers.update(bearer_headers(self.token))

    def send(self, request: Request) -> Response:
        try:
            resp = self.session.request(
                method=request.method,
                url=request.url,
                data=request.body or None,
                headers=dict(request.headers),
                timeout=self.timeout,
                verify=self.verify,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(
                method=request.method, url=request.url, message=str(e)
            ) from e

        logger.debug("%s %s -> %s", request.method, request.url, resp.status_code)
        return Response(
            resp.status_code,
            headers=resp.headers,
            stream=_RequestsBody(resp),
        )

    def close(self) -> None:
        self.session.close()
