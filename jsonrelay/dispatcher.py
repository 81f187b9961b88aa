# JSON request dispatcher routing responses to success or failure targets

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jsonrelay.decoding import decode_into
from jsonrelay.exceptions import DecodeError
from jsonrelay.http.request import build_request
from jsonrelay.http.url import normalize_base_url
from jsonrelay.models import Response
from jsonrelay.transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


@dataclass
class Dispatcher:
    """
    Send JSON requests and decode the response into caller-owned targets.

    Parameters
    ----------
    base_url
        Base address as host[:port][/prefix] or URL including scheme.
    transport
        Transport used to deliver requests. Defaults to a `RequestsTransport`.
    default_scheme
        Scheme used if `base_url` does not include one.
    headers
        Extra headers sent with every request.
    """

    base_url: str
    transport: Transport | None = None
    default_scheme: str = "https"
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.base_url = normalize_base_url(
            self.base_url, default_scheme=self.default_scheme
        )
        self._owns_transport = self.transport is None
        if self.transport is None:
            self.transport = RequestsTransport()

    def close(self) -> None:
        """Release the default transport. Injected transports are left open."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "Dispatcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def send_and_consume(
        self,
        path: str,
        method: str,
        payload: Any = None,
        success: Any = None,
        failure: Any = None,
    ) -> Response:
        """
        Send a request and decode the response body into one of two targets.

        A 2xx response with a non-empty body is decoded into `success`; an empty
        2xx body leaves `success` untouched. Any other status is decoded into
        `failure`, in which case no exception is raised when decoding works: the
        caller checks ``response.ok`` or the failure target.

        Parameters
        ----------
        path
            Request path joined onto `base_url`.
        method
            HTTP method.
        payload
            JSON-serializable request payload, or None for no body.
        success
            Target populated from a successful response.
        failure
            Target populated from an unsuccessful response.

        Returns
        -------
        response
            The response envelope. Its body stream has been released.

        Raises
        ------
        SerializationError
            If `payload` cannot be encoded. Nothing is sent.
        TransportError
            Or whatever else the transport raises, unchanged. No response exists.
        DecodeError
            If the body does not decode into the selected target. The response
            is available as ``err.response``.
        """
        request = build_request(
            self.base_url, path, method, payload, headers=self.headers
        )

        logger.debug("Sending %s %s", request.method, request.url)
        try:
            response = self.transport.send(request)
        except Exception as e:
            logger.warning(
                "Failed to send %s %s. Error was: %s", request.method, request.url, e
            )
            raise

        with response:
            self._consume(response, success, failure)
        return response

    def _consume(self, response: Response, success: Any, failure: Any) -> None:
        if response.ok:
            target, branch = success, "success"
        else:
            target, branch = failure, "failure"

        try:
            body = response.read()
            if response.ok and not body:
                logger.debug("Empty %s response, nothing to decode", response.status_code)
                return
            decode_into(body, target)
        except DecodeError as e:
            e.response = response
            e.target = target
            logger.warning(
                "Failed to decode %s response (status %s) into %s. Error was: %s",
                branch,
                response.status_code,
                type(target).__name__,
                e.message,
            )
            raise

        if not response.ok:
            logger.info("Request failed due to status code %s", response.status_code)

    def get(self, path: str, success: Any = None, failure: Any = None) -> Response:
        return self.send_and_consume(path, "GET", None, success, failure)

    def post(
        self, path: str, payload: Any = None, success: Any = None, failure: Any = None
    ) -> Response:
        return self.send_and_consume(path, "POST", payload, success, failure)

    def put(
        self, path: str, payload: Any = None, success: Any = None, failure: Any = None
    ) -> Response:
        return self.send_and_consume(path, "PUT", payload, success, failure)

    def patch(
        self, path: str, payload: Any = None, success: Any = None, failure: Any = None
    ) -> Response:
        return self.send_and_consume(path, "PATCH", payload, success, failure)

    def delete(self, path: str, success: Any = None, failure: Any = None) -> Response:
        return self.send_and_consume(path, "DELETE", None, success, failure)
