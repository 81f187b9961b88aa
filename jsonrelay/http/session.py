# requests.Session factory and auth headers for RequestsTransport

from collections.abc import Mapping

import requests


def bearer_headers(token: str | None) -> dict[str, str]:
    """Return an Authorization header for `token`, or nothing if it is blank."""
    if token and token.strip():
        return {"Authorization": f"Bearer {token.strip()}"}
    return {}


def create_session(
    *,
    token: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> requests.Session:
    """
    Create a `requests.Session` preloaded with JSON and auth headers.

    Parameters
    ----------
    token
        Optional bearer token added as ``Authorization`` header.
    headers
        Additional default headers. Applied after the defaults, so they win.

    Returns
    -------
    session
        A `requests.Session` instance.
    """
    s = requests.Session()
    s.headers.update({"Accept": "application/json"})
    s.headers.update(bearer_headers(token))
    if headers:
        s.headers.update(headers)
    return s
