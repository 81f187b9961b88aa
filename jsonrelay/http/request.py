# request construction

import json
import logging
from collections.abc import Mapping
from typing import Any

from jsonrelay.exceptions import SerializationError
from jsonrelay.http.url import append_path
from jsonrelay.models import Request

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
DEFAULT_METHOD = "GET"


def encode_payload(payload: Any) -> bytes:
    """
    Encode a request payload as compact UTF-8 JSON.

    Parameters
    ----------
    payload
        Any JSON-serializable value, or None for an empty body.

    Returns
    -------
    body
        Encoded body. ``b""`` if `payload` is None.

    Raises
    ------
    SerializationError
        If `payload` cannot be serialized.
    """
    if payload is None:
        return b""
    try:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize request payload: %s", e)
        raise SerializationError(f"payload is not JSON serializable: {e}") from e
    return text.encode("utf-8")


def build_request(
    base_url: str,
    path: str,
    method: str,
    payload: Any = None,
    *,
    headers: Mapping[str, str] | None = None,
) -> Request:
    """
    Build the request descriptor for a JSON call.

    Parameters
    ----------
    base_url
        Base address the path is joined onto.
    path
        Request path, e.g. ``"/v1/accounts"``.
    method
        HTTP method, passed through unchanged. Blank means ``"GET"``.
    payload
        Request payload or None.
    headers
        Extra request headers. ``Content-Type`` is always JSON.

    Returns
    -------
    request
        The request descriptor.

    Raises
    ------
    ValidationError
        If `base_url` is blank.
    SerializationError
        If `payload` cannot be serialized.
    """
    merged = {k: v for k, v in (headers or {}).items() if k.lower() != "content-type"}
    merged["Content-Type"] = JSON_CONTENT_TYPE

    return Request(
        method=method or DEFAULT_METHOD,
        url=append_path(base_url, path),
        body=encode_payload(payload),
        headers=merged,
    )
