# jsonrelay/http/url.py
from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from jsonrelay.exceptions import InvalidAddressError, ValidationError


def normalize_base_url(
    address: str,
    *,
    default_scheme: str = "https",
    allowed_schemes: tuple[str, ...] = ("http", "https"),
    require_host_only: bool = False,
) -> str:
    """
    Normalize a user-supplied base address.

    Accepts a plain host[:port] (e.g. ``"api.example.org:8080"``), optionally
    followed by a path prefix (e.g. ``"api.example.org/v1"``), or a URL with
    scheme (e.g. ``"https://api.example.org/v1/"``). If no scheme is provided,
    ``default_scheme`` is used. Trailing slashes are removed.

    Parameters
    ----------
    address
        Base address, with or without scheme.
    default_scheme
        Scheme to use if `address` does not include one.
    allowed_schemes
        Allowed URL schemes. The parsed/selected scheme must be one of these.
    require_host_only
        If True, reject `address` values that include a path, query, or fragment.

    Returns
    -------
    base_url
        Normalized base URL ``"scheme://host[:port][/prefix]"`` (no trailing slash).

    Raises
    ------
    InvalidAddressError
        If `address` is empty/blank, does not contain a host, contains a disallowed
        scheme, includes a query or fragment, or (when `require_host_only` is True)
        includes a path.
    """
    if not address or not address.strip():
        raise InvalidAddressError(
            "address must be a non-empty host, e.g. 'api.example.org'"
        )

    raw = address.strip()
    candidate = raw if "://" in raw else f"{default_scheme}://{raw}"

    parts = urlsplit(candidate)

    scheme = (parts.scheme or default_scheme).lower()
    if scheme not in allowed_schemes:
        raise InvalidAddressError(
            f"Unsupported URL scheme '{scheme}'. Allowed: {allowed_schemes}"
        )

    if not parts.netloc:
        raise InvalidAddressError(
            "address must include a host (and optional port), e.g. 'example.org' or 'https://example.org'"
        )

    if parts.query or parts.fragment:
        raise InvalidAddressError("address must not include a query or fragment")

    path = parts.path.rstrip("/")
    if require_host_only and path:
        raise InvalidAddressError(
            "address must be host[:port] only (no path). Example: 'https://example.org:8080'"
        )

    return urlunsplit((scheme, parts.netloc, path, "", ""))


def append_path(base: str, path: str) -> str:
    """
    Append a request path to a base URL.

    Only the seam between `base` and `path` is normalized to a single ``"/"``;
    the rest of `path` (including a trailing slash or query) is kept as given.

    Raises
    ------
    ValidationError
        If `base` is empty/blank.
    """
    if not base or not base.strip():
        raise ValidationError("base must be a non-empty URL")

    base = base.rstrip("/")
    if not path:
        return base
    return base + "/" + path.lstrip("/")
