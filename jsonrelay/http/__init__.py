from jsonrelay.http.request import build_request, encode_payload
from jsonrelay.http.session import bearer_headers, create_session
from jsonrelay.http.url import append_path, normalize_base_url

__all__ = [
    "append_path",
    "bearer_headers",
    "build_request",
    "create_session",
    "encode_payload",
    "normalize_base_url",
]
