"""BunnyCDN token authentication (SHA-256 variant).

The pull zone edge recomputes the token from the request URL and rejects the
request unless it matches, so everything here has to be byte-exact:

    base  = secret + signature_path + expires + client_ip + parameter_string
    token = urlsafe_b64(sha256(base)) without "=" padding

``parameter_string`` is every query parameter (plus the ``token_*``
restriction parameters) sorted by key, joined as ``k=v`` with ``&`` and with
empty values left out.
"""
from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from urllib.parse import unquote

from .errors import HashingError, InvalidInputError
from .paths import parse_resource_path, set_query_param

TOKEN_PATH_PARAM = "token_path"
COUNTRIES_ALLOWED_PARAM = "token_countries"
COUNTRIES_BLOCKED_PARAM = "token_countries_blocked"


@dataclass(frozen=True)
class BunnyToken:
    token: str
    expires: int
    parameter_string: str
    # Sorted, non-empty parameters that went into the signature
    params: tuple[tuple[str, str], ...]


def build_parameter_string(params) -> tuple[str, tuple[tuple[str, str], ...]]:
    """Sort parameters by key and drop the empty ones.

    A value of ``"0"`` is not empty.
    """
    kept = tuple((k, v) for k, v in sorted(params) if v != "")
    return "&".join(f"{k}={v}" for k, v in kept), kept


def _digest(signature_base: str) -> str:
    try:
        raw = hashlib.sha256(signature_base.encode("utf-8")).digest()
    except (UnicodeEncodeError, ValueError) as e:
        raise HashingError(f"could not hash signature base: {e}") from e
    # urlsafe alphabet maps "+" -> "-" and "/" -> "_"
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def generate_token(
    path: str,
    secret: str,
    expires: int,
    client_ip: str = "",
    path_override: str = "",
    countries_allowed: str = "",
    countries_blocked: str = "",
) -> BunnyToken:
    """Compute the BunnyCDN token for ``path``.

    Args:
        path: Resource path relative to the pull zone, query string included
            (e.g. ``/folder/file.webp?width=800&height=600``).
        secret: Pull zone token authentication key.
        expires: Expiry as unix seconds.
        client_ip: Optional IP the token is bound to.
        path_override: Sign this path instead of the resource path (directory
            tokens). Also added as the ``token_path`` parameter.
        countries_allowed: Comma-separated ISO codes allowed to fetch.
        countries_blocked: Comma-separated ISO codes refused.

    Raises:
        InvalidInputError: ``path`` cannot be parsed.
        HashingError: the digest could not be computed.
    """
    resource = parse_resource_path(path)
    params = list(resource.params)
    if path_override:
        params = set_query_param(params, TOKEN_PATH_PARAM, path_override)
    if countries_allowed:
        params = set_query_param(params, COUNTRIES_ALLOWED_PARAM, countries_allowed)
    if countries_blocked:
        params = set_query_param(params, COUNTRIES_BLOCKED_PARAM, countries_blocked)

    parameter_string, kept = build_parameter_string(params)

    if path_override:
        signature_path = path_override
    else:
        try:
            signature_path = unquote(resource.pathname, errors="strict")
        except UnicodeDecodeError as e:
            raise InvalidInputError(f"path is not valid UTF-8 once decoded: {e}") from e

    expires = int(expires)
    signature_base = f"{secret}{signature_path}{expires}{client_ip or ''}{parameter_string}"
    return BunnyToken(
        token=_digest(signature_base),
        expires=expires,
        parameter_string=parameter_string,
        params=kept,
    )
