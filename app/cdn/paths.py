"""Parsing helpers for CDN resource paths.

Paths arrive relative to the pull zone root (``/folder/file.webp?width=800``)
and are resolved against a throwaway base so that relative inputs, dot
segments and stray fragments are normalized the same way a browser would.
"""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, urlencode, urljoin, urlsplit

from .errors import InvalidInputError

# Only used to resolve relative paths; never appears in output
_DUMMY_BASE = "https://dummy/"

# Characters left untouched when re-encoding the pathname and query
_PATH_SAFE = "/%!$&'()*+,;=:@~"
_QUERY_SAFE = _PATH_SAFE + "?"


@dataclass(frozen=True)
class ResourcePath:
    """A resource path split into its pathname and query parameters."""

    pathname: str
    params: tuple[tuple[str, str], ...]
    search: str = ""

    @property
    def full_path(self) -> str:
        return self.pathname + self.search


def parse_resource_path(path: str) -> ResourcePath:
    """Split ``path`` into pathname and decoded query parameters.

    Raises:
        InvalidInputError: path is not a non-empty string or cannot be parsed.
    """
    if not isinstance(path, str) or not path.strip():
        raise InvalidInputError("path must be a non-empty string")
    try:
        parts = urlsplit(urljoin(_DUMMY_BASE, path.strip()))
        params = parse_qsl(parts.query, keep_blank_values=True)
        pathname = quote(parts.path or "/", safe=_PATH_SAFE)
        query = quote(parts.query, safe=_QUERY_SAFE)
    except (UnicodeError, ValueError) as e:
        raise InvalidInputError(f"unparsable path: {e}") from e

    return ResourcePath(
        pathname=pathname,
        params=tuple(params),
        search=f"?{query}" if query else "",
    )


def set_query_param(
    params: list[tuple[str, str]] | tuple[tuple[str, str], ...], key: str, value: str
) -> list[tuple[str, str]]:
    """Return ``params`` with ``key`` set to ``value``.

    The first occurrence keeps its position and later duplicates are dropped;
    a missing key is appended.
    """
    out: list[tuple[str, str]] = []
    replaced = False
    for k, v in params:
        if k != key:
            out.append((k, v))
        elif not replaced:
            out.append((k, value))
            replaced = True
    if not replaced:
        out.append((key, value))
    return out


def encode_query(params: list[tuple[str, str]]) -> str:
    """Form-encode query parameters, preserving their order."""
    return urlencode(params, safe="*")
