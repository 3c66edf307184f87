"""Exceptions raised by the CDN signing helpers.

Route handlers map these onto HTTP responses:

- InvalidInputError -> 400 (caller supplied an unusable path or size)
- ConfigurationError -> 500 (missing secret or CDN base URL)
- HashingError -> 500
"""


class SigningError(Exception):
    """Base class for all URL signing failures."""


class ConfigurationError(SigningError):
    """Signing secret or CDN base URL is missing or malformed."""


class InvalidInputError(SigningError, ValueError):
    """The resource path (or one of its size parameters) cannot be used."""


class HashingError(SigningError):
    """Computing the token digest failed."""
