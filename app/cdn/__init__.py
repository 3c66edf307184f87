"""BunnyCDN URL signing.

Exposes the token generator and the caching signed URL service used by the
API to hand out short-lived URLs for private media.
"""

from .errors import ConfigurationError, HashingError, InvalidInputError, SigningError
from .signer import SignedUrlService, canonical_path, current_signer
from .token import BunnyToken, generate_token

__all__ = [
    "BunnyToken",
    "ConfigurationError",
    "HashingError",
    "InvalidInputError",
    "SignedUrlService",
    "SigningError",
    "canonical_path",
    "current_signer",
    "generate_token",
]
