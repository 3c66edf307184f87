"""
Version management for the Abstract Altitudes API.
"""

__version__ = "1.1.0"
__version_info__ = (1, 1, 0)

# Version history tracking
VERSION_HISTORY = {
    "0.1.0": "Initial Flask API with MD5 BunnyCDN tokens",
    "1.0.0": (
        "SHA-256 token authentication with sorted, empty-skipping query parameters; "
        "width/height display parameters are signed; MD5 tokens removed."
    ),
    "1.1.0": (
        "Signed URL cache with injectable clock (optional Redis backend), "
        "geo restriction and directory token parameters, catalog URL resolution, "
        "structured logging with secret redaction, scripts/sign_url.py."
    ),
}


def get_version():
    """Get the current version string."""
    return __version__
