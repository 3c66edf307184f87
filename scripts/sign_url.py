#!/usr/bin/env python3
"""
Sign a pull zone path from the command line.

Usage:
  - Set BUNNYCDN_TOKEN_SECRET and BUNNYCDN_BASE_URL (or pass flags)
  - python scripts/sign_url.py /folder/file.webp --width 1421 --height 499

Prints the canonical path, expiry, token and the ready-to-use URL.
Restriction flags (--client-ip, --token-path, --countries, --block-countries)
are signed and appended to the URL the way the CDN edge expects them.

Exit codes:
  0 on success, 2 on bad input or missing configuration.
"""
from __future__ import annotations

import argparse
import os
import sys
import time
from urllib.parse import urlencode

# Ensure repository root is on sys.path so `import app` works when running directly
_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from dotenv import load_dotenv  # noqa: E402

from app.cdn.errors import SigningError  # noqa: E402
from app.cdn.signer import canonical_path  # noqa: E402
from app.cdn.token import generate_token  # noqa: E402


def build_url(base_url: str, path: str, result) -> str:
    """Assemble the final URL: restriction params, then token, then expires."""
    extra = [
        (k, v) for k, v in result.params if k.startswith("token_") and f"{k}=" not in path
    ]
    query = urlencode(extra + [("token", result.token), ("expires", result.expires)])
    separator = "&" if "?" in path else "?"
    return f"{base_url.rstrip('/')}{path}{separator}{query}"


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Sign a BunnyCDN pull zone path")
    parser.add_argument("path", help="Path relative to the pull zone, e.g. /folder/file.webp")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument(
        "--ttl", type=int, default=300, help="Seconds the token stays valid (default 300)"
    )
    parser.add_argument("--client-ip", default="", help="Bind the token to this IP")
    parser.add_argument("--token-path", default="", help="Sign a directory prefix instead")
    parser.add_argument("--countries", default="", help="Allowed country codes, comma-separated")
    parser.add_argument(
        "--block-countries", default="", help="Blocked country codes, comma-separated"
    )
    parser.add_argument(
        "--secret",
        default=os.getenv("BUNNYCDN_TOKEN_SECRET"),
        help="Token authentication key (default: $BUNNYCDN_TOKEN_SECRET)",
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("BUNNYCDN_BASE_URL") or os.getenv("VITE_BUNNYCDN_BASE_URL"),
        help="CDN base URL (default: $BUNNYCDN_BASE_URL)",
    )
    args = parser.parse_args(argv)

    if not args.secret or not args.base_url:
        print("BUNNYCDN_TOKEN_SECRET and BUNNYCDN_BASE_URL are required", file=sys.stderr)
        return 2

    try:
        path = canonical_path(args.path, width=args.width, height=args.height)
        result = generate_token(
            path,
            args.secret,
            int(time.time()) + args.ttl,
            client_ip=args.client_ip,
            path_override=args.token_path,
            countries_allowed=args.countries,
            countries_blocked=args.block_countries,
        )
    except SigningError as e:
        print(f"FAIL: {e}", file=sys.stderr)
        return 2

    print(f"Path      : {path}")
    print(f"Expires   : {result.expires}")
    print(f"Token     : {result.token}")
    print(f"Signed URL: {build_url(args.base_url, path, result)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
