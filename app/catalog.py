"""
Resolve CDN URLs for portfolio catalog items.

Items come from the document store as mappings with at least ``name`` and
``type``. Every item is stored on the pull zone under its own folder:

    /<name>/thumbnail.webp   public thumbnail
    /<name>/tiles            public panorama tile set (type "pano")
    /<name>/<name>.webp      private full-size media, served signed

The document store client calls ``resolve_item_urls`` with the items it
loaded and the app's signer (``app.cdn.current_signer()``); no route in
this API serves catalog data itself.
"""
from urllib.parse import quote

import structlog

logger = structlog.get_logger(__name__)

PUBLIC_MEDIA_TYPES = frozenset({"pano"})


def item_paths(name: str, media_type: str) -> dict:
    """Return the pull zone paths for a catalog item."""
    folder = quote(str(name), safe="")
    if media_type in PUBLIC_MEDIA_TYPES:
        actual = f"/{folder}/tiles"
    else:
        actual = f"/{folder}/{folder}.webp"
    return {"thumbnail": f"/{folder}/thumbnail.webp", "actual": actual}


def resolve_item_urls(items, signer) -> list[dict]:
    """Attach thumbnail and full-size URLs to each catalog item.

    Args:
        items: Iterable of mappings with ``name`` and ``type`` keys
        signer: SignedUrlService used for private media

    Returns:
        List of ``{"name", "type", "urls": {"thumbnailUrl", "actualUrl"}}``
        in input order. Items without a name are skipped.
    """
    results = []
    for item in items:
        name = item.get("name")
        media_type = item.get("type")
        if not name:
            logger.warning("catalog_item_skipped", reason="missing name", type=media_type)
            continue

        paths = item_paths(name, media_type)
        if media_type in PUBLIC_MEDIA_TYPES:
            actual_url = signer.public_url(paths["actual"])
        else:
            actual_url = signer.get_signed_url(paths["actual"])

        results.append(
            {
                "name": name,
                "type": media_type,
                "urls": {
                    "thumbnailUrl": signer.public_url(paths["thumbnail"]),
                    "actualUrl": actual_url,
                },
            }
        )
    return results
