"""
StrayLink Backend — Public URL and Image Helpers
==================================================

What:  Small pure helpers shared by the share responder and the article
       reader: site URL resolution, image picking, absolute image URLs and
       text summaries for meta descriptions.
Why:   Records coming from the hosted database are loose: image columns may
       hold a string or a list with blank entries, and pet photos may be
       stored as bare storage keys rather than URLs.
"""

import re
from typing import Any, Mapping, Optional
from urllib.parse import quote

from app.config import settings

_WHITESPACE = re.compile(r"\s+")
_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)
_STORAGE_PREFIX = "storage/v1/object/public"

SUMMARY_MAX_LENGTH = 180


def encode_path_segment(value: str) -> str:
    """Percent-encode one URL path/query component (slashes included)."""
    return quote(value, safe="-_.!~*'()")


def normalize_site_url(value: str) -> str:
    """Add https:// when no scheme is given and drop the trailing slash."""
    value = (value or "").strip()
    if not value:
        return ""
    if not value.startswith("http"):
        value = f"https://{value}"
    return value.rstrip("/")


def resolve_site_url(headers: Mapping[str, str]) -> str:
    """
    Work out the public site root for canonical links.

    Order:
        1. SITE_URL setting
        2. X-Forwarded-Host / Host header, with X-Forwarded-Proto (default https)
        3. FALLBACK_SITE_URL setting
    """
    configured = normalize_site_url(settings.site_url)
    if configured:
        return configured

    host = headers.get("x-forwarded-host") or headers.get("host") or ""
    if host:
        proto = headers.get("x-forwarded-proto") or "https"
        return f"{proto}://{host}".rstrip("/")

    return settings.fallback_site_url


def pick_image(value: Any) -> Optional[str]:
    """First non-blank string from a string or a list of strings."""
    if not value:
        return None
    if isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, str) and item.strip():
                return item
        return None
    if isinstance(value, str) and value.strip():
        return value
    return None


def ensure_absolute_url(value: Optional[str], site_url: str, default: str) -> str:
    """
    Turn a stored image reference into an absolute URL.

        https://cdn/x.jpg          → unchanged
        //cdn/x.jpg                → https://cdn/x.jpg
        /images/x.jpg              → {site_url}/images/x.jpg
        pets/x.jpg                 → {storage base}/pets/x.jpg
        storage/v1/object/public/… → {storage host}/storage/v1/object/public/…

    Bare keys resolve against the site when no storage base is configured.
    """
    if not value or not value.strip():
        return default

    trimmed = value.strip()
    if _HTTP_URL.match(trimmed):
        return trimmed
    if trimmed.startswith("//"):
        return f"https:{trimmed}"
    if trimmed.startswith("/"):
        return f"{site_url}{trimmed}"

    storage_base = settings.storage_public_base_url
    if storage_base:
        if trimmed.startswith(_STORAGE_PREFIX):
            # Base already ends with the public prefix; keep only its host part
            host = storage_base.split(f"/{_STORAGE_PREFIX}")[0]
            return f"{host}/{trimmed}"
        return f"{storage_base}/{trimmed}"

    return f"{site_url}/{trimmed}"


def summarize(value: Optional[str], max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """Collapse whitespace and cut to max_length, ending with '...' when cut."""
    if not value:
        return ""
    normalized = _WHITESPACE.sub(" ", value).strip()
    if len(normalized) <= max_length:
        return normalized
    return f"{normalized[: max_length - 3]}..."
