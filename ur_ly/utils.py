"""Helpers for UR property URLs and search payloads."""

import re
from typing import Optional
from urllib.parse import urlencode, urlparse

from .models import PropertyIds

# e.g. /chintai/kanto/tokyo/20_7140.html
_PROPERTY_PATH_RE = re.compile(r"/([0-9]+)_([0-9]+)\.html$")


def extract_ur_property_ids(url: str) -> Optional[PropertyIds]:
    """
    Extract shisya and danchi from a UR property URL.

    Example:
        https://www.ur-net.go.jp/chintai/kanto/tokyo/20_7140.html
        -> PropertyIds(shisya='20', danchi='7140')

    Returns:
        The identifiers, or None if the URL is not absolute or its path
        does not end with ``<digits>_<digits>.html``.
    """
    if not isinstance(url, str):
        return None
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None

    match = _PROPERTY_PATH_RE.search(parsed.path)
    if not match:
        return None
    return PropertyIds(shisya=match.group(1), danchi=match.group(2))


def build_ur_api_payload(shisya: str, danchi: str) -> str:
    """Build the form-encoded body for the UR property search API."""
    params = [
        ('rent_low', ''),
        ('rent_high', ''),
        ('floorspace_low', ''),
        ('floorspace_high', ''),
        ('shisya', shisya),
        ('danchi', danchi),
        ('shikibetu', '0'),
        ('newBukkenRoom', ''),
        ('orderByField', '0'),
        ('orderBySort', '0'),
        ('pageIndex', '0'),
        ('sp', ''),
    ]
    return urlencode(params)
