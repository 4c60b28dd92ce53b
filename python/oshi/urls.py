"""Request URL builders.

Query parameters are attached only when a directive differs from its default. The service
treats a missing parameter as "use the default", so `false` is never sent as `0`.
"""

from urllib.parse import quote

import httpx

from .errors import InvalidURLError
from .types import Image

FILENAME = "filename"
EXPIRE = "expire"
AUTODESTROY = "autodestroy"
RANDOMIZEFN = "randomizefn"
SHORTURL = "shorturl"

ONION = "onion"
HASHSUM = "hashsum"


def _parse(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError(f"Invalid URL {url!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURLError(f"Invalid URL {url!r}: expected an absolute http(s) URL")
    return parsed


def _join(endpoint: str, *segments: str) -> str:
    url = _parse(endpoint)
    parts = [s.strip("/") for s in segments]
    if not all(parts):
        raise InvalidURLError(f"Empty path segment in {segments!r}")
    # Each segment is escaped whole, so "?", "#" and "/" stay inside it.
    path = url.path.rstrip("/") + "/" + "/".join(quote(p, safe="") for p in parts)
    try:
        return str(url.copy_with(path=path))
    except httpx.InvalidURL as exc:
        raise InvalidURLError(f"Invalid path {path!r}: {exc}") from exc


def build_upload_url(endpoint: str, image: Image) -> str:
    url = _parse(endpoint)

    params: dict[str, str] = {}
    if image.filename and image.filename != FILENAME:
        params[FILENAME] = image.filename
    if image.expire > 0:
        params[EXPIRE] = str(image.expire)
    if image.autodestroy:
        params[AUTODESTROY] = "1"
    if image.randomizefn:
        params[RANDOMIZEFN] = "1"
    if image.shorturl:
        params[SHORTURL] = "1"

    if params:
        url = url.copy_merge_params(params)
    return str(url)


def build_hashsum_url(endpoint: str, file_id: str) -> str:
    return _join(endpoint, HASHSUM, file_id)


def build_tor_url(endpoint: str) -> str:
    return _join(endpoint, ONION)


def build_delete_url(admin_url: str) -> str:
    """Admin URLs are used verbatim, only checked to be absolute http(s) URLs."""
    _parse(admin_url)
    return admin_url


def extract_file_id(download_url: str) -> str:
    """Return the file id of a download URL, i.e. its first path segment.

    >>> extract_file_id("https://oshi.at/AbCd/photo.png")
    'AbCd'
    """
    url = _parse(download_url)
    segments = [s for s in url.path.split("/") if s]
    if not segments:
        raise InvalidURLError(f"No file id in {download_url!r}")
    return segments[0]
