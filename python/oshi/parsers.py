"""Parsers for the plain-text bodies returned by the service.

Upload responses hold one `<url> [<label>]` pair per produced link, in any order:

    https://oshi.at/a/AbCd [Admin]
    https://oshi.at/AbCd/photo.png [Download]
    http://5ety7tpkim5me6eszuwcje7bmy25pbtrjtue7zkqqgziljwqy3rrikqd.onion/AbCd/photo.png [Tor download]

Hashsum responses hold exactly one `<hashsum> (<algorithm>)` pair.
"""

import re

import structlog

from .errors import MalformedResponseError
from .types import HashsumResult, UploadResult

logger = structlog.get_logger("oshi.parsers")

UPLOAD_RESPONSE_RE = re.compile(r"(https?://\S+)\s+\[([^\]]+)\]")

HASHSUM_RESPONSE_RE = re.compile(r"([0-9a-zA-Z]+)\s+\(([^)]+)\)")

UPLOAD_LABELS = {
    "admin": "admin",
    "download": "download",
    "tor download": "tor_download",
}


def parse_upload_response(text: str) -> UploadResult:
    """Extract the labelled URLs of an upload response.

    Never fails. Unknown labels are skipped and missing lines leave their field as None,
    so callers must check for the fields they need.
    """
    fields: dict[str, str] = {}
    for match in UPLOAD_RESPONSE_RE.finditer(text):
        url, label = match.group(1), match.group(2).lower()
        field = UPLOAD_LABELS.get(label)
        if field is None:
            logger.debug("upload_response_unknown_label", label=label)
            continue
        fields[field] = url

    # A 200 without a single link still yields an empty result.
    if not fields:
        logger.warning("upload_response_without_links", body_length=len(text))

    return UploadResult(**fields)


def parse_hashsum_response(text: str) -> HashsumResult:
    match = HASHSUM_RESPONSE_RE.search(text)
    if match is None:
        raise MalformedResponseError(text)
    return HashsumResult(hashsum=match.group(1), algorithm=match.group(2))
