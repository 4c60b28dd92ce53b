# ruff: noqa: F401
from .client import OshiClient
from .config import DEFAULT_ENDPOINT, OshiConfig
from .errors import (
    InvalidContentError,
    InvalidURLError,
    MalformedResponseError,
    OshiError,
    ServiceError,
    TransportError,
    WrongResponseError,
)
from .parsers import parse_hashsum_response, parse_upload_response
from .types import HashsumResult, Image, UploadResult
from .urls import extract_file_id

__version__ = "0.1.0"
