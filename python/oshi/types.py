from collections.abc import AsyncIterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Image(BaseModel):
    """A file to upload together with its upload directives.

    The content is handed to the transport as-is. Bytes can be sent any number of times,
    while an async iterable is consumed by the single upload that reads it.

    Attributes:
        content: The file bytes, or an async iterable of byte chunks for streamed sources.
        filename: Name the file is stored under. Empty means the service picks one.
        expire: Days before the file expires. 0 uses the service default.
        autodestroy: Delete the file after its first download.
        randomizefn: Randomize the stored filename.
        shorturl: Produce a shortened download URL.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    content: Any
    filename: str = ""
    expire: int = Field(0, ge=0)
    autodestroy: bool = False
    randomizefn: bool = False
    shorturl: bool = False

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: Any) -> bytes | AsyncIterable[bytes]:
        # httpx would iterate a bytearray or memoryview as ints, so they are frozen into bytes.
        if isinstance(v, bytearray | memoryview):
            return bytes(v)
        if isinstance(v, bytes | AsyncIterable):
            return v
        raise ValueError(f"content must be bytes or an async iterable of bytes, got {type(v).__name__}")

    @property
    def is_streamed(self) -> bool:
        return not isinstance(self.content, bytes)

    @classmethod
    def from_path(cls, path: str | Path, **kwargs: Any) -> "Image":
        """Read a local file. Its basename is used as filename unless one is given."""
        path = Path(path).expanduser()
        kwargs.setdefault("filename", path.name)
        return cls(content=path.read_bytes(), **kwargs)

    def __repr__(self) -> str:
        size = "stream" if self.is_streamed else f"{len(self.content)} bytes"
        return (
            f"Image(filename={self.filename!r}, content=<{size}>, expire={self.expire}, "
            f"autodestroy={self.autodestroy}, randomizefn={self.randomizefn}, shorturl={self.shorturl})"
        )


class UploadResult(BaseModel):
    """URLs returned by an upload. Any of them may be missing if the service omitted its line."""

    admin: str | None = None
    """Capability URL allowing the file to be deleted."""
    download: str | None = None
    """Public download URL."""
    tor_download: str | None = None
    """Download URL on the onion mirror."""


class HashsumResult(BaseModel):
    """Hashsum of an uploaded file."""

    algorithm: str
    """Hash algorithm name, e.g. sha256."""
    hashsum: str
    """Encoded hash value."""
