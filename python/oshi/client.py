from collections.abc import AsyncIterable, AsyncIterator
from typing import Any, Literal

import httpx
import structlog

from .config import OshiConfig
from .errors import InvalidContentError, ServiceError, TransportError
from .parsers import parse_hashsum_response, parse_upload_response
from .types import HashsumResult, Image, UploadResult
from .urls import build_delete_url, build_hashsum_url, build_tor_url, build_upload_url

logger = structlog.get_logger("oshi.client")


async def _checked_chunks(stream: AsyncIterable[Any]) -> AsyncIterator[bytes]:
    """Pass a streamed body through, failing on the first chunk that is not bytes."""
    async for chunk in stream:
        if not isinstance(chunk, bytes):
            raise InvalidContentError(f"Streamed content must yield bytes, got {type(chunk).__name__}")
        yield chunk


class OshiClient:
    """Client for the oshi.at file hosting API.

    Every operation is a single request/response cycle. Nothing is retried, cached or shared
    between calls, so one instance can be used concurrently from several tasks.

    The HTTP transport is an `httpx.AsyncClient`. An injected one is left open for its owner
    to close; otherwise the client builds its own and closes it in `aclose()`.

    Example:
        async with OshiClient() as client:
            result = await client.upload(Image(content=data, filename="photo.png", expire=5))
            print(result.download)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        config: OshiConfig | None = None,
        endpoint: str | None = None,
    ) -> None:
        if config is None:
            config = OshiConfig() if endpoint is None else OshiConfig(endpoint=endpoint)
        elif endpoint is not None:
            raise ValueError("Pass either config or endpoint, not both.")

        self._config = config
        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=config.timeout)
        self._http_client = http_client

    @property
    def config(self) -> OshiConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    async def __aenter__(self) -> "OshiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def _send(
        self,
        method: Literal["GET", "PUT", "DELETE"],
        url: str,
        content: Any = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a request and return the response if its status is 200.

        Raises:
            TransportError: The request could not be sent or its response could not be read.
            ServiceError: The service answered with any other status.
        """
        kwargs: dict[str, Any] = {}
        if content is not None:
            kwargs["content"] = content
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            res = await self._http_client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            logger.warning("request_failed", method=method, host=httpx.URL(url).host, error=str(exc))
            raise TransportError(f"{method} request failed: {exc}") from exc

        if res.status_code != httpx.codes.OK:
            logger.info("service_error", method=method, host=res.request.url.host, status_code=res.status_code)
            raise ServiceError(res.status_code, res.text)

        return res

    async def upload(self, image: Image, timeout: float | None = None) -> UploadResult:
        """Upload a file.

        Args:
            image: The file and its upload directives.
            timeout: Optional timeout in seconds for this call.

        Returns:
            UploadResult: The admin, download and onion download URLs found in the response.
            Links the service did not return are None.
        """
        url = build_upload_url(self._config.endpoint, image)
        logger.debug("upload", filename=image.filename, streamed=image.is_streamed)
        content = _checked_chunks(image.content) if image.is_streamed else image.content
        res = await self._send("PUT", url, content=content, timeout=timeout)
        return parse_upload_response(res.text)

    async def get_hashsum(self, file_id: str, timeout: float | None = None) -> HashsumResult:
        """Get the hashsum and hash algorithm of an uploaded file.

        The file id is the first path segment of the download URL, see `extract_file_id`.
        """
        url = build_hashsum_url(self._config.endpoint, file_id)
        logger.debug("get_hashsum", file_id=file_id)
        res = await self._send("GET", url, timeout=timeout)
        return parse_hashsum_response(res.text)

    async def delete(self, admin_url: str, timeout: float | None = None) -> None:
        """Delete an uploaded file through the admin URL returned by its upload."""
        url = build_delete_url(admin_url)
        logger.debug("delete")
        await self._send("DELETE", url, timeout=timeout)

    async def get_tor_endpoint(self, timeout: float | None = None) -> str:
        """Get the onion mirror hostname, verbatim."""
        url = build_tor_url(self._config.endpoint)
        res = await self._send("GET", url, timeout=timeout)
        return res.text
