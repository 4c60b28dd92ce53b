"""Integration tests against the live oshi.at service.

Skipped unless OSHI_INTEGRATION=1. OSHI_ENDPOINT overrides the service URL.
"""

import os

import httpx
import pytest
from oshi import DEFAULT_ENDPOINT, Image, OshiClient, extract_file_id

PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)

pytestmark = pytest.mark.skipif(
    os.getenv("OSHI_INTEGRATION") != "1",
    reason="OSHI_INTEGRATION not set",
)


class TestOshiIntegration:

    @pytest.fixture
    def image(self):
        return Image(content=PNG, filename="name_test.png", expire=5, autodestroy=True)

    @pytest.fixture
    def endpoint(self):
        return os.getenv("OSHI_ENDPOINT", DEFAULT_ENDPOINT)

    @pytest.mark.asyncio
    async def test_upload_hashsum_delete(self, image, endpoint):
        async with httpx.AsyncClient(timeout=60) as http_client:
            client = OshiClient(http_client, endpoint=endpoint)

            result = await client.upload(image)
            assert result.admin
            assert result.download
            assert result.tor_download

            info = await client.get_hashsum(extract_file_id(result.download))
            assert info.algorithm
            assert info.hashsum

            await client.delete(result.admin)

    @pytest.mark.asyncio
    async def test_get_tor_endpoint(self, endpoint):
        async with OshiClient(endpoint=endpoint) as client:
            onion = await client.get_tor_endpoint()
        assert onion.strip()
