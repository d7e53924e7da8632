"""Async HTTP client for the DeepSeek chat completions API."""
import logging
from typing import Optional

import httpx

from .exceptions import UpstreamTransportError
from .models import UpstreamRequest

logger = logging.getLogger(__name__)


class DeepSeekClient:
    """Async client for the DeepSeek API."""

    def __init__(
        self,
        completions_url: str,
        timeout: Optional[float] = 120,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.completions_url = completions_url
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def _build_headers(self, credential: str) -> dict:
        """Build request headers."""
        return {
            "Content-Type": "application/json",
            "Authorization": credential,
        }

    def _build_request(self, request: UpstreamRequest, credential: str) -> httpx.Request:
        return self._client.build_request(
            "POST",
            self.completions_url,
            json=request.model_dump(),
            headers=self._build_headers(credential),
        )

    async def chat_completion(
        self,
        request: UpstreamRequest,
        credential: str
    ) -> httpx.Response:
        """Send a buffered chat completion request; the body is fully read."""
        logger.info(f"DeepSeek request: model={request.model} stream=False")
        try:
            return await self._client.send(self._build_request(request, credential))
        except httpx.HTTPError as e:
            logger.warning(f"DeepSeek request failed: {e}")
            raise UpstreamTransportError(str(e) or "Error calling DeepSeek API")

    async def chat_completion_stream(
        self,
        request: UpstreamRequest,
        credential: str
    ) -> httpx.Response:
        """Open a streamed chat completion; the caller must aclose() the response."""
        logger.info(f"DeepSeek request: model={request.model} stream=True")
        try:
            return await self._client.send(
                self._build_request(request, credential),
                stream=True,
            )
        except httpx.HTTPError as e:
            logger.warning(f"DeepSeek request failed: {e}")
            raise UpstreamTransportError(str(e) or "Error calling DeepSeek API")

    async def read_error_body(self, response: httpx.Response) -> bytes:
        """Read and close a streamed response that failed before sending data."""
        try:
            return await response.aread()
        except httpx.HTTPError as e:
            logger.warning(f"Reading DeepSeek error body failed: {e}")
            raise UpstreamTransportError(str(e) or "Error calling DeepSeek API")
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()
