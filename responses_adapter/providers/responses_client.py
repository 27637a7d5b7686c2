"""
Responses Backend Client

Sends a transformed request to the Responses-style backend.
"""

import json
import logging
from typing import Optional

import httpx

from responses_adapter.common.errors import UpstreamError
from responses_adapter.config import get_settings
from responses_adapter.transformers.request import TransformedRequest

logger = logging.getLogger(__name__)


class ResponsesClient:
    """
    Responses Backend Client

    Wraps a lazily created httpx.AsyncClient. Responses are returned in
    streaming mode; the caller owns them and must close them (the response
    transformer does so once the stream is drained).
    """

    def __init__(
        self,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client

        Args:
            timeout: Request timeout (seconds), defaults to configuration
            transport: Custom httpx transport (e.g. httpx.MockTransport in tests)
        """
        settings = get_settings()
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP Client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(self, outbound: TransformedRequest) -> httpx.Response:
        """
        POST the Responses body to the backend.

        Args:
            outbound: Transformed request (body, url, headers)

        Returns:
            httpx.Response: Unread streaming response

        Raises:
            UpstreamError: On timeout (504) or transport failure (502)
        """
        logger.debug(
            "Responses Request: url=%s body=%s",
            outbound.url,
            json.dumps(outbound.body, ensure_ascii=False),
        )

        client = self._get_client()
        request = client.build_request(
            "POST",
            outbound.url,
            headers=outbound.headers,
            json=outbound.body,
        )
        try:
            return await client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise UpstreamError(
                message=f"Request timeout: {str(e)}",
                code="upstream_timeout",
                status_code=504,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(message=f"Request error: {str(e)}") from e
