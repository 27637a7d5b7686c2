"""
Responses API Transformer

Router-facing entry point: reshapes Chat Completions requests for a
Responses-only backend and converts the backend's answers back.
"""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx

from responses_adapter.domain.provider import ProviderDescriptor, TransformerOptions
from responses_adapter.transformers.request import (
    TransformedRequest,
    chat_completions_request_to_responses,
)
from responses_adapter.transformers.response import transform_response


class ResponsesAPITransformer:
    """
    Chat Completions <-> Responses transformer.

    Stateless: every call works on its own inputs, stream state lives in the
    returned response's body iterator.

    Example:
        transformer = ResponsesAPITransformer({"reasoning_effort": "high"})
        outbound = transformer.transform_request_in(chat_request, provider)
        # ... POST outbound.body to outbound.url with outbound.headers ...
        chat_response = await transformer.transform_response_out(upstream_response)
    """

    name = "responses-api"

    def __init__(self, options: Optional[Union[TransformerOptions, dict[str, Any]]] = None):
        if not isinstance(options, TransformerOptions):
            options = TransformerOptions.model_validate(options or {})
        self.options = options

    def transform_request_in(
        self,
        request: dict[str, Any],
        provider: Union[ProviderDescriptor, dict[str, Any]],
    ) -> TransformedRequest:
        """
        Convert a Chat Completions request into a Responses request.

        Raises:
            ConfigurationError: If the provider has no usable base URL
        """
        return chat_completions_request_to_responses(
            request,
            provider,
            default_effort=self.options.default_effort,
        )

    async def transform_response_out(self, response: httpx.Response) -> httpx.Response:
        """Convert a Responses HTTP response (JSON or SSE) into Chat Completions shape."""
        return await transform_response(response)
