"""
API Dependency Injection Module

Provides the dependencies required by FastAPI routes.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from responses_adapter.config import get_settings
from responses_adapter.domain.provider import ProviderDescriptor
from responses_adapter.providers.responses_client import ResponsesClient
from responses_adapter.transformers.plugin import ResponsesAPITransformer


@lru_cache()
def get_responses_client() -> ResponsesClient:
    """Shared backend client (connection pool reused across requests)"""
    return ResponsesClient()


def get_transformer() -> ResponsesAPITransformer:
    settings = get_settings()
    return ResponsesAPITransformer({"reasoning_effort": settings.REASONING_EFFORT})


def get_provider() -> ProviderDescriptor:
    settings = get_settings()
    return ProviderDescriptor(
        name=settings.PROVIDER_NAME,
        base_url=settings.PROVIDER_BASE_URL,
        api_key=settings.PROVIDER_API_KEY,
    )


ResponsesClientDep = Annotated[ResponsesClient, Depends(get_responses_client)]
TransformerDep = Annotated[ResponsesAPITransformer, Depends(get_transformer)]
ProviderDep = Annotated[ProviderDescriptor, Depends(get_provider)]
