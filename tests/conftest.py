"""
Test Configuration Module
"""

import json
from typing import Any, AsyncIterator, Callable

import pytest

from responses_adapter.common.sse import SSELineDecoder
from responses_adapter.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached process-wide; make every test read the environment again"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def provider() -> dict[str, Any]:
    return {
        "name": "responses-test",
        "baseUrl": "https://api.example.com/v1",
        "apiKey": "sk-test",
    }


@pytest.fixture
def sse_upstream() -> Callable[..., AsyncIterator[bytes]]:
    """Build an async byte stream yielding the given raw chunks"""

    def _factory(*chunks: bytes) -> AsyncIterator[bytes]:
        async def _gen():
            for chunk in chunks:
                yield chunk

        return _gen()

    return _factory


@pytest.fixture
def decode_chunks() -> Callable[[list[bytes]], list[dict[str, Any]]]:
    """Decode emitted SSE bytes back into chunk objects"""

    def _decode(chunks: list[bytes]) -> list[dict[str, Any]]:
        decoder = SSELineDecoder()
        payloads: list[str] = []
        for chunk in chunks:
            payloads.extend(decoder.feed(chunk))
        payloads.extend(decoder.flush())
        return [json.loads(payload) for payload in payloads]

    return _decode
