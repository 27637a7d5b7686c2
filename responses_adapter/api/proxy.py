"""
Chat Completions Proxy API

Accepts Chat Completions requests and serves them from the configured
Responses backend.
"""

import logging

import httpx
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, Response, StreamingResponse

from responses_adapter.api.deps import ProviderDep, ResponsesClientDep, TransformerDep
from responses_adapter.common.errors import AppError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proxy - Chat Completions"])


async def _to_fastapi_response(response: httpx.Response) -> Response:
    content_type = response.headers.get("content-type", "")

    if content_type.startswith("text/event-stream"):
        return StreamingResponse(
            response.aiter_bytes(),
            status_code=response.status_code,
            headers={
                key: value
                for key, value in response.headers.items()
                if key.lower() not in ("content-type", "transfer-encoding")
            },
            media_type=content_type,
        )

    try:
        content = await response.aread()
    finally:
        await response.aclose()
    return Response(
        content=content,
        status_code=response.status_code,
        media_type=content_type or None,
    )


@router.post("/v1/chat/completions")
async def chat_completions(
    request: Request,
    client: ResponsesClientDep,
    transformer: TransformerDep,
    provider: ProviderDep,
):
    """
    Chat Completions API backed by a Responses API provider
    """
    try:
        body = await request.json()
        outbound = transformer.transform_request_in(body, provider)
        upstream = await client.send(outbound)
        converted = await transformer.transform_response_out(upstream)
        return await _to_fastapi_response(converted)

    except AppError as e:
        return JSONResponse(content=e.to_dict(), status_code=e.status_code)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return JSONResponse(
            content={
                "error": {
                    "message": "Internal server error",
                    "type": "internal_error",
                    "code": "internal_error",
                }
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
