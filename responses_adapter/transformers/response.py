"""
Responses -> Chat Completions Response Transformation

Handles both single-shot JSON responses and SSE streams returned by a
Responses-style backend.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

import httpx

from responses_adapter.common.utils import as_dict, unix_now
from responses_adapter.transformers.stream import responses_sse_to_chat_completions_sse

logger = logging.getLogger(__name__)

TEXT_OUTPUT_TYPES = ("message", "output_text")
TEXT_PART_TYPES = ("output_text", "text")
STOP_STATUSES = ("stop", "completed")

SSE_RESPONSE_HEADERS = {
    "Content-Type": "text/event-stream; charset=utf-8",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def _extract_output_text(output: list[Any]) -> str:
    texts: list[str] = []
    for item in output:
        if not isinstance(item, dict) or item.get("type") not in TEXT_OUTPUT_TYPES:
            continue
        if isinstance(item.get("text"), str):
            texts.append(item["text"])
        content = item.get("content")
        if isinstance(content, list):
            texts.append(
                "".join(
                    part.get("text") or ""
                    for part in content
                    if isinstance(part, dict) and part.get("type") in TEXT_PART_TYPES
                )
            )
    return "".join(text for text in texts if text)


def _extract_tool_calls(output: list[Any]) -> list[dict[str, Any]]:
    tool_calls: list[dict[str, Any]] = []
    for item in output:
        if not isinstance(item, dict) or item.get("type") != "function_call":
            continue
        arguments = item.get("arguments")
        tool_calls.append(
            {
                "id": item.get("call_id") or item.get("id") or "",
                "type": "function",
                "function": {
                    "name": item.get("name") or "",
                    "arguments": arguments if isinstance(arguments, str) else "",
                },
            }
        )
    return tool_calls


def _finish_reason(status: Any, has_tool_calls: bool) -> Any:
    """
    Map a Responses status to a Chat finish_reason.

    "stop" / "completed" (or a missing status) finish normally; any other
    status is passed through literally.
    """
    if status is None or status in STOP_STATUSES:
        return "tool_calls" if has_tool_calls else "stop"
    return status


def responses_response_to_chat_completion(body: dict[str, Any]) -> dict[str, Any]:
    """
    Translate a `/v1/responses` JSON body into a `/v1/chat/completions` JSON body.
    """
    output = body.get("output")
    output = output if isinstance(output, list) else []

    message: dict[str, Any] = {
        "role": "assistant",
        "content": _extract_output_text(output),
    }
    tool_calls = _extract_tool_calls(output)
    if tool_calls:
        message["tool_calls"] = tool_calls

    chat: dict[str, Any] = {
        "id": body.get("id") or "",
        "object": "chat.completion",
        "created": unix_now(),
        "model": body.get("model") or "",
        "choices": [
            {
                "index": 0,
                "finish_reason": _finish_reason(body.get("status"), bool(tool_calls)),
                "message": message,
            }
        ],
    }
    if body.get("usage") is not None:
        chat["usage"] = body["usage"]
    return chat


def is_json_content_type(content_type: str) -> bool:
    return "application/json" in content_type


def is_stream_content_type(content_type: str) -> bool:
    return "text/event-stream" in content_type or "stream" in content_type


async def _close_after(response: httpx.Response) -> AsyncIterator[bytes]:
    """Stream the translated frames and release the upstream connection once done."""
    try:
        async for frame in responses_sse_to_chat_completions_sse(upstream=response.aiter_bytes()):
            yield frame
    finally:
        await response.aclose()


async def transform_response(response: httpx.Response) -> httpx.Response:
    """
    Translate a Responses HTTP response into a Chat Completions HTTP response.

    - application/json: one-shot conversion of the body
    - text/event-stream (or any "stream" content type): incremental conversion
    - anything else: returned untouched

    Error statuses (>= 400) are returned untouched so the caller sees the
    backend's own error payload.
    """
    content_type = response.headers.get("content-type", "")

    if response.status_code >= 400:
        logger.debug(
            "Passing through upstream error response: status=%s content_type=%s",
            response.status_code,
            content_type,
        )
        return response

    if is_json_content_type(content_type):
        await response.aread()
        chat = responses_response_to_chat_completion(as_dict(response.json()))
        return httpx.Response(status_code=200, json=chat)

    if is_stream_content_type(content_type):
        return httpx.Response(
            status_code=200,
            headers=SSE_RESPONSE_HEADERS,
            content=_close_after(response),
        )

    return response

