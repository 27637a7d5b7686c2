"""
Chat Completions -> Responses Request Transformation

Reshapes a Chat-style request ({model, messages, tools, ...}) into a
Responses-style body ({model, input, instructions, tools, ...}) and
resolves the outbound target for the provider.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union
from urllib.parse import urlsplit, urlunsplit

from responses_adapter.common.errors import ConfigurationError
from responses_adapter.common.utils import (
    first_defined,
    first_truthy,
    get_path,
    stringify,
)
from responses_adapter.domain.provider import ProviderDescriptor
from responses_adapter.transformers.reasoning import resolve_reasoning

logger = logging.getLogger(__name__)

DEFAULT_CALL_NAME = "tool_call"
RESPONSES_PATH_SUFFIX = "/responses"
INSTRUCTIONS_SEPARATOR = "\n\n"

# Field resolution order per item kind (dotted paths, first match wins)
TOOL_USE_NAME_FIELDS = ("name", "function.name", "tool_name", "id")
TOOL_USE_CALL_ID_FIELDS = ("id", "tool_call_id", "call_id", "name", "function.name")
TOOL_RESULT_CALL_ID_FIELDS = ("tool_use_id", "id", "call_id", "name")
TOOL_RESULT_OUTPUT_FIELDS = ("content", "output", "result", "text")
TOOL_MESSAGE_CALL_ID_FIELDS = ("tool_call_id", "id", "name")
TOOL_MESSAGE_OUTPUT_FIELDS = ("content", "output")
TOOL_CALL_NAME_FIELDS = ("function.name", "name", "id")
TOOL_CALL_ID_FIELDS = ("id", "name", "function.name")
LEGACY_FUNCTION_NAME_FIELDS = ("function_call.name", "name")
LEGACY_FUNCTION_CALL_ID_FIELDS = ("id", "function_call.name")

# Forwarded as-is whenever the key is present on the request
PASSTHROUGH_FIELDS = ("response_format", "tool_choice", "parallel_tool_calls", "user", "modalities")
# Hints without an equivalent on Responses content parts
STRIPPED_PART_FIELDS = ("cache_control",)
STRIPPED_IMAGE_FIELDS = ("media_type", "url")


@dataclass
class TransformedRequest:
    """Outbound Responses request: body plus HTTP target."""

    body: dict[str, Any]
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    # Stream flag the caller asked for, kept for diagnostics only
    requested_stream: Any = None


def _text_part_type(role: Any) -> str:
    return "output_text" if role == "assistant" else "input_text"


def _function_call_item(name: Any, arguments: str, call_id: Any) -> dict[str, Any]:
    return {
        "type": "function_call",
        "name": name,
        "arguments": arguments,
        "call_id": call_id,
    }


def _function_call_output_item(call_id: Any, output: Any) -> dict[str, Any]:
    # Arrays and strings are accepted verbatim by the Responses API
    if not isinstance(output, (list, str)):
        output = stringify(output)
    return {
        "type": "function_call_output",
        "call_id": call_id,
        "output": output,
    }


def _arguments_string(arguments: Any) -> str:
    if isinstance(arguments, str):
        return arguments
    return stringify(arguments if arguments is not None else {})


def _tool_use_arguments(part: dict[str, Any]) -> str:
    for key in ("input", "arguments"):
        if isinstance(part.get(key), str):
            return part[key]
    return stringify(first_defined(part, ("input", "arguments"), default={}))


def _tool_use_to_item(part: dict[str, Any]) -> dict[str, Any]:
    return _function_call_item(
        name=first_truthy(part, TOOL_USE_NAME_FIELDS, default=DEFAULT_CALL_NAME),
        arguments=_tool_use_arguments(part),
        call_id=first_truthy(part, TOOL_USE_CALL_ID_FIELDS, default=DEFAULT_CALL_NAME),
    )


def _tool_result_to_item(part: dict[str, Any]) -> dict[str, Any]:
    return _function_call_output_item(
        call_id=first_truthy(part, TOOL_RESULT_CALL_ID_FIELDS, default=DEFAULT_CALL_NAME),
        output=first_defined(part, TOOL_RESULT_OUTPUT_FIELDS, default=""),
    )


def _relabel_part(part: dict[str, Any], role: Any) -> dict[str, Any]:
    """Rename a Chat content part to its Responses counterpart."""
    cloned = dict(part)
    part_type = cloned.get("type")

    if part_type == "text":
        cloned["type"] = _text_part_type(role)
    elif part_type == "image_url":
        cloned["type"] = "input_image"
        cloned["image_url"] = (
            get_path(part, "image_url.url") or part.get("url") or part.get("image_url")
        )
        for key in STRIPPED_IMAGE_FIELDS:
            cloned.pop(key, None)

    for key in STRIPPED_PART_FIELDS:
        cloned.pop(key, None)
    return cloned


def _convert_content_parts(
    parts: list[Any], role: Any, items: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """
    Convert message content parts.

    tool_use / tool_result parts are lifted out into standalone items
    (appended to items); the remaining parts are returned relabeled.
    """
    remaining: list[dict[str, Any]] = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        part_type = part.get("type")
        if part_type == "tool_use":
            items.append(_tool_use_to_item(part))
        elif part_type == "tool_result":
            items.append(_tool_result_to_item(part))
        else:
            remaining.append(_relabel_part(part, role))
    return remaining


def _assistant_call_items(message: dict[str, Any]) -> Optional[list[dict[str, Any]]]:
    """
    Convert assistant-issued invocations into function_call items.

    Only one path applies per message, in order of preference:
    tool_calls list > legacy function_call > tool_call_id.
    Returns None when the message carries none of them.
    """
    tool_calls = message.get("tool_calls")
    if isinstance(tool_calls, list) and tool_calls:
        return [
            _function_call_item(
                name=first_truthy(tool_call, TOOL_CALL_NAME_FIELDS, default=DEFAULT_CALL_NAME),
                arguments=_arguments_string(get_path(tool_call, "function.arguments")),
                call_id=first_truthy(tool_call, TOOL_CALL_ID_FIELDS, default=DEFAULT_CALL_NAME),
            )
            for tool_call in tool_calls
        ]

    function_call = message.get("function_call")
    if isinstance(function_call, dict) or function_call:
        return [
            _function_call_item(
                name=first_truthy(message, LEGACY_FUNCTION_NAME_FIELDS, default=DEFAULT_CALL_NAME),
                arguments=_arguments_string(get_path(message, "function_call.arguments")),
                call_id=first_truthy(message, LEGACY_FUNCTION_CALL_ID_FIELDS, default=DEFAULT_CALL_NAME),
            )
        ]

    if message.get("tool_call_id"):
        content = message.get("content")
        return [
            _function_call_item(
                name=message.get("name") or DEFAULT_CALL_NAME,
                arguments=stringify(content if content is not None else {}),
                call_id=message["tool_call_id"],
            )
        ]

    return None


def _collect_text(content: Any) -> list[str]:
    """Text of a system message: a string, or the text parts of a list."""
    if isinstance(content, str):
        return [content]
    if isinstance(content, list):
        return [
            part["text"]
            for part in content
            if isinstance(part, dict) and part.get("type") == "text" and isinstance(part.get("text"), str)
        ]
    return []


def _collect_system_field(system: Any) -> list[str]:
    """Text of a top-level system field (string or list of blocks)."""
    if isinstance(system, str):
        return [system]
    if not isinstance(system, list):
        return []

    texts: list[str] = []
    for block in system:
        if not block:
            continue
        if isinstance(block, str):
            texts.append(block)
        elif isinstance(block, dict):
            if isinstance(block.get("text"), str):
                texts.append(block["text"])
            if isinstance(block.get("content"), list):
                texts.extend(_collect_text(block["content"]))
    return texts


def convert_messages(
    messages: list[Any], instructions: list[str]
) -> list[dict[str, Any]]:
    """
    Convert Chat messages into Responses input items.

    System message text is appended to instructions and never emitted as an item.
    """
    items: list[dict[str, Any]] = []

    for original in messages:
        if not isinstance(original, dict):
            continue
        role = original.get("role")

        if role == "system":
            instructions.extend(_collect_text(original.get("content")))
            continue

        message = copy.deepcopy(original)
        content = message.get("content")
        if isinstance(content, list):
            message["content"] = _convert_content_parts(content, role, items)
        elif isinstance(content, str):
            message["content"] = [{"type": _text_part_type(role), "text": content}]
        message.pop("cache_control", None)

        if role == "tool":
            items.append(
                _function_call_output_item(
                    call_id=first_truthy(original, TOOL_MESSAGE_CALL_ID_FIELDS, default=DEFAULT_CALL_NAME),
                    output=first_defined(original, TOOL_MESSAGE_OUTPUT_FIELDS, default=""),
                )
            )
            continue

        if role == "assistant":
            call_items = _assistant_call_items(original)
            if call_items is not None:
                items.extend(call_items)
                continue

        if isinstance(message.get("content"), list) and not message["content"]:
            continue

        items.append(message)

    return items


def _is_web_search(tool: Any) -> bool:
    return get_path(tool, "function.name") == "web_search" or get_path(tool, "name") == "web_search"


def normalize_tools(tools: list[Any]) -> list[Any]:
    """
    Flatten Chat function tools into Responses function tools.

    {"type": "function", "function": {"name", ...}} -> {"type": "function", "name", ...}
    A web_search_preview tool is appended when a web_search function was declared.
    """
    wants_web_search = any(_is_web_search(tool) for tool in tools)

    normalized: list[Any] = []
    for tool in tools:
        if isinstance(tool, dict) and tool.get("type") == "function" and isinstance(tool.get("function"), dict):
            flat: dict[str, Any] = {"type": "function"}
            for key in ("name", "description", "parameters", "response"):
                if key in tool["function"]:
                    flat[key] = tool["function"][key]
            normalized.append(flat)
        else:
            normalized.append(tool)

    if wants_web_search and not any(
        isinstance(tool, dict) and tool.get("type") == "web_search_preview" for tool in normalized
    ):
        normalized.append({"type": "web_search_preview"})
    return normalized


def build_target_url(provider: ProviderDescriptor) -> str:
    """
    Build the outbound URL: provider base URL with a path ending in "/responses".

    Raises:
        ConfigurationError: If the provider has no usable base URL
    """
    base_url = provider.base_url
    if not base_url:
        raise ConfigurationError(
            message=f"Provider {provider.display_name} missing baseUrl",
            code="missing_base_url",
            details={"provider": provider.name},
        )

    parts = urlsplit(base_url)
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(
            message=f"Provider {provider.display_name} has an invalid baseUrl: {base_url}",
            code="invalid_base_url",
            details={"provider": provider.name},
        )

    path = parts.path
    if not path.endswith(RESPONSES_PATH_SUFFIX):
        if path.endswith("/"):
            path = path[:-1]
        path = f"{path}{RESPONSES_PATH_SUFFIX}"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def build_headers(provider: ProviderDescriptor) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if provider.api_key:
        headers["Authorization"] = f"Bearer {provider.api_key}"
    return headers


def chat_completions_request_to_responses(
    request: dict[str, Any],
    provider: Union[ProviderDescriptor, dict[str, Any]],
    default_effort: Optional[str] = None,
) -> TransformedRequest:
    """
    Translate a Chat Completions request into a Responses request.

    The caller's request is not modified.

    Args:
        request: Chat-style request body
        provider: Target provider (base URL, API key, name)
        default_effort: Configured default reasoning effort

    Returns:
        TransformedRequest: Responses body, outbound URL and headers

    Raises:
        ConfigurationError: If the provider has no usable base URL
    """
    if not isinstance(provider, ProviderDescriptor):
        provider = ProviderDescriptor.model_validate(provider or {})

    url = build_target_url(provider)
    headers = build_headers(provider)

    request = copy.deepcopy(request)
    requested_stream = request.get("stream")

    # The Responses backend only supports streaming
    request["stream"] = True
    logger.debug(
        "Enforcing stream flag: provider=%s requested_stream=%s",
        provider.name,
        requested_stream,
    )
    if requested_stream is not True:
        logger.warning(
            "Forcing stream=true for Responses API compatibility: provider=%s requested_stream=%s",
            provider.name,
            requested_stream,
        )

    original_max_tokens = request.get("max_tokens")
    if isinstance(original_max_tokens, bool) or not isinstance(original_max_tokens, (int, float)):
        original_max_tokens = None
    request.pop("temperature", None)
    request.pop("max_tokens", None)

    instructions = _collect_system_field(request.pop("system", None))
    messages = request.get("messages")
    items = convert_messages(messages if isinstance(messages, list) else [], instructions)

    body: dict[str, Any] = {
        "model": request.get("model"),
        "input": items,
        "stream": True,
    }

    joined_instructions = INSTRUCTIONS_SEPARATOR.join(instructions)
    if joined_instructions.strip():
        body["instructions"] = joined_instructions

    tools = request.get("tools")
    if isinstance(tools, list):
        normalized_tools = normalize_tools(tools)
        if normalized_tools:
            body["tools"] = normalized_tools

    if isinstance(request.get("metadata"), dict):
        body["metadata"] = request["metadata"]

    for key in PASSTHROUGH_FIELDS:
        if key in request:
            body[key] = request[key]

    if request.get("max_output_tokens") is not None:
        body["max_output_tokens"] = request["max_output_tokens"]
    elif original_max_tokens is not None:
        body["max_output_tokens"] = original_max_tokens

    reasoning = resolve_reasoning(request, default_effort)
    if reasoning is not None:
        body["reasoning"] = reasoning

    logger.debug("Responses request target: provider=%s url=%s", provider.name, url)

    return TransformedRequest(
        body=body,
        url=url,
        headers=headers,
        requested_stream=requested_stream,
    )
