"""
Responses SSE -> Chat Completions SSE

Translates the fine-grained Responses event stream into "chat.completion.chunk"
frames. Function-call events arrive scattered across several events
(output_item.added, function_call_arguments.delta/done) and are correlated
through a per-stream ToolCallCorrelationState.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Optional

from responses_adapter.common.sse import SSELineDecoder, encode_sse_data
from responses_adapter.common.utils import as_dict, first_truthy, unix_now

logger = logging.getLogger(__name__)

EVENT_OUTPUT_ITEM_ADDED = "response.output_item.added"
EVENT_ARGUMENTS_DELTA = "response.function_call_arguments.delta"
EVENT_ARGUMENTS_DONE = "response.function_call_arguments.done"
EVENT_RESPONSE_DELTA = "response.delta"
EVENT_COMPLETED = "response.completed"
TEXT_DELTA_EVENTS = frozenset({"response.output_text.delta", "output_text.delta", "text.delta"})
TEXT_DELTA_PART_TYPES = frozenset({"output_text.delta", "text.delta", "output_text"})

CHUNK_ID_FIELDS = ("id", "item_id", "item.id", "response.id")
CHUNK_MODEL_FIELDS = ("model", "response.model")
DELTA_KEYS = ("role", "content", "tool_calls", "annotations")


def _lookup_key(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


@dataclass
class ToolCallEntry:
    """One function call seen on the stream."""

    index: int
    call_id: str
    name: str
    arguments: str = ""


@dataclass
class ToolCallCorrelationState:
    """
    Per-stream tool call bookkeeping.

    Entries live in a dense list indexed by their assigned output index;
    the lookup table maps item ids and call ids to that index, so both
    aliases resolve to the same entry. Indexes are assigned in arrival
    order and never reused.
    """

    entries: list[ToolCallEntry] = field(default_factory=list)
    role_sent: bool = False
    _lookup: dict[str, int] = field(default_factory=dict)

    def register(self, item: dict[str, Any]) -> ToolCallEntry:
        index = len(self.entries)
        item_id = _lookup_key(item.get("id"))
        call_id = _lookup_key(item.get("call_id"))
        key = item_id or call_id or f"tool_{index}"

        entry = ToolCallEntry(index=index, call_id=call_id or key, name=item.get("name") or "")
        self.entries.append(entry)
        self._lookup[key] = index
        if call_id and call_id != key:
            self._lookup[call_id] = index
        return entry

    def find(self, *keys: Any) -> Optional[ToolCallEntry]:
        """Return the entry for the first key that resolves."""
        for key in keys:
            key = _lookup_key(key)
            if key and key in self._lookup:
                return self.entries[self._lookup[key]]
        return None

    def claim_role(self) -> bool:
        """True exactly once per stream: the caller must attach role=assistant."""
        if self.role_sent:
            return False
        self.role_sent = True
        return True


def _append_text(value: Any, parts: list[str]) -> None:
    """Collect text/delta strings, recursing through lists and nested content."""
    if isinstance(value, str):
        parts.append(value)
    elif isinstance(value, list):
        for item in value:
            _append_text(item, parts)
    elif isinstance(value, dict):
        if isinstance(value.get("text"), str):
            parts.append(value["text"])
        if isinstance(value.get("delta"), str):
            parts.append(value["delta"])
        if isinstance(value.get("content"), list):
            for inner in value["content"]:
                _append_text(inner, parts)


def _first_not_none(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _is_text_part(part: dict[str, Any]) -> bool:
    part_type = part.get("type")
    return isinstance(part_type, str) and part_type in TEXT_DELTA_PART_TYPES


def extract_text_delta(event: dict[str, Any]) -> str:
    """Text carried by a text delta event (any of the known shapes), else ""."""
    event_type = event.get("type")
    parts: list[str] = []
    if not isinstance(event_type, str):
        return ""

    if event_type == EVENT_RESPONSE_DELTA:
        content = as_dict(event.get("delta")).get("content")
        if isinstance(content, list):
            for part in content:
                if isinstance(part, dict) and _is_text_part(part):
                    _append_text(_first_not_none(part.get("text"), part.get("delta"), part), parts)
    elif event_type in TEXT_DELTA_EVENTS:
        if isinstance(event.get("delta"), str):
            parts.append(event["delta"])
        else:
            _append_text(_first_not_none(event.get("text"), event.get("delta")), parts)

    return "".join(parts)


def _response_has_function_call(event: dict[str, Any]) -> bool:
    output = as_dict(event.get("response")).get("output")
    if not isinstance(output, list):
        return False
    return any(isinstance(item, dict) and item.get("type") == "function_call" for item in output)


class ResponsesStreamTranslator:
    """
    Stateful Responses event -> chat chunk translator for one stream.

    Each handled event yields at most one chunk.
    """

    def __init__(self) -> None:
        self.state = ToolCallCorrelationState()

    def _chunk(
        self,
        event: dict[str, Any],
        delta: dict[str, Any],
        finish_reason: Optional[str] = None,
        index: Optional[int] = None,
    ) -> dict[str, Any]:
        output_index = event.get("output_index")
        if index is None:
            index = output_index if output_index is not None else 0
        return {
            "id": first_truthy(event, CHUNK_ID_FIELDS, default=""),
            "object": "chat.completion.chunk",
            "created": unix_now(),
            "model": first_truthy(event, CHUNK_MODEL_FIELDS, default=""),
            "choices": [
                {
                    "index": index,
                    "delta": {key: delta[key] for key in DELTA_KEYS if key in delta},
                    "finish_reason": finish_reason,
                }
            ],
        }

    def _with_role(self, delta: dict[str, Any]) -> dict[str, Any]:
        if self.state.claim_role():
            return {"role": "assistant", **delta}
        return delta

    def _on_output_item_added(self, event: dict[str, Any]) -> Optional[dict[str, Any]]:
        item = event.get("item")
        if not isinstance(item, dict) or item.get("type") != "function_call":
            return None

        entry = self.state.register(item)
        delta = self._with_role(
            {
                "tool_calls": [
                    {
                        "index": entry.index,
                        "id": entry.call_id,
                        "type": "function",
                        "function": {"name": entry.name, "arguments": ""},
                    }
                ]
            }
        )
        return self._chunk(event, delta)

    def _on_arguments_delta(self, event: dict[str, Any]) -> dict[str, Any]:
        fragment = event.get("delta") or ""
        entry = self.state.find(event.get("item_id"), event.get("call_id"))
        if entry is not None and isinstance(fragment, str):
            entry.arguments += fragment

        delta = self._with_role(
            {
                "tool_calls": [
                    {
                        "index": entry.index if entry is not None else 0,
                        "function": {"arguments": fragment},
                    }
                ]
            }
        )
        return self._chunk(event, delta)

    def _on_arguments_done(self, event: dict[str, Any]) -> None:
        entry = self.state.find(event.get("item_id"), event.get("call_id"))
        if entry is not None and isinstance(event.get("arguments"), str):
            entry.arguments = event["arguments"]

    def _on_completed(self, event: dict[str, Any]) -> dict[str, Any]:
        finish_reason = "tool_calls" if _response_has_function_call(event) else "stop"
        return self._chunk(event, {}, finish_reason=finish_reason, index=0)

    def handle_event(self, event: Any) -> Optional[dict[str, Any]]:
        """
        Translate one Responses event.

        Returns:
            Optional[dict]: chat.completion.chunk, or None when the event has no translation
        """
        if not isinstance(event, dict):
            return None
        event_type = event.get("type")

        if event_type == EVENT_OUTPUT_ITEM_ADDED:
            return self._on_output_item_added(event)
        if event_type == EVENT_ARGUMENTS_DELTA:
            return self._on_arguments_delta(event)
        if event_type == EVENT_ARGUMENTS_DONE:
            self._on_arguments_done(event)
            return None
        if event_type == EVENT_COMPLETED:
            return self._on_completed(event)

        text = extract_text_delta(event)
        if text:
            return self._chunk(event, self._with_role({"content": text}))
        return None

    def handle_payload(self, payload: str) -> Optional[dict[str, Any]]:
        """
        Parse and translate one data payload.

        Unparsable payloads (including "[DONE]") and frames that fail to
        translate are logged and dropped; the stream keeps going.
        """
        try:
            event = json.loads(payload)
        except (json.JSONDecodeError, RecursionError):
            logger.debug("Dropping unparsable Responses frame: %.200s", payload)
            return None
        try:
            return self.handle_event(event)
        except Exception:
            logger.debug("Dropping untranslatable Responses frame: %.200s", payload, exc_info=True)
            return None


async def responses_sse_to_chat_completions_sse(
    *,
    upstream: AsyncIterator[bytes],
) -> AsyncIterator[bytes]:
    """
    Convert a Responses SSE byte stream into a Chat Completions SSE byte stream.

    Frames are handled strictly in arrival order; the output ends when the
    upstream ends (no [DONE] sentinel is appended).
    """
    decoder = SSELineDecoder()
    translator = ResponsesStreamTranslator()

    async for chunk in upstream:
        for payload in decoder.feed(chunk):
            out = translator.handle_payload(payload)
            if out is not None:
                yield encode_sse_data(out)

    for payload in decoder.flush():
        out = translator.handle_payload(payload)
        if out is not None:
            yield encode_sse_data(out)
