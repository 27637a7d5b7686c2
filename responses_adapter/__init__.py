"""
Responses Adapter

Lets Chat Completions clients drive a backend that only speaks the
OpenAI Responses API.
"""

from responses_adapter.transformers import (
    ResponsesAPITransformer,
    TransformedRequest,
    chat_completions_request_to_responses,
    responses_response_to_chat_completion,
    responses_sse_to_chat_completions_sse,
)

__version__ = "0.1.0"
__all__ = [
    "ResponsesAPITransformer",
    "TransformedRequest",
    "chat_completions_request_to_responses",
    "responses_response_to_chat_completion",
    "responses_sse_to_chat_completions_sse",
]
