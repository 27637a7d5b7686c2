from responses_adapter.transformers.plugin import ResponsesAPITransformer
from responses_adapter.transformers.request import (
    TransformedRequest,
    chat_completions_request_to_responses,
)
from responses_adapter.transformers.response import (
    responses_response_to_chat_completion,
    transform_response,
)
from responses_adapter.transformers.stream import (
    ResponsesStreamTranslator,
    ToolCallCorrelationState,
    responses_sse_to_chat_completions_sse,
)

__all__ = [
    "ResponsesAPITransformer",
    "TransformedRequest",
    "chat_completions_request_to_responses",
    "responses_response_to_chat_completion",
    "transform_response",
    "ResponsesStreamTranslator",
    "ToolCallCorrelationState",
    "responses_sse_to_chat_completions_sse",
]
