from responses_adapter.providers.responses_client import ResponsesClient

__all__ = ["ResponsesClient"]
