from responses_adapter.domain.provider import ProviderDescriptor, TransformerOptions

__all__ = ["ProviderDescriptor", "TransformerOptions"]
