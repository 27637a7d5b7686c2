"""
Provider Domain Model

Describes the upstream Responses-style provider and the transformer options.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from responses_adapter.common.utils import as_dict


class ProviderDescriptor(BaseModel):
    """
    Upstream Provider Descriptor

    Accepts both camelCase router keys (baseUrl, apiKey) and snake_case
    configuration keys (api_base_url, api_key).
    """

    model_config = ConfigDict(extra="ignore")

    # Provider Name
    name: Optional[str] = Field(None, description="Provider Name")
    # Base URL
    base_url: Optional[str] = Field(None, description="Base URL")
    # Provider API Key
    api_key: Optional[str] = Field(None, description="Provider API Key")

    @model_validator(mode="before")
    @classmethod
    def _resolve_aliases(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            "name": data.get("name"),
            "base_url": data.get("baseUrl") or data.get("api_base_url") or data.get("base_url"),
            "api_key": data.get("apiKey") or data.get("api_key"),
        }

    @property
    def display_name(self) -> str:
        return self.name or "<unknown>"


class TransformerOptions(BaseModel):
    """
    Transformer Options

    The default reasoning effort may be given as reasoning_effort, effort,
    or a nested reasoning.effort entry.
    """

    model_config = ConfigDict(extra="allow")

    reasoning_effort: Optional[str] = None
    effort: Optional[str] = None
    reasoning: Optional[dict[str, Any]] = None

    @property
    def default_effort(self) -> Optional[str]:
        candidate = (
            self.reasoning_effort
            or self.effort
            or as_dict(self.reasoning).get("effort")
        )
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
        return None
