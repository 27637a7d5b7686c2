from responses_adapter.domain.provider import ProviderDescriptor, TransformerOptions


def test_camel_case_keys_take_precedence():
    provider = ProviderDescriptor.model_validate(
        {
            "name": "p",
            "baseUrl": "https://a.example.com",
            "api_base_url": "https://b.example.com",
            "apiKey": "k1",
            "api_key": "k2",
        }
    )
    assert provider.base_url == "https://a.example.com"
    assert provider.api_key == "k1"


def test_empty_camel_case_value_falls_back_to_snake_case():
    provider = ProviderDescriptor.model_validate({"baseUrl": "", "api_base_url": "https://b.example.com"})
    assert provider.base_url == "https://b.example.com"


def test_keyword_construction_and_display_name():
    provider = ProviderDescriptor(base_url="https://a.example.com")
    assert provider.base_url == "https://a.example.com"
    assert provider.display_name == "<unknown>"


def test_transformer_options_default_effort_resolution():
    assert TransformerOptions().default_effort is None
    assert TransformerOptions(effort="low", reasoning={"effort": "high"}).default_effort == "low"
    assert TransformerOptions(reasoning_effort="   ").default_effort is None
    assert TransformerOptions.model_validate({"reasoning": {"effort": "high"}}).default_effort == "high"
