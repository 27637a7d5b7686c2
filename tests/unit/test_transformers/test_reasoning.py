"""
Reasoning Effort Resolution Unit Tests
"""

from responses_adapter.transformers.reasoning import resolve_reasoning
from responses_adapter.transformers.request import chat_completions_request_to_responses


def test_flat_effort_is_used_and_flat_keys_removed():
    request = {"reasoning.effort": " high ", "reasoning.enabled": True}
    assert resolve_reasoning(request) == {"effort": "high"}
    assert "reasoning.effort" not in request
    assert "reasoning.enabled" not in request


def test_nested_effort_strips_spent_fields():
    request = {"reasoning": {"effort": "low", "enabled": True, "max_tokens": 1024}}
    assert resolve_reasoning(request) == {"effort": "low"}
    assert request["reasoning"] == {"effort": "low"}


def test_request_effort_beats_configured_default():
    assert resolve_reasoning({"reasoning.effort": "low"}, default_effort="high") == {"effort": "low"}


def test_configured_default_applies_without_request_effort():
    assert resolve_reasoning({}, default_effort=" high ") == {"effort": "high"}


def test_blank_request_effort_falls_back_to_default():
    assert resolve_reasoning({"reasoning.effort": "  "}, default_effort="minimal") == {"effort": "minimal"}


def test_enabled_flag_without_effort_defaults_to_medium():
    assert resolve_reasoning({"reasoning.enabled": True}) == {"effort": "medium"}
    assert resolve_reasoning({"reasoning": {"enabled": True, "max_tokens": 2048}}) == {"effort": "medium"}


def test_enabled_flag_uses_configured_default_when_present():
    assert resolve_reasoning({"reasoning": {"enabled": True}}, default_effort="low") == {"effort": "low"}


def test_disabled_or_absent_reasoning_yields_none():
    assert resolve_reasoning({}) is None
    assert resolve_reasoning({"reasoning.enabled": False}) is None
    assert resolve_reasoning({"reasoning": "high"}) is None


def test_full_reasoning_object_overrides_resolution():
    request = {"reasoning": {"summary": "auto", "enabled": True}}
    assert resolve_reasoning(request, default_effort="high") == {"summary": "auto"}


def test_reasoning_is_carried_into_responses_body(provider):
    result = chat_completions_request_to_responses(
        {
            "model": "gpt-5",
            "messages": [{"role": "user", "content": "think"}],
            "reasoning.enabled": True,
        },
        provider,
        default_effort="high",
    )
    assert result.body["reasoning"] == {"effort": "high"}
    assert "reasoning.enabled" not in result.body


def test_no_reasoning_key_without_hints(provider):
    result = chat_completions_request_to_responses(
        {"model": "gpt-5", "messages": []},
        provider,
    )
    assert "reasoning" not in result.body
