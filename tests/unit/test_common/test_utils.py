from responses_adapter.common.errors import ConfigurationError, UpstreamError
from responses_adapter.common.utils import (
    first_defined,
    first_truthy,
    get_path,
    non_empty_str,
    stringify,
)


def test_get_path_walks_nested_dicts():
    assert get_path({"function": {"name": "lookup"}}, "function.name") == "lookup"
    assert get_path({"function": "lookup"}, "function.name") is None
    assert get_path(None, "name") is None


def test_first_truthy_skips_empty_values():
    source = {"name": "", "function": {"name": "lookup"}, "id": "call_1"}
    assert first_truthy(source, ("name", "function.name", "id")) == "lookup"
    assert first_truthy({}, ("name",), default="tool_call") == "tool_call"


def test_first_defined_keeps_falsy_but_present_values():
    assert first_defined({"content": "", "output": "x"}, ("content", "output")) == ""
    assert first_defined({"content": None, "output": 0}, ("content", "output")) == 0
    assert first_defined({}, ("content",), default="") == ""


def test_stringify_uses_compact_json():
    assert stringify({"q": "x"}) == '{"q":"x"}'
    assert stringify([1, 2]) == "[1,2]"
    assert stringify("already") == "already"
    assert stringify(None) == ""
    assert stringify({"city": "北京"}) == '{"city":"北京"}'


def test_stringify_falls_back_to_str_for_unserializable_values():
    value = object()
    assert stringify(value) == str(value)


def test_non_empty_str():
    assert non_empty_str("  high ") == "high"
    assert non_empty_str("   ") is None
    assert non_empty_str(3) is None


def test_configuration_error_to_dict():
    error = ConfigurationError(
        message="Provider p1 missing baseUrl",
        code="missing_base_url",
        details={"provider": "p1"},
    )
    assert error.status_code == 500
    assert error.to_dict() == {
        "error": {
            "message": "Provider p1 missing baseUrl",
            "type": "configuration_error",
            "code": "missing_base_url",
            "details": {"provider": "p1"},
        }
    }


def test_upstream_error_defaults():
    error = UpstreamError()
    assert error.status_code == 502
    assert "details" not in error.to_dict()["error"]
