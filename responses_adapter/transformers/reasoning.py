"""
Reasoning Effort Resolution

Chat-style routers express reasoning hints in several shapes:

- nested: {"reasoning": {"effort": "high", "enabled": true, "max_tokens": 2048}}
- flattened: {"reasoning.effort": "high", "reasoning.enabled": true}

The Responses API only understands {"reasoning": {"effort": ...}}.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from responses_adapter.common.utils import non_empty_str

logger = logging.getLogger(__name__)

FLAT_ENABLED_KEY = "reasoning.enabled"
FLAT_EFFORT_KEY = "reasoning.effort"
# Sub-fields consumed by the resolution and never forwarded upstream
SPENT_NESTED_KEYS = ("enabled", "max_tokens")
ENABLED_FALLBACK_EFFORT = "medium"


def resolve_reasoning(
    request: dict[str, Any],
    default_effort: Optional[str] = None,
) -> Optional[dict[str, Any]]:
    """
    Resolve the outbound reasoning object.

    Precedence:
        1. explicit effort on the request (nested first, then flattened)
        2. the configured default effort
        3. "medium" when reasoning was enabled without an effort
        4. a non-empty nested reasoning object (after spent keys are removed)
           replaces the result of 1-3

    Note: the request is modified in place, flattened keys and spent
    nested sub-fields are removed.

    Args:
        request: Chat-style request (already a private copy)
        default_effort: Configured default effort

    Returns:
        Optional[dict]: Reasoning object for the Responses body, or None
    """
    nested = request.get("reasoning")
    nested_obj = nested if isinstance(nested, dict) else None

    flat_enabled = request.pop(FLAT_ENABLED_KEY, None)
    flat_effort = request.pop(FLAT_EFFORT_KEY, None)

    enabled = (nested_obj is not None and nested_obj.get("enabled") is True) or flat_enabled is True
    effort = (nested_obj.get("effort") if nested_obj is not None else None) or flat_effort

    if nested_obj is not None:
        for key in SPENT_NESTED_KEYS:
            nested_obj.pop(key, None)
        if isinstance(nested_obj.get("effort"), str):
            if nested_obj["effort"].strip():
                nested_obj["effort"] = nested_obj["effort"].strip()
            else:
                nested_obj.pop("effort")

    final_effort = non_empty_str(effort) or non_empty_str(default_effort)

    reasoning: Optional[dict[str, Any]] = None
    if final_effort:
        reasoning = {"effort": final_effort}
    elif enabled:
        reasoning = {"effort": ENABLED_FALLBACK_EFFORT}

    if nested_obj:
        reasoning = nested_obj
    elif nested is not None and not isinstance(nested, dict):
        logger.debug("Ignoring non-object reasoning value: %r", nested)

    return reasoning
