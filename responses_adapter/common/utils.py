"""
Utility Functions Module

Field resolution and serialization helpers shared by the request and response transformers.
"""

import json
import time
from typing import Any, Iterable, Optional


def get_path(source: Any, path: str) -> Any:
    """
    Read a dotted path ("function.name") from nested dictionaries.

    Returns None when any segment is missing or not a dictionary.
    """
    current = source
    for segment in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(segment)
    return current


def first_truthy(source: Any, paths: Iterable[str], default: Any = None) -> Any:
    """
    Resolve the first non-empty value along an ordered list of dotted paths.

    Empty strings, zero and None are skipped, mirroring "a || b || c" lookups.
    """
    for path in paths:
        value = get_path(source, path)
        if value:
            return value
    return default


def first_defined(source: Any, paths: Iterable[str], default: Any = None) -> Any:
    """
    Resolve the first value that is not None along an ordered list of dotted paths.
    """
    for path in paths:
        value = get_path(source, path)
        if value is not None:
            return value
    return default


def stringify(value: Any) -> str:
    """
    Serialize a value to a string payload.

    Strings pass through untouched, None becomes "", everything else is compact JSON.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(value)


def as_dict(value: Any) -> dict:
    """Return the value when it is a dictionary, otherwise an empty dictionary."""
    return value if isinstance(value, dict) else {}


def non_empty_str(value: Any) -> Optional[str]:
    """Return the stripped string, or None when it is not a string or blank."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def unix_now() -> int:
    """Current time as integer unix seconds."""
    return int(time.time())
