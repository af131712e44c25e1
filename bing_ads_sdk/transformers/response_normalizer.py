"""Key casing and array unwrapping for parsed responses."""
import re
from typing import Any, Callable, Dict, Mapping

# Wrapper key used by the API serializer for arrays of xs:long
LONG_WRAPPER = "long"

_LEADING_INTEGER = re.compile(r"\s*[-+]?\d+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def snakize(name: str) -> str:
    """Convert a CamelCase name to snake_case.

    Digits stay attached to the preceding word and names already in
    snake_case come back unchanged.
    """
    snake = _ACRONYM_BOUNDARY.sub(r"\1_\2", str(name))
    snake = _WORD_BOUNDARY.sub(r"\1_\2", snake)
    return snake.replace("-", "_").lower()


def to_int(value: Any) -> int:
    """Coerce to int without raising.

    Strings are read up to their first non-digit (``"1.5"`` gives 1) and
    anything unreadable, ``None`` included, gives 0.
    """
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    match = _LEADING_INTEGER.match(str(value)) if value is not None else None
    return int(match.group()) if match else 0


def unwrap_long_array(value: Any) -> Any:
    """Collapse ``{"long": [...]}`` into a list of integers."""
    if isinstance(value, Mapping) and isinstance(value.get(LONG_WRAPPER), list):
        return [to_int(item) for item in value[LONG_WRAPPER]]
    return value


def normalize_response(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize one level of a parsed response.

    Keys are converted to snake_case and ``long`` array wrappers are replaced
    with plain integer lists. Nested mappings are left as they are; walking
    the tree is the caller's job.

    Args:
        mapping: Decoded response node with CamelCase keys

    Returns:
        New dictionary with snake_case keys
    """
    normalized: Dict[str, Any] = {}
    for key, value in mapping.items():
        normalized[snakize(key)] = unwrap_long_array(value)
    return normalized


def normalize_tree(value: Any, normalize: Callable[[Mapping[str, Any]], Dict[str, Any]] = normalize_response) -> Any:
    """Apply ``normalize`` to every mapping in a nested structure, children first."""
    if isinstance(value, Mapping):
        children = {key: normalize_tree(child, normalize) for key, child in value.items()}
        return normalize(children)
    if isinstance(value, list):
        return [normalize_tree(item, normalize) for item in value]
    return value
