import re
from collections.abc import Mapping
from typing import Any, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _accessible(value) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _exists(container, key) -> bool:
    if isinstance(container, Mapping):
        return key in container
    if isinstance(key, int) and not isinstance(key, bool):
        return 0 <= key < len(container)
    return False


def data_get(container: Any, key: Optional[Any], default: Any = None) -> Any:
    """
    Get an item from a nested mapping (or list) by key or dotted path.

    Returns ``default`` when ``container`` is not a mapping/sequence or when any
    path segment is missing. A ``None`` key returns the container unchanged.
    """
    if not _accessible(container):
        return default

    if key is None:
        return container

    if _exists(container, key):
        return container[key]

    if not isinstance(key, str) or "." not in key:
        return default

    for segment in key.split("."):
        if not _accessible(container):
            return default
        segment_key = _segment_key(container, segment)
        if not _exists(container, segment_key):
            return default
        container = container[segment_key]

    return container


def _segment_key(container, segment: str):
    # Lists are indexed by position, mappings may carry int keys (region codes).
    if isinstance(container, Mapping) and segment in container:
        return segment
    try:
        return int(segment)
    except ValueError:
        return segment


def to_int(value, default: Optional[int] = 0) -> Optional[int]:
    """Cast to int the lenient way: leading digits only, ``default`` when there are none."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default
