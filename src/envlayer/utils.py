from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from copy import deepcopy
from typing import Any, Dict, Iterable, Tuple

Path = Tuple[str, ...]


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deeply merge two mappings returning a new dict; ``override`` wins on conflicts."""
    result = {key: deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], Mapping)
            and isinstance(value, Mapping)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


def merge_sources(sources: Iterable[Any]) -> Dict[str, Any]:
    """Fold ``collect()`` of each source in order; later sources take precedence."""
    merged: Dict[str, Any] = {}
    for source in sources:
        merged = deep_merge(merged, source.collect())
    return merged


def set_path(data: MutableMapping[str, Any], path: Path, value: Any) -> None:
    """Assign ``value`` at ``path``, creating intermediate dicts.

    Raises ``ValueError`` when an intermediate key already holds a scalar, or
    when the leaf already holds a nested mapping.
    """
    current: MutableMapping[str, Any] = data
    for depth, key in enumerate(path[:-1]):
        next_val = current.get(key)
        if next_val is None:
            next_val = {}
            current[key] = next_val
        elif not isinstance(next_val, MutableMapping):
            raise ValueError(f"key '{'.'.join(path[: depth + 1])}' is already set to a scalar value")
        current = next_val
    if isinstance(current.get(path[-1]), MutableMapping):
        raise ValueError(f"key '{'.'.join(path)}' already holds nested keys")
    current[path[-1]] = value


def lower_keys(data: Mapping[str, Any], prefix: Path = ()) -> Dict[str, Any]:
    """Return a copy of ``data`` with string keys lowercased at every depth.

    Raises ``ValueError`` when two keys of one section differ only by case.
    """
    result: Dict[str, Any] = {}
    for key, value in data.items():
        lowered = key.lower() if isinstance(key, str) else key
        if lowered in result:
            raise ValueError(f"key '{'.'.join(map(str, prefix + (lowered,)))}' is defined more than once")
        if isinstance(value, Mapping):
            value = lower_keys(value, prefix + (lowered,))
        result[lowered] = value
    return result
