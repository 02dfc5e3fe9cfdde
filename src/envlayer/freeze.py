from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator


class FrozenConfig(Mapping[str, Any]):
    """Immutable mapping over a merged configuration tree."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = {key: _freeze(value) for key, value in data.items()}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._data)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"FrozenConfig({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrozenConfig):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def get(self, key: str, default: Any = None) -> Any:
        """Look up ``key``; dots walk into nested sections (``"bar.baz"``)."""
        if key in self._data:
            return self._data[key]
        value: Any = self
        for part in key.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return default
        return value

    def to_dict(self) -> Dict[str, Any]:
        return {key: _unfreeze(value) for key, value in self._data.items()}


def _freeze(value: Any) -> Any:
    if isinstance(value, FrozenConfig):
        return value
    if isinstance(value, Mapping):
        return FrozenConfig(value)
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


def _unfreeze(value: Any) -> Any:
    if isinstance(value, FrozenConfig):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_unfreeze(item) for item in value]
    return value
