"""Blackboard implementation."""

from __future__ import annotations


class RuntimeBlackboard:
    """Dict-backed blackboard. Keys are whitespace-trimmed on every access."""

    def __init__(self) -> None:
        self._entries: dict[str, object] = {}

    def set(self, key: str, value: object) -> None:
        self._entries[_normalize_key(key)] = value

    def get(self, key: str) -> object | None:
        return self._entries.get(_normalize_key(key))

    def require(self, key: str) -> object:
        normalized = _normalize_key(key)
        if normalized not in self._entries:
            raise KeyError(f"missing blackboard key: {normalized}")
        return self._entries[normalized]

    def has(self, key: str) -> bool:
        return _normalize_key(key) in self._entries

    def remove(self, key: str) -> object | None:
        return self._entries.pop(_normalize_key(key), None)


def _normalize_key(key: str) -> str:
    normalized = key.strip()
    if not normalized:
        raise ValueError("blackboard key must not be empty")
    return normalized
