from __future__ import annotations

from typing import Any


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()
"""Sentinel returned by ``ResolutionCache.lookup`` for names not yet resolved."""


class ResolutionCache:
    """Write-once store of resolved property values.

    Entries are only ever added: once a name is stored it keeps the same value
    for the lifetime of the container. Any value is cacheable, including
    ``None`` and other falsy values.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def lookup(self, name: str) -> Any:
        """Return the cached value for ``name`` or ``MISSING``."""
        return self._values.get(name, MISSING)

    def store(self, name: str, value: Any) -> None:
        if name in self._values:
            msg = f"Property {name!r} is already resolved; cached values are write-once."
            raise RuntimeError(msg)
        self._values[name] = value

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)
