from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from ctxwire.exceptions import CtxWireInvalidProviderError

if TYPE_CHECKING:
    from ctxwire.context import Context

Resolver: TypeAlias = Callable[["Context"], Any]
"""A unary function computing one property's value from the context handle."""


class ProviderRegistry:
    """Fixed mapping from property name to resolver.

    The mapping is copied once at construction and exposed read-only; its keys
    are the complete set of names the owning context can resolve.
    """

    __slots__ = ("_providers",)

    def __init__(self, providers: Mapping[str, Resolver]) -> None:
        for name, resolver in providers.items():
            if not isinstance(name, str):
                msg = f"Provider names must be strings, got {name!r}."
                raise CtxWireInvalidProviderError(msg)
            if not callable(resolver):
                msg = f"Provider for property {name!r} must be callable, got {resolver!r}."
                raise CtxWireInvalidProviderError(msg)
        self._providers: Mapping[str, Resolver] = MappingProxyType(dict(providers))

    def lookup(self, name: str) -> Resolver | None:
        return self._providers.get(name)

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __iter__(self) -> Iterator[str]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._providers)!r})"
