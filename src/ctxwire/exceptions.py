from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import ClassVar

from typing_extensions import Self

CHAIN_SEPARATOR = " -> "


class ResolutionErrorKind(str, Enum):
    """Classify why reading a context property failed."""

    MISSING_PROVIDER = "missing_provider"
    """The requested name has no resolver in the provider registry."""

    CIRCULAR_DEPENDENCY = "circular_dependency"
    """The requested name is already being resolved on the active call path."""

    RESOLVER_PROPAGATED = "resolver_propagated"
    """A resolver body raised; the original exception is passed through as is."""


class CtxWireError(Exception):
    """Represent a base class for all ctxwire-specific failures.

    Catch this type when you want to handle any container error path without
    matching each concrete exception class individually. Errors raised by
    resolver bodies are never wrapped in it.
    """

    kind: ClassVar[ResolutionErrorKind | None] = None


class CtxWireMissingProviderError(CtxWireError, AttributeError):
    """Signal that a property was requested without a registered resolver.

    Raised by ``Context.get`` and attribute or item access on a context handle,
    before the resolution cache or the in-flight stack is consulted. The check
    applies equally to external reads and reads made from inside a resolver.

    It subclasses ``AttributeError`` so that ``hasattr`` and ``getattr`` with a
    default keep working on context handles.

    Typical fix is adding a resolver for the name to the mapping passed to
    ``create_context_container``.
    """

    kind = ResolutionErrorKind.MISSING_PROVIDER

    def __init__(self, name: object) -> None:
        super().__init__(f"Missing provider for property: {name}")
        self.name = name

    def __reduce__(self) -> tuple[type[Self], tuple[object]]:
        return type(self), (self.name,)


class CtxWireCircularDependencyError(CtxWireError):
    """Signal that a property was requested while it was still being resolved.

    ``chain`` lists every in-flight property from the outermost active
    resolution down to, and including, the repeated name, in request order.
    ``cycle`` is the tail of ``chain`` that starts at the first occurrence of
    the repeated name, which is the loop itself.

    Nothing is cached for any property on the chain, so a later read of any of
    them fails again with an equivalent report.
    """

    kind = ResolutionErrorKind.CIRCULAR_DEPENDENCY

    def __init__(self, name: str, chain: Sequence[str]) -> None:
        self.name = name
        self.chain: tuple[str, ...] = tuple(chain)
        super().__init__(f'Circular dependency detected while resolving property "{name}"')
        self.add_note(f"Dependency chain: {self.dependency_chain}")

    def __reduce__(self) -> tuple[type[Self], tuple[str, tuple[str, ...]]]:
        return type(self), (self.name, self.chain)

    @property
    def cycle(self) -> tuple[str, ...]:
        return self.chain[self.chain.index(self.name) :]

    @property
    def dependency_chain(self) -> str:
        return CHAIN_SEPARATOR.join(self.chain)


class CtxWireReadOnlyContextError(CtxWireError, AttributeError):
    """Signal an attempt to assign or delete an attribute on a context handle.

    Context handles are read-only views: values only enter them through their
    resolvers.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Context properties are read-only: cannot modify {name!r}")
        self.name = name

    def __reduce__(self) -> tuple[type[Self], tuple[str]]:
        return type(self), (self.name,)


class CtxWireInvalidProviderError(CtxWireError, TypeError):
    """Signal a provider mapping entry that can never be resolved.

    Raised by ``create_context_container`` when a key is not a string or a value
    is not callable. Resolver bodies themselves are not inspected; their errors
    surface lazily on first access.
    """


def error_kind(error: BaseException) -> ResolutionErrorKind | None:
    """Return the resolution error kind for any exception seen by a caller.

    Args:
        error: Exception raised while reading a context property.

    Returns:
        The kind carried by ctxwire resolution errors, ``None`` for ctxwire
        errors unrelated to reading a property, or ``RESOLVER_PROPAGATED`` for
        anything raised by a resolver body.

    """
    if isinstance(error, CtxWireError):
        return error.kind
    return ResolutionErrorKind.RESOLVER_PROPAGATED
