from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast, overload

from typing_extensions import Self

from ctxwire.cache import MISSING, ResolutionCache
from ctxwire.exceptions import (
    CtxWireError,
    CtxWireInvalidProviderError,
    CtxWireMissingProviderError,
    CtxWireReadOnlyContextError,
)
from ctxwire.registry import ProviderRegistry, Resolver
from ctxwire.resolution_stack import ResolutionStack

T = TypeVar("T")
ContextT = TypeVar("ContextT", bound="Context")

logger = logging.getLogger(__name__)


class Context:
    """Self-referential, read-only handle over lazily resolved properties.

    Every resolver is called with the same handle, so it can read sibling
    properties through it, either as attributes (``ctx.service``), as items
    (``ctx["service"]``) or with ``ctx.get("service")``. Each property is
    resolved on first read and memoized for the lifetime of the handle.

    Names defined on the handle class itself, such as ``get`` or typed
    ``ContextProperty`` accessors, take precedence over attribute-style reads;
    ``get`` and item access reach every declared name.

    ``CtxWireMissingProviderError`` is an ``AttributeError``, so ``hasattr`` and
    ``getattr`` with a default treat it as an absent attribute. That holds for a
    missing provider hit anywhere during resolution, including one read by a
    nested resolver: with ``{"main": lambda ctx: ctx.settings}``,
    ``hasattr(ctx, "main")`` is ``False`` even though ``main`` is declared. Use
    ``"main" in ctx`` to ask whether a name is declared.

    Values are returned exactly as the resolver produced them. A resolver that
    returns a coroutine, ``Future`` or ``Task`` hands that pending computation to
    whoever reads the property, and awaiting it is up to the reader.
    """

    __slots__ = ("__cache", "__registry", "__stack")

    def __init__(self, providers: Mapping[str, Resolver] | ProviderRegistry) -> None:
        # The handle exists with empty state before the registry is bound, so
        # resolvers always see this exact object.
        object.__setattr__(self, "_Context__cache", ResolutionCache())
        object.__setattr__(self, "_Context__stack", ResolutionStack())
        registry = (
            providers if isinstance(providers, ProviderRegistry) else ProviderRegistry(providers)
        )
        object.__setattr__(self, "_Context__registry", registry)

    def get(self, name: str) -> Any:
        """Return the value of property ``name``, resolving it on first access.

        Args:
            name: Property name to read.

        Returns:
            The value produced by the property's resolver, unmodified.

        Raises:
            CtxWireMissingProviderError: If ``name`` has no resolver.
            CtxWireCircularDependencyError: If ``name`` is already being resolved
                on the current call path.

        Any exception raised by the resolver propagates unchanged; the property
        stays unresolved and the next read runs the resolver again.

        """
        registry = self.__registry
        resolver = registry.lookup(name) if isinstance(name, str) else None
        if resolver is None:
            raise CtxWireMissingProviderError(name)

        stack = self.__stack
        stack.check(name)

        cache = self.__cache
        value = cache.lookup(name)
        if value is not MISSING:
            return value

        logger.debug("Resolving context property %r (in flight: %s)", name, stack.path)
        try:
            with stack.enter(name):
                value = resolver(self)
        except CtxWireError:
            raise
        except Exception as error:
            logger.debug("Resolver for context property %r raised %r", name, error)
            raise

        if inspect.isawaitable(value):
            logger.debug("Context property %r resolved to a pending value %r", name, value)
        cache.store(name, value)
        return value

    def __getattribute__(self, name: str) -> Any:
        if _is_class_attribute(type(self), name):
            return object.__getattribute__(self, name)
        return Context.get(self, name)

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.__registry

    def __setattr__(self, name: str, value: Any) -> None:
        raise CtxWireReadOnlyContextError(name)

    def __delattr__(self, name: str) -> None:
        raise CtxWireReadOnlyContextError(name)

    def __dir__(self) -> list[str]:
        return sorted({*object.__dir__(self), *self.__registry.names})

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} declared={sorted(self.__registry.names)!r} "
            f"resolved={sorted(self.__cache.names)!r}>"
        )


def _is_class_attribute(cls: type, name: str) -> bool:
    return any(name in klass.__dict__ for klass in cls.__mro__)


class ContextProperty(Generic[T]):
    """Typed accessor for one context property.

    Declare accessors on a ``Context`` subclass to give type checkers a view of
    the properties it serves; each read delegates to ``Context.get``::

        class AppContext(Context):
            settings: ContextProperty[Settings] = ContextProperty()
            repository: ContextProperty[Repository] = ContextProperty("repo")

    The property name defaults to the attribute name.
    """

    __slots__ = ("name",)

    def __init__(self, name: str | None = None) -> None:
        self.name = name

    def __set_name__(self, owner: type[Any], name: str) -> None:
        if self.name is None:
            self.name = name

    @overload
    def __get__(self, instance: None, owner: type[Any] | None = None) -> Self: ...

    @overload
    def __get__(self, instance: Context, owner: type[Any] | None = None) -> T: ...

    def __get__(self, instance: Context | None, owner: type[Any] | None = None) -> Self | T:
        if instance is None:
            return self
        if self.name is None:
            msg = "ContextProperty must be assigned in a class body or given an explicit name."
            raise TypeError(msg)
        return cast("T", instance.get(self.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


@overload
def create_context_container(providers: Mapping[str, Resolver] | ProviderRegistry) -> Context: ...


@overload
def create_context_container(
    providers: Mapping[str, Resolver] | ProviderRegistry,
    *,
    context_type: type[ContextT],
) -> ContextT: ...


def create_context_container(
    providers: Mapping[str, Resolver] | ProviderRegistry,
    *,
    context_type: type[Context] = Context,
) -> Context:
    """Build a context handle over ``providers``.

    Nothing is resolved here; resolvers run on first read of their property.

    Args:
        providers: Mapping from property name to a resolver taking the handle,
            or an already built ``ProviderRegistry``.
        context_type: ``Context`` subclass to instantiate, typically one that
            declares ``ContextProperty`` accessors.

    Returns:
        The context handle, also passed to every resolver.

    Raises:
        CtxWireInvalidProviderError: If a key is not a string, a value is not
            callable, or ``context_type`` is not a ``Context`` subclass.

    """
    if not (isinstance(context_type, type) and issubclass(context_type, Context)):
        msg = f"context_type must be a Context subclass, got {context_type!r}."
        raise CtxWireInvalidProviderError(msg)
    context = context_type(providers)
    logger.debug("Created %r", context)
    return context


@dataclass(frozen=True, slots=True)
class ContextState:
    """Point-in-time view of a context handle's resolution state."""

    declared: frozenset[str]
    resolved: frozenset[str]
    in_flight: tuple[str, ...]

    @property
    def pending(self) -> frozenset[str]:
        """Declared names that have not been resolved yet."""
        return self.declared - self.resolved


def inspect_context(context: Context) -> ContextState:
    """Return what ``context`` declares, has resolved and is resolving.

    Kept outside ``Context`` so that it never shadows a property name.
    """
    registry = cast("ProviderRegistry", object.__getattribute__(context, "_Context__registry"))
    cache = cast("ResolutionCache", object.__getattribute__(context, "_Context__cache"))
    stack = cast("ResolutionStack", object.__getattribute__(context, "_Context__stack"))
    return ContextState(
        declared=registry.names,
        resolved=cache.names,
        in_flight=stack.path,
    )
