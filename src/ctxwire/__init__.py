from ctxwire.context import (
    Context,
    ContextProperty,
    ContextState,
    create_context_container,
    inspect_context,
)
from ctxwire.exceptions import (
    CtxWireCircularDependencyError,
    CtxWireError,
    CtxWireInvalidProviderError,
    CtxWireMissingProviderError,
    CtxWireReadOnlyContextError,
    ResolutionErrorKind,
    error_kind,
)
from ctxwire.registry import ProviderRegistry, Resolver

__all__ = [
    "Context",
    "ContextProperty",
    "ContextState",
    "CtxWireCircularDependencyError",
    "CtxWireError",
    "CtxWireInvalidProviderError",
    "CtxWireMissingProviderError",
    "CtxWireReadOnlyContextError",
    "ProviderRegistry",
    "ResolutionErrorKind",
    "Resolver",
    "create_context_container",
    "error_kind",
    "inspect_context",
]
