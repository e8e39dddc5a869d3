from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic_settings import BaseSettings

from ctxwire.context import Context
from ctxwire.exceptions import CtxWireInvalidProviderError

SettingsT = TypeVar("SettingsT", bound=BaseSettings)


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return true when candidate subclasses pydantic-settings ``BaseSettings``."""
    return isinstance(candidate, type) and issubclass(candidate, BaseSettings)


def settings_resolver(
    settings_cls: type[SettingsT],
    **overrides: Any,
) -> Callable[[Context], SettingsT]:
    """Build a resolver that loads ``settings_cls`` on first access.

    Settings are read from the environment (and any sources configured on the
    class) when the property is first requested, then memoized by the context
    like every other property.

    Args:
        settings_cls: A pydantic-settings ``BaseSettings`` subclass.
        **overrides: Field values passed to the constructor; they take
            precedence over environment values.

    Returns:
        A resolver suitable for ``create_context_container``.

    Raises:
        CtxWireInvalidProviderError: If ``settings_cls`` is not a settings class.

    """
    if not is_pydantic_settings_subclass(settings_cls):
        msg = f"settings_resolver expects a BaseSettings subclass, got {settings_cls!r}."
        raise CtxWireInvalidProviderError(msg)

    def resolve_settings(_context: Context) -> SettingsT:
        return settings_cls(**overrides)

    resolve_settings.__qualname__ = f"settings_resolver({settings_cls.__qualname__})"
    return resolve_settings


__all__ = [
    "is_pydantic_settings_subclass",
    "settings_resolver",
]
