from __future__ import annotations

from dataclasses import dataclass

import pytest

from ctxwire import (
    Context,
    ContextProperty,
    CtxWireInvalidProviderError,
    CtxWireMissingProviderError,
    Resolver,
    create_context_container,
)
from tests.helpers import CallCounter


@dataclass
class Settings:
    dsn: str


@dataclass
class Repository:
    settings: Settings


class AppContext(Context):
    settings: ContextProperty[Settings] = ContextProperty()
    repository: ContextProperty[Repository] = ContextProperty("repo")
    audit_log: ContextProperty[list[str]] = ContextProperty()


def _providers(call_counter: CallCounter) -> dict[str, Resolver]:
    return {
        "settings": call_counter.track("settings", lambda _: Settings(dsn="sqlite://")),
        "repo": call_counter.track("repo", lambda c: Repository(settings=c.settings)),
    }


def test_create_context_container_instantiates_requested_type(call_counter: CallCounter) -> None:
    ctx = create_context_container(_providers(call_counter), context_type=AppContext)

    assert type(ctx) is AppContext


def test_typed_accessors_delegate_to_the_shared_cache(call_counter: CallCounter) -> None:
    ctx = create_context_container(_providers(call_counter), context_type=AppContext)

    repository = ctx.repository

    assert repository.settings is ctx.settings
    assert ctx["repo"] is repository
    assert call_counter.calls == {"settings": 1, "repo": 1}


def test_typed_accessor_for_undeclared_property_raises_missing_provider(
    call_counter: CallCounter,
) -> None:
    ctx = create_context_container(_providers(call_counter), context_type=AppContext)

    with pytest.raises(CtxWireMissingProviderError, match="audit_log"):
        ctx.audit_log


def test_untyped_names_remain_available_on_typed_contexts() -> None:
    ctx = create_context_container(
        {"settings": lambda _: Settings(dsn="x"), "extra": lambda _: 42},
        context_type=AppContext,
    )

    assert ctx.extra == 42


def test_descriptor_accessed_on_class_returns_itself() -> None:
    descriptor = AppContext.repository

    assert isinstance(descriptor, ContextProperty)
    assert descriptor.name == "repo"
    assert repr(descriptor) == "ContextProperty('repo')"


def test_unbound_descriptor_without_name_raises() -> None:
    descriptor: ContextProperty[int] = ContextProperty()
    ctx = create_context_container({})

    with pytest.raises(TypeError, match="explicit name"):
        descriptor.__get__(ctx, Context)


@pytest.mark.parametrize("context_type", [dict, object, "Context"])
def test_context_type_must_be_a_context_subclass(context_type: object) -> None:
    with pytest.raises(CtxWireInvalidProviderError, match="context_type"):
        create_context_container({}, context_type=context_type)  # type: ignore[arg-type]


def test_context_can_be_constructed_directly() -> None:
    ctx = AppContext({"settings": lambda _: Settings(dsn="direct")})

    assert ctx.settings.dsn == "direct"
