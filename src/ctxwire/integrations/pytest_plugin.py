from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from ctxwire.context import Context, create_context_container
from ctxwire.registry import Resolver

CTXWIRE_PROVIDERS_MARKER = "ctxwire_providers"


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        f"{CTXWIRE_PROVIDERS_MARKER}(**providers): add or replace resolvers for the "
        "ctxwire_context fixture in a single test.",
    )


@pytest.fixture()
def ctxwire_providers() -> Mapping[str, Resolver]:
    """Resolvers used to build ``ctxwire_context``.

    Override this fixture in a test module or ``conftest.py`` to declare the
    properties your tests read. The default declares nothing.

    """
    return {}


@pytest.fixture()
def ctxwire_context_type() -> type[Context]:
    """``Context`` subclass instantiated by ``ctxwire_context``."""
    return Context


@pytest.fixture()
def ctxwire_context(
    request: pytest.FixtureRequest,
    ctxwire_providers: Mapping[str, Resolver],
    ctxwire_context_type: type[Context],
) -> Context:
    """Create a fresh context handle for each test.

    Resolvers given through ``@pytest.mark.ctxwire_providers(name=resolver)``
    are layered over ``ctxwire_providers``, the closest marker winning.

    Returns:
        A new handle with nothing resolved yet.

    """
    providers: dict[str, Any] = dict(ctxwire_providers)
    for marker in reversed(list(request.node.iter_markers(CTXWIRE_PROVIDERS_MARKER))):
        providers.update(marker.kwargs)
    return create_context_container(providers, context_type=ctxwire_context_type)
