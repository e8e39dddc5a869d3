"""Resolver helpers shared across ctxwire tests."""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Callable
from typing import Any

from ctxwire.context import Context


class CallCounter:
    """Wrap resolvers and count how many times each one runs."""

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()

    def track(self, name: str, resolver: Callable[[Context], Any]) -> Callable[[Context], Any]:
        def tracked(ctx: Context) -> Any:
            self.calls[name] += 1
            return resolver(ctx)

        return tracked


async def produce_eventually(value: Any) -> Any:
    """Return ``value`` after yielding control to the event loop once."""
    await asyncio.sleep(0)
    return value
