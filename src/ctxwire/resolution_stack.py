from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from ctxwire.exceptions import CtxWireCircularDependencyError


class ResolutionStack:
    """Track the properties currently being resolved on the active call path.

    Names are kept in request order, outermost first. The stack is empty
    whenever no resolution is running; a name is only present between entering
    and leaving its own resolver call.
    """

    __slots__ = ("_names",)

    def __init__(self) -> None:
        self._names: list[str] = []

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._names)

    @property
    def is_empty(self) -> bool:
        return not self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def check(self, name: str) -> None:
        """Raise if ``name`` is already in flight.

        Raises:
            CtxWireCircularDependencyError: With the full chain from the
                outermost in-flight property to the repeated ``name``.

        """
        if name in self._names:
            raise CtxWireCircularDependencyError(name, [*self._names, name])

    @contextmanager
    def enter(self, name: str) -> Generator[None, None, None]:
        """Mark ``name`` in flight for the duration of the ``with`` block.

        The marker is removed on every exit path, so a resolver that raises
        leaves the stack exactly as it found it.
        """
        self.check(name)
        self._names.append(name)
        try:
            yield
        finally:
            self._names.pop()
