"""
Scope stacks for the Novarc evaluator.

Bindings live on two ordered stacks, one for variables and one for
functions. Entering a ``let``, ``fn`` or call pushes entries; leaving it pops
exactly those entries, on success and on error alike. Lookup scans from the
most recent entry down, so the innermost binding of a name shadows the
others. Insertion order decides shadowing, which is why these are lists and
not dicts.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from novarc.core.ir.expressions import Expr

T = TypeVar("T")


@dataclass(frozen=True)
class FunctionDef:
    """A function definition as seen by callers."""

    name: str
    params: tuple[str, ...]
    body: Expr

    @property
    def arity(self) -> int:
        return len(self.params)


class ScopeStack(Generic[T]):
    """Last-in-first-out stack of named bindings with shadowing lookup."""

    def __init__(self) -> None:
        self._entries: list[tuple[str, T]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, T]]:
        return iter(self._entries)

    def push(self, name: str, value: T) -> None:
        self._entries.append((name, value))

    def push_all(self, bindings: Sequence[tuple[str, T]]) -> None:
        self._entries.extend(bindings)

    def pop(self, count: int = 1) -> None:
        """Remove the ``count`` most recent entries."""
        if count < 0 or count > len(self._entries):
            raise IndexError(f"cannot pop {count} of {len(self._entries)} scope entries")
        if count:
            del self._entries[-count:]

    def lookup(self, name: str) -> T | None:
        """Return the innermost value bound to ``name``, or None."""
        for bound, value in reversed(self._entries):
            if bound == name:
                return value
        return None

    def names(self) -> list[str]:
        """Bound names, innermost first."""
        return [name for name, _ in reversed(self._entries)]

    @contextmanager
    def scoped(self, bindings: Sequence[tuple[str, T]]) -> Iterator[None]:
        """Push ``bindings`` for the duration of the block, then pop them."""
        self.push_all(bindings)
        try:
            yield
        finally:
            self.pop(len(bindings))


@dataclass
class Scope:
    """The variable and function stacks owned by one evaluation."""

    variables: ScopeStack[float] = field(default_factory=ScopeStack)
    functions: ScopeStack[FunctionDef] = field(default_factory=ScopeStack)
