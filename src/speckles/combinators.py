"""Structural combinators for assembling trees from data.

Combinators return renderables (or None) that slot into any children list:

- group: render several children in sequence
- if_: include children only when a condition holds
- ternary: choose one of two already-built branches
- range_ / range_indexed: map a sequence to children

The deferred variants take zero-argument producers instead of built
children. A producer runs exactly once, when the combinator itself is
called, and only for the branch that is taken:

    >>> deferred_if(user.is_admin, lambda: build_admin_panel(user))

The eager combinators are thin wrappers over the deferred ones.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import partial
from typing import TypeVar

from speckles.errors import GroupRenderError
from speckles.protocols import Renderable, RenderableFunc, Writer

T = TypeVar("T")


@dataclass(slots=True)
class Group:
    """Ordered children rendered one after another.

    None children are skipped. A failing child aborts the group; its
    exception is chained to a GroupRenderError.

    """

    children: list[Renderable | None] = field(default_factory=list)

    def render(self, w: Writer) -> None:
        for i, child in enumerate(self.children):
            if child is None:
                continue
            try:
                child.render(w)
            except Exception as e:
                raise GroupRenderError(i) from e

    def __len__(self) -> int:
        return len(self.children)


def _given(value: Renderable | None) -> RenderableFunc:
    return lambda: value


def deferred_group(*producers: RenderableFunc) -> Group:
    """Build a Group by calling each producer once, in order.

    Producers returning None contribute nothing.
    """
    children: list[Renderable | None] = []
    for produce in producers:
        child = produce()
        if child is not None:
            children.append(child)
    return Group(children)


def deferred_if(condition: bool, *producers: RenderableFunc) -> Group | None:
    """Call the producers only when ``condition`` is true.

    Returns:
        Group of the produced children, or None when the condition is false
    """
    if condition:
        return deferred_group(*producers)
    return None


def deferred_ternary(
    condition: bool,
    when_true: RenderableFunc,
    when_false: RenderableFunc,
) -> Renderable | None:
    """Call exactly one of two producers depending on ``condition``."""
    if condition:
        return when_true()
    return when_false()


def group(*children: Renderable | None) -> Group:
    return deferred_group(*map(_given, children))


def if_(condition: bool, *children: Renderable | None) -> Group | None:
    """Group ``children`` when ``condition`` holds, else None.

    All children are built by the caller regardless of the condition; use
    deferred_if to avoid building content that is never shown.
    """
    return deferred_if(condition, *map(_given, children))


def ternary(
    condition: bool,
    when_true: Renderable | None,
    when_false: Renderable | None,
) -> Renderable | None:
    return deferred_ternary(condition, _given(when_true), _given(when_false))


def range_(values: Iterable[T], fn: Callable[[T], Renderable | None]) -> Group:
    """Map each value to a child, preserving order.

    Example:
        >>> range_(["Home", "About"], lambda item: element("li").text(item))
    """
    return deferred_group(*(partial(fn, value) for value in values))


def range_indexed(
    values: Iterable[T], fn: Callable[[int, T], Renderable | None]
) -> Group:
    """Like range_, but ``fn`` also receives the zero-based index."""
    return deferred_group(*(partial(fn, i, value) for i, value in enumerate(values)))
