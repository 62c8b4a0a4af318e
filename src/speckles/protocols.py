"""Protocols for Speckles.

Defines the contracts between element trees and the sinks they render into.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


class Writer(Protocol):
    """Protocol for render sinks.

    Anything accepting sequential string writes: io.StringIO, text files,
    sys.stdout, StringBuilder. A sink may fail by raising; the failure
    propagates as a render error.

    """

    def write(self, s: str, /) -> Any:
        """Write ``s`` to the sink."""
        ...


@runtime_checkable
class Renderable(Protocol):
    """Protocol for anything that serializes itself into a Writer.

    Implemented by Element, Text, Escaped and Group. ``None`` stands in for
    "no content" and is skipped by every container that holds it.

    Thread Safety:
        Rendering must not mutate the renderable; distinct trees can be
        rendered concurrently.

    """

    def render(self, w: Writer) -> None:
        """Write markup to ``w``.

        Args:
            w: Output sink

        Raises:
            RenderError: The sink or a descendant failed
        """
        ...


RenderableFunc = Callable[[], Renderable | None]
"""A zero-argument producer of a renderable, used by deferred combinators."""
