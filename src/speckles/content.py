"""Leaf content renderables.

Text writes its content verbatim; Escaped HTML-escapes it first. Both are
frozen, slotted dataclasses and safe to share between trees.

Example:
    >>> sb = StringBuilder()
    >>> escaped("<b>").render(sb)
    >>> sb.build()
    '&lt;b&gt;'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from speckles.errors import SinkError
from speckles.protocols import Writer
from speckles.utils.text import escape_html


def _write(w: Writer, s: str) -> None:
    try:
        w.write(s)
    except Exception as e:
        raise SinkError() from e


@dataclass(frozen=True, slots=True)
class Text:
    """Raw text content, written without escaping.

    Callers are responsible for the markup-safety of the content.

    """

    content: str

    def render(self, w: Writer) -> None:
        _write(w, self.content)


@dataclass(frozen=True, slots=True)
class Escaped:
    """Text content that is HTML-escaped when written.

    """

    content: str

    def render(self, w: Writer) -> None:
        _write(w, escape_html(self.content))


def text(content: str) -> Text:
    return Text(content)


def textf(format_string: str, /, *args: Any, **kwargs: Any) -> Text:
    """Create Text from a str.format() template."""
    return Text(format_string.format(*args, **kwargs))


def escaped(content: str) -> Escaped:
    return Escaped(content)


def escapedf(format_string: str, /, *args: Any, **kwargs: Any) -> Escaped:
    """Create Escaped from a str.format() template."""
    return Escaped(format_string.format(*args, **kwargs))


def error(exc: BaseException) -> Text:
    """Render an exception's message as plain text in place of content."""
    return Text(str(exc))
