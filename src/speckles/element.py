"""Markup element with typed attribute stores and a deterministic renderer.

An Element holds a tag, a self-closing flag, one lazily created store per
attribute kind and an ordered list of children. All builder methods return
the element so trees read top-down:

    >>> page = element("div").id("elt").style_add("color", "red").text("Hi")
    >>> str(page)
    '<div id="elt" style="color:red">Hi</div>'

Attribute Merge:
At render time the stores are merged into one name-sorted map in a fixed
order: int, float, string, delimited, key-value, bool. When a name lives in
several stores, the later kind wins. False booleans never appear. Values are
written unescaped; an empty value renders as a bare attribute name.

Thread Safety:
Build first, then render. Rendering does not mutate the element, so one
finished tree can be rendered from several threads.

"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar

from speckles.attributes import DelimitedSequence, KeyValueList, format_float, format_int
from speckles.content import Escaped, Text, escapedf, textf
from speckles.errors import BuilderError, SinkError
from speckles.protocols import Renderable, Writer
from speckles.stringbuilder import StringBuilder
from speckles.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=Hashable)

SPACE = " "
COMMA = ","
COLON = ":"
SEMICOLON = ";"


class Element:
    """A markup element: tag, typed attributes and children.

    Args:
        tag: Element name, written as-is
        *children: Initial children (None entries are allowed and skipped)
        self_closing: Emit only the opening tag; children are dropped

    """

    __slots__ = (
        "_tag",
        "_self_closing",
        "_int_attrs",
        "_float_attrs",
        "_string_attrs",
        "_delimited_attrs",
        "_key_value_attrs",
        "_bool_attrs",
        "_children",
    )

    def __init__(
        self,
        tag: str,
        *children: Renderable | None,
        self_closing: bool = False,
    ) -> None:
        self._tag = tag
        self._self_closing = self_closing
        self._int_attrs: dict[str, int] | None = None
        self._float_attrs: dict[str, float] | None = None
        self._string_attrs: dict[str, str] | None = None
        self._delimited_attrs: dict[str, DelimitedSequence[Any]] | None = None
        self._key_value_attrs: dict[str, KeyValueList] | None = None
        self._bool_attrs: dict[str, bool] | None = None
        self._children: list[Renderable | None] = list(children)

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def self_closing(self) -> bool:
        return self._self_closing

    @property
    def child_nodes(self) -> tuple[Renderable | None, ...]:
        return tuple(self._children)

    # =========================================================================
    # Scalar attributes
    # =========================================================================

    def attr(self, name: str, value: str) -> Element:
        if self._string_attrs is None:
            self._string_attrs = {}
        self._string_attrs[name] = value
        return self

    def attrs(self, *pairs: str) -> Element:
        """Set string attributes from flat ``name, value, ...`` arguments.

        Raises:
            BuilderError: odd number of arguments
        """
        if len(pairs) % 2:
            raise BuilderError(f"attrs must be name/value pairs, got {len(pairs)} arguments")
        for i in range(0, len(pairs), 2):
            self.attr(pairs[i], pairs[i + 1])
        return self

    def attrs_map(self, attrs: Mapping[str, str]) -> Element:
        for name, value in attrs.items():
            self.attr(name, value)
        return self

    def int_attr(self, name: str, value: int) -> Element:
        if self._int_attrs is None:
            self._int_attrs = {}
        self._int_attrs[name] = value
        return self

    def float_attr(self, name: str, value: float) -> Element:
        if self._float_attrs is None:
            self._float_attrs = {}
        self._float_attrs[name] = value
        return self

    def rune_attr(self, name: str, value: str) -> Element:
        """Set a single-character attribute (e.g. ``accesskey``).

        Raises:
            BuilderError: value is not exactly one character
        """
        if len(value) != 1:
            raise BuilderError(f"expected a single character, got {value!r}", name)
        return self.attr(name, value)

    def choice_attr(self, name: str, choice: Enum | str) -> Element:
        """Set an enumerated attribute.

        Enum members contribute their value; an empty value renders as a
        bare attribute (``<div popover>``).
        """
        value = choice.value if isinstance(choice, Enum) else choice
        return self.attr(name, str(value))

    def bool_attr(self, name: str, value: bool = True) -> Element:
        if self._bool_attrs is None:
            self._bool_attrs = {}
        self._bool_attrs[name] = value
        return self

    def if_bool_attr(self, condition: bool, name: str) -> Element:
        return self.bool_attr(name, condition)

    def remove_attr(self, *names: str) -> Element:
        """Drop attributes from every store."""
        stores = (
            self._int_attrs,
            self._float_attrs,
            self._string_attrs,
            self._delimited_attrs,
            self._key_value_attrs,
            self._bool_attrs,
        )
        for store in stores:
            if store:
                for name in names:
                    store.pop(name, None)
        return self

    # =========================================================================
    # Composite attributes
    # =========================================================================

    def delimited(self, name: str, delimiter: str) -> DelimitedSequence[T]:
        """Return the live sequence for ``name``, creating it if needed.

        An existing sequence keeps its own delimiter.
        """
        if self._delimited_attrs is None:
            self._delimited_attrs = {}
        seq = self._delimited_attrs.get(name)
        if seq is None:
            seq = self._delimited_attrs[name] = DelimitedSequence(delimiter)
        return seq

    def delimited_set(
        self, name: str, delimiter: str, values: str | Iterable[Hashable]
    ) -> Element:
        """Replace the values of ``name``. A string is split on the delimiter."""
        if self._delimited_attrs is None:
            self._delimited_attrs = {}
        if isinstance(values, str):
            seq = DelimitedSequence[Hashable](delimiter).extend_split(values)
        else:
            seq = DelimitedSequence(delimiter, values)
        self._delimited_attrs[name] = seq
        return self

    def delimited_add(self, name: str, delimiter: str, *values: Hashable) -> Element:
        self.delimited(name, delimiter).add(*values)
        return self

    def delimited_remove(self, name: str, *values: Hashable) -> Element:
        if self._delimited_attrs and name in self._delimited_attrs:
            self._delimited_attrs[name].remove(*values)
        return self

    def key_value(
        self, name: str, pair_delimiter: str, entry_delimiter: str
    ) -> KeyValueList:
        """Return the live key/value list for ``name``, creating it if needed."""
        if self._key_value_attrs is None:
            self._key_value_attrs = {}
        kv = self._key_value_attrs.get(name)
        if kv is None:
            kv = self._key_value_attrs[name] = KeyValueList(pair_delimiter, entry_delimiter)
        return kv

    def key_value_add(
        self,
        name: str,
        key: str,
        value: str,
        *,
        pair_delimiter: str = COLON,
        entry_delimiter: str = SEMICOLON,
    ) -> Element:
        try:
            self.key_value(name, pair_delimiter, entry_delimiter).add(key, value)
        except BuilderError as e:
            raise BuilderError(e.message, name) from None
        return self

    def key_value_map(
        self,
        name: str,
        mapping: Mapping[str, str],
        *,
        pair_delimiter: str = COLON,
        entry_delimiter: str = SEMICOLON,
    ) -> Element:
        try:
            self.key_value(name, pair_delimiter, entry_delimiter).update(mapping)
        except BuilderError as e:
            raise BuilderError(e.message, name) from None
        return self

    def key_value_pairs(
        self,
        name: str,
        *pairs: str,
        pair_delimiter: str = COLON,
        entry_delimiter: str = SEMICOLON,
    ) -> Element:
        try:
            self.key_value(name, pair_delimiter, entry_delimiter).add_pairs(*pairs)
        except BuilderError as e:
            raise BuilderError(e.message, name) from None
        return self

    def key_value_parse(
        self,
        name: str,
        text: str,
        *,
        pair_delimiter: str = COLON,
        entry_delimiter: str = SEMICOLON,
    ) -> Element:
        try:
            self.key_value(name, pair_delimiter, entry_delimiter).parse(text)
        except BuilderError as e:
            raise BuilderError(e.message, name) from None
        return self

    def key_value_remove(self, name: str, *keys: str) -> Element:
        if self._key_value_attrs and name in self._key_value_attrs:
            self._key_value_attrs[name].remove(*keys)
        return self

    # =========================================================================
    # Global attributes shared by HTML, SVG and MathML
    # =========================================================================

    def id(self, value: str) -> Element:
        return self.attr("id", value)

    def class_(self, *names: str) -> Element:
        """Add classes; each argument may hold several space-separated names."""
        seq = self.delimited("class", SPACE)
        for value in names:
            seq.extend_split(value)
        return self

    def class_remove(self, *names: str) -> Element:
        """Remove classes; each argument may hold several space-separated names."""
        return self.delimited_remove("class", *(n for value in names for n in value.split()))

    def style(self, text: str) -> Element:
        """Add declarations parsed from CSS text such as ``"color: red; top: 0;"``."""
        return self.key_value_parse("style", text)

    def style_add(self, prop: str, value: str) -> Element:
        return self.key_value_add("style", prop, value)

    def style_map(self, mapping: Mapping[str, str]) -> Element:
        return self.key_value_map("style", mapping)

    def style_pairs(self, *pairs: str) -> Element:
        return self.key_value_pairs("style", *pairs)

    def style_remove(self, *props: str) -> Element:
        return self.key_value_remove("style", *props)

    # =========================================================================
    # Children
    # =========================================================================

    def children(self, *children: Renderable | None) -> Element:
        self._children.extend(children)
        return self

    def text(self, content: str) -> Element:
        self._children.append(Text(content))
        return self

    def textf(self, format_string: str, /, *args: Any, **kwargs: Any) -> Element:
        self._children.append(textf(format_string, *args, **kwargs))
        return self

    def escaped(self, content: str) -> Element:
        self._children.append(Escaped(content))
        return self

    def escapedf(self, format_string: str, /, *args: Any, **kwargs: Any) -> Element:
        self._children.append(escapedf(format_string, *args, **kwargs))
        return self

    # =========================================================================
    # Rendering
    # =========================================================================

    def merged_attributes(self) -> dict[str, str]:
        """Merge every store into the final name -> text map, sorted by name."""
        merged: dict[str, str] = {}

        if self._int_attrs:
            for name in sorted(self._int_attrs):
                merged[name] = format_int(self._int_attrs[name])

        if self._float_attrs:
            for name in sorted(self._float_attrs):
                merged[name] = format_float(self._float_attrs[name])

        if self._string_attrs:
            for name in sorted(self._string_attrs):
                merged[name] = self._string_attrs[name]

        if self._delimited_attrs:
            for name in sorted(self._delimited_attrs):
                buf = StringBuilder()
                self._delimited_attrs[name].render(buf)
                merged[name] = buf.build()

        if self._key_value_attrs:
            for name in sorted(self._key_value_attrs):
                buf = StringBuilder()
                self._key_value_attrs[name].render(buf)
                merged[name] = buf.build()

        if self._bool_attrs:
            for name in sorted(self._bool_attrs):
                if self._bool_attrs[name]:
                    merged[name] = ""

        return {name: merged[name] for name in sorted(merged)}

    def render(self, w: Writer) -> None:
        """Write this element and its subtree to ``w``.

        Raises:
            SinkError: ``w`` rejected a write
            RenderError: a child failed; remaining siblings are not rendered
        """
        sb = StringBuilder()
        sb.append("<").append(self._tag)
        for name, value in self.merged_attributes().items():
            sb.append(" ").append(name)
            if value:
                sb.append('="').append(value).append('"')
        sb.append(">")

        if self._self_closing:
            if self._children:
                logger.debug(
                    "Dropping %d children of self-closing <%s>", len(self._children), self._tag
                )
            self._write(w, sb.build())
            return

        self._write(w, sb.build())
        for child in self._children:
            if child is None:
                continue
            child.render(w)
        self._write(w, f"</{self._tag}>")

    def _write(self, w: Writer, s: str) -> None:
        try:
            w.write(s)
        except Exception as e:
            raise SinkError(self._tag) from e

    def render_string(self) -> str:
        sb = StringBuilder()
        self.render(sb)
        return sb.build()

    def __str__(self) -> str:
        return self.render_string()

    def __repr__(self) -> str:
        kind = ", self_closing=True" if self._self_closing else ""
        return f"Element({self._tag!r}{kind}, children={len(self._children)})"


def element(tag: str, *children: Renderable | None) -> Element:
    """Create an element with a closing tag."""
    return Element(tag, *children)


def void_element(tag: str) -> Element:
    """Create a self-closing element such as ``input`` or ``br``."""
    return Element(tag, self_closing=True)
