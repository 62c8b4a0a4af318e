"""
Speckles — Typed markup trees with deterministic rendering

Build HTML, SVG and MathML trees with a fluent builder and write them to any
text sink. Attribute order is always alphabetical, so output is byte-identical
from run to run regardless of how the tree was assembled.

Quick Start:
    >>> from speckles import element, void_element, render_string
    >>> page = element("div").id("elt").style("border-top: 1px solid blue; color: red;")
    >>> page.text("An example div")
    >>> render_string(page)
    '<div id="elt" style="border-top:1px solid blue;color:red">An example div</div>'

    >>> render_string(void_element("input").bool_attr("disabled"))
    '<input disabled>'

Composing From Data:
    >>> from speckles import element, range_, if_
    >>> nav = element("ul").class_("navigation").children(
    ...     range_(links, lambda link: element("li", element("a").attr("href", link.url))),
    ...     if_(show_more, element("li").text("More")),
    ... )
"""

from speckles.attributes import DelimitedSequence, KeyValueList, format_float, format_int
from speckles.combinators import (
    Group,
    deferred_group,
    deferred_if,
    deferred_ternary,
    group,
    if_,
    range_,
    range_indexed,
    ternary,
)
from speckles.content import Escaped, Text, error, escaped, escapedf, text, textf
from speckles.element import Element, element, void_element
from speckles.errors import BuilderError, GroupRenderError, RenderError, SinkError, SpecklesError
from speckles.kinds import (
    AttributeKind,
    BoolKind,
    Choice,
    ChoicesKind,
    DelimitedKind,
    IntKind,
    KeyValueKind,
    NumberKind,
    RuneKind,
    StringKind,
    choice_suffix,
)
from speckles.protocols import Renderable, RenderableFunc, Writer
from speckles.stringbuilder import StringBuilder

__version__ = "0.1.0"


def render(node: Renderable | None, w: Writer) -> None:
    """Render a tree into a sink.

    Args:
        node: Root of the tree; None renders nothing
        w: Output sink (anything with ``write(str)``)

    Raises:
        RenderError: the sink or a node failed

    Example:
        >>> import sys
        >>> render(element("p").text("hi"), sys.stdout)
        <p>hi</p>
    """
    if node is not None:
        node.render(w)


def render_string(node: Renderable | None) -> str:
    """Render a tree into a string.

    Args:
        node: Root of the tree; None renders the empty string

    Returns:
        Serialized markup
    """
    sb = StringBuilder()
    render(node, sb)
    return sb.build()


__all__ = [
    # Version
    "__version__",
    # Rendering
    "render",
    "render_string",
    "Renderable",
    "RenderableFunc",
    "Writer",
    "StringBuilder",
    # Elements
    "Element",
    "element",
    "void_element",
    # Attribute builders
    "DelimitedSequence",
    "KeyValueList",
    "format_float",
    "format_int",
    # Content
    "Text",
    "Escaped",
    "text",
    "textf",
    "escaped",
    "escapedf",
    "error",
    # Combinators
    "Group",
    "group",
    "if_",
    "ternary",
    "range_",
    "range_indexed",
    "deferred_group",
    "deferred_if",
    "deferred_ternary",
    # Attribute kinds
    "AttributeKind",
    "BoolKind",
    "RuneKind",
    "IntKind",
    "NumberKind",
    "StringKind",
    "DelimitedKind",
    "KeyValueKind",
    "Choice",
    "ChoicesKind",
    "choice_suffix",
    # Errors
    "SpecklesError",
    "BuilderError",
    "RenderError",
    "SinkError",
    "GroupRenderError",
]
