"""Tests for Element construction and the attribute merge renderer."""

import io
import logging
from enum import Enum

import pytest

from speckles import element, render_string, text, void_element
from speckles.element import Element
from speckles.errors import BuilderError


class TestElementRendering:
    """Tests for the basic element layout."""

    def test_empty_element(self) -> None:
        assert render_string(element("div")) == "<div></div>"

    def test_string_attribute(self) -> None:
        assert render_string(element("div").attr("data-foo", "bar")) == '<div data-foo="bar"></div>'

    def test_attributes_sorted_by_name(self) -> None:
        el = element("div").attr("data-bind-foo", "bar").bool_attr("data-baz")
        assert render_string(el) == '<div data-baz data-bind-foo="bar"></div>'

    def test_children_rendered_in_order(self) -> None:
        el = element("ol", element("li").text("one"), element("li").text("two"))
        assert render_string(el) == "<ol><li>one</li><li>two</li></ol>"

    def test_children_appended(self) -> None:
        el = element("p").text("a").children(text("b"), element("b").text("c"))
        assert render_string(el) == "<p>ab<b>c</b></p>"

    def test_textf(self) -> None:
        el = element("title").textf("{}'s Home Page", "Alice")
        assert render_string(el) == "<title>Alice's Home Page</title>"

    def test_escaped_and_raw_text(self) -> None:
        el = element("div").text("<b>").escaped("<b>")
        assert render_string(el) == "<div><b>&lt;b&gt;</div>"

    def test_escapedf(self) -> None:
        el = element("div").escapedf("{a} & {b}", a="x", b="y")
        assert render_string(el) == "<div>x &amp; y</div>"

    def test_values_are_not_escaped(self) -> None:
        el = element("a").attr("title", 'say "hi"')
        assert render_string(el) == '<a title="say "hi""></a>'

    def test_str_and_render_string_agree(self) -> None:
        el = element("span").attr("id", "x")
        assert str(el) == el.render_string() == render_string(el)

    def test_render_to_text_stream(self) -> None:
        buf = io.StringIO()
        element("p").text("hi").render(buf)
        assert buf.getvalue() == "<p>hi</p>"

    def test_render_is_repeatable(self) -> None:
        el = element("div").class_("a b").style_add("color", "red").text("x")
        assert render_string(el) == render_string(el)

    def test_repr(self) -> None:
        assert repr(element("div", text("x"))) == "Element('div', children=1)"
        assert repr(void_element("br")) == "Element('br', self_closing=True, children=0)"

    def test_properties(self) -> None:
        child = text("x")
        el = Element("p", child)
        assert el.tag == "p"
        assert el.self_closing is False
        assert el.child_nodes == (child,)


class TestSelfClosing:
    """Tests for self-closing elements."""

    def test_bool_attribute(self) -> None:
        assert render_string(void_element("input").bool_attr("disabled")) == "<input disabled>"

    def test_children_dropped(self) -> None:
        bare = void_element("img").attr("src", "a.png")
        with_children = Element("img", text("ignored"), self_closing=True).attr("src", "a.png")
        with_children.children(element("span"))
        assert render_string(with_children) == render_string(bare) == '<img src="a.png">'

    def test_dropped_children_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="speckles.element"):
            render_string(Element("br", text("x"), self_closing=True))
        assert "self-closing <br>" in caplog.text


class TestNoneChildren:
    """None children are skipped silently."""

    def test_none_children_skipped(self) -> None:
        el = element("div", None, text("a"), None, None, text("b"), None)
        assert render_string(el) == "<div>ab</div>"

    def test_only_none_children(self) -> None:
        assert render_string(element("div", None)) == "<div></div>"


class TestBooleanAttributes:
    """Tests for boolean attributes."""

    def test_false_is_absent(self) -> None:
        assert render_string(element("button").bool_attr("disabled", False)) == "<button></button>"

    def test_if_bool_attr(self) -> None:
        assert render_string(void_element("input").if_bool_attr(False, "disabled")) == "<input>"
        assert render_string(void_element("input").if_bool_attr(True, "disabled")) == "<input disabled>"

    def test_last_write_wins(self) -> None:
        el = element("video").bool_attr("autoplay").bool_attr("muted").bool_attr("muted", False)
        assert render_string(el) == "<video autoplay></video>"

    def test_remove(self) -> None:
        el = element("video").bool_attr("autoplay").bool_attr("muted").remove_attr("muted")
        assert render_string(el) == "<video autoplay></video>"


class TestNumericAttributes:
    """Tests for integer and float attributes."""

    def test_int(self) -> None:
        el = element("ol").bool_attr("reversed").int_attr("start", 5).attr("type", "a")
        assert render_string(el) == '<ol reversed start="5" type="a"></ol>'

    def test_float_formatting(self) -> None:
        el = element("linearGradient").float_attr("x1", 0.048).float_attr("y1", 0.5)
        el.float_attr("x2", 0.963).float_attr("y2", 0.5)
        assert render_string(el) == '<linearGradient x1="0.048" x2="0.963" y1="0.5" y2="0.5"></linearGradient>'

    def test_integral_float_has_no_fraction(self) -> None:
        el = element("stop").float_attr("offset", 0.0).attr("stop-color", "#000000")
        assert render_string(el) == '<stop offset="0" stop-color="#000000"></stop>'

    def test_zero_int_is_rendered(self) -> None:
        assert render_string(element("li").int_attr("value", 0)) == '<li value="0"></li>'


class TestStringAttributes:
    """Tests for string attribute helpers."""

    def test_attrs_pairs(self) -> None:
        el = element("a").attrs("href", "/", "rel", "home")
        assert render_string(el) == '<a href="/" rel="home"></a>'

    def test_attrs_odd_count_fails_immediately(self) -> None:
        with pytest.raises(BuilderError):
            element("a").attrs("href")

    def test_attrs_map(self) -> None:
        el = element("a").attrs_map({"target": "_blank", "href": "/x"})
        assert render_string(el) == '<a href="/x" target="_blank"></a>'

    def test_empty_value_renders_bare_name(self) -> None:
        assert render_string(element("div").attr("popover", "")) == "<div popover></div>"

    def test_rune_attr(self) -> None:
        assert render_string(element("button").rune_attr("accesskey", "s")) == '<button accesskey="s"></button>'

    @pytest.mark.parametrize("value", ["", "ab"])
    def test_rune_attr_rejects_wrong_length(self, value: str) -> None:
        with pytest.raises(BuilderError, match="accesskey"):
            element("button").rune_attr("accesskey", value)

    def test_choice_attr_with_enum(self) -> None:
        class Popover(Enum):
            AUTO = "auto"
            MANUAL = "manual"
            EMPTY = ""

        el = element("div").choice_attr("popover", Popover.AUTO).id("my-popover")
        assert render_string(el) == '<div id="my-popover" popover="auto"></div>'
        assert render_string(element("div").choice_attr("popover", Popover.EMPTY)) == "<div popover></div>"

    def test_choice_attr_with_string(self) -> None:
        assert render_string(element("a").choice_attr("hidden", "until-found")) == '<a hidden="until-found"></a>'


class TestDelimitedAttributes:
    """Tests for delimited attributes."""

    def test_class_split_and_remove(self) -> None:
        el = element("div").class_("foo bar baz hello").class_remove("hello")
        assert render_string(el) == '<div class="foo bar baz"></div>'

    def test_class_accumulates(self) -> None:
        assert render_string(element("div").class_("foo").class_("bar")) == '<div class="foo bar"></div>'

    def test_class_several_arguments(self) -> None:
        assert render_string(element("div").class_("a", "b c")) == '<div class="a b c"></div>'

    def test_class_remove_splits_names(self) -> None:
        el = element("div").class_("a b c d").class_remove("a b", " d ")
        assert render_string(el) == '<div class="c"></div>'

    def test_comma_delimited(self) -> None:
        el = element("area").delimited_add("coords", ",", "260", "96", "209", "249", "130", "138")
        el.delimited_remove("coords", "138")
        assert render_string(el) == '<area coords="260,96,209,249,130"></area>'

    def test_live_sequence(self) -> None:
        el = element("div")
        el.delimited("rel", " ").add("noopener")
        el.delimited("rel", ",").add("noreferrer")
        assert render_string(el) == '<div rel="noopener noreferrer"></div>'

    def test_delimited_set_replaces(self) -> None:
        el = element("div").class_("old").delimited_set("class", " ", ["new", "list"])
        assert render_string(el) == '<div class="new list"></div>'

    def test_delimited_set_splits_string(self) -> None:
        el = element("div").delimited_set("class", " ", "a  b")
        assert render_string(el) == '<div class="a b"></div>'
        el = element("area").delimited_set("coords", ",", "1, 2,3")
        assert render_string(el) == '<area coords="1,2,3"></area>'

    def test_remove_from_absent_attribute_is_noop(self) -> None:
        el = element("div").delimited_remove("class", "x").key_value_remove("style", "y")
        assert render_string(el) == "<div></div>"

    def test_emptied_sequence_renders_bare_name(self) -> None:
        el = element("div").class_("only").class_remove("only")
        assert render_string(el) == "<div class></div>"


class TestKeyValueAttributes:
    """Tests for key/value attributes."""

    def test_style_text(self) -> None:
        el = element("div").id("elt").style("border-top: 1px solid blue; color: red;").text("An example div")
        assert render_string(el) == (
            '<div id="elt" style="border-top:1px solid blue;color:red">An example div</div>'
        )

    def test_style_add(self) -> None:
        assert render_string(element("div").style_add("display", "none")) == '<div style="display:none"></div>'

    def test_style_map_and_remove(self) -> None:
        el = (
            element("span")
            .style_add("color", "red")
            .style_map({"display": "block", "font-size": "12px", "font-weight": "bold"})
            .style_remove("font-size", "font-weight")
        )
        assert render_string(el) == '<span style="color:red;display:block"></span>'

    def test_style_map_sorted(self) -> None:
        el = element("p").style_map({"margin": "10px", "padding": "5px", "display": "block"})
        assert render_string(el) == '<p style="display:block;margin:10px;padding:5px"></p>'

    def test_style_pairs(self) -> None:
        el = element("p").style_pairs("top", "0", "left", "1px")
        assert render_string(el) == '<p style="top:0;left:1px"></p>'

    def test_add_then_remove(self) -> None:
        el = element("div").style_add("color", "rad").style_add("font-size", "12px").style_remove("color")
        assert render_string(el) == '<div style="font-size:12px"></div>'

    def test_custom_delimiters(self) -> None:
        el = element("meta").key_value_add("content", "width", "device-width", pair_delimiter="=", entry_delimiter=", ")
        el.key_value_add("content", "initial-scale", "1")
        assert render_string(el) == '<meta content="width=device-width, initial-scale=1"></meta>'

    def test_empty_value_allowed(self) -> None:
        assert render_string(element("p").style_map({"foo": ""})) == '<p style="foo:"></p>'

    @pytest.mark.parametrize(
        "build",
        [
            lambda: element("a").style_pairs("foo"),
            lambda: element("div").style_add("", "bar"),
            lambda: element("span").style(";;;;;;"),
            lambda: element("div").style("font-size; color: red;"),
        ],
    )
    def test_misuse_fails_at_construction(self, build) -> None:
        with pytest.raises(BuilderError, match="style"):
            build()


class TestAttributeMerge:
    """Tests for merging attribute stores."""

    def test_bool_overrides_string(self) -> None:
        el = element("input").attr("disabled", "no").bool_attr("disabled")
        assert render_string(el) == "<input disabled></input>"

    def test_false_bool_leaves_string(self) -> None:
        el = element("input").attr("disabled", "no").bool_attr("disabled", False)
        assert render_string(el) == '<input disabled="no"></input>'

    def test_string_overrides_numbers(self) -> None:
        el = element("rect").int_attr("width", 10).float_attr("width", 2.5).attr("width", "100%")
        assert render_string(el) == '<rect width="100%"></rect>'

    def test_float_overrides_int(self) -> None:
        el = element("rect").float_attr("x", 1.5).int_attr("x", 3)
        assert render_string(el) == '<rect x="1.5"></rect>'

    def test_delimited_overrides_string(self) -> None:
        el = element("div").class_("from-list").attr("class", "from-string")
        assert render_string(el) == '<div class="from-list"></div>'

    def test_key_value_overrides_delimited(self) -> None:
        el = element("div").style_add("color", "red").delimited_add("style", " ", "x")
        assert render_string(el) == '<div style="color:red"></div>'

    def test_merged_attributes(self) -> None:
        el = element("div").int_attr("b", 1).attr("a", "x").bool_attr("c").bool_attr("d", False)
        assert el.merged_attributes() == {"a": "x", "b": "1", "c": ""}
        assert list(el.merged_attributes()) == ["a", "b", "c"]

    def test_remove_attr_all_stores(self) -> None:
        el = element("div").int_attr("x", 1).class_("a").style_add("k", "v").attr("id", "i")
        el.remove_attr("x", "class", "style", "missing")
        assert render_string(el) == '<div id="i"></div>'


class TestSvgAndMathML:
    """Non-HTML vocabularies use the same renderer."""

    def test_svg(self) -> None:
        svg = (
            element("svg")
            .attr("xmlns", "http://www.w3.org/2000/svg")
            .attr("width", "200")
            .attr("height", "200")
            .attr("viewBox", "0 0 200 200")
            .children(element("circle").float_attr("cx", 100).float_attr("cy", 100).float_attr("r", 80))
        )
        assert render_string(svg) == (
            '<svg height="200" viewBox="0 0 200 200" width="200" xmlns="http://www.w3.org/2000/svg">'
            '<circle cx="100" cy="100" r="80"></circle></svg>'
        )

    def test_mathml(self) -> None:
        math = element("math", element("mfrac", element("mn").text("1"), element("mn").text("3")))
        assert render_string(math) == "<math><mfrac><mn>1</mn><mn>3</mn></mfrac></math>"
