"""Build and render a small page in a few lines — zero config, zero deps."""

import sys

from speckles import element, render, void_element

page = element("form").attr("action", "/search").children(
    void_element("input").attr("name", "q").bool_attr("required"),
    element("button").text("Search"),
)
render(page, sys.stdout)
print()
