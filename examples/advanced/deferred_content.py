"""Skip building expensive branches with deferred combinators.

deferred_if and deferred_ternary call their producers only for the branch
that is taken, so the admin panel below is never constructed for guests.
"""

from speckles import deferred_if, element, range_, render_string


def admin_panel(users: list[str]):
    print("building admin panel")
    return element("ul").class_("admin").children(
        range_(users, lambda name: element("li").text(name)),
    )


def page(is_admin: bool, users: list[str]) -> str:
    tree = element(
        "main",
        element("h1").text("Dashboard"),
        deferred_if(is_admin, lambda: admin_panel(users)),
    )
    return render_string(tree)


if __name__ == "__main__":
    print(page(False, ["ana", "bo"]))
    print(page(True, ["ana", "bo"]))
