import re

from dbtui.ui.which_key import KeyNode, WhichKey

_ANSI = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def plain(text):
    return _ANSI.sub("", text)


def make_root():
    buffer_node = KeyNode(
        key="b",
        desc="+buffer",
        children=[
            KeyNode(key="n", desc="next", group="nav", action=lambda app: None),
            KeyNode(key="d", desc="delete active", group="manage", action=lambda app: None),
        ],
        digit=lambda app, n: None,
        digit_desc="jump to N",
    )
    return KeyNode(
        key="<leader>",
        desc="<leader>",
        children=[
            buffer_node,
            KeyNode(key="r", desc="refresh schema", group="database"),
            KeyNode(key="c", desc="switch connection", group="database"),
            KeyNode(key="q", desc="quit", group="app"),
        ],
    )


def test_find_child():
    root = make_root()
    assert root.find_child("r").desc == "refresh schema"
    assert root.find_child("b").find_child("d").desc == "delete active"
    assert root.find_child("z") is None


def test_hidden_popup_is_empty():
    popup = WhichKey()
    assert popup.view() == ""
    assert popup.line_count() == 0


def test_view_lists_path_and_descriptions():
    popup = WhichKey()
    popup.show(make_root(), "<leader>", 80, 24)
    text = plain(popup.view())
    assert "Which Key" in text
    assert "<leader>" in text
    for desc in ("refresh schema", "switch connection", "quit", "+buffer"):
        assert desc in text
    assert "[Esc] cancel" in text


def test_groups_sorted_and_default_group_used():
    popup = WhichKey()
    popup.show(make_root(), "<leader>", 80, 24)
    text = plain(popup.view())
    assert text.index("app") < text.index("database") < text.index("general")


def test_keys_sorted_within_group():
    popup = WhichKey()
    popup.show(make_root(), "<leader>", 80, 24)
    text = plain(popup.view())
    assert text.index("switch connection") < text.index("refresh schema")


def test_submenu_marker_only_for_nodes_with_children():
    popup = WhichKey()
    popup.show(make_root(), "<leader>", 80, 24)
    assert plain(popup.view()).count("›") == 1
    popup.show(make_root().find_child("b"), "<leader>b", 80, 24)
    assert "›" not in plain(popup.view())


def test_digit_section():
    popup = WhichKey()
    popup.show(make_root().find_child("b"), "<leader>b", 80, 24)
    text = plain(popup.view())
    assert "digits" in text
    assert "1-9" in text
    assert "jump to N" in text


def test_digit_section_default_description():
    node = KeyNode(key="x", children=[KeyNode(key="a", desc="alpha")], digit=lambda app, n: None)
    popup = WhichKey()
    popup.show(node, "<leader>x", 80, 24)
    assert "digit action" in plain(popup.view())


def test_line_count_matches_view_and_hide_clears():
    popup = WhichKey()
    popup.show(make_root(), "<leader>", 80, 24)
    assert popup.line_count() == len(popup.view().split("\n"))
    popup.hide()
    assert popup.visible is False
    assert popup.node is None
    assert popup.line_count() == 0


def test_zero_width_renders_nothing():
    popup = WhichKey()
    popup.show(make_root(), "<leader>", 0, 24)
    assert popup.view() == ""