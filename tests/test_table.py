import pytest

from dbtui.ui.table import (
    Table,
    TableConfig,
    pretty_json_if_possible,
    sanitize_cell,
    truncate_cell,
    truncate_to_width,
)


def make_table(columns, rows, width=40, height=10, config=None):
    table = Table(config or TableConfig())
    table.set_data(columns, rows)
    table.set_size(width, height)
    return table


def test_set_data():
    table = Table(TableConfig())
    table.set_data(
        ["id", "name", "email"],
        [["1", "Alice", "alice@example.com"], ["2", "Bob", "bob@example.com"]],
    )
    assert table.row_count == 2
    assert table.col_count == 3


def test_cursor_movement():
    table = make_table(["id", "name"], [["1", "Alice"], ["2", "Bob"], ["3", "Carol"]])
    assert table.cursor_row == 0
    table.move_down()
    assert table.cursor_row == 1
    table.move_down()
    table.move_down()
    assert table.cursor_row == 2
    table.move_up()
    assert table.cursor_row == 1
    table.move_to_bottom()
    assert table.cursor_row == 2
    table.move_to_top()
    assert table.cursor_row == 0


def test_horizontal_scroll():
    table = make_table(
        ["id", "name", "email", "phone", "address", "city"],
        [["1", "Alice", "[email]", "555-0001", "123 Main St", "NYC"]],
        width=30,
    )
    assert table.cursor_col == 0
    table.move_right()
    assert table.cursor_col == 1
    for _ in range(4):
        table.move_right()
    assert table.cursor_col == 5
    table.move_right()
    assert table.cursor_col == 5
    table.move_left()
    assert table.cursor_col == 4


def test_cell_truncation():
    result = truncate_cell("this is a very long text value that should be truncated", 20)
    assert len(result) <= 20
    assert result.endswith("...")


def test_cell_truncation_short_value():
    assert truncate_cell("short", 20) == "short"


def test_truncate_to_width_tiny():
    assert truncate_to_width("abcdef", 3) == "abc"


def test_sanitize_cell():
    assert sanitize_cell("a\nb\tc\rd") == "a b c d"


def test_column_auto_size():
    config = TableConfig(min_cell_width=5, max_cell_width=40)
    table = Table(config)
    table.set_data(
        ["id", "a_very_long_column_name_that_exceeds_maximum_width_limit"],
        [["1", "val"]],
    )
    assert table.col_widths[0] >= 5
    assert table.col_widths[1] <= 40


def test_fk_column_highlight():
    config = TableConfig(fk_columns={"customer_id"})
    table = make_table(
        ["id", "customer_id", "total"], [["1", "42", "99.99"]], width=60, config=config
    )
    view = table.view()
    assert view != ""
    assert "customer_id" in view
    assert "42" in view


def test_empty_data():
    table = make_table([], [])
    assert table.view() == ""


def test_cursor_cell_value():
    table = Table(TableConfig())
    table.set_data(["id", "name"], [["1", "Alice"], ["2", "Bob"]])
    assert table.cursor_cell_value() == "1"
    table.move_right()
    assert table.cursor_cell_value() == "Alice"
    table.move_down()
    assert table.cursor_cell_value() == "Bob"


def test_page_down_page_up():
    table = make_table(["val"], [["xxx"] for _ in range(50)], width=20, height=12)
    table.page_down()
    assert table.cursor_row > 0
    previous = table.cursor_row
    table.page_up()
    assert table.cursor_row < previous


def test_resize():
    table = Table(TableConfig())
    table.set_data(
        ["id", "name", "email", "phone", "address", "city", "country"],
        [["1", "Alice Johnson", "alice@example.com", "555-0001", "123 Main Street", "New York", "USA"]],
    )
    table.set_size(120, 20)
    view1 = table.view()
    table.set_size(30, 5)
    view2 = table.view()
    assert view1 != view2
    assert "country" in view1
    assert "country" not in view2


def test_toggle_mark():
    table = make_table(["id", "name"], [["1", "Alice"], ["2", "Bob"], ["3", "Carol"]])
    table.toggle_mark(0)
    assert table.is_row_selected(0)
    table.toggle_mark(0)
    assert not table.is_row_selected(0)
    table.toggle_mark(1)
    table.toggle_mark(2)
    assert table.selected_rows() == [1, 2]


def test_toggle_mark_out_of_range_ignored():
    table = make_table(["id"], [["1"]])
    table.toggle_mark(5)
    assert not table.has_selection()


def test_visual_mode():
    table = make_table(
        ["id", "name"], [["1", "Alice"], ["2", "Bob"], ["3", "Carol"], ["4", "Dave"]]
    )
    assert not table.is_visual_active()
    table.set_cursor_row(1)
    table.start_visual()
    assert table.is_visual_active()
    table.set_cursor_row(3)
    assert table.selected_rows() == [1, 2, 3]
    table.stop_visual()
    assert not table.is_visual_active()
    assert not table.has_selection()


def test_visual_and_marks_union():
    table = make_table(["id"], [["1"], ["2"], ["3"], ["4"], ["5"]])
    table.toggle_mark(0)
    table.set_cursor_row(3)
    table.start_visual()
    table.set_cursor_row(4)
    assert table.selected_rows() == [0, 3, 4]


def test_clear_selection():
    table = make_table(["id"], [["1"], ["2"], ["3"]])
    table.toggle_mark(0)
    table.start_visual()
    table.set_cursor_row(2)
    table.clear_selection()
    assert not table.has_selection()
    assert not table.is_visual_active()


def test_selected_row_values():
    table = make_table(["id", "name"], [["1", "Alice"], ["2", "Bob"], ["3", "Carol"]])
    table.toggle_mark(0)
    table.toggle_mark(2)
    values = table.selected_row_values()
    assert len(values) == 2
    assert values[0][1] == "Alice"
    assert values[1][1] == "Carol"


def test_start_visual_on_empty_table_does_nothing():
    table = make_table(["id"], [])
    table.start_visual()
    assert not table.is_visual_active()


def test_fk_column_navigation():
    config = TableConfig(fk_columns={"user_id", "order_id"})
    table = make_table(
        ["id", "user_id", "name", "order_id"], [["1", "2", "x", "3"]], width=80, config=config
    )
    table.move_to_next_fk_col()
    assert table.cursor_column_name() == "user_id"
    table.move_to_next_fk_col()
    assert table.cursor_column_name() == "order_id"
    table.move_to_next_fk_col()
    assert table.cursor_column_name() == "order_id"
    table.move_to_prev_fk_col()
    assert table.cursor_column_name() == "user_id"


def test_first_and_last_column():
    table = make_table(["a", "b", "c"], [["1", "2", "3"]])
    table.move_to_last_col()
    assert table.cursor_column_name() == "c"
    table.move_to_first_col()
    assert table.cursor_column_name() == "a"


def test_set_cursor_clamps():
    table = make_table(["a", "b"], [["1", "2"], ["3", "4"]])
    table.set_cursor_row(99)
    table.set_cursor_col(-4)
    assert table.cursor_row == 1
    assert table.cursor_col == 0


def test_filter_indicators_widen_columns_and_show():
    table = make_table(["id", "name"], [["1", "Alice"]], width=60)
    table.set_filter_indicators({"name": "name=Alice"}, {"id": "ASC"})
    assert table.col_widths[1] >= len("name") + len(" ◈")
    view = table.view()
    assert "▲" in view
    assert "◈" in view
    table.set_filter_indicators({}, {"id": "DESC"})
    assert "▼" in table.view()


def test_cursor_row_values_empty_table():
    table = make_table(["id"], [])
    assert table.cursor_row_values() == []
    assert table.cursor_cell_value() == ""


def test_pretty_json_object():
    assert pretty_json_if_possible('{"a":1,"b":[1,2]}') == (
        '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'
    )


def test_pretty_json_keeps_empty_containers():
    assert pretty_json_if_possible('{"a":{},"b":[]}') == '{\n  "a": {},\n  "b": []\n}'


@pytest.mark.parametrize("text", ["plain text", "{not json", "42", ""])
def test_pretty_json_leaves_non_json(text):
    assert pretty_json_if_possible(text) == text


def test_expanded_cell_view_shows_cell():
    table = make_table(["id", "payload"], [["1", '{"k":"v"}']])
    table.move_right()
    view = table.expanded_cell_view()
    assert "payload (row 1)" in view
    assert '"k": "v"' in view
    assert view.startswith("╭")