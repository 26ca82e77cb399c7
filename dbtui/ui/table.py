"""Scrollable data grid with a cursor, marks and a visual range selection."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from .style import box, pad_right, truncate

_SAMPLE_SIZE = 100


@dataclass
class TableConfig:
    """Appearance and behaviour settings of a Table.

    Colours are 256-colour palette indices.
    """

    show_header: bool = True
    show_cursor: bool = True
    fk_columns: set[str] = field(default_factory=set)
    filtered_columns: dict[str, str] = field(default_factory=dict)
    ordered_columns: dict[str, str] = field(default_factory=dict)
    max_cell_width: int = 40
    min_cell_width: int = 5
    highlight_fk_color: int = 6
    cursor_bg_color: int = 236
    selection_bg_color: int = 53


def _paint(text: str, fg: int | None = None, bg: int | None = None, bold: bool = False) -> str:
    codes = []
    if bold:
        codes.append("1")
    if fg is not None:
        codes.append(f"38;5;{fg}")
    if bg is not None:
        codes.append(f"48;5;{bg}")
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def truncate_to_width(text: str, max_width: int) -> str:
    """Cut ``text`` to ``max_width`` characters, ending in ``...`` when room allows."""
    return truncate(text, max_width)


def sanitize_cell(text: str) -> str:
    """Replace line breaks and tabs with spaces."""
    return text.replace("\n", " ").replace("\r", " ").replace("\t", " ")


def truncate_cell(text: str, max_width: int) -> str:
    """Sanitize a cell value and fit it into ``max_width`` characters."""
    return truncate_to_width(sanitize_cell(text), max_width)


def _indent_json(text: str) -> str:
    out: list[str] = []
    depth = 0
    in_string = False
    escaped = False
    pending_indent = False
    for char in text:
        if in_string:
            out.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char in " \t\r\n":
            continue
        if pending_indent and char not in "]}":
            out.append("\n" + "  " * depth)
            pending_indent = False
        if char == '"':
            in_string = True
            out.append(char)
        elif char in "{[":
            out.append(char)
            depth += 1
            pending_indent = True
        elif char in "}]":
            depth -= 1
            if pending_indent:
                pending_indent = False
            else:
                out.append("\n" + "  " * depth)
            out.append(char)
        elif char == ",":
            out.append(",\n" + "  " * depth)
        elif char == ":":
            out.append(": ")
        else:
            out.append(char)
    return "".join(out)


def pretty_json_if_possible(text: str) -> str:
    """Indent a JSON object or array by two spaces; other text is returned as is."""
    trimmed = text.strip()
    if not trimmed or trimmed[0] not in "{[":
        return text
    try:
        json.loads(trimmed)
    except ValueError:
        return text
    return _indent_json(trimmed)


class Table:
    """A grid of string cells sized to fit its content and its viewport."""

    def __init__(self, config: TableConfig | None = None) -> None:
        self.config = config if config is not None else TableConfig()
        self._columns: list[str] = []
        self._rows: list[list[str]] = []
        self._col_widths: list[int] = []
        self._cursor_row = 0
        self._cursor_col = 0
        self._scroll_row = 0
        self._scroll_col = 0
        self._width = 0
        self._height = 0
        self._marked: set[int] = set()
        self._visual_anchor: int | None = None

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def col_widths(self) -> list[int]:
        return list(self._col_widths)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def col_count(self) -> int:
        return len(self._columns)

    @property
    def cursor_row(self) -> int:
        return self._cursor_row

    @property
    def cursor_col(self) -> int:
        return self._cursor_col

    @property
    def scroll_row(self) -> int:
        return self._scroll_row

    @property
    def scroll_col(self) -> int:
        return self._scroll_col

    def set_data(self, columns: list[str], rows: list[list[str]]) -> None:
        self._columns = list(columns)
        self._rows = [list(row) for row in rows]
        self._calculate_column_widths()
        self._clamp_cursor()

    def set_size(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._clamp_scroll()

    def set_filter_indicators(self, filtered: dict[str, str], ordered: dict[str, str]) -> None:
        """Mark filtered and ordered columns in the header."""
        self.config.filtered_columns = dict(filtered)
        self.config.ordered_columns = dict(ordered)
        self._adjust_widths_for_indicators()

    def _indicator_suffix(self, column: str) -> str:
        suffix = ""
        direction = self.config.ordered_columns.get(column)
        if direction is not None:
            suffix += " ▲" if direction == "ASC" else " ▼"
        if column in self.config.filtered_columns:
            suffix += " ◈"
        return suffix

    def _adjust_widths_for_indicators(self) -> None:
        for i, (column, width) in enumerate(zip(self._columns, self._col_widths)):
            suffix = self._indicator_suffix(column)
            if not suffix:
                continue
            min_width = min(len(column) + len(suffix), self.config.max_cell_width)
            if width < min_width:
                self._col_widths[i] = min_width

    def _calculate_column_widths(self) -> None:
        widths = [len(column) for column in self._columns]
        for row in self._rows[:_SAMPLE_SIZE]:
            for i, cell in enumerate(row[: len(widths)]):
                widths[i] = max(widths[i], len(sanitize_cell(cell)))
        self._col_widths = [
            min(max(width, self.config.min_cell_width), self.config.max_cell_width)
            for width in widths
        ]
        self._adjust_widths_for_indicators()

    def cursor_column_name(self) -> str:
        return self._column_name(self._cursor_col)

    def cursor_cell_value(self) -> str:
        row = self.cursor_row_values()
        if 0 <= self._cursor_col < len(row):
            return row[self._cursor_col]
        return ""

    def cursor_row_values(self) -> list[str]:
        if 0 <= self._cursor_row < len(self._rows):
            return list(self._rows[self._cursor_row])
        return []

    def _column_name(self, index: int) -> str:
        if 0 <= index < len(self._columns):
            return self._columns[index]
        return ""

    def move_down(self) -> None:
        if self._cursor_row < len(self._rows) - 1:
            self._cursor_row += 1
            self._clamp_scroll()

    def move_up(self) -> None:
        if self._cursor_row > 0:
            self._cursor_row -= 1
            self._clamp_scroll()

    def move_right(self) -> None:
        if self._cursor_col < len(self._columns) - 1:
            self._cursor_col += 1
            self._clamp_scroll()

    def move_left(self) -> None:
        if self._cursor_col > 0:
            self._cursor_col -= 1
            self._clamp_scroll()

    def move_to_top(self) -> None:
        self._cursor_row = 0
        self._clamp_scroll()

    def move_to_bottom(self) -> None:
        if self._rows:
            self._cursor_row = len(self._rows) - 1
        self._clamp_scroll()

    def page_down(self) -> None:
        row = min(self._cursor_row + self._visible_row_count(), len(self._rows) - 1)
        self._cursor_row = max(row, 0)
        self._clamp_scroll()

    def page_up(self) -> None:
        self._cursor_row = max(self._cursor_row - self._visible_row_count(), 0)
        self._clamp_scroll()

    def move_to_first_col(self) -> None:
        self._cursor_col = 0
        self._clamp_scroll()

    def move_to_last_col(self) -> None:
        if self._columns:
            self._cursor_col = len(self._columns) - 1
        self._clamp_scroll()

    def move_to_next_fk_col(self) -> None:
        following = enumerate(self._columns[self._cursor_col + 1 :], start=self._cursor_col + 1)
        target = next((i for i, col in following if col in self.config.fk_columns), None)
        if target is not None:
            self._cursor_col = target
            self._clamp_scroll()

    def move_to_prev_fk_col(self) -> None:
        preceding = reversed(list(enumerate(self._columns[: max(self._cursor_col, 0)])))
        target = next((i for i, col in preceding if col in self.config.fk_columns), None)
        if target is not None:
            self._cursor_col = target
            self._clamp_scroll()

    def set_cursor_row(self, row: int) -> None:
        self._cursor_row = row
        self._clamp_cursor()
        self._clamp_scroll()

    def set_cursor_col(self, col: int) -> None:
        self._cursor_col = col
        self._clamp_cursor()
        self._clamp_scroll()

    def toggle_mark(self, row: int) -> None:
        if not 0 <= row < len(self._rows):
            return
        self._marked ^= {row}

    def start_visual(self) -> None:
        if self._rows:
            self._visual_anchor = self._cursor_row

    def stop_visual(self) -> None:
        self._visual_anchor = None

    def is_visual_active(self) -> bool:
        return self._visual_anchor is not None

    def clear_selection(self) -> None:
        self._marked = set()
        self._visual_anchor = None

    def has_selection(self) -> bool:
        return self._visual_anchor is not None or bool(self._marked)

    def _visual_range(self) -> range:
        if self._visual_anchor is None:
            return range(0)
        low, high = sorted((self._visual_anchor, self._cursor_row))
        return range(low, high + 1)

    def is_row_selected(self, row: int) -> bool:
        return row in self._marked or row in self._visual_range()

    def selected_rows(self) -> list[int]:
        """Marked rows and the visual range, sorted and without repeats."""
        return sorted(self._marked.union(self._visual_range()))

    def selected_row_values(self) -> list[list[str]]:
        return [
            list(self._rows[i]) for i in self.selected_rows() if 0 <= i < len(self._rows)
        ]

    def view(self) -> str:
        if self._width == 0 or self._height == 0 or not self._columns:
            return ""
        lines = []
        if self.config.show_header:
            lines.append(self._render_header())
            lines.append(self._render_separator())
        end = self._scroll_row + self._visible_row_count()
        lines.extend(
            self._render_cells(row, index, is_header=False)
            for index, row in enumerate(self._rows[self._scroll_row : end], start=self._scroll_row)
        )
        return "\n".join(lines)

    def expanded_cell_view(self) -> str:
        """The cursor cell in full, JSON pretty-printed, inside a bordered box."""
        value = pretty_json_if_possible(self.cursor_cell_value())
        header = f" {self.cursor_column_name()} (row {self._cursor_row + 1}) "
        return box(
            header + "\n\n" + value,
            width=max(self._width - 2, 0),
            height=max(self._height - 2, 0),
        )

    def _render_header(self) -> str:
        decorated = []
        for column, width in zip(self._columns, self._col_widths):
            suffix = self._indicator_suffix(column)
            if not suffix:
                decorated.append(column)
                continue
            name_space = max(width - len(suffix), 3)
            decorated.append(truncate_to_width(column, name_space) + suffix)
        return self._render_cells(decorated, None, is_header=True)

    def _visible_widths(self) -> list[tuple[int, int]]:
        content_width = self._width - 1
        shown = []
        used = 0
        for index, width in enumerate(self._col_widths[self._scroll_col :], start=self._scroll_col):
            if used + width + 1 > content_width and used > 0:
                break
            shown.append((index, width))
            used += width + 1
        return shown

    def _render_separator(self) -> str:
        parts = ["─" * width for _, width in self._visible_widths()]
        return _paint("┼".join(parts), fg=240)

    def _render_cells(self, cells: list[str], row_index: int | None, is_header: bool) -> str:
        cfg = self.config
        is_cursor_row = cfg.show_cursor and row_index is not None and row_index == self._cursor_row
        is_selected = not is_header and row_index is not None and self.is_row_selected(row_index)

        parts = []
        for col_index, width in self._visible_widths():
            cell = cells[col_index] if col_index < len(cells) else ""
            cell = pad_right(truncate_cell(cell, width), width)
            name = self._column_name(col_index)
            fg: int | None = None
            bg: int | None = None
            if is_header:
                if name in cfg.filtered_columns:
                    fg = 3
                elif name in cfg.ordered_columns:
                    fg = 5
                else:
                    fg = 15
            elif is_cursor_row:
                bg = cfg.cursor_bg_color
                if col_index == self._cursor_col:
                    bg, fg = 4, 15
            elif is_selected:
                bg = cfg.selection_bg_color
            if not is_header and name in cfg.fk_columns:
                fg = cfg.highlight_fk_color
            parts.append(_paint(cell, fg=fg, bg=bg, bold=is_header))
        return _paint("│", fg=240).join(parts)

    def _visible_row_count(self) -> int:
        height = self._height - 2 if self.config.show_header else self._height
        return max(height, 1)

    def _clamp_cursor(self) -> None:
        self._cursor_row = max(self._cursor_row, 0)
        if self._rows and self._cursor_row >= len(self._rows):
            self._cursor_row = len(self._rows) - 1
        self._cursor_col = max(self._cursor_col, 0)
        if self._columns and self._cursor_col >= len(self._columns):
            self._cursor_col = len(self._columns) - 1

    def _clamp_scroll(self) -> None:
        visible = self._visible_row_count()
        if self._cursor_row < self._scroll_row:
            self._scroll_row = self._cursor_row
        if self._cursor_row >= self._scroll_row + visible:
            self._scroll_row = self._cursor_row - visible + 1
        self._scroll_row = max(self._scroll_row, 0)

        if self._cursor_col < self._scroll_col:
            self._scroll_col = self._cursor_col
        if self._cursor_col > self._scroll_col:
            content_width = self._width - 1
            used = 0
            last_visible = self._scroll_col
            for index, width in enumerate(
                self._col_widths[self._scroll_col :], start=self._scroll_col
            ):
                used += width + 1
                if used > content_width:
                    break
                last_visible = index
            if self._cursor_col > last_visible:
                self._scroll_col = self._cursor_col
        self._scroll_col = max(self._scroll_col, 0)