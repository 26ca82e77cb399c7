"""Sidebar listing the database tables, with fuzzy filtering."""

from __future__ import annotations

from .fuzzy import find
from .style import box, pad_right, truncate
from .textinput import TextInput

_TYPE_SUFFIXES = {"view": " (v)", "materialized_view": " (m)"}


def _paint(text: str, fg: int | None = None, bg: int | None = None) -> str:
    codes = []
    if fg is not None:
        codes.append(f"38;5;{fg}")
    if bg is not None:
        codes.append(f"48;5;{bg}")
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def truncate_string(text: str, max_len: int) -> str:
    """Cut ``text`` to ``max_len`` characters, ending in ``...`` when room allows."""
    return truncate(text, max_len)


class TableList:
    """Navigable list of table names; ``/``-style filtering narrows it fuzzily."""

    def __init__(self) -> None:
        self._tables: list[str] = []
        self._filtered: list[str] = []
        self._cursor = 0
        self.width = 0
        self.height = 0
        self._focused = False
        self._filtering = False
        self._input = TextInput(placeholder="filter...", char_limit=50)
        self._selected = ""
        self._table_types: dict[str, str] = {}

    @property
    def tables(self) -> list[str]:
        return list(self._tables)

    @property
    def filtered(self) -> list[str]:
        return list(self._filtered)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def filtering(self) -> bool:
        return self._filtering

    @property
    def selected(self) -> str:
        """The table last chosen with Enter, or an empty string."""
        return self._selected

    def set_tables(self, tables: list[str], types: dict[str, str] | None) -> None:
        self._tables = list(tables)
        self._table_types = dict(types or {})
        self._filtered = list(self._tables)
        self._cursor = 0

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False
        self._stop_filtering()

    def start_filtering(self) -> None:
        self._filtering = True
        self._input.focus()
        self._input.set_value("")
        self._filtered = list(self._tables)
        self._cursor = 0

    def _stop_filtering(self) -> None:
        self._filtering = False
        self._input.blur()
        self._input.set_value("")
        self._filtered = list(self._tables)

    def _select_cursor(self) -> None:
        if 0 <= self._cursor < len(self._filtered):
            self._selected = self._filtered[self._cursor]

    def handle_key(self, key: str) -> None:
        if self._filtering:
            self._handle_filtering_key(key)
        else:
            self._handle_normal_key(key)

    def _handle_filtering_key(self, key: str) -> None:
        if key == "esc":
            self._stop_filtering()
        elif key == "enter":
            self._select_cursor()
            self._stop_filtering()
        elif key in ("up", "ctrl+p", "ctrl+k"):
            if self._cursor > 0:
                self._cursor -= 1
        elif key in ("down", "ctrl+n", "ctrl+j"):
            if self._cursor < len(self._filtered) - 1:
                self._cursor += 1
        elif self._input.handle_key(key):
            self._apply_filter()

    def _handle_normal_key(self, key: str) -> None:
        if key in ("j", "down"):
            if self._cursor < len(self._filtered) - 1:
                self._cursor += 1
        elif key in ("k", "up"):
            if self._cursor > 0:
                self._cursor -= 1
        elif key == "g":
            self._cursor = 0
        elif key == "G":
            if self._filtered:
                self._cursor = len(self._filtered) - 1
        elif key == "enter":
            self._select_cursor()

    def _apply_filter(self) -> None:
        query = self._input.value
        if not query:
            if len(self._filtered) != len(self._tables):
                self._filtered = list(self._tables)
                self._cursor = 0
            return

        new_filtered = [match.text for match in find(query, self._tables)]
        if new_filtered != self._filtered:
            self._cursor = 0
        self._filtered = new_filtered
        if self._filtered and self._cursor >= len(self._filtered):
            self._cursor = len(self._filtered) - 1

    def view(self) -> str:
        if self.width == 0 or self.height == 0:
            return ""

        content_height = self.height - 2
        if self._filtering:
            content_height -= 1
        content_height = max(content_height, 1)

        out = ""
        if self._filtering:
            self._input.width = max(self.width - 4, 0)
            out += self._input.view() + "\n"

        scroll = 0
        if self._cursor >= content_height:
            scroll = self._cursor - content_height + 1
        visible_end = min(scroll + content_height, len(self._filtered))

        lines = 0
        for index in range(scroll, visible_end):
            if lines >= content_height:
                break
            name = self._filtered[index]
            is_cursor = index == self._cursor
            prefix = "> " if is_cursor else "  "
            suffix = _TYPE_SUFFIXES.get(self._table_types.get(name, ""), "")
            line = prefix + truncate_string(name + suffix, self.width - 4)
            if is_cursor:
                line = _paint(pad_right(line, self.width - 2), fg=15, bg=236)
            out += line
            if index < visible_end - 1 or lines < content_height - 1:
                out += "\n"
            lines += 1

        out += "\n" * max(content_height - lines, 0)

        return box(
            out,
            width=max(self.width - 2, 0),
            height=content_height + int(self._filtering),
        )