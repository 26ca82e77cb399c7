"""Vertical key/value view of a single row."""

from __future__ import annotations

from .style import box, place

_MAX_LABEL_WIDTH = 30


def _paint(text: str, fg: int | None = None, bold: bool = False, italic: bool = False) -> str:
    codes = []
    if bold:
        codes.append("1")
    if italic:
        codes.append("3")
    if fg is not None:
        codes.append(f"38;5;{fg}")
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


class RecordView:
    """Overlay listing each column of one row with its value."""

    def __init__(self) -> None:
        self._columns: list[str] = []
        self._values: list[str] = []
        self._table = ""
        self._row_index = 0
        self._scroll = 0
        self._visible = False
        self.width = 0
        self.height = 0

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def scroll(self) -> int:
        return self._scroll

    def show(self, table: str, row_index: int, columns: list[str], values: list[str]) -> None:
        self._table = table
        self._row_index = row_index
        self._columns = list(columns)
        self._values = list(values)
        self._scroll = 0
        self._visible = True

    def hide(self) -> None:
        self._visible = False

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def _visible_lines(self) -> int:
        return max(self.height - 6, 1)

    def _max_scroll(self) -> int:
        return max(len(self._columns) - self._visible_lines(), 0)

    def handle_key(self, key: str) -> None:
        if key in ("j", "down"):
            if self._scroll < self._max_scroll():
                self._scroll += 1
        elif key in ("k", "up"):
            if self._scroll > 0:
                self._scroll -= 1
        elif key == "d":
            self._scroll = min(self._scroll + 10, self._max_scroll())
        elif key == "u":
            self._scroll = max(self._scroll - 10, 0)
        elif key == "g":
            self._scroll = 0
        elif key == "G":
            self._scroll = self._max_scroll()

    def _render_value(self, value: str) -> str:
        if value == "NULL":
            return _paint(value, fg=3, italic=True)
        if value.startswith("[FK]"):
            return _paint(value, fg=6)
        return _paint(value, fg=250)

    def view(self) -> str:
        if not self._visible or self.width == 0 or self.height == 0:
            return ""

        label_width = min(max((len(col) for col in self._columns), default=0), _MAX_LABEL_WIDTH)

        lines = [
            _paint(f"  Record View: {self._table} (row {self._row_index + 1})", fg=6, bold=True),
            "",
        ]

        end = min(self._scroll + self._visible_lines(), len(self._columns))
        separator = _paint(" : ", fg=245)
        for index in range(self._scroll, end):
            column = self._columns[index]
            value = self._values[index] if index < len(self._values) else ""
            label = _paint("  " + column.ljust(label_width), fg=4, bold=True)
            lines.append(label + separator + self._render_value(value))

        lines.append("")
        info = f"{self._scroll + 1}-{end} of {len(self._columns)} fields"
        lines.append(_paint(f"  {info}  [j/k] Scroll  [Esc] Close", fg=245))

        content = box(
            "\n".join(lines),
            width=max(self.width - 4, 0),
            height=max(self.height - 4, 0),
            padding=1,
        )
        return place(self.width, self.height, content)