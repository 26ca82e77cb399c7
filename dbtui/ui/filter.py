"""Column filters: parsing user input, the filter prompt and the filter list."""

from __future__ import annotations

from dataclasses import dataclass

from .style import box, pad_right, place
from .textinput import TextInput

_NULL_OPERATORS = ("IS NULL", "IS NOT NULL")
_COMPARISON_PREFIXES = ("!=", ">=", "<=", ">", "<")

CLEAR_ALL = "ALL"


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


@dataclass(frozen=True)
class FilterClause:
    """A condition on one column, such as ``total > 100`` or ``email IS NULL``."""

    column: str
    operator: str
    value: str = ""

    def __str__(self) -> str:
        if self.operator in _NULL_OPERATORS:
            return f"{self.column} {self.operator}"
        return f"{self.column}{self.operator}{self.value}"


def parse_filter_input(column: str, text: str) -> FilterClause:
    """Turn what the user typed into a filter on ``column``.

    ``null`` and ``!null``/``not null`` test for NULL, a leading comparison
    operator is taken as such, a ``%`` anywhere makes a LIKE pattern and
    anything else is an equality test.
    """
    text = text.strip()
    folded = text.casefold()

    if folded == "null":
        return FilterClause(column, "IS NULL")
    if folded in ("!null", "not null"):
        return FilterClause(column, "IS NOT NULL")

    for prefix in _COMPARISON_PREFIXES:
        if text.startswith(prefix):
            return FilterClause(column, prefix, text[len(prefix):].strip())

    if "%" in text:
        return FilterClause(column, "LIKE", text)

    return FilterClause(column, "=", text)


class FilterInput:
    """The one-line prompt in which a filter for a column is typed."""

    def __init__(self) -> None:
        self._input = TextInput(char_limit=100)
        self._column = ""
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def column(self) -> str:
        return self._column

    @property
    def value(self) -> str:
        return self._input.value

    @property
    def placeholder(self) -> str:
        return self._input.placeholder

    def activate(self, column: str) -> None:
        """Open the prompt, empty, for ``column``."""
        self._column = column
        self._active = True
        self._input.set_value("")
        self._input.placeholder = f"filter {column} (value, %like%, >n, null, !null)"
        self._input.focus()

    def deactivate(self) -> None:
        self._active = False
        self._input.blur()

    def set_value(self, operator: str, value: str) -> None:
        """Prefill the prompt with the text that parses back to this filter."""
        if operator == "IS NULL":
            self._input.set_value("null")
        elif operator == "IS NOT NULL":
            self._input.set_value("!null")
        elif operator in ("LIKE", "="):
            self._input.set_value(value)
        else:
            self._input.set_value(operator + value)

    def handle_key(self, key: str) -> bool:
        """Pass a key to the text field; return True when the text changed."""
        return self._input.handle_key(key)

    def view(self, width: int) -> str:
        if not self._active:
            return ""
        self._input.width = max(width - len(self._column) - 12, 0)
        label = _paint(f" Filter {self._column}: ", fg=3, bold=True)
        return label + self._input.view()


class FilterList:
    """Overlay listing the active filters, with keys to remove them."""

    def __init__(self) -> None:
        self._filters: list[FilterClause] = []
        self.cursor = 0
        self._visible = False
        self.width = 0
        self.height = 0

    @property
    def filters(self) -> list[FilterClause]:
        return list(self._filters)

    def set_filters(self, filters: list[FilterClause]) -> None:
        self._filters = list(filters)
        self.cursor = 0

    def toggle(self) -> None:
        self._visible = not self._visible

    def hide(self) -> None:
        self._visible = False

    def is_visible(self) -> bool:
        """Shown only when switched on and there is something to list."""
        return self._visible and bool(self._filters)

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def handle_key(self, key: str) -> str | None:
        """Apply a key press.

        Returns the column whose filter was removed, ``CLEAR_ALL`` when every
        filter was removed, or None when no filter was removed.
        """
        if key in ("j", "down"):
            if self.cursor < len(self._filters) - 1:
                self.cursor += 1
        elif key in ("k", "up"):
            if self.cursor > 0:
                self.cursor -= 1
        elif key == "d":
            if self.cursor < len(self._filters):
                removed = self._filters.pop(self.cursor)
                if self.cursor >= len(self._filters) and self.cursor > 0:
                    self.cursor -= 1
                if not self._filters:
                    self._visible = False
                return removed.column
        elif key == "D":
            self._filters = []
            self._visible = False
            return CLEAR_ALL
        elif key in ("esc", "F"):
            self._visible = False
        return None

    def view(self) -> str:
        if not self._visible or not self._filters:
            return ""

        lines = [_paint(" Active Filters", fg=3, bold=True), ""]
        for index, clause in enumerate(self._filters):
            line = f"  {clause}"
            if index == self.cursor:
                lines.append(_paint(pad_right(line, self.width - 6), fg=15, bg=4))
            else:
                lines.append(_paint(line, fg=250))
        lines.append("")
        lines.append(_paint("  [d] Remove  [D] Clear all  [Esc] Close", fg=245))

        return place(self.width, self.height, box("\n".join(lines), padding=(0, 1)))