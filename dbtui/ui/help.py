"""Scrollable overlay listing the keyboard shortcuts."""

from __future__ import annotations

from .style import box, pad_right, place

_KEY_WIDTH = 16
_PAGE = 10

_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    ("Navigation", (
        ("j / k", "Move down / up (rows)"),
        ("h / l", "Move left / right (columns)"),
        ("0 / $", "Jump to first / last column"),
        ("w / b", "Jump to next / previous FK column"),
        ("g / G", "Jump to top / bottom"),
        ("d / u", "Page down / up"),
        ("n / N", "Next / previous data page (LIMIT/OFFSET)"),
        ("Tab", "Switch panel (left / data grid)"),
        ("S", "Switch left panel (Tables / Scripts)"),
        ("] / [", "Next / previous buffer"),
        ("c", "Fuzzy jump to column"),
        ("V", "Visual mode (range select)"),
        ("m", "Toggle mark on current row"),
    )),
    ("Tables & FK", (
        ("/", "Fuzzy search tables"),
        ("Enter", "Select table / Follow FK link"),
        ("Backspace", "Go back in FK navigation"),
        ("p", "Toggle FK preview panel"),
        ("H / L", "Scroll FK preview left / right"),
    )),
    ("Views", (
        ("v", "Record view (vertical key-value)"),
        ("e", "Expand cell content"),
    )),
    ("Filtering & Ordering", (
        ("f", "Filter column (=, !=, >, <, %like%, null)"),
        ("x", "Remove filter on current column"),
        ("F", "Clear all filters"),
        ("o", "Toggle order (ASC -> DESC -> remove)"),
        ("O", "Clear all orders"),
    )),
    ("Clipboard", (
        ("y", "Copy cell value to clipboard"),
        ("Y", "Copy entire row (tab-separated)"),
    )),
    ("Scripts", (
        ("S", "Switch to Scripts panel"),
        ("Enter", "Execute script (in Scripts panel)"),
        ("e", "Edit script in SQL editor (in Scripts panel)"),
        ("O", "Open script in $EDITOR (in Scripts panel)"),
        ("a", "Create new script (in Scripts panel)"),
        ("d", "Delete script (in Scripts panel)"),
    )),
    ("Command & Edit", (
        (":", "Command mode (SQL, :run, :edit, :bd, :bn)"),
        ("E", "Open SQL editor (multiline)"),
        ("i", "Edit cell (INSERT mode, confirm with y/n)"),
        ("D", "Delete current row"),
        ("a", "Add new row (form)"),
        ("A", "Duplicate current row (form)"),
    )),
    ("AI", (
        ("P", "Open command palette"),
    )),
    ("Leader (<Space>)", (
        ("<Space>bb", "Buffer picker (fuzzy)"),
        ("<Space>bd", "Close active buffer"),
        ("<Space>bn", "Next buffer"),
        ("<Space>bp", "Previous buffer"),
        ("<Space>b1-9", "Jump to buffer N"),
        ("<Space>tt", "Toggle sidebar"),
        ("<Space>tf", "Find table (telescope)"),
        ("<Space>r", "Refresh schema"),
        ("<Space>c", "Switch connection"),
        ("<Space>q", "Quit"),
        ("<Space>?", "Help overlay"),
    )),
    ("Other", (
        ("?", "Toggle this help"),
        ("q", "Quit"),
    )),
)


def _paint(text: str, fg: int | None = None, bold: bool = False) -> str:
    codes = []
    if bold:
        codes.append("1")
    if fg is not None:
        codes.append(f"38;5;{fg}")
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _build_lines() -> list[str]:
    lines = [_paint("  dbTUI - Keyboard Shortcuts", fg=6, bold=True), ""]
    for title, bindings in _SECTIONS:
        lines.append("")
        lines.append(_paint("  " + title, fg=4, bold=True))
        lines.extend(
            "  " + _paint(pad_right(key, _KEY_WIDTH), fg=6, bold=True) + _paint(desc, fg=250)
            for key, desc in bindings
        )
    return lines


class HelpOverlay:
    """Overlay with every key binding, scrolled with vi-style keys."""

    def __init__(self) -> None:
        self._visible = False
        self.width = 0
        self.height = 0
        self._scroll = 0
        self._lines: list[str] = []

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def scroll(self) -> int:
        return self._scroll

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def toggle(self) -> None:
        """Show or hide; showing starts again at the top."""
        self._visible = not self._visible
        if self._visible:
            self._scroll = 0
            self._lines = _build_lines()

    def hide(self) -> None:
        self._visible = False

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def _visible_line_count(self) -> int:
        return max(self.height - 8, 1)

    def _max_scroll(self) -> int:
        return max(len(self._lines) - self._visible_line_count(), 0)

    def handle_key(self, key: str) -> None:
        max_scroll = self._max_scroll()
        if key in ("j", "down"):
            if self._scroll < max_scroll:
                self._scroll += 1
        elif key in ("k", "up"):
            if self._scroll > 0:
                self._scroll -= 1
        elif key == "d":
            self._scroll = min(self._scroll + _PAGE, max_scroll)
        elif key == "u":
            self._scroll = max(self._scroll - _PAGE, 0)
        elif key == "g":
            self._scroll = 0
        elif key == "G":
            self._scroll = max_scroll

    def view(self) -> str:
        if not self._visible or self.width == 0 or self.height == 0:
            return ""

        end = self._scroll + self._visible_line_count()
        shown = self._lines[self._scroll:end]
        shown.append("")
        shown.append(_paint("  [j/k] Scroll  [d/u] Page  [?/Esc] Close", fg=245))

        content = box(
            "\n".join(shown),
            width=max(self.width - 4, 0),
            height=max(self.height - 4, 0),
            padding=(1, 2),
        )
        return place(self.width, self.height, content)