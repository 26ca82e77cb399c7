"""Command palette: a fuzzy-filtered list of named actions."""

from __future__ import annotations

from dataclasses import dataclass

from .fuzzy import find
from .style import box, pad_right, place
from .textinput import TextInput


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
class PaletteAction:
    """An entry of the palette; ``action_id`` is reported when it is chosen."""

    label: str
    category: str
    action_id: str


class Palette:
    """Overlay in which the user types to narrow actions and picks one."""

    def __init__(self) -> None:
        self._actions: list[PaletteAction] = []
        self._filtered: list[PaletteAction] = []
        self._input = TextInput(placeholder="Type to filter...", char_limit=100)
        self._cursor = 0
        self._visible = False
        self.width = 0
        self.height = 0

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def filtered(self) -> list[PaletteAction]:
        return list(self._filtered)

    @property
    def query(self) -> str:
        return self._input.value

    def set_actions(self, actions: list[PaletteAction]) -> None:
        self._actions = list(actions)
        self._filtered = list(self._actions)

    def show(self, width: int, height: int) -> None:
        """Open the palette empty, with every action listed."""
        self._visible = True
        self.width = width
        self.height = height
        self._cursor = 0
        self._input.set_value("")
        self._filtered = list(self._actions)
        self._input.focus()

    def hide(self) -> None:
        self._visible = False
        self._input.blur()

    def handle_key(self, key: str) -> str | None:
        """Apply a key press; return the chosen action's id on Enter, else None."""
        if key == "esc":
            self.hide()
            return None
        if key == "enter":
            if 0 <= self._cursor < len(self._filtered):
                chosen = self._filtered[self._cursor]
                self.hide()
                return chosen.action_id
            return None
        if key in ("up", "ctrl+p"):
            if self._cursor > 0:
                self._cursor -= 1
            return None
        if key in ("down", "ctrl+n"):
            if self._cursor < len(self._filtered) - 1:
                self._cursor += 1
            return None
        if self._input.handle_key(key):
            self._apply_filter()
        return None

    def _apply_filter(self) -> None:
        query = self._input.value
        if query:
            labels = [action.label for action in self._actions]
            self._filtered = [self._actions[match.index] for match in find(query, labels)]
        else:
            self._filtered = list(self._actions)
        self._cursor = 0

    def view(self) -> str:
        if not self._visible or self.width == 0:
            return ""

        half = self.width // 2
        self._input.width = half
        lines = [
            _paint("  Command Palette", fg=6, bold=True),
            "",
            "  " + self._input.view(),
            "",
        ]

        max_visible = max(self.height - 12, 5)
        start = self._cursor - max_visible + 1 if self._cursor >= max_visible else 0
        end = min(start + max_visible, len(self._filtered))

        for index, action in enumerate(self._filtered[start:end], start=start):
            is_cursor = index == self._cursor
            label = ("> " if is_cursor else "  ") + action.label
            category = _paint(" [" + action.category + "]", fg=245)
            if is_cursor:
                lines.append(_paint(pad_right(label, half), fg=15, bg=4, bold=True) + category)
            else:
                lines.append(_paint(label, fg=250) + category)

        if not self._filtered:
            lines.append(_paint("  No matching actions", fg=245))

        lines.append("")
        lines.append(_paint("  [Enter] Select  [Esc] Close", fg=245))

        return place(self.width, self.height, box("\n".join(lines), padding=(1, 2)))