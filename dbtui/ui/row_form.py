"""Form for entering a new row, empty or copied from an existing one."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .style import box, place
from .textinput import TextInput

_AUTO_GENERATED = "[auto-generated]"
_MAX_LABEL_WIDTH = 40


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


class RowFormMode(enum.Enum):
    """Whether the form adds a blank row or duplicates an existing one."""

    ADD = "ADD"
    DUPLICATE = "DUPLICATE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ColumnSpec:
    """What the form needs to know about a table column."""

    name: str
    data_type: str
    is_pk: bool = False
    is_nullable: bool = False
    has_default: bool = False


@dataclass
class RowFormField:
    """One input of the form; ``skip`` marks a generated primary key."""

    name: str
    data_type: str
    is_pk: bool = False
    is_nullable: bool = False
    has_default: bool = False
    skip: bool = False
    input: TextInput = field(default_factory=lambda: TextInput(char_limit=1000, width=40))


class RowForm:
    """Overlay with one text input per column of a table."""

    def __init__(self) -> None:
        self._fields: list[RowFormField] = []
        self._active = 0
        self._table_name = ""
        self._mode = RowFormMode.ADD
        self._visible = False
        self._confirm = False
        self.width = 0
        self.height = 0
        self._scroll = 0

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def confirm(self) -> bool:
        """True once the user has pressed Enter on the last editable field."""
        return self._confirm

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def mode(self) -> RowFormMode:
        return self._mode

    @property
    def active_field(self) -> int:
        return self._active

    @property
    def scroll_offset(self) -> int:
        return self._scroll

    @property
    def fields(self) -> list[RowFormField]:
        return list(self._fields)

    def hide(self) -> None:
        self._visible = False
        self._confirm = False

    def reset_confirm(self) -> None:
        self._confirm = False

    def show_add(self, table_name: str, columns: list[ColumnSpec], width: int, height: int) -> None:
        self._open(table_name, RowFormMode.ADD, columns, {}, width, height)

    def show_duplicate(
        self,
        table_name: str,
        columns: list[ColumnSpec],
        col_names: list[str],
        values: list[str],
        width: int,
        height: int,
    ) -> None:
        self._open(
            table_name, RowFormMode.DUPLICATE, columns, dict(zip(col_names, values)), width, height
        )

    def _open(
        self,
        table_name: str,
        mode: RowFormMode,
        columns: list[ColumnSpec],
        prefill: dict[str, str],
        width: int,
        height: int,
    ) -> None:
        self._table_name = table_name
        self._mode = mode
        self.width = width
        self.height = height
        self._confirm = False
        self._scroll = 0
        self._build_fields(columns, prefill)
        self._visible = True
        self._focus_active()

    def _build_fields(self, columns: list[ColumnSpec], prefill: dict[str, str]) -> None:
        self._fields = []
        for col in columns:
            skip = col.is_pk and col.has_default
            entry = RowFormField(
                name=col.name,
                data_type=col.data_type,
                is_pk=col.is_pk,
                is_nullable=col.is_nullable,
                has_default=col.has_default,
                skip=skip,
            )
            value = prefill.get(col.name)
            if value is not None and value != "NULL" and not skip:
                entry.input.set_value(value)
            if skip:
                entry.input.placeholder = _AUTO_GENERATED
            elif col.is_nullable:
                entry.input.placeholder = "NULL"
            self._fields.append(entry)
        self._active = next((i for i, f in enumerate(self._fields) if not f.skip), 0)

    def _focus_active(self) -> None:
        for entry in self._fields:
            entry.input.blur()
        if self._active < len(self._fields):
            self._fields[self._active].input.focus()

    def _move_to(self, index: int | None) -> None:
        if index is None:
            return
        self._active = index
        self._focus_active()
        self._ensure_visible()

    def _next_editable(self) -> int | None:
        return next(
            (i for i in range(self._active + 1, len(self._fields)) if not self._fields[i].skip),
            None,
        )

    def _prev_editable(self) -> int | None:
        return next(
            (i for i in range(self._active - 1, -1, -1) if not self._fields[i].skip), None
        )

    def _visible_lines(self) -> int:
        return max(self.height - 8, 1)

    def _ensure_visible(self) -> None:
        visible = self._visible_lines()
        if self._active < self._scroll:
            self._scroll = self._active
        if self._active >= self._scroll + visible:
            self._scroll = self._active - visible + 1

    def collect_values(self) -> tuple[list[str], list[str]]:
        """Column names and values to insert; empty generated keys are left out."""
        columns: list[str] = []
        values: list[str] = []
        for entry in self._fields:
            value = entry.input.value
            if entry.skip and not value:
                continue
            columns.append(entry.name)
            values.append(value)
        return columns, values

    def handle_key(self, key: str) -> None:
        """Apply a key press; nothing happens while awaiting confirmation."""
        if self._confirm:
            return
        if key == "esc":
            self._visible = False
            self._confirm = False
        elif key in ("tab", "down"):
            self._move_to(self._next_editable())
        elif key in ("shift+tab", "up"):
            self._move_to(self._prev_editable())
        elif key == "enter":
            following = self._next_editable()
            if following is None:
                self._confirm = True
            else:
                self._move_to(following)
        elif self._active < len(self._fields):
            self._fields[self._active].input.handle_key(key)

    def view(self) -> str:
        if not self._visible or self.width == 0 or self.height == 0:
            return ""

        label_width = min(
            max((len(f.name) + len(f.data_type) + 3 for f in self._fields), default=0),
            _MAX_LABEL_WIDTH,
        )

        lines = [_paint(f"  {self._mode} Row: {self._table_name}", fg=6, bold=True), ""]

        end = min(self._scroll + self._visible_lines(), len(self._fields))
        separator = _paint(" : ", fg=245)
        for index in range(self._scroll, end):
            entry = self._fields[index]
            label = f"{entry.name} ({entry.data_type})"[:label_width].ljust(label_width)
            is_active = index == self._active

            if entry.skip:
                value = _paint(_AUTO_GENERATED, fg=3, italic=True)
            elif is_active:
                value = entry.input.view()
            elif entry.input.value:
                value = entry.input.value
            else:
                value = _paint(entry.input.placeholder, fg=245)

            if is_active:
                rendered_label = _paint("  > " + label, fg=6, bold=True)
            else:
                rendered_label = _paint("    " + label, fg=4, bold=True)
            lines.append(rendered_label + separator + value)

        lines.append("")
        info = f"{self._scroll + 1}-{end} of {len(self._fields)} fields"
        lines.append(
            _paint(
                f"  {info}  [Tab/Shift+Tab] Nav  [Enter] Confirm  [Esc] Cancel",
                fg=245,
            )
        )

        content = box(
            "\n".join(lines),
            width=max(self.width - 4, 0),
            height=max(self.height - 4, 0),
            padding=1,
        )
        return place(self.width, self.height, content)