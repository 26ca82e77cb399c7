"""Leader-key tree nodes and the popup that lists the keys available next."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .style import box, pad_right

_DEFAULT_GROUP = "general"


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


@dataclass
class KeyNode:
    """One key of a leader sequence.

    A node either leads to ``children`` or runs ``action``; ``digit`` handles
    a digit key 1-9 pressed at this node.
    """

    key: str
    desc: str = ""
    group: str = ""
    children: list[KeyNode] = field(default_factory=list)
    action: Callable[..., Any] | None = None
    digit: Callable[..., Any] | None = None
    digit_desc: str = ""

    def find_child(self, key: str) -> KeyNode | None:
        """The child bound to ``key``, or None."""
        return next((child for child in self.children if child.key == key), None)


class WhichKey:
    """Popup showing the children of the current leader node, grouped."""

    def __init__(self) -> None:
        self._visible = False
        self.width = 0
        self.height = 0
        self.path = ""
        self._node: KeyNode | None = None

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def node(self) -> KeyNode | None:
        return self._node

    def show(self, node: KeyNode, path: str, width: int, height: int) -> None:
        self._visible = True
        self._node = node
        self.path = path
        self.width = width
        self.height = height

    def hide(self) -> None:
        self._visible = False
        self._node = None

    def view(self) -> str:
        node = self._node
        if not self._visible or node is None or self.width == 0:
            return ""

        groups: dict[str, list[KeyNode]] = {}
        for child in node.children:
            groups.setdefault(child.group or _DEFAULT_GROUP, []).append(child)

        key_width = max((len(child.key) for child in node.children), default=1)
        key_width = max(key_width, 1)
        if node.digit is not None:
            key_width = max(key_width, 3)

        lines = [
            _paint(" Which Key  ", fg=6, bold=True) + _paint(self.path, fg=3, bold=True),
            "",
        ]

        for group in sorted(groups):
            lines.append(_paint("  " + group, fg=245, italic=True))
            for child in sorted(groups[group], key=lambda entry: entry.key):
                marker = _paint("›", fg=5) if child.children else " "
                key = _paint(pad_right(child.key, key_width), fg=4, bold=True)
                lines.append(f"    {key} {marker}  {_paint(child.desc, fg=250)}")

        if node.digit is not None:
            desc = node.digit_desc or "digit action"
            lines.append(_paint("  digits", fg=245, italic=True))
            key = _paint(pad_right("1-9", key_width), fg=4, bold=True)
            lines.append(f"    {key}   {_paint(desc, fg=250)}")

        lines.append("")
        lines.append(_paint(" [Esc] cancel", fg=245))

        return box("\n".join(lines), padding=(0, 1))

    def line_count(self) -> int:
        """Number of terminal lines the popup takes; 0 when hidden."""
        if not self._visible or self._node is None:
            return 0
        return self.view().count("\n") + 1