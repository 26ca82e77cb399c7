"""Plain-text layout helpers: widths, padding, boxes and placement."""

from __future__ import annotations

import re

_ANSI = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

_TOP_LEFT, _TOP_RIGHT = "╭", "╮"
_BOTTOM_LEFT, _BOTTOM_RIGHT = "╰", "╯"
_HORIZONTAL, _VERTICAL = "─", "│"


def visible_width(text: str) -> int:
    """Width of the widest line of ``text``, ignoring ANSI escape sequences."""
    return max((len(_ANSI.sub("", line)) for line in text.split("\n")), default=0)


def pad_right(text: str, width: int) -> str:
    """Pad ``text`` with spaces up to ``width`` visible columns."""
    missing = width - visible_width(text)
    return text + " " * missing if missing > 0 else text


def truncate(text: str, max_width: int) -> str:
    """Cut ``text`` to ``max_width`` characters, ending in ``...`` when room allows."""
    max_width = max(max_width, 0)
    if len(text) <= max_width:
        return text
    if max_width <= 3:
        return text[:max_width]
    return text[: max_width - 3] + "..."


def _padding(padding: int | tuple[int, int]) -> tuple[int, int]:
    if isinstance(padding, int):
        return padding, padding
    vertical, horizontal = padding
    return vertical, horizontal


def box(
    content: str,
    width: int | None = None,
    height: int | None = None,
    padding: int | tuple[int, int] = 0,
) -> str:
    """Surround ``content`` with a rounded border.

    ``width`` and ``height`` are the minimum inner size, padding included;
    the box grows to fit wider or taller content. ``padding`` is either one
    number or a ``(vertical, horizontal)`` pair.
    """
    vpad, hpad = _padding(padding)
    lines = content.split("\n")
    text_width = max(visible_width(line) for line in lines)
    inner = max(width or 0, text_width + 2 * hpad)

    rows = [""] * vpad + lines + [""] * vpad
    if height is not None and len(rows) < height:
        rows.extend([""] * (height - len(rows)))

    body = [
        _VERTICAL + " " * hpad + pad_right(row, inner - 2 * hpad) + " " * hpad + _VERTICAL
        for row in rows
    ]
    top = _TOP_LEFT + _HORIZONTAL * inner + _TOP_RIGHT
    bottom = _BOTTOM_LEFT + _HORIZONTAL * inner + _BOTTOM_RIGHT
    return "\n".join([top, *body, bottom])


def place(width: int, height: int, content: str) -> str:
    """Center ``content`` in an area of ``width`` by ``height`` cells."""
    lines = content.split("\n")
    block_width = visible_width(content)
    left = max(0, (width - block_width) // 2)
    top = max(0, (height - len(lines)) // 2)

    placed = [" " * width] * top
    placed.extend(pad_right(" " * left + pad_right(line, block_width), width) for line in lines)
    if len(placed) < height:
        placed.extend([" " * width] * (height - len(placed)))
    return "\n".join(placed)


def join_horizontal(*args: str) -> str:
    """Put text blocks side by side, aligned at the top."""
    blocks = [block.split("\n") for block in args]
    widths = [visible_width(block) for block in args]
    rows = max((len(lines) for lines in blocks), default=0)
    return "\n".join(
        "".join(
            pad_right(lines[row] if row < len(lines) else "", block_width)
            for lines, block_width in zip(blocks, widths)
        )
        for row in range(rows)
    )