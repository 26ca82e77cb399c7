"""A single-line text input field driven by key names."""

from __future__ import annotations

from .style import truncate


class TextInput:
    """Editable line of text with a cursor, placeholder and length limit.

    ``char_limit`` of 0 means no limit; ``width`` of 0 means the whole value
    is shown.
    """

    def __init__(
        self,
        placeholder: str = "",
        char_limit: int = 0,
        width: int = 0,
        prompt: str = "> ",
    ) -> None:
        self.placeholder = placeholder
        self.char_limit = char_limit
        self.width = width
        self.prompt = prompt
        self.value = ""
        self.cursor = 0
        self.focused = False

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def set_value(self, value: str) -> None:
        """Replace the value and move the cursor to its end."""
        if self.char_limit > 0:
            value = value[: self.char_limit]
        self.value = value
        self.cursor = len(value)

    def _insert(self, text: str) -> bool:
        if self.char_limit > 0:
            text = text[: max(0, self.char_limit - len(self.value))]
        if not text:
            return False
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)
        return True

    def _delete(self, start: int, end: int) -> bool:
        if start >= end:
            return False
        self.value = self.value[:start] + self.value[end:]
        self.cursor = start
        return True

    def _word_start(self) -> int:
        position = self.cursor
        while position > 0 and self.value[position - 1].isspace():
            position -= 1
        while position > 0 and not self.value[position - 1].isspace():
            position -= 1
        return position

    def handle_key(self, key: str) -> bool:
        """Apply one key press; return True when the value changed.

        Keys are ignored while the input is not focused.
        """
        if not self.focused:
            return False
        if key == "backspace":
            return self._delete(max(0, self.cursor - 1), self.cursor)
        if key == "delete":
            return self._delete(self.cursor, min(len(self.value), self.cursor + 1))
        if key == "ctrl+u":
            return self._delete(0, self.cursor)
        if key == "ctrl+k":
            return self._delete(self.cursor, len(self.value))
        if key == "ctrl+w":
            return self._delete(self._word_start(), self.cursor)
        if key in ("left", "ctrl+b"):
            self.cursor = max(0, self.cursor - 1)
        elif key in ("right", "ctrl+f"):
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in ("home", "ctrl+a"):
            self.cursor = 0
        elif key in ("end", "ctrl+e"):
            self.cursor = len(self.value)
        elif key == "space":
            return self._insert(" ")
        elif len(key) == 1 and key.isprintable():
            return self._insert(key)
        return False

    def view(self) -> str:
        """Render the prompt followed by the value or the placeholder."""
        if not self.value:
            placeholder = self.placeholder
            if self.width > 0:
                placeholder = truncate(placeholder, self.width)
            return self.prompt + placeholder
        if self.width <= 0 or len(self.value) <= self.width:
            return self.prompt + self.value
        start = min(max(0, self.cursor - self.width), len(self.value) - self.width)
        return self.prompt + self.value[start : start + self.width]