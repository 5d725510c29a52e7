"""The text being edited, held as one string, with its cursor."""

from dataclasses import dataclass
from typing import Optional

FILE_LIMIT = 64000
WORD_SEPARATORS = " \t\n()[]{},;:'\"-="
ESC = "\033"

_SPACES = " \t\n\r\v\f"


class BufferFull(Exception):
    """Raised when an edit would grow the text past the buffer capacity."""


def is_separator(c: str) -> bool:
    """True if c ends a word; the empty string and NUL count as separators."""
    return c == "" or c == "\0" or c in WORD_SEPARATORS


def _isspace(c: str) -> bool:
    return c != "" and c in _SPACES


@dataclass
class Buffer:
    """A text of limited size, a cursor into it and a yank register."""

    text: str = ""
    cursor: int = 0
    capacity: int = FILE_LIMIT
    changed: bool = False
    yanked: Optional[str] = None

    def _at(self, pos: int) -> str:
        if 0 <= pos < len(self.text):
            return self.text[pos]
        return ""

    # -- line navigation -------------------------------------------------

    def next_line(self, pos: int) -> Optional[int]:
        """Start of the line after the one holding pos, or None."""
        end = len(self.text)
        while pos < end:
            ch = self.text[pos]
            pos += 1
            if ch == "\n":
                break
        if pos >= end:
            return None
        return pos

    def prev_line(self, pos: int) -> Optional[int]:
        """Start of the line before the one holding pos, or None."""
        newlines = -1 if self._at(pos) == "\n" else 0
        while pos > 0:
            if self._at(pos) == "\n":
                newlines += 1
                if newlines == 2:
                    break
            pos -= 1
        if pos <= 0:
            return 0 if newlines == 1 else None
        return pos + 1

    def col_advance(self, pos: int, col: int) -> int:
        """Move from pos towards screen column col, staying on the line."""
        if self._at(pos) == "\n":
            return pos
        column = 0
        while col > 0:
            col -= 1
            if self._at(pos) == "\t":
                step = 7 - column % 8
                col -= step
                column += step
            pos += 1
            if pos >= len(self.text) or self._at(pos) == "\n":
                pos -= 1
                break
            column += 1
        return pos

    def count_lines(self, begin: int, end: int) -> int:
        """One more than the number of newlines in text[begin:end]."""
        return self.text.count("\n", begin, max(begin, end)) + 1

    # -- cursor motion ---------------------------------------------------

    def one_right(self) -> bool:
        """Move the cursor right within its line; False at a boundary."""
        p = self.cursor
        if self._at(p) == "\n" or p + 1 >= len(self.text) or self._at(p + 1) == "\n":
            return False
        self.cursor += 1
        return True

    def one_left(self) -> bool:
        """Move the cursor left within its line; False at a boundary."""
        p = self.cursor
        if self._at(p) == "\n" or p == 0 or self._at(p - 1) == "\n":
            return False
        self.cursor -= 1
        return True

    def begin_line(self) -> None:
        """Move the cursor to the start of its line."""
        while self.one_left():
            pass

    # -- insertion -------------------------------------------------------

    def _ensure_room(self, n: int) -> None:
        if len(self.text) + n >= self.capacity:
            raise BufferFull("Can't add anything, file is too big!")

    def insert_char(self, c: str) -> None:
        """Insert c before the cursor and move past it."""
        self.insert_str(c)

    def insert_str(self, s: str) -> None:
        """Insert s before the cursor and move past it."""
        self._ensure_room(len(s))
        at = max(0, min(self.cursor, len(self.text)))
        self.text = self.text[:at] + s + self.text[at:]
        self.cursor = at + len(s)
        self.changed = True

    def append_char(self, c: str) -> None:
        """Insert c after the cursor and move onto it."""
        self._ensure_room(1)
        at = max(0, min(self.cursor + 1, len(self.text)))
        self.text = self.text[:at] + c + self.text[at:]
        self.cursor = at
        self.changed = True

    # -- deletion --------------------------------------------------------

    def delete_char(self) -> Optional[str]:
        """Delete the character under the cursor and return it."""
        if not self.text:
            return None
        if self.cursor >= len(self.text):
            removed = self.text[-1]
            self.text = self.text[:-1]
        else:
            removed = self.text[self.cursor]
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
            if (
                self._at(self.cursor) == "\n"
                and self.cursor > 0
                and self._at(self.cursor - 1) != "\n"
            ):
                self.cursor -= 1
        self.changed = True
        return removed

    def delete_word(self, delete_trailing: bool) -> str:
        """Delete the word at the cursor; return the keys that undo it."""
        undo = ["i"]
        c = self._at(self.cursor)
        if is_separator(c) and not _isspace(c):
            while self.cursor < len(self.text) and is_separator(c) and not _isspace(c):
                undo.append(self.delete_char())
                c = self._at(self.cursor)
        else:
            while self.cursor < len(self.text):
                ch = self._at(self.cursor)
                if is_separator(ch) or ch == "\n":
                    break
                end_of_line = self._at(self.cursor + 1) == "\n"
                undo.append(self.delete_char())
                if end_of_line:
                    break
        if delete_trailing:
            while _isspace(self._at(self.cursor)) and self._at(self.cursor) != "\n":
                undo.append(self.delete_char())
        undo.append(ESC)
        return "".join(undo)

    def delete_lines(self, count: int) -> None:
        """Delete count lines starting with the cursor's line."""
        if self._at(self.cursor) != "\n":
            while self.cursor > 0:
                if self._at(self.cursor) == "\n":
                    self.cursor += 1
                    break
                self.cursor -= 1
        for _ in range(count):
            newline = self.text.find("\n", self.cursor)
            stop = len(self.text) if newline < 0 else newline + 1
            self.text = self.text[: self.cursor] + self.text[stop:]
            self.changed = True
            if self.cursor >= len(self.text):
                prev = self.prev_line(self.cursor)
                self.cursor = 0 if prev is None else prev
                break

    def open_line(self) -> None:
        """Add a blank line below the cursor's line and move onto it."""
        while self.cursor < len(self.text) and self.text[self.cursor] != "\n":
            self.cursor += 1
        if self.cursor >= len(self.text):
            self.cursor = len(self.text) - 1
        self.append_char("\n")

    # -- yank and put ----------------------------------------------------

    def yank_lines(self, count: int) -> str:
        """Copy count lines from the cursor's line into the yank register."""
        saved = self.cursor
        self.begin_line()
        start = self.cursor
        p = start
        while p < len(self.text):
            if self.text[p] == "\n":
                count -= 1
                if count <= 0:
                    break
            p += 1
        self.yanked = self.text[start:p] + "\n"
        self.cursor = saved
        return self.yanked

    def put_lines(self, above: bool) -> None:
        """Put the yanked lines below (or above) the cursor's line."""
        if self.yanked is None:
            return
        if above:
            self.begin_line()
        else:
            while self.cursor < len(self.text) and self.text[self.cursor] != "\n":
                self.cursor += 1
        for ch in self.yanked:
            if above:
                self.insert_char(ch)
            else:
                self.append_char(ch)
        self.cursor -= len(self.yanked) - 1
        if above:
            self.cursor -= 1
        self.begin_line()

    # -- plain string search ---------------------------------------------

    def find_forward(self, text: str) -> Optional[int]:
        """Next occurrence of text after the cursor, wrapping to the top."""
        found = self.text.find(text, self.cursor + 1)
        if found >= 0:
            return found
        found = self.text.find(text, 0, max(0, self.cursor + len(text) + 1))
        return found if found >= 0 else None

    def find_backward(self, text: str) -> Optional[int]:
        """Previous occurrence of text, wrapping from the end of the text."""
        if not text:
            return None
        found = self.text.rfind(text, 0, max(0, self.cursor + 2))
        if found >= 0:
            return found
        found = self.text.rfind(text, max(0, self.cursor - len(text)))
        return found if found >= 0 else None