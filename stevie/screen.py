"""The two screen images: what should be shown and what is shown."""

from typing import List, Optional

from .charinfo import CharTable


class Screen:
    """Draws a window of the buffer and sends only the changed cells.

    The last terminal row is the status line and is not part of the
    image. ``render`` builds the wanted image from the buffer;
    ``flush`` writes the cells that differ from what the terminal
    already shows.
    """

    def __init__(self, rows: int, columns: int, chars: Optional[CharTable] = None):
        if rows < 2 or columns < 1:
            raise ValueError("screen is too small")
        self.rows = rows
        self.columns = columns
        if chars is None:
            chars = CharTable()
            chars.set_octal()
        self.chars = chars
        self.text_rows = rows - 1
        size = self.text_rows * columns
        self._next: List[str] = [" "] * size
        self._real: List[str] = [" "] * size
        self.bottom = 0

    def render(self, buffer, top: int) -> int:
        """Build the wanted image from buffer starting at position top.

        Returns the position just past the last character shown.
        """
        text = buffer.text
        columns = self.columns
        size = self.text_rows * columns
        cells: List[str] = []
        pending: List[str] = []
        row = col = 0
        mem = top
        while len(cells) < size and mem < len(text):
            if pending:
                c = pending.pop()
            else:
                c = text[mem]
                mem += 1
                code = ord(c) & 0xFF
                if c == "\t":
                    pending = [" "] * (7 - col % 8)
                    c = " "
                elif self.chars.width(code) > 1:
                    shown = self.chars.display(code)
                    pending = list(reversed(shown[1:]))
                    c = shown[0]
            if c == "\n":
                row += 1
                cells.extend(" " * (row * columns - len(cells)))
                col = 0
                continue
            if col >= columns:
                row += 1
                col = 0
            cells.append(c)
            col += 1
        cells.extend(" " * (size - len(cells)))
        if col != 0:
            row += 1
        for r in range(row, self.text_rows):
            cells[r * columns] = "~"
        self._next = cells
        self.bottom = mem
        return mem

    def flush(self, terminal) -> None:
        """Write every cell whose wanted contents differ from the screen."""
        go_row = go_col = -1
        for index, (wanted, shown) in enumerate(zip(self._next, self._real)):
            if wanted == shown:
                continue
            row, col = divmod(index, self.columns)
            self._real[index] = wanted
            if (go_row, go_col) != (row, col):
                go_row, go_col = row, col
                terminal.goto(row, col)
            terminal.put(wanted)
            go_col += 1
        terminal.refresh()

    def clear(self, terminal) -> None:
        """Clear the terminal and forget both images."""
        terminal.clear()
        size = self.text_rows * self.columns
        self._next = [" "] * size
        self._real = [" "] * size

    def row_text(self, row: int) -> str:
        """The wanted contents of a text row."""
        if not 0 <= row < self.text_rows:
            raise IndexError("row outside the text area")
        start = row * self.columns
        return "".join(self._next[start : start + self.columns])