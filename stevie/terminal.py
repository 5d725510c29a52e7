"""A character terminal driven with ANSI escape sequences."""

import os
import sys

try:
    import termios
except ImportError:  # pragma: no cover - not on POSIX
    termios = None


class Terminal:
    """Screen output and keyboard input for the editor.

    When the input is a terminal it is put into character-at-a-time mode
    with echo and carriage-return translation off; close() restores it.
    """

    def __init__(self, stdin=None, stdout=None, rows=None, columns=80, term=None):
        self.input = sys.stdin if stdin is None else stdin
        self.output = sys.stdout if stdout is None else stdout
        if rows is None:
            if term is None:
                term = os.environ.get("TERM", "")
            rows = 25 if term.startswith("vt52") else 24
        self.rows = rows
        self.columns = columns
        self._fd = None
        self._saved = None
        self._enter_raw()

    def _enter_raw(self) -> None:
        if termios is None:
            return
        try:
            fd = self.input.fileno()
        except (AttributeError, OSError, ValueError):
            return
        if not os.isatty(fd):
            return
        self._fd = fd
        self._saved = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
        attrs[0] &= ~termios.ICRNL
        attrs[3] &= ~(termios.ICANON | termios.ECHO)
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSADRAIN, attrs)

    def goto(self, row: int, col: int) -> None:
        """Move the cursor to a zero-based row and column."""
        self.output.write(f"\033[{row + 1};{col + 1}H")

    def clear(self) -> None:
        """Clear the whole screen and home the cursor."""
        self.output.write("\033[H\033[J")

    def put(self, text: str) -> None:
        """Write text at the cursor."""
        self.output.write(text)

    def refresh(self) -> None:
        """Push pending output to the screen."""
        self.output.flush()

    def getc(self) -> str:
        """Read one character; the empty string means end of input."""
        if self._saved is not None:
            data = os.read(self._fd, 1)
            return data.decode("latin-1")
        return self.input.read(1)

    def beep(self) -> None:
        """Ring the bell."""
        self.output.write("\007")
        self.output.flush()

    def close(self) -> None:
        """Restore the input mode and flush output."""
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None
        self.output.flush()

    def __enter__(self) -> "Terminal":
        return self

    def __exit__(self, *exc) -> None:
        self.close()