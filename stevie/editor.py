"""The editing loop: normal-mode commands, insert mode and file I/O."""

import time
from collections import deque
from enum import Enum
from typing import Optional

from .buffer import ESC, Buffer, BufferFull, is_separator
from .charinfo import CharTable, hex_to_int
from .commands import BACKWARD, FORWARD, execute_command
from .help import show_help
from .screen import Screen

_DIGITS = "0123456789"


class Mode(Enum):
    """What the next key typed means."""

    NORMAL = "normal"
    INSERT = "insert"


def _is_printable(c: str) -> bool:
    return "\x20" <= c <= "\x7e" or c in " \t\n\r\v\f"


class Editor:
    """One file being edited on one terminal."""

    def __init__(
        self,
        terminal,
        filename: Optional[str] = None,
        binary: bool = False,
        debug: bool = False,
        chars: Optional[CharTable] = None,
        sleep=time.sleep,
    ):
        self.terminal = terminal
        self.filename = filename
        self.binary = binary
        self.debug = debug
        if chars is None:
            chars = CharTable()
            chars.set_octal()
        self.chars = chars
        self.sleep = sleep
        self.buffer = Buffer()
        self.screen = Screen(terminal.rows, terminal.columns, chars)
        self.mode = Mode.NORMAL
        self.top = 0
        self.row = self.col = self.vcol = 0
        self.prenum = 0
        self.done = False
        self.last_message: Optional[str] = None
        self.redo_buff = ""
        self.undo_buff = ""
        self.undo_cursor: Optional[int] = None
        self.undel_chars = 0
        self.ins_buff = []
        self.ins_start = 0
        self.n_insert = 0
        self._pending = deque()
        self._last_search: Optional[str] = None
        self._last_dir = FORWARD

    @property
    def bottom(self) -> int:
        return self.screen.bottom

    # -- input -----------------------------------------------------------

    def stuff_input(self, text: str) -> None:
        """Queue keys to be read before any typed on the terminal."""
        self._pending.extend(text)

    def getc(self) -> str:
        """Next key, from queued input first; the empty string at end of input."""
        if self._pending:
            return self._pending.popleft()
        return self.terminal.getc()

    def _peek(self) -> Optional[str]:
        return self._pending[0] if self._pending else None

    # -- screen ----------------------------------------------------------

    def update_screen(self) -> None:
        """Redraw the text area from the buffer."""
        self.screen.render(self.buffer, self.top)
        self.screen.flush(self.terminal)

    def _goto_cmd(self, clear: bool, fresh: bool, firstc: Optional[str]) -> None:
        term = self.terminal
        term.goto(term.rows - 1, 0)
        if clear:
            term.put(" " * (term.columns - 1))
            term.goto(term.rows - 1, 0)
        if firstc:
            term.put(firstc)
        if fresh:
            term.refresh()

    def message(self, text: str) -> None:
        """Show text on the status line, unless it is already shown."""
        if text.endswith("\n"):
            text = text[:-1]
        if self.last_message == text:
            return
        self._goto_cmd(True, True, None)
        self.terminal.put(text)
        self.terminal.refresh()
        self.last_message = text

    def _scroll_down(self, nlines: int) -> None:
        for _ in range(nlines):
            p = self.buffer.prev_line(self.top)
            if p is None:
                break
            self.top = p

    def cursor_update(self) -> None:
        """Keep the cursor on screen and work out its row and column."""
        buf = self.buffer
        rows = self.terminal.rows
        if not buf.text:
            self.top = buf.cursor = 0
        elif buf.cursor < self.top:
            nlines = buf.count_lines(buf.cursor, self.top)
            self.top = buf.cursor
            if nlines > rows // 3:
                self._scroll_down(rows // 3)
            else:
                p = buf.prev_line(self.top)
                if p is not None:
                    p = buf.next_line(p)
                    if p is not None:
                        self.top = p
            self.update_screen()
        elif self.bottom <= buf.cursor < len(buf.text):
            nlines = buf.count_lines(self.bottom, buf.cursor)
            self.top = buf.cursor
            self._scroll_down((2 * rows) // 3 if nlines > rows // 3 else rows - 2)
            self.update_screen()

        columns = self.terminal.columns
        self.row = self.col = self.vcol = 0
        for c in buf.text[self.top : buf.cursor]:
            if c == "\n":
                self.row += 1
                self.col = self.vcol = 0
                continue
            step = 8 - self.col % 8 if c == "\t" else self.chars.width(c)
            self.col += step
            self.vcol += step
            if self.col >= columns:
                self.col -= columns
                self.row += 1

    # -- files -----------------------------------------------------------

    def read_file(self, name: str, at: int, keep_name: bool) -> bool:
        """Read a file into the buffer at position at.

        Returns True when the file could not be opened (a new file).
        """
        if not keep_name:
            self.filename = name
        buf = self.buffer
        try:
            with open(name, "rb") as f:
                raw = f.read()
        except OSError:
            if not keep_name:
                buf.text = ""
                buf.cursor = 0
            return True
        data = raw.decode("latin-1")
        if not self.binary:
            data = data.replace("\r\n", "\n")
        if len(buf.text) + len(data) > buf.capacity:
            raise BufferFull(f"File too long (limit is {buf.capacity})!")
        unprint = sum(1 for c in data if not _is_printable(c))
        at = max(0, min(at, len(buf.text)))
        buf.text = buf.text[:at] + data + buf.text[at:]
        if not self.binary and unprint > 0:
            self.message(
                f"{unprint} unprintable chars!  "
                "Perhaps binary mode (-b) should be used?"
            )
            self.sleep(2)
        if unprint > 0:
            self.message(
                f'"{name}" {len(data)} characters ({unprint} un-printable)'
                "  (Press 'H' for help)"
            )
        else:
            self.message(f"\"{name}\" {len(data)} characters  (Press 'H' for help)")
        return False

    def write_file(self, name: str) -> bool:
        """Write the whole buffer to a file; False if it cannot be opened."""
        text = self.buffer.text
        try:
            with open(name, "wb") as f:
                f.write(text.encode("latin-1", errors="replace"))
        except OSError:
            self.message("Unable to open file!")
            return False
        self.message(f'"{name}" {len(text)} characters')
        self.buffer.changed = False
        return True

    def file_info(self) -> None:
        """Show the file name, whether it changed and the cursor's line."""
        buf = self.buffer
        modified = " [Modified]" if buf.changed else ""
        self.message(
            f'"{self.filename}"{modified} line {buf.count_lines(0, buf.cursor)}'
            f" of {buf.count_lines(0, len(buf.text)) - 1}"
        )

    def goto_line(self, n: int) -> None:
        """Move to line n (1-based); 0 means the last line."""
        buf = self.buffer
        if n == 0:
            p = buf.prev_line(len(buf.text))
            if p is not None:
                buf.cursor = p
        else:
            buf.cursor = 0
            for _ in range(n - 1):
                p = buf.next_line(buf.cursor)
                if p is None:
                    break
                buf.cursor = p
        self.top = buf.cursor
        for _ in range(self.terminal.rows // 2):
            p = buf.prev_line(self.top)
            if p is None:
                break
            self.top = p
        self.update_screen()

    # -- searching -------------------------------------------------------

    def search(self, direction, text: str) -> bool:
        """Search for text and move the cursor to it."""
        self._last_search = text
        self._last_dir = direction
        buf = self.buffer
        if direction == BACKWARD:
            found = buf.find_backward(text)
        else:
            found = buf.find_forward(text)
        if found is None:
            self.message("Pattern not found")
            return False
        self.cursor_update()
        buf.cursor = found
        buf.begin_line()
        if buf.cursor < self.top:
            self.top = buf.cursor
        buf.cursor = found
        self.cursor_update()
        self.update_screen()
        return True

    def repeat_search(self) -> bool:
        """Repeat the last search; rings the bell if there was none."""
        if self._last_search is None:
            self.terminal.beep()
            return False
        return self.search(self._last_dir, self._last_search)

    def quit(self) -> None:
        """Leave the editing loop."""
        term = self.terminal
        term.goto(term.rows - 1, 0)
        term.refresh()
        term.put("\r\n")
        term.refresh()
        self.done = True

    # -- the loop --------------------------------------------------------

    def run(self) -> int:
        """Read and carry out keys until quit or end of input."""
        try:
            while not self.done:
                self.cursor_update()
                if self.mode is Mode.INSERT:
                    self.message("Insert Mode")
                self.terminal.goto(self.row, self.col)
                self.terminal.refresh()
                c = self.getc()
                if c == "":
                    break
                self.handle_key(c)
        except EOFError:
            pass
        return 0

    def handle_key(self, c: str) -> None:
        """Carry out one key in the current mode."""
        if self.mode is not Mode.INSERT:
            self.message("")
        try:
            if self.mode is Mode.NORMAL:
                if c in _DIGITS and (self.prenum > 0 or c != "0"):
                    self.prenum = self.prenum * 10 + int(c)
                    return
                self.normal(c)
                self.prenum = 0
            else:
                self.insert_key(c)
        except BufferFull as exc:
            self.message(str(exc))
            self.mode = Mode.NORMAL
            self.prenum = 0

    # -- insert mode -----------------------------------------------------

    def _start_insert(self, initstr: str) -> None:
        self.ins_start = self.buffer.cursor
        self.n_insert = 0
        self.ins_buff = list(initstr)
        self.mode = Mode.INSERT
        self.terminal.refresh()

    def _reset_undo(self) -> None:
        self.undel_chars = 0
        self.undo_buff = ""
        self.undo_cursor = None

    def _insert_typed(self, c: str) -> None:
        buf = self.buffer
        if self._peek() is None:
            buf.insert_char(c)
            self.ins_buff.append(c)
            self.n_insert += 1
        else:
            typed = [c]
            while self._peek() is not None and self._peek() != ESC:
                typed.append(self.getc())
            self.ins_buff.extend(typed)
            self.n_insert += len(typed)
            buf.insert_str("".join(typed))
        self.update_screen()

    def _get_hex_char(self) -> str:
        while True:
            self.terminal.goto(self.row, self.col)
            self.terminal.refresh()
            c = self.getc()
            if c == "":
                raise EOFError
            if hex_to_int(c) is not None:
                return c
            self.message("Expecting a hexidecimal character (0-9 or a-f)")
            self.terminal.beep()
            self.sleep(1)

    def insert_key(self, c: str) -> None:
        """Carry out one key typed in insert mode."""
        buf = self.buffer
        if c == ESC:
            if buf.cursor >= len(buf.text):
                buf.insert_char("\n")
                buf.cursor -= 1
            if (
                buf.cursor > 0
                and buf._at(buf.cursor) == "\n"
                and buf._at(buf.cursor - 1) != "\n"
            ):
                buf.cursor -= 1
            self.mode = Mode.NORMAL
            self.message("")
            self.undo_cursor = self.ins_start
            self.undel_chars = self.n_insert
            self.redo_buff = "".join(self.ins_buff) + ESC
            self.update_screen()
        elif c == "\b":
            if buf.cursor <= self.ins_start:
                self.terminal.beep()
                return
            was_newline = buf._at(buf.cursor) == "\n"
            buf.cursor -= 1
            buf.delete_char()
            if self.ins_buff:
                self.ins_buff.pop()
            self.n_insert -= 1
            if was_newline:
                buf.cursor += 1
            self.cursor_update()
            self.update_screen()
        elif c == "\x18":
            start = buf.cursor
            was_newline = buf._at(buf.cursor) == "\n"
            buf.insert_char("[")
            buf.insert_char("x")
            self.cursor_update()
            self.update_screen()
            c1 = self._get_hex_char()
            buf.insert_char(c1)
            self.cursor_update()
            self.update_screen()
            c2 = self._get_hex_char()
            buf.cursor = start
            for _ in range(3):
                buf.delete_char()
            value = chr(16 * hex_to_int(c1) + hex_to_int(c2))
            if self.debug:
                self.terminal.put(f"(c={ord(value)})")
            if was_newline:
                buf.cursor += 1
            buf.insert_char(value)
            self.n_insert += 1
            self.ins_buff.append(value)
            self.update_screen()
        elif c == "\x0f":
            pass
        else:
            self._insert_typed("\n" if c == "\r" else c)

    # -- normal mode -----------------------------------------------------

    def _one_up(self, n: int) -> bool:
        buf = self.buffer
        save_vcol = self.vcol
        p = buf.cursor
        for k in range(n):
            np = buf.prev_line(p)
            if np is None:
                if k > 0:
                    break
                return False
            p = np
        buf.cursor = p
        self.cursor_update()
        buf.cursor = buf.col_advance(p, save_vcol)
        return True

    def _one_down(self, n: int) -> bool:
        buf = self.buffer
        p = buf.cursor
        for k in range(n):
            np = buf.next_line(p)
            if np is None:
                if k > 0:
                    break
                return False
            p = np
        buf.cursor = buf.col_advance(p, self.vcol)
        return True

    def _read_cmdline(self, firstc: str) -> None:
        self._goto_cmd(True, True, firstc)
        typed = [] if firstc == ":" else [firstc]
        while True:
            c = self.getc()
            if c in ("\n", "\r", ""):
                break
            if c == "\b":
                if typed:
                    typed.pop()
                    self._goto_cmd(False, False, ":" if firstc == ":" else None)
                    self.terminal.put("".join(typed))
                    self.terminal.refresh()
                continue
            if c == "@":
                typed = []
                self._goto_cmd(True, True, firstc)
                continue
            self.terminal.put(c)
            self.terminal.refresh()
            typed.append(c)
        self.last_message = None
        execute_command(self, "".join(typed))

    def _word_back(self) -> None:
        buf = self.buffer
        p = buf.cursor
        if not is_separator(buf._at(p)) and p > 0 and is_separator(buf._at(p - 1)):
            p -= 1
        if not is_separator(buf._at(p)):
            while p > 0 and not is_separator(buf._at(p)):
                p -= 1
        else:
            while p > 0 and is_separator(buf._at(p)):
                p -= 1
            while p > 0 and not is_separator(buf._at(p)):
                p -= 1
        if is_separator(buf._at(p)):
            p += 1
        buf.cursor = p

    def _word_forward(self) -> None:
        buf = self.buffer
        p = buf.cursor
        end = len(buf.text)
        if is_separator(buf._at(p)):
            while p + 1 < end:
                p += 1
                if not is_separator(buf._at(p)):
                    break
        else:
            while p + 1 < end:
                p += 1
                if is_separator(buf._at(p)):
                    break
            while buf._at(p).isspace() and p + 1 < end:
                p += 1
        buf.cursor = p

    def _tab_in_out(self, remove: bool, num: int) -> None:
        buf = self.buffer
        buf.begin_line()
        saved = buf.cursor
        for todo in range(num - 1, -1, -1):
            buf.begin_line()
            if not remove:
                buf.insert_char("\t")
            elif buf._at(buf.cursor) == "\t":
                buf.delete_char()
            if todo > 0:
                p = buf.next_line(buf.cursor)
                if p is None:
                    break
                buf.cursor = p
        buf.cursor = saved
        self.update_screen()
        self.redo_buff = f"{num}{'<<' if remove else '>>'}"
        self._reset_undo()
        self.undo_cursor = saved
        self.undo_buff = f"{num}{'>>' if remove else '<<'}"

    def normal(self, c: str) -> None:
        """Carry out one normal-mode command."""
        buf = self.buffer
        term = self.terminal
        count = self.prenum or 1

        if c in ("H", "\x0c"):
            if c == "H":
                show_help(term, self.getc)
            self.screen.clear(term)
            self.update_screen()
        elif c == "\x04":
            if not self._one_down(10):
                term.beep()
        elif c == "\x15":
            if not self._one_up(10):
                term.beep()
        elif c == "\x06":
            if not self._one_down(term.rows):
                term.beep()
        elif c == "\x02":
            if not self._one_up(term.rows):
                term.beep()
        elif c == "\x07":
            self.file_info()
        elif c == "G":
            self.goto_line(self.prenum)
        elif c == "l":
            if not buf.one_right():
                term.beep()
        elif c == "h":
            if not buf.one_left():
                term.beep()
        elif c == "k":
            if not self._one_up(1):
                term.beep()
        elif c == "j":
            if not self._one_down(1):
                term.beep()
        elif c == "b":
            self._word_back()
        elif c == "w":
            self._word_forward()
        elif c == "$":
            while buf.one_right():
                pass
        elif c in ("0", "^"):
            buf.begin_line()
        elif c == "x":
            ch = buf._at(buf.cursor)
            if ch == "\n":
                term.beep()
            else:
                self.redo_buff = "x"
                self._reset_undo()
                self.undo_buff = "i" + ch + ESC
                self.undo_cursor = buf.cursor
                buf.delete_char()
                self.update_screen()
        elif c == "a":
            if buf.cursor < len(buf.text) - 1:
                buf.cursor += 1
            self._reset_undo()
            self._start_insert("a")
        elif c == "i":
            self._reset_undo()
            self._start_insert("i")
        elif c == "o":
            buf.open_line()
            self.update_screen()
            self._reset_undo()
            self._start_insert("o")
        elif c == "d":
            nchar = self.getc()
            if nchar == "d":
                self.redo_buff = f"{count}dd"
                buf.begin_line()
                self._reset_undo()
                self.undo_cursor = buf.cursor
                buf.yank_lines(count)
                buf.delete_lines(count)
                buf.begin_line()
                self.update_screen()
                if buf.cursor < self.undo_cursor:
                    self.undo_cursor = buf.cursor
                    self.undo_buff = "p"
                else:
                    self.undo_buff = "P"
            elif nchar == "w":
                self.redo_buff = "dw"
                self._reset_undo()
                self.undo_buff = buf.delete_word(True)
                self.undo_cursor = buf.cursor
                self.update_screen()
        elif c == "c":
            nchar = self.getc()
            if nchar == "c":
                self._reset_undo()
                buf.begin_line()
                buf.yank_lines(1)
                while buf.cursor < len(buf.text) and buf._at(buf.cursor) != "\n":
                    buf.delete_char()
                self._start_insert("cc")
                self.update_screen()
            elif nchar == "w":
                self._reset_undo()
                self.undo_buff = buf.delete_word(False)
                self._start_insert("cw")
                self.update_screen()
        elif c == "y":
            if self.getc() == "y":
                buf.yank_lines(count)
            else:
                term.beep()
        elif c in (">", "<"):
            if self.getc() == c:
                self._tab_in_out(c == "<", count)
                self.update_screen()
            else:
                term.beep()
        elif c in ("?", "/", ":"):
            self._read_cmdline(c)
        elif c == "n":
            self.repeat_search()
        elif c in ("C", "D"):
            start = buf.cursor
            while buf.cursor >= start:
                if buf.delete_char() is None:
                    break
            self.update_screen()
            self._reset_undo()
            if c == "C":
                buf.cursor += 1
                self._start_insert("C")
        elif c == "r":
            nchar = self.getc()
            if nchar == "":
                return
            self._reset_undo()
            old = buf._at(buf.cursor)
            if nchar == "\n" or (not self.binary and nchar == "\r"):
                nchar = "\n"
                self.undo_cursor = buf.cursor - 1
                self.undo_buff = "Ji" + old + ESC
                self._replace(nchar)
                if buf.cursor > 0:
                    buf.cursor -= 1
                elif buf.cursor < len(buf.text):
                    buf.cursor += 1
            else:
                self.undo_buff = "r" + old
                self.undo_cursor = buf.cursor
                self._replace(nchar)
            self.redo_buff = "r" + nchar
            self.update_screen()
        elif c == "p":
            self._put(False)
        elif c == "P":
            self._put(True)
        elif c == "J":
            p = buf.cursor
            while buf._at(p) != "\n" and p < len(buf.text) - 1:
                p += 1
            if p >= len(buf.text) - 1:
                term.beep()
                return
            buf.cursor = p
            buf.delete_char()
            self._reset_undo()
            self.undo_cursor = buf.cursor
            self.undo_buff = "i\n" + ESC
            self.redo_buff = "J"
            self.update_screen()
        elif c == ".":
            self.stuff_input(self.redo_buff)
        elif c == "u":
            if self.undo_cursor is not None and self.undo_buff:
                buf.cursor = self.undo_cursor
                self.stuff_input(self.undo_buff)
                self.undo_buff = ""
            if self.undel_chars > 0:
                buf.cursor = self.undo_cursor
                removed = []
                for _ in range(self.undel_chars):
                    ch = buf.delete_char()
                    if ch is not None:
                        removed.append(ch)
                self.undel_chars = 0
                self.undo_buff = self.redo_buff = "i" + "".join(removed) + ESC
                self.update_screen()
        else:
            term.beep()

    def _replace(self, ch: str) -> None:
        buf = self.buffer
        if 0 <= buf.cursor < len(buf.text):
            buf.text = buf.text[: buf.cursor] + ch + buf.text[buf.cursor + 1 :]
            buf.changed = True

    def _put(self, above: bool) -> None:
        if self.buffer.yanked is None:
            return
        self.message("Inserting saved stuff...")
        self.buffer.put_lines(above)
        self.message("")
        self.update_screen()