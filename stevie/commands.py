"""Colon commands and searches typed on the status line.

``execute_command`` works on an editor object offering: ``buffer``,
``filename``, ``top``, ``chars``, and the methods ``message``,
``search``, ``repeat_search``, ``quit``, ``write_file``,
``file_info``, ``read_file`` and ``update_screen``.
"""

from typing import Optional, Tuple

FORWARD = "forward"
BACKWARD = "backward"

BAD_COMMAND = "Unrecognized command"


def split_command(text: str) -> Tuple[str, Optional[str]]:
    """Split a command line into the command word and its argument."""
    text = text.lstrip()
    end = 0
    while end < len(text) and not text[end].isspace():
        end += 1
    rest = text[end:].lstrip()
    return text[:end], (rest or None)


def _search(editor, text: str) -> None:
    c = text[0]
    rest = text[1:]
    if rest[:1] == c:
        editor.repeat_search()
        return
    if rest.endswith(c):
        rest = rest[:-1]
    editor.search(FORWARD if c == "/" else BACKWARD, rest)


def _edit(editor, cmd: str, arg: Optional[str]) -> None:
    if cmd != "e!" and editor.buffer.changed:
        editor.message("File not written out.  Use 'e!' to override.")
        return
    if arg is not None:
        editor.filename = arg
    editor.buffer.text = ""
    editor.buffer.cursor = 0
    editor.top = 0
    editor.buffer.changed = False
    editor.read_file(editor.filename, 0, False)
    editor.update_screen()


def _set(editor, arg: Optional[str]) -> None:
    actions = {
        "oct": editor.chars.set_octal,
        "hex": editor.chars.set_hex,
        "dec": editor.chars.set_decimal,
    }
    action = actions.get(arg)
    if action is None:
        editor.message(BAD_COMMAND)
        return
    action()
    editor.update_screen()


def execute_command(editor, text: str) -> None:
    """Carry out a command line (without the leading ':' for colon commands)."""
    text = text.lstrip()
    if text[:1] in ("/", "?"):
        _search(editor, text)
        return

    cmd, arg = split_command(text)
    buf = editor.buffer

    if cmd == "q!":
        editor.quit()
    elif cmd == "q":
        if buf.changed:
            editor.message("File not written out.  Use 'q!' to override.")
        else:
            editor.quit()
    elif cmd == "w":
        if arg is None:
            editor.write_file(editor.filename)
            buf.changed = False
        else:
            editor.write_file(arg)
    elif cmd == "wq":
        if editor.write_file(editor.filename):
            editor.quit()
    elif cmd == "f" and arg is None:
        editor.file_info()
    elif cmd in ("e", "e!"):
        _edit(editor, cmd, arg)
    elif cmd == "f":
        editor.filename = arg
        editor.message(f'"{editor.filename}" ')
    elif cmd in ("r", ".r"):
        if arg is None:
            editor.message(BAD_COMMAND)
            return
        at = buf.next_line(buf.cursor)
        editor.read_file(arg, len(buf.text) if at is None else at, True)
        editor.update_screen()
        buf.changed = True
    elif cmd == ".=":
        line = buf.count_lines(0, buf.cursor)
        editor.message(f"line {line}   character {buf.cursor + 1}")
    elif cmd == "$=":
        editor.message(str(buf.count_lines(0, len(buf.text)) - 1))
    elif cmd == "set":
        _set(editor, arg)
    else:
        editor.message(BAD_COMMAND)