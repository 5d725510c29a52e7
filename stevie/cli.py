"""Command-line entry point for the editor."""

import sys

from .charinfo import CharTable
from .editor import Editor
from .terminal import Terminal


def main(argv=None) -> int:
    """Edit the file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    hex_mode = False
    debug = False
    binary = False
    while args and args[0].startswith("-"):
        flag = args[0][1:2]
        if flag == "x":
            hex_mode = True
        elif flag == "o":
            hex_mode = False
        elif flag == "d":
            debug = True
        elif flag == "b":
            binary = True
        args.pop(0)

    if not args:
        print("usage: stevie {file}", file=sys.stderr)
        return 1

    filename = args[0]
    terminal = Terminal()
    try:
        if terminal.rows < 3 or terminal.columns < 16:
            print(
                f"Rows={terminal.rows} Columns={terminal.columns} not big enough!",
                file=sys.stderr,
            )
            return 0
        chars = CharTable()
        if hex_mode:
            chars.set_hex()
        else:
            chars.set_octal()
        editor = Editor(terminal, filename, binary=binary, debug=debug, chars=chars)
        editor.screen.clear(terminal)
        if editor.read_file(filename, 0, False):
            editor.message(f'"{editor.filename}" [New File]')
        editor.buffer.cursor = editor.top = 0
        editor.update_screen()
        editor.run()
    finally:
        terminal.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())