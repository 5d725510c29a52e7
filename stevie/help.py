"""The built-in help screens."""

_CONTINUE = " " * 47 + "<Press space bar to continue>"
_QUIT = " " * 47 + "<Any other key will quit>"

_PAGES = (
    (
        "",
        "   Cursor movement commands",
        "   ========================",
        "   control-l         Redraw screen",
        "   control-d         Cursor down 1/2 screen",
        "   control-u         Cursor up 1/2 screen",
        "   control-f         Cursor forward 1 screen",
        "   control-b         Cursor back 1 screen",
        "   control-g         Give info on file",
        "",
        "      h              Cursor left 1 char",
        "      j              Cursor down 1 char",
        "      k              Cursor up 1 char",
        "      l              Cursor right 1 char",
        "      $              Cursor to end of line",
        "      ^ -or- 0       Cursor to beginning of line",
        "      b              Cursor back 1 word",
        "      w              Cursor forward 1 word",
        "      [#]G           Goto line # (or last line if no #)",
        "",
        _CONTINUE,
        _QUIT,
    ),
    (
        "",
        "    Modification commands",
        "    =====================",
        "    x           Delete 1 char",
        "    dw          Delete 1 word",
        "    D           Delete rest of line",
        "    [#]dd       Delete 1 (or #) lines",
        "    C           Change rest of line",
        "    cw          Change word",
        "    cc          Change line",
        "    r           Replace single character",
        "    [#]yy       Yank 1 (or #) lines",
        "    p           Insert last yanked or deleted line(s)",
        "    P              below (p) or above (P) current line",
        "    J           Join current and next line",
        "    [#]<<          Shift line left 1 (or #) tabs",
        "    [#]>>          Shift line right 1 (or #) tabs",
        "    i           Enter Insert mode (<ESC> to exit)",
        "    a           Append (<ESC> to exit) ",
        "    o           Open line (<ESC> to exit)",
        "",
        _CONTINUE,
        _QUIT,
    ),
    (
        "",
        "    Miscellaneous",
        "    =============",
        "    .           Repeat last insert or delete",
        "    u           Undo last insert or delete",
        "    /str/       Search for 'str'",
        "    ?str?       Search backward for 'str'",
        "    n           Repeat previous search",
        "    :.=         Print current line number",
        "    :$=         Print number of lines in file",
        "    H\t\tHelp",
        "",
        "    File manipulation",
        "    =================",
        "    :w          Write file",
        "    :wq         Write and quit",
        "    :e {file}   Edit a new file",
        "    :e!         Re-read current file",
        "    :f          Print file into (current line and total # of lines)",
        "    :f {file}   Change current file name",
        "    :q          Quit",
        "    :q!         Quit (no save)",
        "",
        " " * 53 + "<Press any key>",
    ),
)


def help_pages():
    """The help screens, each as newline-separated text."""
    return ["\n".join(page) for page in _PAGES]


def show_help(terminal, getc):
    """Show the help screens one at a time.

    A space moves to the next screen; any other key stops. Returns the
    number of screens shown.
    """
    pages = help_pages()
    for number, page in enumerate(pages, start=1):
        terminal.clear()
        for row, line in enumerate(page.split("\n")):
            terminal.goto(row, 0)
            terminal.put(line)
        terminal.refresh()
        key = getc()
        if number < len(pages) and key != " ":
            return number
    return len(pages)