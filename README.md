# stevie

A small vi-like screen editor for ANSI terminals. The whole file is held
in memory as one flat string of at most 64000 characters. The editor
offers the core vi commands: cursor motion, word and line deletion, yank
and put, one-step repeat and undo, plain-string search forward and
backward, and a handful of colon commands.

## Installing

    pip install .

## Running

    stevie [-x | -o] [-b] [-d] FILE

Options:

- `-x` shows unprintable characters in hexadecimal, as `[xNN]`
- `-o` shows them in octal, as `[NNN]` (the default)
- `-b` binary mode: carriage-return/newline pairs are kept as they are
  when the file is read, and `r` followed by a carriage return replaces
  the character with a carriage return instead of splitting the line
- `-d` shows the value of each byte entered with Ctrl-X in insert mode

If FILE cannot be opened, the editor starts on an empty buffer and
reports `[New File]`. The screen is 24 rows by 80 columns (25 rows when
`TERM` starts with `vt52`); the last row is the status line. When standard
input is a terminal it is switched to character-at-a-time mode without
echo and restored on exit.

## Commands

Press `H` inside the editor to see the help screens. In short:

| Key | Action |
| --- | --- |
| `h j k l` | move left, down, up, right |
| `w b` | next word, previous word |
| `0 ^ $` | start of line, end of line |
| `[#]G` | go to line # (the last line when no # is given) |
| `^D ^U` | move down or up 10 lines |
| `^F ^B` | move down or up one screen |
| `^G` | show the file name, whether it changed, and the current line |
| `^L` | redraw the screen |
| `x`, `dw`, `[#]dd`, `D` | delete a character, a word, lines, the rest of the line |
| `i a o` | insert, append, open a line (Esc to leave insert mode) |
| `cw cc C r` | change a word, the line, the rest of the line; replace one character |
| `[#]yy p P` | yank lines; put them below or above |
| `J`, `[#]>>`, `[#]<<` | join lines; add or remove a leading tab |
| `.` `u` | repeat the last change; undo it |
| `/str` `?str` `n` | search forward or backward; repeat the last search |

On the command line, Backspace removes the last character and `@` starts
the line again. `//` or `??` repeats the last search.

Colon commands: `:w [file]`, `:wq`, `:q`, `:q!`, `:e [file]`, `:e!`,
`:f [file]`, `:r file` (read a file in after the current line), `:.=`
(current line and character), `:$=` (number of lines), and
`:set oct|hex|dec`.

In insert mode, Ctrl-X followed by two hexadecimal digits enters the
byte with that value.

## Library use

The pieces can be used on their own:

- `stevie.buffer.Buffer` is the flat text buffer with a cursor and a yank
  register, with line navigation, word and line deletion, yank and put,
  and plain-string search (`find_forward`, `find_backward`). Edits that
  would pass its capacity raise `stevie.buffer.BufferFull`.
- `stevie.charinfo.CharTable` maps bytes to how they appear on screen;
  `stevie.charinfo.hex_to_int` reads one hexadecimal digit.
- `stevie.screen.Screen` lays a buffer out into rows and sends only the
  changed cells to a `stevie.terminal.Terminal`.
- `stevie.commands.execute_command` carries out a colon command or a
  search line on an editor; `split_command` splits a command word from
  its argument.
- `stevie.editor.Editor` is the editing loop; `Editor.stuff_input` queues
  keys and `Editor.handle_key` carries out one key, which makes it usable
  without a real terminal.
- `stevie.setenv` parses `NAME = value` definitions (`parse_definition`,
  with quoted values and backslash escapes via `unescape`) and reads,
  edits and writes NUL-separated environment blocks with `EnvTable`.
  It is a library only; no command is installed for it.

## What it does not do

- Searches match plain strings only; there are no regular expressions.
- Undo covers only the last change, and there is no line undo (`U`).
- There is no substitute or global command, no marks, no tags, no
  multiple-file list, and no shell escape.
- Screen control is fixed ANSI escape sequences; there is no terminfo
  or termcap lookup.