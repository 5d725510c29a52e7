"""Parse ``name = value`` definitions and edit an environment block.

A definition takes one of three forms after the equal sign:

* unquoted: the value is the literal text immediately after ``=``,
  up to the end of the line;
* single quotes: the value is the literal text between the quotes;
* double quotes: the text between the quotes, with backslash escapes
  processed (``\\n``, ``\\t`` and friends, octal ``\\ddd`` and hex
  ``\\0xdd`` constants).

An environment block is a run of ``NAME=value`` strings, each ended by
a NUL byte, with one more NUL byte marking the end of the block.
"""

import string
from typing import Optional, Tuple, Union

_LETTER_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_OCTAL_DIGITS = "01234567"


class DefinitionError(ValueError):
    """Raised when a definition or an environment block is malformed."""


def _number(text: str, i: int) -> Tuple[int, int]:
    """Read an octal or ``0x`` hex constant at text[i]; return (value, next)."""
    if (
        text[i] == "0"
        and i + 2 < len(text)
        and text[i + 1] in "xX"
        and text[i + 2] in string.hexdigits
    ):
        digits, limit, i = string.hexdigits, 2, i + 2
        radix = 16
    else:
        digits, limit, radix = _OCTAL_DIGITS, 3, 8
    value = 0
    while limit > 0 and i < len(text) and text[i] in digits:
        value = value * radix + int(text[i], radix)
        i += 1
        limit -= 1
    return value & 0xFF, i


def unescape(text: str, quote: str) -> str:
    """Decode a quoted value; text starts just after the opening quote.

    Backslash escapes are processed only inside double quotes. Anything
    but spaces after the closing quote is an error, as is a missing one.
    """
    out = []
    i = 0
    n = len(text)
    while True:
        if i >= n:
            raise DefinitionError("Invalid symbol definition syntax")
        ch = text[i]
        if ch == quote:
            break
        if ch == "\\" and quote == '"':
            i += 1
            if i >= n:
                raise DefinitionError("Invalid symbol definition syntax")
            esc = text[i]
            if esc in "012":
                value, i = _number(text, i)
                out.append(chr(value))
                continue
            out.append(_LETTER_ESCAPES.get(esc, esc))
            i += 1
            continue
        out.append(ch)
        i += 1
    if text[i + 1 :].strip(" "):
        raise DefinitionError("Invalid symbol definition syntax")
    return "".join(out)


def parse_definition(cmdline: str) -> Optional[Tuple[str, str]]:
    """Split ``name = value`` into (name, value).

    Returns None for a blank line and raises DefinitionError when the
    line has no equal sign or a badly quoted value.
    """
    stripped = cmdline.lstrip(" ")
    if not stripped:
        return None
    start = len(cmdline) - len(stripped)
    end = start
    while end < len(cmdline) and cmdline[end] not in "= ":
        end += 1
    if end == len(cmdline):
        raise DefinitionError("Invalid symbol definition syntax")
    name = cmdline[start:end]
    eq = cmdline.find("=", end)
    if eq < 0:
        raise DefinitionError("Invalid symbol definition syntax")
    raw = cmdline[eq + 1 :]
    body = raw.lstrip(" ")
    if body[:1] in ('"', "'"):
        return name, unescape(body[1:], body[0])
    return name, raw


class EnvTable:
    """An ordered set of environment variables with case-blind names."""

    def __init__(self, entries=()):
        self._entries = [[name, value] for name, value in entries]

    @classmethod
    def from_block(cls, data: Union[bytes, str]) -> "EnvTable":
        """Read a NUL-separated environment block."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        entries = []
        for item in data.split("\0"):
            if not item:
                break
            name, _, value = item.partition("=")
            entries.append((name, value))
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter([(name, value) for name, value in self._entries])

    def get(self, name: str) -> Optional[str]:
        """Value of the last variable named name (any case), or None."""
        found = None
        wanted = name.upper()
        for entry_name, value in self._entries:
            if entry_name.upper() == wanted:
                found = value
        return found

    def set(self, name: str, value: str) -> None:
        """Set every variable named name; add it, upper-cased, if absent."""
        wanted = name.upper()
        done = False
        for entry in self._entries:
            if entry[0].upper() == wanted:
                entry[1] = value
                done = True
        if not done:
            self._entries.append([wanted, value])

    def size(self) -> int:
        """Bytes taken by the entries, not counting the final NUL."""
        return sum(len(name) + 1 + len(value) + 1 for name, value in self._entries)

    def to_block(self, capacity: Optional[int] = None) -> bytes:
        """Write the table as an environment block.

        Raises DefinitionError if the block does not fit in capacity bytes.
        """
        if capacity is not None and self.size() >= capacity:
            raise DefinitionError("Insufficient space in environment")
        body = "".join(f"{name}={value}\0" for name, value in self._entries)
        return (body + "\0").encode("latin-1")

    def format(self) -> str:
        """One ``NAME=value`` line per variable."""
        return "".join(f"{name}={value}\n" for name, value in self._entries)