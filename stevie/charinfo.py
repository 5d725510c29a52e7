"""Screen representations of the 256 byte values."""

import string

_PLACEHOLDER = "[xxx]"


def _is_plain(code: int) -> bool:
    """True for codes shown as themselves: newline and printable ASCII."""
    return code == 0x0A or 0x20 <= code <= 0x7E


def _code_of(c) -> int:
    if isinstance(c, str):
        c = ord(c)
    return c & 0xFF


class CharTable:
    """How each byte value is drawn on the screen.

    Printable characters (and newline) take one column and are drawn as
    themselves. Every other byte is drawn as a five-column bracketed
    number whose base is chosen with set_octal, set_hex or set_decimal.
    """

    def __init__(self):
        self._entries = [
            None if _is_plain(code) else _PLACEHOLDER for code in range(256)
        ]

    def _reformat(self, fmt: str) -> None:
        self._entries = [
            None if entry is None else "[" + fmt.format(code) + "]"
            for code, entry in enumerate(self._entries)
        ]

    def set_octal(self) -> None:
        """Show unprintable bytes as octal numbers."""
        self._reformat("{:03o}")

    def set_hex(self) -> None:
        """Show unprintable bytes as hexadecimal numbers."""
        self._reformat("x{:02X}")

    def set_decimal(self) -> None:
        """Show unprintable bytes as decimal numbers."""
        self._reformat("{:3d}")

    def display(self, code) -> str:
        """Return the text drawn on screen for a byte value or character."""
        code = _code_of(code)
        entry = self._entries[code]
        return chr(code) if entry is None else entry

    def width(self, code) -> int:
        """Return the number of screen columns a byte value occupies."""
        entry = self._entries[_code_of(code)]
        return 1 if entry is None else len(entry)


def hex_to_int(c):
    """Return the value of a hexadecimal digit, or None if it is not one."""
    if isinstance(c, int):
        if not 0 <= c < 0x110000:
            return None
        c = chr(c)
    if len(c) == 1 and c in string.hexdigits:
        return int(c, 16)
    return None