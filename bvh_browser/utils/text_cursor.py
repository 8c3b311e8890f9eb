"""
TextCursor - Minimal scanner over whole-file BVH text.

This module provides the low level token reading used by the skeleton parser
and the motion decoder. It owns nothing but the text and a position.
"""

import re

_WHITESPACE = " \t\r\n"
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_RE = re.compile(r"[+-]?\d+")


class TextCursor:
    """
    Tiny cursor for scanning BVH text.

    Every read either consumes a token and returns a value, or returns
    None/False with at most leading whitespace consumed.

    Example usage:
        cursor = TextCursor("OFFSET 0.0 1.5 -2")
        cursor.word("OFFSET")      # True
        cursor.read_float()        # 0.0
    """

    def __init__(self, text: str, pos: int = 0):
        """
        Initialize the cursor.

        Args:
            text: Decoded file contents
            pos: Starting character offset (default: 0)
        """
        self.text = text
        self.i = pos
        self.n = len(text)

    @property
    def at_end(self):
        return self.i >= self.n

    def peek(self, length=1):
        """Return the next `length` characters without consuming them."""
        return self.text[self.i:self.i + length]

    def whitespace(self):
        """Skip spaces, tabs and line breaks."""
        while self.i < self.n and self.text[self.i] in _WHITESPACE:
            self.i += 1

    def next_line(self):
        """Skip the remainder of the current line, then any whitespace."""
        while self.i < self.n and self.text[self.i] not in "\r\n":
            self.i += 1
        self.whitespace()

    def word(self, key: str) -> bool:
        """Consume `key` if the text at the cursor starts with it."""
        if not self.text.startswith(key, self.i):
            return False
        self.i += len(key)
        return True

    def read_identifier(self) -> str:
        """
        Read a name token: printable characters up to whitespace or a brace.

        Returns:
            The name, possibly empty.
        """
        self.whitespace()
        start = self.i
        while self.i < self.n:
            c = self.text[self.i]
            if c in _WHITESPACE or c in "{}" or not c.isprintable():
                break
            self.i += 1
        return self.text[start:self.i]

    def read_token(self) -> str:
        """Read a whitespace delimited token (used for error messages)."""
        self.whitespace()
        start = self.i
        while self.i < self.n and self.text[self.i] not in _WHITESPACE:
            self.i += 1
        return self.text[start:self.i]

    def _read_number(self, pattern, cast):
        self.whitespace()
        m = pattern.match(self.text, self.i)
        if m is None:
            return None
        self.i = m.end()
        return cast(m.group(0))

    def read_float(self):
        """Read a decimal number, returning None if there is none."""
        return self._read_number(_FLOAT_RE, float)

    def read_int(self):
        """Read an integer, returning None if there is none."""
        return self._read_number(_INT_RE, int)
