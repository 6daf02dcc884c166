"""Low-level scanning of JSON text: whitespace, comments, strings, numbers."""

from __future__ import annotations

import math
from dataclasses import dataclass

_BOM = b"\xef\xbb\xbf"
_DIGITS = frozenset("0123456789")
_HEX = frozenset("0123456789abcdefABCDEF")
_WHITESPACE = frozenset(" \t\r\n")
_SIMPLE_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}
_LITERALS = {"t": ("true", True), "f": ("false", False), "n": ("null", None)}


class JsonParseError(ValueError):
    """Raised when JSON text is malformed; carries the line and column."""

    def __init__(self, message: str, line: int | None = None, col: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.col = col


@dataclass(frozen=True)
class JsonSettings:
    """Parser options: a memory budget (0 is unlimited) and comment support."""

    max_memory: int = 0
    enable_comments: bool = False


def _pow10(exponent: int) -> float:
    try:
        return 10.0**exponent
    except OverflowError:
        return math.inf


class Scanner:
    """A cursor over JSON bytes that tracks the current line and column.

    Characters are handed out as one-character strings, one per byte;
    the end of input reads as the empty string.
    """

    def __init__(self, data: bytes | str, settings: JsonSettings | None = None) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        data = bytes(data)
        if data.startswith(_BOM):
            data = data[len(_BOM):]
        self.data = data
        self.settings = settings if settings is not None else JsonSettings()
        self.pos = 0
        self.line = 1
        self.col = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def _fail(self, text: str) -> JsonParseError:
        return JsonParseError(f"{self.line}:{self.col}: {text}", self.line, self.col)

    def _fail_in_string(self, text: str) -> JsonParseError:
        return JsonParseError(f"{text} (at {self.line}:{self.col})", self.line, self.col)

    def peek(self) -> str:
        """Return the current character without consuming it, or ``""`` at the end."""
        if self.at_end:
            return ""
        return chr(self.data[self.pos])

    def advance(self) -> str:
        """Consume and return the current character, or ``""`` at the end."""
        if self.at_end:
            return ""
        char = chr(self.data[self.pos])
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.col = 0
        else:
            self.col += 1
        return char

    def _skip_comment(self) -> None:
        self.advance()
        if self.at_end:
            raise self._fail("EOF unexpected")
        opener = self.advance()
        if opener == "/":
            while not self.at_end and self.peek() not in ("\r", "\n"):
                self.advance()
        elif opener == "*":
            while True:
                if self.at_end:
                    raise self._fail("Unexpected EOF in block comment")
                if self.advance() == "*" and self.peek() == "/":
                    self.advance()
                    return
        else:
            raise self._fail(f"Unexpected `{opener}` in comment opening sequence")

    def skip_whitespace(self) -> str:
        """Skip whitespace, and comments when enabled; return the next character."""
        while True:
            char = self.peek()
            if char and char in _WHITESPACE:
                self.advance()
            elif char == "/" and self.settings.enable_comments:
                self._skip_comment()
            else:
                return char

    def _read_hex4(self) -> int | None:
        if len(self.data) - self.pos < 4:
            return None
        digits = self.data[self.pos:self.pos + 4].decode("latin-1")
        if not all(d in _HEX for d in digits):
            return None
        for _ in range(4):
            self.advance()
        return int(digits, 16)

    def _read_unicode_escape(self) -> str:
        value = self._read_hex4()
        if value is None:
            raise self._fail_in_string("Invalid character value `u`")
        if value & 0xF800 == 0xD800:
            if self.advance() != "\\" or self.advance() != "u":
                raise self._fail_in_string("Invalid character value `u`")
            low = self._read_hex4()
            if low is None:
                raise self._fail_in_string("Invalid character value `u`")
            value = 0x010000 | ((value & 0x3FF) << 10) | (low & 0x3FF)
        return chr(value)

    def read_string(self) -> str:
        """Read a double-quoted string starting at the current character."""
        if self.peek() != '"':
            raise self._fail(f"Expected string, found `{self.peek()}`")
        self.advance()
        buf = bytearray()
        while True:
            if self.at_end:
                raise self._fail_in_string("Unexpected EOF in string")
            char = self.advance()
            if char == '"':
                return bytes(buf).decode("utf-8", "surrogateescape")
            if char != "\\":
                buf.append(ord(char))
                continue
            if self.at_end:
                raise self._fail_in_string("Unexpected EOF in string")
            escape = self.advance()
            if escape in _SIMPLE_ESCAPES:
                buf += _SIMPLE_ESCAPES[escape].encode("ascii")
            elif escape == "u":
                buf += self._read_unicode_escape().encode("utf-8")
            else:
                buf.append(ord(escape))

    def read_number(self) -> int | float:
        """Read a number; integers stay ``int``, fractions and exponents give ``float``."""
        first = self.peek()
        if not (first in _DIGITS and first) and first != "-":
            raise self._fail(f"Unexpected {first} when seeking value")
        negative = first == "-"
        if negative:
            self.advance()

        is_double = False
        integer = 0
        value = 0.0
        digits = 0
        fraction = 0
        in_exp = False
        exp_sign_seen = False
        exp_negative = False
        exponent = 0
        leading_zero = False

        while True:
            char = self.peek()
            if char and char in _DIGITS:
                digit = ord(char) - 48
                digits += 1
                if not is_double or in_exp:
                    if in_exp:
                        exp_sign_seen = True
                        exponent = exponent * 10 + digit
                    else:
                        if leading_zero:
                            raise self._fail(f"Unexpected `0` before `{char}`")
                        if digits == 1 and char == "0":
                            leading_zero = True
                        integer = integer * 10 + digit
                else:
                    fraction = fraction * 10 + digit
                self.advance()
                continue

            if char in ("+", "-") and char:
                if in_exp and not exp_sign_seen:
                    exp_sign_seen = True
                    exp_negative = char == "-"
                    self.advance()
                    continue
            elif char == "." and not is_double:
                if not digits:
                    raise self._fail("Expected digit before `.`")
                is_double = True
                value = float(integer)
                digits = 0
                self.advance()
                continue

            if not in_exp:
                if is_double:
                    if not digits:
                        raise self._fail("Expected digit after `.`")
                    value += fraction / _pow10(digits)
                if char in ("e", "E") and char:
                    in_exp = True
                    if not is_double:
                        is_double = True
                        value = float(integer)
                    digits = 0
                    leading_zero = False
                    self.advance()
                    continue
            else:
                if not digits:
                    raise self._fail("Expected digit after `e`")
                value *= _pow10(-exponent if exp_negative else exponent)

            if is_double:
                return -value if negative else value
            return -integer if negative else integer

    def read_literal(self) -> bool | None:
        """Read ``true``, ``false`` or ``null``."""
        entry = _LITERALS.get(self.peek())
        if entry is None:
            raise self._fail("Unknown value")
        word, result = entry
        if self.data[self.pos:self.pos + len(word)] != word.encode("ascii"):
            raise self._fail("Unknown value")
        for _ in word:
            self.advance()
        return result