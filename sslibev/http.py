"""Extract the target host from the Host header of an HTTP request."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

MAX_HOSTNAME_LEN = 256

_CR = 0x0D
_LF = 0x0A
_BLANKS = (0x20, 0x09)
_HOST_HEADER = b"host:"


class HttpParseError(ValueError):
    """Raised when no hostname can be taken from a request."""


class IncompleteRequest(HttpParseError):
    """The request ended before the blank line closing its headers."""


class NoHostHeader(HttpParseError):
    """The request headers are complete but carry no Host header."""


@dataclass(frozen=True)
class Protocol:
    """A sniffable protocol: its default port and its hostname parser."""

    default_port: int
    parse_packet: Callable[[bytes], str]


def _next_header(data: bytes, pos: int, remaining: int) -> tuple[int, int, int]:
    """Move past the current line and measure the next one.

    Returns the new position, the bytes remaining from it, and the length
    of the header line that starts there (zero at the blank line).
    """
    while remaining > 2 and data[pos] != _CR and data[pos + 1] != _LF:
        pos += 1
        remaining -= 1
    pos += 2
    remaining -= 2

    length = 0
    while (
        remaining > length + 1
        and data[pos + length] != _CR
        and data[pos + length + 1] != _LF
    ):
        length += 1
    return pos, remaining, length


def _get_header(name: bytes, data: bytes) -> bytes:
    pos, remaining = 0, len(data)
    name_len = len(name)
    while True:
        pos, remaining, length = _next_header(data, pos, remaining)
        if length == 0:
            break
        if length > name_len and data[pos : pos + name_len].lower() == name:
            start = pos + name_len
            end = pos + length
            while start < end and data[start] in _BLANKS:
                start += 1
            return data[start:end]

    if remaining == 0:
        raise IncompleteRequest("incomplete HTTP request")
    raise NoHostHeader("no Host header in HTTP request")


def parse_http_header(data: bytes | str) -> str:
    """Return the hostname named by the request's Host header.

    A trailing ``:port`` is removed. Raises ``IncompleteRequest`` when the
    headers are not complete and ``NoHostHeader`` when there is no Host
    header.
    """
    if isinstance(data, str):
        data = data.encode("latin-1")
    data = bytes(data)
    if not data:
        raise IncompleteRequest("empty HTTP request")

    host = _get_header(_HOST_HEADER, data)
    without_digits = host.rstrip(b"0123456789")
    if without_digits.endswith(b":"):
        host = without_digits[:-1]
    return host.decode("latin-1")


HTTP_PROTOCOL = Protocol(default_port=80, parse_packet=parse_http_header)