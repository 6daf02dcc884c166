"""URL-safe Base64 encoding as used for pre-shared keys."""

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
_DECODE_MAP = {char: value for value, char in enumerate(_ALPHABET)}


def encoded_size(length: int) -> int:
    """Return the buffer size needed to encode ``length`` bytes.

    The size includes one extra slot for a terminator, as the classic
    C interface reserves it.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    return (length + 2) // 3 * 4 + 1


def encode(data: bytes) -> str:
    """Encode ``data`` with the URL-safe alphabet, padded with ``=``."""
    out: list[str] = []
    bits = 0
    shift = 0
    remaining = len(data)
    for byte in data:
        bits = ((bits << 8) + byte) & 0xFFFFFFFF
        remaining -= 1
        shift += 8
        while True:
            out.append(_ALPHABET[((bits << 6) >> shift) & 0x3F])
            shift -= 6
            if not (shift > 6 or (remaining == 0 and shift > 0)):
                break
    while len(out) % 4:
        out.append("=")
    return "".join(out)


def decode(text: str) -> bytes:
    """Decode URL-safe Base64 text.

    Decoding stops at the first ``=`` or NUL character; incomplete
    trailing bits are dropped. Raises ``ValueError`` on any character
    outside the URL-safe alphabet.
    """
    out = bytearray()
    value = 0
    for position, char in enumerate(text):
        if char in ("=", "\0"):
            break
        digit = _DECODE_MAP.get(char)
        if digit is None:
            raise ValueError(f"invalid base64 character {char!r} at {position}")
        value = (value << 6) + digit
        phase = position & 3
        if phase:
            out.append((value >> (6 - 2 * phase)) & 0xFF)
        value &= 0xFFFFFF
    return bytes(out)