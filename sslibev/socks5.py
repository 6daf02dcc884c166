"""SOCKS5 constants and fixed-size message headers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

SVERSION = 0x05
METHOD_NOAUTH = 0x00
METHOD_UNACCEPTABLE = 0xFF


class Command(enum.IntEnum):
    CONNECT = 0x01
    BIND = 0x02
    UDP_ASSOCIATE = 0x03


class AddressType(enum.IntEnum):
    IPV4 = 0x01
    DOMAIN = 0x03
    IPV6 = 0x04


class Reply(enum.IntEnum):
    SUCCEEDED = 0x00
    GENERAL = 0x01
    CONN_DISALLOWED = 0x02
    NETWORK_UNREACHABLE = 0x03
    HOST_UNREACHABLE = 0x04
    CONN_REFUSED = 0x05
    TTL_EXPIRED = 0x06
    CMD_NOT_SUPPORTED = 0x07
    ADDRTYPE_NOT_SUPPORTED = 0x08
    FF_UNASSIGNED = 0x09


def _coerce(enum_cls: type[enum.IntEnum], value: int) -> int:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs at least {size} bytes, got {len(data)}")


@dataclass(frozen=True)
class MethodSelectRequest:
    """Client greeting: version, method count and the methods offered."""

    methods: bytes
    ver: int = SVERSION

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", bytes(self.methods))

    def pack(self) -> bytes:
        if len(self.methods) > 0xFF:
            raise ValueError("at most 255 methods can be offered")
        return bytes([self.ver, len(self.methods)]) + self.methods

    @classmethod
    def unpack(cls, data: bytes) -> MethodSelectRequest:
        _require(data, 2, "method select request")
        count = data[1]
        _require(data, 2 + count, "method select request")
        return cls(methods=bytes(data[2 : 2 + count]), ver=data[0])


@dataclass(frozen=True)
class MethodSelectResponse:
    """Server answer to the greeting: version and chosen method."""

    method: int
    ver: int = SVERSION

    def pack(self) -> bytes:
        return bytes([self.ver, self.method])

    @classmethod
    def unpack(cls, data: bytes) -> MethodSelectResponse:
        _require(data, 2, "method select response")
        return cls(method=data[1], ver=data[0])


@dataclass(frozen=True)
class Socks5Request:
    """Request header: version, command, reserved byte, address type."""

    cmd: int
    atyp: int
    ver: int = SVERSION
    rsv: int = 0

    def pack(self) -> bytes:
        return bytes([self.ver, self.cmd, self.rsv, self.atyp])

    @classmethod
    def unpack(cls, data: bytes) -> Socks5Request:
        _require(data, 4, "request")
        return cls(
            cmd=_coerce(Command, data[1]),
            atyp=_coerce(AddressType, data[3]),
            ver=data[0],
            rsv=data[2],
        )


@dataclass(frozen=True)
class Socks5Response:
    """Reply header: version, reply code, reserved byte, address type."""

    rep: int
    atyp: int
    ver: int = SVERSION
    rsv: int = 0

    def pack(self) -> bytes:
        return bytes([self.ver, self.rep, self.rsv, self.atyp])

    @classmethod
    def unpack(cls, data: bytes) -> Socks5Response:
        _require(data, 4, "response")
        return cls(
            rep=_coerce(Reply, data[1]),
            atyp=_coerce(AddressType, data[3]),
            ver=data[0],
            rsv=data[2],
        )