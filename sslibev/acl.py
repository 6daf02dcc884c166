"""Access control lists: address sets and host patterns per section."""

from __future__ import annotations

import enum
import ipaddress
import logging
import os
import re
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

_MAX_LINE = 255
_C_SPACE = " \t\n\v\f\r"

IpAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


class AclMode(enum.IntEnum):
    BLACK_LIST = 0
    WHITE_LIST = 1


class AclMatch(enum.IntEnum):
    NONE = 0
    BLACK = 1
    WHITE = -1


def trim_whitespace(text: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return text.strip(_C_SPACE)


def _atoi(text: str) -> int:
    text = text.lstrip(_C_SPACE)
    match = re.match(r"[+-]?\d+", text)
    return int(match.group()) if match else 0


def parse_addr_cidr(text: str) -> tuple[str, int | None]:
    """Split ``host/prefix`` at the last slash.

    The prefix is read like C ``atoi``; it is ``None`` when there is no slash.
    """
    host, slash, prefix = text.rpartition("/")
    if not slash:
        return text, None
    return host, _atoi(prefix)


def _parse_ip(text: str) -> IpAddress | None:
    if "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


class _IpSet:
    """A set of addresses held as a list of networks."""

    def __init__(self) -> None:
        self._networks: list[ipaddress.IPv4Network | ipaddress.IPv6Network] = []

    def add(self, address: IpAddress) -> None:
        self._networks.append(ipaddress.ip_network(address))

    def add_network(self, address: IpAddress, prefix: int) -> None:
        self._networks.append(ipaddress.ip_network((address, prefix), strict=False))

    def remove(self, address: IpAddress) -> None:
        target = ipaddress.ip_network(address)
        kept = []
        for network in self._networks:
            if target.subnet_of(network):
                kept.extend(network.address_exclude(target))
            else:
                kept.append(network)
        self._networks = kept

    def __contains__(self, address: object) -> bool:
        return any(address in network for network in self._networks)


@dataclass
class _List:
    ipv4: _IpSet = field(default_factory=_IpSet)
    ipv6: _IpSet = field(default_factory=_IpSet)
    rules: list[re.Pattern[str]] = field(default_factory=list)

    def ips(self, address: IpAddress) -> _IpSet:
        return self.ipv4 if address.version == 4 else self.ipv6

    def add_entry(self, line: str) -> None:
        host, prefix = parse_addr_cidr(line)
        address = _parse_ip(host)
        if address is None:
            try:
                self.rules.append(re.compile(line))
            except re.error as exc:
                log.error("Invalid ACL rule %s: %s", line, exc)
            return
        target = self.ips(address)
        if prefix is None or prefix < 0:
            target.add(address)
            return
        try:
            target.add_network(address, prefix)
        except ValueError as exc:
            log.error("Invalid ACL network %s: %s", line, exc)

    def matches(self, host: str) -> bool:
        address = _parse_ip(host)
        if address is None:
            return any(rule.search(host) for rule in self.rules)
        return address in self.ips(address)


_SECTIONS = {
    "[outbound_block_list]": "outbound",
    "[black_list]": "black",
    "[bypass_list]": "black",
    "[white_list]": "white",
    "[proxy_list]": "white",
}

_MODES = {
    "[reject_all]": AclMode.WHITE_LIST,
    "[bypass_all]": AclMode.WHITE_LIST,
    "[accept_all]": AclMode.BLACK_LIST,
    "[proxy_all]": AclMode.BLACK_LIST,
}


class Acl:
    """Black, white and outbound-block lists of addresses and host patterns."""

    def __init__(self) -> None:
        self.mode = AclMode.BLACK_LIST
        self._reset()

    def _reset(self) -> None:
        self._black = _List()
        self._white = _List()
        self._outbound = _List()

    def load(self, path: str | os.PathLike[str]) -> None:
        """Replace the lists with those read from the ACL file at ``path``."""
        self._reset()
        lists = {"black": self._black, "white": self._white, "outbound": self._outbound}
        current = self._black
        with open(path, "rb") as stream:
            for raw in stream:
                content = raw[:-1] if raw.endswith(b"\n") else raw
                if len(content) >= _MAX_LINE:
                    log.error("Discarding long ACL content: %r", content[:_MAX_LINE])
                    continue
                text = content.decode("utf-8", "replace").split("#", 1)[0]
                line = trim_whitespace(text)
                if not line:
                    continue
                if line in _SECTIONS:
                    current = lists[_SECTIONS[line]]
                elif line in _MODES:
                    self.mode = _MODES[line]
                else:
                    current.add_entry(line)

    def match_host(self, host: str) -> AclMatch:
        """Tell whether ``host`` is on the black list, the white list, or neither."""
        if self._black.matches(host):
            return AclMatch.BLACK
        if self._white.matches(host):
            return AclMatch.WHITE
        return AclMatch.NONE

    def _address(self, ip: str) -> IpAddress:
        address = _parse_ip(ip)
        if address is None:
            raise ValueError(f"invalid IP address: {ip!r}")
        return address

    def add_ip(self, ip: str) -> None:
        """Add an address to the black list; raises ``ValueError`` if invalid."""
        address = self._address(ip)
        self._black.ips(address).add(address)

    def remove_ip(self, ip: str) -> None:
        """Remove an address from the black list; raises ``ValueError`` if invalid."""
        address = self._address(ip)
        self._black.ips(address).remove(address)

    def outbound_block_match_host(self, host: str) -> bool:
        """Return whether ``host`` is on the outbound block list."""
        return self._outbound.matches(host)


def load_acl(path: str | os.PathLike[str]) -> Acl:
    """Read an ACL file into a new ``Acl``."""
    acl = Acl()
    acl.load(path)
    return acl