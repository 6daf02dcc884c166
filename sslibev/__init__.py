"""Proxy building blocks: URL-safe Base64, SOCKS5 headers, an LRU cache, HTTP Host sniffing, ACLs and a JSON scanner."""

__version__ = "0.1.0"

__all__ = [
    "acl",
    "base64url",
    "cache",
    "http",
    "jsonlex",
    "socks5",
]