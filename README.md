# sslibev

Building blocks for Shadowsocks-style proxies, in plain Python with no
dependencies beyond the standard library. It contains no event loop and opens
no sockets; it gives you some of the pieces a proxy is made of:

- **`sslibev.base64url`**: URL-safe Base64 as used for pre-shared keys
  (`encode`, `decode`, `encoded_size`).
- **`sslibev.socks5`**: SOCKS5 message headers (`MethodSelectRequest`,
  `MethodSelectResponse`, `Socks5Request`, `Socks5Response`), each with
  `pack()` and `unpack()`, plus the `Command`, `AddressType` and `Reply`
  enumerations.
- **`sslibev.cache`**: `LruCache`, a bounded least-recently-used map with
  time-based expiry.
- **`sslibev.http`**: `parse_http_header` takes the host name from the
  `Host:` header of an HTTP request.
- **`sslibev.acl`**: access-control lists of IP addresses, CIDR networks and
  host-name patterns.
- **`sslibev.jsonlex`**: `Scanner`, a low-level JSON scanner for strings,
  numbers, literals, whitespace and optional comments.

## Requirements

Python 3.10 or later.

## URL-safe Base64

```python
from sslibev import base64url

text = base64url.encode(b"\x00\x01\x02")
assert base64url.decode(text) == b"\x00\x01\x02"
assert base64url.encoded_size(16) == 25   # includes one terminator slot
```

`decode` stops at the first `=` and raises `ValueError` on a character
outside the URL-safe alphabet.

## SOCKS5 headers

```python
from sslibev.socks5 import AddressType, Command, MethodSelectRequest, Socks5Request

assert MethodSelectRequest(methods=b"\x00").pack() == b"\x05\x01\x00"

request = Socks5Request.unpack(b"\x05\x01\x00\x03")
assert request.cmd == Command.CONNECT
assert request.atyp == AddressType.DOMAIN
```

`unpack` raises `ValueError` when the data is too short. Only the fixed
headers are covered; the address and port that follow a request are left to
the caller.

## LRU cache

```python
from sslibev.cache import LruCache

released = []
cache = LruCache(3, free_cb=lambda key, value: released.append(key))
cache.insert("a", 1)
cache.insert("b", 2)
cache.insert("c", 3)        # count reaches capacity: "a" is evicted
assert released == ["a"]
assert cache.lookup("b") == 2
assert cache.contains("c")
```

An insertion that brings the number of entries up to the capacity evicts the
least recently used one. `lookup` and `contains` refresh an entry's
timestamp, `remove` drops one key, `clear(age)` drops entries unused for more
than `age` seconds, and `close(keep_data)` empties the cache, calling
`free_cb` for each value unless `keep_data` is true. A `clock` function may be
passed to the constructor in place of `time.time`.

## Finding the target host of an HTTP request

```python
from sslibev.http import parse_http_header

request = b"GET / HTTP/1.1\r\nHost: example.com:8080\r\n\r\n"
assert parse_http_header(request) == "example.com"
```

A request whose headers are not yet complete raises `IncompleteRequest`; a
complete one without the header raises `NoHostHeader`. Both derive from
`HttpParseError`, itself a `ValueError`. `HTTP_PROTOCOL` bundles the parser
with the default port 80.

## Access-control lists

```text
[proxy_all]

[bypass_list]
127.0.0.0/8
192.168.0.0/16
(^|\.)example\.com$

[outbound_block_list]
10.0.0.1
```

```python
from sslibev.acl import AclMatch, load_acl

acl = load_acl("rules.acl")
assert acl.match_host("192.168.1.5") == AclMatch.BLACK
assert acl.match_host("www.example.com") == AclMatch.BLACK
assert acl.outbound_block_match_host("10.0.0.1")
```

Sections `[bypass_list]`/`[black_list]`, `[proxy_list]`/`[white_list]` and
`[outbound_block_list]` choose the list that following lines go to; entries
before any section go to the black list. `[bypass_all]`/`[reject_all]` and
`[proxy_all]`/`[accept_all]` set `acl.mode` to `AclMode.WHITE_LIST` or
`AclMode.BLACK_LIST`. Lines that are not addresses are regular expressions
searched in host names. Anything after `#` is a comment, and lines of 255
characters or more are discarded. `Acl.add_ip` and `Acl.remove_ip` change the
black list at run time and raise `ValueError` for an invalid address.

## Scanning JSON

```python
from sslibev.jsonlex import JsonSettings, Scanner

scanner = Scanner(b'  /* note */ "hi" 12.5e1', JsonSettings(enable_comments=True))
assert scanner.skip_whitespace() == '"'
assert scanner.read_string() == "hi"
scanner.skip_whitespace()
assert scanner.read_number() == 125.0
```

Malformed input raises `JsonParseError`, which carries `line` and `col`.
A leading UTF-8 byte-order mark is skipped.

## What this package does not do

It has no ciphers or key derivation, so it cannot encrypt or decrypt proxy
traffic. It has no full JSON document parser, only the scanner above, and
it does not read configuration files. It runs no local or remote server and
has no command-line program.

## Running the tests

Install the `test` extra and run pytest from the project root.