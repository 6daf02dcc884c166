import pytest

from sslibev.acl import (
    Acl,
    AclMatch,
    AclMode,
    load_acl,
    parse_addr_cidr,
    trim_whitespace,
)

SAMPLE = """\
# sample list
[bypass_all]
[proxy_list]
10.0.0.0/8
2001:db8::/32
(^|\\.)example\\.com$
[bypass_list]
192.168.1.1   # single host
(^|\\.)example\\.org$
[outbound_block_list]
127.0.0.0/8
(^|\\.)blocked\\.example$
"""


@pytest.fixture
def acl(tmp_path):
    path = tmp_path / "sample.acl"
    path.write_text(SAMPLE)
    return load_acl(path)


@pytest.mark.parametrize(
    "text, expected",
    [("  abc \t\n", "abc"), ("   ", ""), ("x y", "x y"), ("", "")],
)
def test_trim_whitespace(text, expected):
    assert trim_whitespace(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("10.0.0.0/8", ("10.0.0.0", 8)),
        ("1.2.3.4", ("1.2.3.4", None)),
        ("a/b/24", ("a/b", 24)),
        ("::1/128", ("::1", 128)),
        ("host/abc", ("host", 0)),
    ],
)
def test_parse_addr_cidr(text, expected):
    assert parse_addr_cidr(text) == expected


def test_fresh_acl_defaults():
    fresh = Acl()
    assert fresh.mode == AclMode.BLACK_LIST
    assert fresh.match_host("10.1.2.3") == AclMatch.NONE


def test_mode_from_file(acl):
    assert acl.mode == AclMode.WHITE_LIST


@pytest.mark.parametrize(
    "host, expected",
    [
        ("10.1.2.3", AclMatch.WHITE),
        ("2001:db8::5", AclMatch.WHITE),
        ("www.example.com", AclMatch.WHITE),
        ("192.168.1.1", AclMatch.BLACK),
        ("example.org", AclMatch.BLACK),
        ("192.168.1.2", AclMatch.NONE),
        ("example.net", AclMatch.NONE),
        ("2001:db9::1", AclMatch.NONE),
    ],
)
def test_match_host(acl, host, expected):
    assert acl.match_host(host) == expected


@pytest.mark.parametrize(
    "host, expected",
    [
        ("127.0.0.1", True),
        ("mail.blocked.example", True),
        ("10.1.2.3", False),
        ("example.org", False),
    ],
)
def test_outbound_block(acl, host, expected):
    assert acl.outbound_block_match_host(host) is expected


def test_black_list_takes_precedence(acl):
    acl.add_ip("10.0.0.1")
    assert acl.match_host("10.0.0.1") == AclMatch.BLACK
    acl.remove_ip("10.0.0.1")
    assert acl.match_host("10.0.0.1") == AclMatch.WHITE


def test_remove_address_from_network(tmp_path):
    path = tmp_path / "net.acl"
    path.write_text("[bypass_list]\n172.16.0.0/12\n")
    acl = load_acl(path)
    acl.remove_ip("172.16.0.5")
    assert acl.match_host("172.16.0.5") == AclMatch.NONE
    assert acl.match_host("172.16.0.6") == AclMatch.BLACK
    assert acl.match_host("172.31.255.255") == AclMatch.BLACK


def test_add_ipv6(acl):
    acl.add_ip("fd00::1")
    assert acl.match_host("fd00::1") == AclMatch.BLACK


@pytest.mark.parametrize("bad", ["not-an-ip", "300.1.1.1", ""])
def test_invalid_ip_raises(acl, bad):
    with pytest.raises(ValueError):
        acl.add_ip(bad)
    with pytest.raises(ValueError):
        acl.remove_ip(bad)


def test_long_lines_are_discarded(tmp_path):
    too_long = "x" * 255
    just_fits = "y" * 254
    path = tmp_path / "long.acl"
    path.write_text(f"{too_long}\n{just_fits}\n")
    acl = load_acl(path)
    assert acl.match_host(too_long) == AclMatch.NONE
    assert acl.match_host(just_fits) == AclMatch.BLACK


def test_default_section_is_black_list(tmp_path):
    path = tmp_path / "plain.acl"
    path.write_text("203.0.113.7\n")
    acl = load_acl(path)
    assert acl.match_host("203.0.113.7") == AclMatch.BLACK


def test_mode_switches_back(tmp_path):
    path = tmp_path / "modes.acl"
    path.write_text("[reject_all]\n[accept_all]\n")
    assert load_acl(path).mode == AclMode.BLACK_LIST


def test_load_replaces_previous_lists(tmp_path, acl):
    other = tmp_path / "other.acl"
    other.write_text("[white_list]\n198.51.100.1\n")
    acl.load(other)
    assert acl.match_host("192.168.1.1") == AclMatch.NONE
    assert acl.match_host("198.51.100.1") == AclMatch.WHITE
    assert acl.outbound_block_match_host("127.0.0.1") is False


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_acl(tmp_path / "absent.acl")