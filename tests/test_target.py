import pytest

from webrecon.target import Target, TargetError, parse_target


def test_scheme_is_added():
    target = parse_target("www.example.com")
    assert target.raw_input == "https://www.example.com"
    assert target.url.scheme == "https"
    assert target.domain == "www.example.com"


def test_base_domain_keeps_last_two_labels():
    target = parse_target("deep.sub.example.com")
    assert target.base_domain == "example.com"


def test_existing_scheme_kept_and_port_stripped():
    target = parse_target("http://example.com:8080/path")
    assert target.raw_input == "http://example.com:8080/path"
    assert target.url.scheme == "http"
    assert target.domain == "example.com"
    assert target.base_domain == target.domain


def test_single_label_host_is_its_own_base():
    target = parse_target("localhost")
    assert target.base_domain == target.domain == "localhost"


def test_ipv6_host():
    target = parse_target("http://[::1]:80/")
    assert target.domain == "::1"
    assert target.base_domain == "::1"


def test_userinfo_is_not_part_of_domain():
    target = parse_target("https://user@example.com/")
    assert target.domain == "example.com"


@pytest.mark.parametrize("raw", ["", "https://", "http://", "http:///path"])
def test_missing_host_raises(raw):
    with pytest.raises(TargetError):
        parse_target(raw)


def test_invalid_port_raises():
    with pytest.raises(TargetError):
        parse_target("example.com:notaport")


def test_starts_with_no_addresses_or_subdomains():
    target = parse_target("example.com")
    assert target.ip_addresses == []
    assert target.subdomains == []


def test_add_ip_address_deduplicates():
    target = parse_target("example.com")
    target.add_ip_address("192.0.2.1")
    target.add_ip_address("192.0.2.2")
    target.add_ip_address("192.0.2.1")
    assert target.ip_addresses == ["192.0.2.1", "192.0.2.2"]


def test_add_subdomain_deduplicates():
    target = parse_target("example.com")
    target.add_subdomain("www.example.com")
    target.add_subdomain("www.example.com")
    target.add_subdomain("mail.example.com")
    assert target.subdomains == ["www.example.com", "mail.example.com"]


def test_str_is_domain():
    target = parse_target("https://www.example.com/index.html")
    assert str(target) == target.domain


def test_targets_do_not_share_lists():
    first = parse_target("a.example.com")
    second = parse_target("b.example.com")
    first.add_ip_address("192.0.2.9")
    assert isinstance(second, Target)
    assert second.ip_addresses == []